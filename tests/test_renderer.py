import re
from concurrent.futures import ThreadPoolExecutor

import pytest

from qr_styling import (
    BackgroundOptions,
    Color,
    CornerSquareType,
    CornersSquareOptions,
    DotsOptions,
    DotType,
    Gradient,
    IdSource,
    ImageOptions,
    QRMatrix,
    QROptions,
    ShapeType,
    SvgRenderer,
)
from qr_styling.errors import CanvasTooSmallError, InvalidColorError
from qr_styling.renderer import VisibleModules, build_circle_edge_grid

from .conftest import SVG_NS, clip_path_children, parse_svg

XLINK_HREF = '{http://www.w3.org/1999/xlink}href'

# 3 finder patterns, each a 24 module ring plus a 9 module center
FINDER_DARK_MODULES = 3 * (24 + 9)


def render(builder, ids=None):
    options = builder.build_options()
    matrix = QRMatrix.from_data(options.data, options.qr_options)
    return SvgRenderer(options, ids or IdSource(namespace="")).render(matrix), matrix


def test_document_structure(builder):
    svg, matrix = render(builder)
    assert svg.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<svg ')
    assert svg.endswith('</svg>')
    assert svg.count('<defs>') == 1

    root = parse_svg(svg)
    assert root.tag == f'{SVG_NS}svg'
    assert root.get('width') == '300'
    assert root.get('viewBox') == '0 0 300 300'
    assert root.get('shape-rendering') == 'crispEdges'


def test_dots_skip_finder_modules(builder):
    svg, matrix = render(builder)
    dots = clip_path_children(parse_svg(svg), 'clip-path-dot-color')
    assert len(dots) == matrix.dark_count() - FINDER_DARK_MODULES


def test_square_dots_are_grid_aligned(builder):
    svg, matrix = render(builder)
    assert matrix.size == 25
    for rect in clip_path_children(parse_svg(svg), 'clip-path-dot-color'):
        assert int(rect.get('x')) % 12 == 0
        assert int(rect.get('y')) % 12 == 0
        assert rect.get('width') == '12'


def test_corner_ornaments(builder):
    svg, _ = render(builder)
    root = parse_svg(svg)
    clip_ids = {clip.get('id') for clip in root.iter(f'{SVG_NS}clipPath')}
    for column, row in [(0, 0), (1, 0), (0, 1)]:
        assert f'clip-path-corners-square-color-{column}-{row}-0' in clip_ids
        assert f'clip-path-corners-dot-color-{column}-{row}-0' in clip_ids

    top_right = clip_path_children(root, 'clip-path-corners-square-color-1-0')
    assert top_right[0].get('transform') == 'rotate(90,258,42)'


def test_no_crisp_edges_without_rounding(builder):
    svg, _ = render(builder.dots_options(DotsOptions(round_size=False)).margin(7))
    assert 'shape-rendering' not in svg
    parse_svg(svg)


def test_canvas_too_small_for_modules(builder):
    with pytest.raises(CanvasTooSmallError):
        render(builder.size(21).qr_options(QROptions(type_number=10)))


def test_rounded_background(builder):
    svg, _ = render(builder.background_options(BackgroundOptions(color="#EEEEEE", round=0.5)))
    background = clip_path_children(parse_svg(svg), 'clip-path-background-color')
    assert background[0].get('rx') == '75'
    assert 'fill="#EEEEEE" clip-path="url(#clip-path-background-color-0)"' in svg


def test_gradient_paint(builder):
    gradient = Gradient.simple_linear(Color.BLACK, Color.rgb(66, 103, 178))
    svg, _ = render(builder.dots_options(DotsOptions(DotType.ROUNDED, gradient=gradient)))
    assert '<linearGradient id="dot-color-0"' in svg
    assert 'fill="url(#dot-color-0)" clip-path="url(#clip-path-dot-color-0)"' in svg


@pytest.mark.parametrize("dot_type", list(DotType))
@pytest.mark.parametrize("shape", list(ShapeType))
def test_every_style_renders_well_formed(builder, dot_type, shape):
    builder.dots_options(DotsOptions(dot_type)).shape(shape)
    builder.corners_square_options(CornersSquareOptions(CornerSquareType.EXTRA_ROUNDED))
    svg, _ = render(builder)
    assert len(clip_path_children(parse_svg(svg), 'clip-path-dot-color')) > 0


def test_circle_shape_adds_edge_dots(builder):
    square_svg, _ = render(builder)
    circle_svg, _ = render(builder.shape(ShapeType.CIRCLE))
    square_dots = clip_path_children(parse_svg(square_svg), 'clip-path-dot-color')
    circle_dots = clip_path_children(parse_svg(circle_svg), 'clip-path-dot-color')
    assert len(circle_dots) > len(square_dots)


def test_circle_edge_grid(matrix):
    assert not build_circle_edge_grid(matrix, 0).cells.any()

    additional = 3
    grid = build_circle_edge_grid(matrix, additional)
    size = matrix.size + 2 * additional
    center = size / 2
    assert grid.size == size
    assert grid.cells.any()
    assert not grid.cells[additional - 1:size - additional + 1, additional - 1:size - additional + 1].any()
    for row, col in grid.filled_cells():
        assert ((row - center) ** 2 + (col - center) ** 2) ** 0.5 <= center
    assert not grid.neighbor(0, 0, -1, 0)


def test_logo_hides_dots(builder, logo_png):
    svg, matrix = render(builder.image(logo_png))
    root = parse_svg(svg)

    # 64x32 logo at Q on 25 modules hides 9 columns by 5 rows
    hidden = matrix.modules[10:15, 8:17].sum()
    dots = clip_path_children(root, 'clip-path-dot-color')
    assert len(dots) == matrix.dark_count() - FINDER_DARK_MODULES - hidden

    image = root.find(f'{SVG_NS}image')
    assert image.get('href').startswith('data:image/png;base64,')
    assert image.get(XLINK_HREF) == image.get('href')
    assert (image.get('x'), image.get('y'), image.get('width'), image.get('height')) == ('96', '120', '108', '60')


def test_logo_without_hiding_dots(builder, logo_png):
    svg, matrix = render(builder.image(logo_png).image_options(ImageOptions(hide_background_dots=False)))
    dots = clip_path_children(parse_svg(svg), 'clip-path-dot-color')
    assert len(dots) == matrix.dark_count() - FINDER_DARK_MODULES
    assert '<image ' in svg


def test_hidden_modules_count_as_empty_neighbors(matrix):
    visible = VisibleModules(matrix, 9, 5)
    assert not visible.is_visible(12, 12)
    assert not visible.neighbor(12, 7, 1, 0)
    assert not visible.is_visible(0, 0)
    assert not visible.is_filled(3, 3)


def test_renders_are_deterministic_with_fixed_ids(builder):
    first, _ = render(builder)
    second, _ = render(builder)
    assert first == second


def test_default_id_sources_do_not_clash(options, matrix):
    first = parse_svg(SvgRenderer(options).render(matrix))
    second = parse_svg(SvgRenderer(options).render(matrix))
    first_ids = {clip.get('id') for clip in first.iter(f'{SVG_NS}clipPath')}
    second_ids = {clip.get('id') for clip in second.iter(f'{SVG_NS}clipPath')}
    assert first_ids.isdisjoint(second_ids)


def test_fills_are_hex_colors(builder):
    svg, _ = render(builder
                    .dots_options(DotsOptions(color=Color(255, 255, 255, 1)))
                    .background_options(BackgroundOptions(color=Color(0, 0, 0, 254))))
    fills = re.findall(r'fill="(#[^"]*)"', svg)
    assert fills
    for fill in fills:
        assert re.fullmatch(r'#[0-9A-F]{6}([0-9A-F]{2})?', fill)


def test_out_of_range_dot_color_rejected():
    with pytest.raises(InvalidColorError):
        DotsOptions(color=(256, 0, 0))


def test_shared_renderer_keeps_ids_per_document(options, matrix):
    renderer = SvgRenderer(options, IdSource(namespace=""))
    with ThreadPoolExecutor(max_workers=8) as pool:
        documents = list(pool.map(lambda _: renderer.render(matrix), range(8)))

    suffixes = []
    for svg in documents:
        ids = {clip.get('id').rsplit('-', 1)[1] for clip in parse_svg(svg).iter(f'{SVG_NS}clipPath')}
        assert len(ids) == 1
        suffixes.extend(ids)
    assert len(set(suffixes)) == len(documents)


def test_logo_cross_origin_attribute(builder, logo_png):
    svg, _ = render(builder.image(logo_png).image_options(ImageOptions(cross_origin="anonymous")))
    assert parse_svg(svg).find(f'{SVG_NS}image').get('crossorigin') == 'anonymous'

    plain, _ = render(builder.image(logo_png).image_options(ImageOptions()))
    assert 'crossorigin' not in plain
