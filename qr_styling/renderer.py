# -*- coding: utf-8 -*-
"""
QR Code Renderer Module

Composes the styled SVG document for a QR matrix. Rendering runs in fixed
phases: background, dots (plus the synthesized edge dots of circular
codes), the three finder ornaments, the optional logo, and finally the
document assembly.

Each styled group (dots, every corner square, every corner dot) is drawn as
one clip path holding all of its shapes plus a single rectangle painted
with the group's color or gradient and clipped to it.

Classes:
    VisibleModules: Matrix view hiding finder patterns and the logo area
    FakeGrid: Module grid synthesized around a circular code
    SvgRenderer: Builds the SVG document

Functions:
    build_circle_edge_grid: Synthesize the edge dots of a circular code
"""

import logging
import math
from typing import List, Optional, Tuple
from xml.sax.saxutils import quoteattr

import numpy as np

from .errors import CanvasTooSmallError
from .figures import CornerDotDrawer, CornerSquareDrawer, DotDrawer
from .gradients import resolve_paint
from .ids import IdSource
from .image_size import (
    calculate_image_size,
    logo_data_uri,
    logo_dimensions,
    max_hidden_axis_dots,
    max_hidden_dots,
)
from .matrix import QRMatrix
from .options import StylingOptions
from .svg import fmt
from .types import ShapeType

logger = logging.getLogger(__name__)

# Finder ornaments: (column, row, rotation) of the top-left, top-right and
# bottom-left corners
CORNER_POSITIONS = (
    (0, 0, 0.0),
    (1, 0, math.pi / 2),
    (0, 1, -math.pi / 2),
)


class VisibleModules:
    """
    Modules that are drawn as ordinary dots.

    Finder outer rings and inner dots are drawn as corner ornaments, and
    the centered ``hide_x`` x ``hide_y`` rectangle is left free for the
    logo. Hidden modules also count as empty for neighbor queries.
    """

    def __init__(self, matrix: QRMatrix, hide_x: int = 0, hide_y: int = 0):
        self.matrix = matrix
        count = matrix.size
        self.x_range = ((count - hide_x) // 2, (count + hide_x) // 2)
        self.y_range = ((count - hide_y) // 2, (count + hide_y) // 2)

    def is_visible(self, row: int, col: int) -> bool:
        if self.y_range[0] <= row < self.y_range[1] and self.x_range[0] <= col < self.x_range[1]:
            return False
        if self.matrix.is_finder_pattern_outer(row, col) or self.matrix.is_finder_pattern_inner(row, col):
            return False
        return True

    def is_filled(self, row: int, col: int) -> bool:
        return self.matrix.is_dark(row, col) and self.is_visible(row, col)

    def neighbor(self, row: int, col: int, dx: int, dy: int) -> bool:
        return self.is_filled(row + dy, col + dx)


class FakeGrid:
    """Boolean grid with its own neighbor relation (out of range reads as empty)."""

    def __init__(self, cells: np.ndarray):
        self.cells = cells

    @property
    def size(self) -> int:
        return int(self.cells.shape[0])

    def is_filled(self, row: int, col: int) -> bool:
        if row < 0 or col < 0 or row >= self.size or col >= self.size:
            return False
        return bool(self.cells[row, col])

    def neighbor(self, row: int, col: int, dx: int, dy: int) -> bool:
        return self.is_filled(row + dy, col + dx)

    def filled_cells(self) -> List[Tuple[int, int]]:
        return [(int(r), int(c)) for r, c in zip(*np.nonzero(self.cells))]


def _source_index(index: int, count: int, additional: int) -> int:
    # wrap the fake ring back onto the real matrix edge content
    if index < 2 * additional:
        return index
    if index >= count:
        return index - 2 * additional
    return index - additional


def build_circle_edge_grid(matrix: QRMatrix, additional: int) -> FakeGrid:
    """
    Synthesize the dots filling the corners of a circular QR code.

    The real matrix sits in the middle of a larger grid with ``additional``
    extra rings on every side. Cells of the extra rings that lie inside the
    circle inscribed in the larger grid copy the state of a real module
    picked by wrapping the ring index back onto the matrix edges. The real
    matrix plus a one-module gap around it stays empty.

    Args:
        matrix (QRMatrix): The real module matrix
        additional (int): Extra rings on each side

    Returns:
        FakeGrid: Grid of size count + 2 * additional
    """
    count = matrix.size
    fake_count = count + 2 * additional
    center = fake_count / 2
    cells = np.zeros((fake_count, fake_count), dtype=bool)

    inner_low = max(0, additional - 1)
    inner_high = fake_count - additional

    for row in range(fake_count):
        for col in range(fake_count):
            if inner_low <= row <= inner_high and inner_low <= col <= inner_high:
                continue
            if math.hypot(row - center, col - center) > center:
                continue
            source_row = _source_index(row, count, additional)
            source_col = _source_index(col, count, additional)
            cells[row, col] = matrix.is_dark(source_row, source_col)

    return FakeGrid(cells)


class SvgRenderer:
    """
    Renders a QR matrix into a styled SVG document.

    Args:
        options (StylingOptions): Validated styling options
        ids (Optional[IdSource]): Source of id suffixes for clip paths and
            gradients; a fresh source (random namespace) when None

    Example:
        >>> options = StylingBuilder().data("https://example.com").build_options()
        >>> matrix = QRMatrix.from_data(options.data, options.qr_options)
        >>> svg = SvgRenderer(options).render(matrix)
    """

    def __init__(self, options: StylingOptions, ids: Optional[IdSource] = None):
        self.options = options
        self.ids = ids if ids is not None else IdSource()

    def round_size(self, value: float) -> float:
        if self.options.dots_options.round_size:
            return float(math.floor(value))
        return value

    def _min_size(self) -> int:
        return min(self.options.width, self.options.height) - 2 * self.options.margin

    def dot_size(self, count: int) -> float:
        min_size = self._min_size()
        real_qr_size = min_size / math.sqrt(2) if self.options.shape == ShapeType.CIRCLE else min_size
        return self.round_size(real_qr_size / count)

    def image_hide_area(self, count: int, dot_size: float) -> Tuple[int, int]:
        """Modules hidden by the logo along x and y, (0, 0) without a logo."""
        if not self.options.image:
            return 0, 0
        logo_width, logo_height = logo_dimensions(self.options.image)
        result = calculate_image_size(
            logo_width,
            logo_height,
            max_hidden_dots(self.options.image_options.image_size,
                            self.options.qr_options.error_correction_level, count),
            max_hidden_axis_dots(count),
            dot_size,
        )
        return result.hide_x_dots, result.hide_y_dots

    def _origin(self, count: int, dot_size: float) -> Tuple[float, float]:
        x = self.round_size((self.options.width - count * dot_size) / 2)
        y = self.round_size((self.options.height - count * dot_size) / 2)
        return x, y

    def render(self, matrix: QRMatrix) -> str:
        """
        Render the matrix as an SVG string.

        Raises:
            CanvasTooSmallError: If the canvas leaves less than a pixel per module
            ImageLoadError / ImageEncodeError: If the logo can't be processed
        """
        render_id = self.ids.next_id()
        count = matrix.size
        dot_size = self.dot_size(count)
        if dot_size <= 0:
            raise CanvasTooSmallError(self.options.width, self.options.height)

        hide_x, hide_y = self.image_hide_area(count, dot_size)
        hide_background = self.options.image_options.hide_background_dots and bool(self.options.image)
        visible = VisibleModules(matrix, hide_x, hide_y) if hide_background else VisibleModules(matrix)
        logger.debug(f"Rendering {count}x{count} modules, dot size {dot_size}, "
                     f"logo area {hide_x}x{hide_y}")

        defs: List[str] = []
        elements: List[str] = []

        for phase_defs, phase_elements in (
            self.render_background(render_id),
            self.render_dots(visible, dot_size, render_id),
            self.render_corners(count, dot_size, render_id),
        ):
            defs.append(phase_defs)
            elements.append(phase_elements)

        if self.options.image:
            elements.append(self.render_image(count, dot_size, hide_x, hide_y))

        shape_rendering = ' shape-rendering="crispEdges"' if self.options.dots_options.round_size else ''
        width, height = self.options.width, self.options.height
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" '
            f'width="{width}" height="{height}" viewBox="0 0 {width} {height}"{shape_rendering}>\n'
            '<defs>\n'
            f'{"".join(defs)}'
            '</defs>\n'
            f'{"".join(elements)}'
            '</svg>'
        )

    def render_background(self, render_id: str) -> Tuple[str, str]:
        bg = self.options.background_options
        name = f"background-color-{render_id}"

        if bg.round > 0:
            width = height = min(self.options.width, self.options.height)
        else:
            width, height = self.options.width, self.options.height

        x = self.round_size((self.options.width - width) / 2)
        y = self.round_size((self.options.height - height) / 2)
        rx = height / 2 * bg.round if bg.round > 0 else 0
        rx_attr = f' rx="{fmt(rx)}"' if rx > 0 else ''

        defs = (f'<clipPath id="clip-path-{name}"><rect x="{fmt(x)}" y="{fmt(y)}" '
                f'width="{fmt(width)}" height="{fmt(height)}"{rx_attr}/></clipPath>\n')
        grad_defs, fill = resolve_paint(bg.gradient, bg.color, 0.0, 0, 0,
                                        self.options.height, self.options.width, name)
        element = (f'<rect x="0" y="0" width="{self.options.width}" height="{self.options.height}" '
                   f'fill="{fill}" clip-path="url(#clip-path-{name})"/>\n')
        return defs + grad_defs, element

    def render_dots(self, visible: VisibleModules, dot_size: float, render_id: str) -> Tuple[str, str]:
        count = visible.matrix.size
        x_beginning, y_beginning = self._origin(count, dot_size)
        drawer = DotDrawer(self.options.dots_options.dot_type)
        name = f"dot-color-{render_id}"

        shapes = []
        for row in range(count):
            for col in range(count):
                if not visible.is_filled(row, col):
                    continue
                x = x_beginning + col * dot_size
                y = y_beginning + row * dot_size
                shapes.append(drawer.draw_module(visible, row, col, x, y, dot_size))

        if self.options.shape == ShapeType.CIRCLE:
            shapes.extend(self.render_circle_edge_dots(visible.matrix, dot_size, x_beginning, y_beginning, drawer))

        defs = f'<clipPath id="clip-path-{name}">\n' + ''.join(s + '\n' for s in shapes) + '</clipPath>\n'
        dots = self.options.dots_options
        grad_defs, fill = resolve_paint(dots.gradient, dots.color, 0.0, 0, 0,
                                        self.options.height, self.options.width, name)
        element = (f'<rect x="0" y="0" width="{self.options.width}" height="{self.options.height}" '
                   f'fill="{fill}" clip-path="url(#clip-path-{name})"/>\n')
        return defs + grad_defs, element

    def circle_additional_dots(self, count: int, dot_size: float) -> int:
        """Extra rings fitting in the margin left around the inscribed square."""
        additional = self.round_size((self._min_size() / dot_size - count) / 2)
        return max(0, int(additional))

    def render_circle_edge_dots(
        self,
        matrix: QRMatrix,
        dot_size: float,
        x_beginning: float,
        y_beginning: float,
        drawer: DotDrawer,
    ) -> List[str]:
        additional = self.circle_additional_dots(matrix.size, dot_size)
        if additional == 0:
            return []

        grid = build_circle_edge_grid(matrix, additional)
        x_fake = x_beginning - additional * dot_size
        y_fake = y_beginning - additional * dot_size

        shapes = [
            drawer.draw_module(grid, row, col, x_fake + col * dot_size, y_fake + row * dot_size, dot_size)
            for row, col in grid.filled_cells()
        ]
        logger.debug(f"Circle shape: {additional} extra rings, {len(shapes)} edge dots")
        return shapes

    def render_corners(self, count: int, dot_size: float, render_id: str) -> Tuple[str, str]:
        x_beginning, y_beginning = self._origin(count, dot_size)
        square_size = dot_size * 7
        dot_size_px = dot_size * 3

        defs, elements = [], []
        for column, row, rotation in CORNER_POSITIONS:
            x = x_beginning + column * dot_size * (count - 7)
            y = y_beginning + row * dot_size * (count - 7)

            square_defs, square_element = self._render_corner(
                f"corners-square-color-{column}-{row}-{render_id}",
                CornerSquareDrawer(self.options.corners_square_options.square_type),
                self.options.corners_square_options,
                x, y, square_size, rotation,
            )
            dot_defs, dot_element = self._render_corner(
                f"corners-dot-color-{column}-{row}-{render_id}",
                CornerDotDrawer(self.options.corners_dot_options.dot_type),
                self.options.corners_dot_options,
                x + dot_size * 2, y + dot_size * 2, dot_size_px, rotation,
            )
            defs += [square_defs, dot_defs]
            elements += [square_element, dot_element]

        return ''.join(defs), ''.join(elements)

    @staticmethod
    def _render_corner(name, drawer, style, x, y, size, rotation) -> Tuple[str, str]:
        shape = drawer.draw(x, y, size, rotation)
        defs = f'<clipPath id="clip-path-{name}">\n{shape}\n</clipPath>\n'
        grad_defs, fill = resolve_paint(style.gradient, style.color, rotation, x, y, size, size, name)
        element = (f'<rect x="{fmt(x)}" y="{fmt(y)}" width="{fmt(size)}" height="{fmt(size)}" '
                   f'fill="{fill}" clip-path="url(#clip-path-{name})"/>\n')
        return defs + grad_defs, element

    def render_image(self, count: int, dot_size: float, hide_x: int, hide_y: int) -> str:
        x_beginning, y_beginning = self._origin(count, dot_size)
        width = hide_x * dot_size
        height = hide_y * dot_size
        margin = self.options.image_options.margin

        dx = x_beginning + self.round_size(margin + (count * dot_size - width) / 2)
        dy = y_beginning + self.round_size(margin + (count * dot_size - height) / 2)
        dw = width - margin * 2
        dh = height - margin * 2
        if dw <= 0 or dh <= 0:
            logger.warning(f"Logo margin {margin}px leaves no room in a {width}x{height}px area, logo skipped")
            return ''

        data_uri = logo_data_uri(self.options.image, self.options.image_options.save_as_blob)
        cross_origin = self.options.image_options.cross_origin
        cross_origin_attr = f' crossorigin={quoteattr(cross_origin)}' if cross_origin else ''
        return (f'<image href="{data_uri}" xlink:href="{data_uri}" x="{fmt(dx)}" y="{fmt(dy)}" '
                f'width="{fmt(dw)}" height="{fmt(dh)}"{cross_origin_attr}/>\n')
