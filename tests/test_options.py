import pytest

from qr_styling import (
    BackgroundOptions,
    Color,
    CornerSquareType,
    DotType,
    ErrorCorrectionLevel,
    ImageOptions,
    QROptions,
    ShapeType,
    StylingBuilder,
    options_from_dict,
)
from qr_styling.errors import (
    CanvasTooSmallError,
    ConfigurationError,
    InvalidColorError,
    InvalidVersionError,
    MissingDataError,
)


def test_defaults(options):
    assert options.width == 300
    assert options.height == 300
    assert options.margin == 0
    assert options.shape == ShapeType.SQUARE
    assert options.qr_options.error_correction_level == ErrorCorrectionLevel.Q
    assert options.dots_options.round_size is True
    assert options.background_options.color == Color.WHITE


def test_missing_data():
    with pytest.raises(MissingDataError):
        StylingBuilder().build_options()
    with pytest.raises(MissingDataError):
        StylingBuilder().data("").build_options()


def test_canvas_too_small(builder):
    with pytest.raises(CanvasTooSmallError):
        builder.width(20).build_options()


def test_minimum_canvas_accepted(builder):
    assert builder.size(21).build_options().width == 21


def test_invalid_version(builder):
    with pytest.raises(InvalidVersionError):
        builder.qr_options(QROptions(type_number=41)).build_options()


def test_margin_validation(builder):
    with pytest.raises(ConfigurationError):
        builder.margin(-1).build_options()
    with pytest.raises(ConfigurationError):
        builder.margin(140).build_options()


def test_clamped_ranges():
    assert BackgroundOptions(round=2).round == 0.5
    assert ImageOptions(image_size=-1).image_size == 0.0


def test_enum_parsing():
    assert DotType.parse("Extra_Rounded") == DotType.EXTRA_ROUNDED
    with pytest.raises(ConfigurationError):
        DotType.parse("hexagon")


def test_with_data(options):
    assert options.with_data("other").data == "other"
    with pytest.raises(MissingDataError):
        options.with_data("")


def test_options_from_dict():
    options = options_from_dict({
        'data': 'hello',
        'size': '400',
        'margin': '10',
        'shape': 'circle',
        'ecc': 'h',
        'dot_type': 'rounded',
        'dot_color': '#4267B2',
        'corner_square_type': 'extra-rounded',
        'background_round': '0.2',
        'round_size': 'false',
    })
    assert options.data == 'hello'
    assert (options.width, options.height) == (400, 400)
    assert options.margin == 10
    assert options.shape == ShapeType.CIRCLE
    assert options.qr_options.error_correction_level == ErrorCorrectionLevel.H
    assert options.qr_options.type_number == 0
    assert options.dots_options.dot_type == DotType.ROUNDED
    assert options.dots_options.color == Color(0x42, 0x67, 0xB2)
    assert options.dots_options.round_size is False
    assert options.corners_square_options.square_type == CornerSquareType.EXTRA_ROUNDED
    assert options.background_options.round == 0.2


def test_options_from_dict_errors():
    with pytest.raises(ConfigurationError):
        options_from_dict({'data': 'x', 'width': 'wide'})
    with pytest.raises(ConfigurationError):
        options_from_dict({'data': 'x', 'round_size': 'maybe'})
    with pytest.raises(InvalidColorError):
        options_from_dict({'data': 'x', 'dot_color': 'blue-ish'})
    with pytest.raises(MissingDataError):
        options_from_dict({'width': '300'})


def test_logo_margin_validation():
    assert ImageOptions(margin=0).margin == 0
    with pytest.raises(ConfigurationError):
        ImageOptions(margin=-1)


def test_options_from_dict_cross_origin():
    assert options_from_dict({'data': 'x'}).image_options.cross_origin is None
    options = options_from_dict({'data': 'x', 'cross_origin': 'anonymous'})
    assert options.image_options.cross_origin == 'anonymous'
