# -*- coding: utf-8 -*-
"""
Styling Options Module

Immutable option groups describing how a QR code is styled, the builder that
validates them, and a loader turning flat string mappings (HTTP query
parameters, form fields) into options.

Classes:
    QROptions: Encoder parameters (version, error correction, mode)
    DotsOptions / CornersSquareOptions / CornersDotOptions: Shape styles
    BackgroundOptions: Background paint and corner rounding
    ImageOptions: Logo sizing and embedding
    StylingOptions: Aggregate of all groups plus canvas geometry
    StylingBuilder: Fluent builder failing fast on invalid input

Functions:
    options_from_dict: Build StylingOptions from a mapping of strings
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

from .color import Color, Gradient
from .errors import (
    CanvasTooSmallError,
    ConfigurationError,
    InvalidVersionError,
    MissingDataError,
)
from .types import (
    CornerDotType,
    CornerSquareType,
    DotType,
    ErrorCorrectionLevel,
    Mode,
    ShapeType,
)

logger = logging.getLogger(__name__)

# Smallest canvas able to hold one pixel per module of a version 1 symbol
MIN_CANVAS_SIZE = 21
MAX_VERSION = 40

DEFAULT_WIDTH = 300
DEFAULT_HEIGHT = 300


def _clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, float(value)))


@dataclass(frozen=True)
class QROptions:
    """Encoder parameters. ``type_number`` 0 selects the smallest fitting version."""

    type_number: int = 0
    error_correction_level: ErrorCorrectionLevel = ErrorCorrectionLevel.Q
    mode: Optional[Mode] = None

    def __post_init__(self):
        object.__setattr__(self, 'error_correction_level',
                           ErrorCorrectionLevel.parse(self.error_correction_level))
        if self.mode is not None:
            object.__setattr__(self, 'mode', Mode.parse(self.mode))


@dataclass(frozen=True)
class DotsOptions:
    dot_type: DotType = DotType.SQUARE
    color: Color = Color.BLACK
    gradient: Optional[Gradient] = None
    round_size: bool = True

    def __post_init__(self):
        object.__setattr__(self, 'dot_type', DotType.parse(self.dot_type))
        object.__setattr__(self, 'color', Color.parse(self.color))


@dataclass(frozen=True)
class CornersSquareOptions:
    square_type: CornerSquareType = CornerSquareType.SQUARE
    color: Color = Color.BLACK
    gradient: Optional[Gradient] = None

    def __post_init__(self):
        object.__setattr__(self, 'square_type', CornerSquareType.parse(self.square_type))
        object.__setattr__(self, 'color', Color.parse(self.color))


@dataclass(frozen=True)
class CornersDotOptions:
    dot_type: CornerDotType = CornerDotType.DOT
    color: Color = Color.BLACK
    gradient: Optional[Gradient] = None

    def __post_init__(self):
        object.__setattr__(self, 'dot_type', CornerDotType.parse(self.dot_type))
        object.__setattr__(self, 'color', Color.parse(self.color))


@dataclass(frozen=True)
class BackgroundOptions:
    """Background paint. ``round`` (0..0.5) turns the background into a rounded square."""

    color: Color = Color.WHITE
    gradient: Optional[Gradient] = None
    round: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'color', Color.parse(self.color))
        object.__setattr__(self, 'round', _clamp(self.round, 0.0, 0.5))

    @classmethod
    def transparent(cls) -> "BackgroundOptions":
        return cls(color=Color.TRANSPARENT)


@dataclass(frozen=True)
class ImageOptions:
    """
    Logo embedding options.

    Attributes:
        image_size (float): Share of the error-correction budget the logo
            may occlude (0..1)
        hide_background_dots (bool): Skip modules underneath the logo
        margin (int): Inner padding in pixels around the logo (>= 0)
        cross_origin (Optional[str]): Emitted as the ``crossorigin``
            attribute of the logo ``<image>`` element
        save_as_blob (bool): Embed the logo bytes verbatim; when False the
            logo is re-encoded to PNG before embedding

    Raises:
        ConfigurationError: If the margin is negative
    """

    image_size: float = 0.4
    hide_background_dots: bool = True
    margin: int = 0
    cross_origin: Optional[str] = None
    save_as_blob: bool = True

    def __post_init__(self):
        object.__setattr__(self, 'image_size', _clamp(self.image_size, 0.0, 1.0))
        if self.margin < 0:
            raise ConfigurationError(f"Logo margin must not be negative: {self.margin}")


@dataclass(frozen=True)
class StylingOptions:
    data: str = ''
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    margin: int = 0
    shape: ShapeType = ShapeType.SQUARE
    image: Optional[bytes] = None
    qr_options: QROptions = field(default_factory=QROptions)
    dots_options: DotsOptions = field(default_factory=DotsOptions)
    corners_square_options: CornersSquareOptions = field(default_factory=CornersSquareOptions)
    corners_dot_options: CornersDotOptions = field(default_factory=CornersDotOptions)
    background_options: BackgroundOptions = field(default_factory=BackgroundOptions)
    image_options: ImageOptions = field(default_factory=ImageOptions)

    def with_data(self, data: str) -> "StylingOptions":
        if not data:
            raise MissingDataError()
        return replace(self, data=data)


class StylingBuilder:
    """
    Fluent builder for ``StylingOptions``.

    Example:
        >>> options = (StylingBuilder()
        ...            .data("https://example.com")
        ...            .size(400)
        ...            .dots_options(DotsOptions(DotType.ROUNDED))
        ...            .build_options())
    """

    def __init__(self):
        self._values = {}

    def _set(self, key: str, value: Any) -> "StylingBuilder":
        self._values[key] = value
        return self

    def data(self, data: str) -> "StylingBuilder":
        return self._set('data', data)

    def width(self, width: int) -> "StylingBuilder":
        return self._set('width', width)

    def height(self, height: int) -> "StylingBuilder":
        return self._set('height', height)

    def size(self, size: int) -> "StylingBuilder":
        self._set('width', size)
        return self._set('height', size)

    def margin(self, margin: int) -> "StylingBuilder":
        return self._set('margin', margin)

    def shape(self, shape: ShapeType) -> "StylingBuilder":
        return self._set('shape', ShapeType.parse(shape))

    def image(self, image: bytes) -> "StylingBuilder":
        return self._set('image', bytes(image))

    def qr_options(self, options: QROptions) -> "StylingBuilder":
        return self._set('qr_options', options)

    def dots_options(self, options: DotsOptions) -> "StylingBuilder":
        return self._set('dots_options', options)

    def corners_square_options(self, options: CornersSquareOptions) -> "StylingBuilder":
        return self._set('corners_square_options', options)

    def corners_dot_options(self, options: CornersDotOptions) -> "StylingBuilder":
        return self._set('corners_dot_options', options)

    def background_options(self, options: BackgroundOptions) -> "StylingBuilder":
        return self._set('background_options', options)

    def image_options(self, options: ImageOptions) -> "StylingBuilder":
        return self._set('image_options', options)

    def build_options(self) -> StylingOptions:
        """
        Validate the collected values and freeze them into StylingOptions.

        Raises:
            MissingDataError: If no data (or an empty string) was given
            CanvasTooSmallError: If width or height is below 21 px
            InvalidVersionError: If the explicit version is outside 0..40
            ConfigurationError: If the margin is negative or leaves no room
        """
        values = dict(self._values)

        data = values.get('data')
        if not data:
            raise MissingDataError()

        width = int(values.get('width', DEFAULT_WIDTH))
        height = int(values.get('height', DEFAULT_HEIGHT))
        if width < MIN_CANVAS_SIZE or height < MIN_CANVAS_SIZE:
            raise CanvasTooSmallError(width, height)

        margin = int(values.get('margin', 0))
        if margin < 0:
            raise ConfigurationError(f"Margin must not be negative: {margin}")
        if min(width, height) - 2 * margin < MIN_CANVAS_SIZE:
            raise ConfigurationError(
                f"Margin {margin} leaves less than {MIN_CANVAS_SIZE}px for a {width}x{height} canvas")

        qr_options = values.get('qr_options') or QROptions()
        if not 0 <= int(qr_options.type_number) <= MAX_VERSION:
            raise InvalidVersionError(qr_options.type_number)

        values.update(width=width, height=height, margin=margin, qr_options=qr_options)
        options = StylingOptions(**values)
        logger.debug(f"Built styling options: {width}x{height}, margin={margin}, shape={options.shape.value}")
        return options

    def build(self):
        """Validate the options and encode the data into a QRCodeStyling."""
        from .styling import QRCodeStyling
        return QRCodeStyling(self.build_options())


_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off'}


def _get_bool(params: Mapping[str, Any], key: str, default: bool) -> bool:
    raw = params.get(key)
    if raw is None or raw == '':
        return default
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for '{key}': {raw}")


def _get_number(params: Mapping[str, Any], key: str, default, cast=int):
    raw = params.get(key)
    if raw is None or raw == '':
        return default
    try:
        return cast(raw)
    except (TypeError, ValueError) as ex:
        raise ConfigurationError(f"Invalid number for '{key}': {raw}") from ex


def options_from_dict(params: Mapping[str, Any]) -> StylingOptions:
    """
    Build validated StylingOptions from a flat mapping of (string) values.

    Recognized keys: data (or text), width, height, size, margin, shape,
    ecc, version, mode, dot_type, dot_color, round_size,
    corner_square_type, corner_square_color, corner_dot_type,
    corner_dot_color, background, background_round, image_size,
    image_margin, hide_background_dots, save_as_blob, cross_origin.
    Missing keys fall back to the option defaults.

    Args:
        params (Mapping[str, Any]): e.g. ``request.values`` from Flask

    Returns:
        StylingOptions: Validated options (without a logo image)

    Raises:
        ConfigurationError: On unparseable numbers, booleans or enum names
        InvalidColorError: On bad color strings
        MissingDataError / CanvasTooSmallError / InvalidVersionError:
            From the builder validation
    """
    data = (params.get('data') or params.get('text') or '').strip()

    builder = StylingBuilder().data(data)
    size = _get_number(params, 'size', None)
    if size is not None:
        builder.size(size)
    builder.width(_get_number(params, 'width', size or DEFAULT_WIDTH))
    builder.height(_get_number(params, 'height', size or DEFAULT_HEIGHT))
    builder.margin(_get_number(params, 'margin', 0))
    builder.shape(params.get('shape') or ShapeType.SQUARE)

    version = params.get('version')
    type_number = 0 if version in (None, '', 'auto') else _get_number(params, 'version', 0)
    mode = params.get('mode')
    builder.qr_options(QROptions(
        type_number=type_number,
        error_correction_level=(params.get('ecc') or 'Q').strip().upper(),
        mode=None if mode in (None, '', 'auto') else mode,
    ))

    builder.dots_options(DotsOptions(
        dot_type=params.get('dot_type') or DotType.SQUARE,
        color=params.get('dot_color') or Color.BLACK,
        round_size=_get_bool(params, 'round_size', True),
    ))
    builder.corners_square_options(CornersSquareOptions(
        square_type=params.get('corner_square_type') or CornerSquareType.SQUARE,
        color=params.get('corner_square_color') or Color.BLACK,
    ))
    builder.corners_dot_options(CornersDotOptions(
        dot_type=params.get('corner_dot_type') or CornerDotType.DOT,
        color=params.get('corner_dot_color') or Color.BLACK,
    ))
    builder.background_options(BackgroundOptions(
        color=params.get('background') or Color.WHITE,
        round=_get_number(params, 'background_round', 0.0, float),
    ))
    builder.image_options(ImageOptions(
        image_size=_get_number(params, 'image_size', 0.4, float),
        margin=_get_number(params, 'image_margin', 0),
        hide_background_dots=_get_bool(params, 'hide_background_dots', True),
        save_as_blob=_get_bool(params, 'save_as_blob', True),
        cross_origin=params.get('cross_origin') or None,
    ))
    return builder.build_options()
