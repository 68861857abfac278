# -*- coding: utf-8 -*-
"""
QR Styling - Styled QR Code Rendering

Renders QR codes as styled SVG documents (neighbor-aware dot shapes,
finder ornaments, gradients, embedded logos, circular outlines and
decorative borders) and exports them to PNG, JPEG, WebP and PDF.

Modules:
    styling: QRCodeStyling facade
    options: Option groups and builder
    renderer: SVG composition
    figures: Dot and corner shapes
    border: Frames and text/image decorations
    export: Raster and PDF conversion
"""

__version__ = "1.0.0"
__author__ = "QR Generator Advanced Team"

from .border import BorderOptions, BorderPlugin, Decoration, Position, QRBorderOptions
from .color import Color, ColorStop, Gradient
from .errors import (
    CanvasTooSmallError,
    ConfigurationError,
    DataTooLargeError,
    EmptyGradientError,
    GenerationError,
    ImageEncodeError,
    ImageLoadError,
    InvalidColorError,
    InvalidVersionError,
    MarkupError,
    MissingDataError,
    QRStylingError,
)
from .ids import IdSource
from .matrix import QRMatrix
from .options import (
    BackgroundOptions,
    CornersDotOptions,
    CornersSquareOptions,
    DotsOptions,
    ImageOptions,
    QROptions,
    StylingBuilder,
    StylingOptions,
    options_from_dict,
)
from .renderer import SvgRenderer
from .styling import QRCodeStyling
from .types import (
    CornerDotType,
    CornerSquareType,
    DotType,
    ErrorCorrectionLevel,
    GradientType,
    Mode,
    OutputFormat,
    ShapeType,
)

__all__ = [
    'QRCodeStyling',
    'StylingBuilder',
    'StylingOptions',
    'QROptions',
    'DotsOptions',
    'CornersSquareOptions',
    'CornersDotOptions',
    'BackgroundOptions',
    'ImageOptions',
    'options_from_dict',
    'QRMatrix',
    'SvgRenderer',
    'IdSource',
    'Color',
    'ColorStop',
    'Gradient',
    'BorderOptions',
    'BorderPlugin',
    'Decoration',
    'Position',
    'QRBorderOptions',
    'DotType',
    'CornerSquareType',
    'CornerDotType',
    'GradientType',
    'ShapeType',
    'ErrorCorrectionLevel',
    'Mode',
    'OutputFormat',
    'QRStylingError',
    'MissingDataError',
    'DataTooLargeError',
    'InvalidVersionError',
    'CanvasTooSmallError',
    'InvalidColorError',
    'EmptyGradientError',
    'ImageLoadError',
    'ImageEncodeError',
    'GenerationError',
    'MarkupError',
    'ConfigurationError',
]
