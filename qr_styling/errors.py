# -*- coding: utf-8 -*-
"""
Error Types

All failures raised by the styling engine derive from ``QRStylingError`` so
callers can catch the whole family at once. Configuration problems are
raised eagerly by the options builder, before any matrix or geometry work.
"""

from typing import Optional


class QRStylingError(Exception):
    """Base class for every error raised by qr_styling."""


class MissingDataError(QRStylingError):
    def __init__(self, message: str = "No data provided for QR code"):
        super().__init__(message)


class DataTooLargeError(QRStylingError):
    def __init__(self, message: str = "Data too large for QR code: data requires more capacity than available"):
        super().__init__(message)


class InvalidVersionError(QRStylingError):
    def __init__(self, version):
        self.version = version
        super().__init__(f"Invalid QR code version: {version}")


class CanvasTooSmallError(QRStylingError):
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        super().__init__(f"Canvas dimensions too small: {width}x{height}")


class InvalidColorError(QRStylingError, ValueError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid color format: {value}")


class EmptyGradientError(QRStylingError):
    def __init__(self):
        super().__init__("Gradient must have at least one color stop")


class ImageLoadError(QRStylingError):
    pass


class ImageEncodeError(QRStylingError):
    pass


class GenerationError(QRStylingError):
    def __init__(self, reason: Optional[str] = None):
        super().__init__(f"QR code generation failed: {reason}" if reason else "QR code generation failed")


class MarkupError(QRStylingError):
    pass


class ConfigurationError(QRStylingError, ValueError):
    pass
