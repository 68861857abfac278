# -*- coding: utf-8 -*-
"""
Style Type Enumerations

Closed sets of style variants used across the renderer. Values are the
kebab-case names accepted by the configuration layer (e.g. ``"extra-rounded"``).

Classes:
    DotType, CornerSquareType, CornerDotType: Module shape families
    GradientType: Linear or radial gradients
    ShapeType: Overall QR outline (square or circle)
    ErrorCorrectionLevel: L/M/Q/H with recovery percentage
    Mode: Encoding modes with auto-detection
    OutputFormat: Export formats with MIME type and extension
"""

from enum import Enum
from typing import Union

from .errors import ConfigurationError


class _ParseableEnum(Enum):
    """Enum accepting members or case-insensitive value strings."""

    @classmethod
    def parse(cls, value: Union[str, "_ParseableEnum"]):
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower().replace('_', '-')
        for member in cls:
            if member.value.lower() == text:
                return member
        choices = ", ".join(m.value for m in cls)
        raise ConfigurationError(f"Invalid {cls.__name__} '{value}' (expected one of: {choices})")


class DotType(_ParseableEnum):
    SQUARE = 'square'
    DOTS = 'dots'
    ROUNDED = 'rounded'
    CLASSY = 'classy'
    CLASSY_ROUNDED = 'classy-rounded'
    EXTRA_ROUNDED = 'extra-rounded'


class CornerSquareType(_ParseableEnum):
    SQUARE = 'square'
    DOT = 'dot'
    EXTRA_ROUNDED = 'extra-rounded'


class CornerDotType(_ParseableEnum):
    DOT = 'dot'
    SQUARE = 'square'


class GradientType(_ParseableEnum):
    LINEAR = 'linear'
    RADIAL = 'radial'


class ShapeType(_ParseableEnum):
    SQUARE = 'square'
    CIRCLE = 'circle'


class ErrorCorrectionLevel(_ParseableEnum):
    """
    QR error correction levels.

    The value is the letter segno expects; ``percentage`` is the approximate
    share of codewords that can be restored, which bounds how many modules
    a logo may hide.
    """
    L = 'L'
    M = 'M'
    Q = 'Q'
    H = 'H'

    @property
    def percentage(self) -> float:
        return _EC_PERCENTAGE[self]


_EC_PERCENTAGE = {
    ErrorCorrectionLevel.L: 0.07,   # ~7% recovery
    ErrorCorrectionLevel.M: 0.15,   # ~15% recovery
    ErrorCorrectionLevel.Q: 0.25,   # ~25% recovery
    ErrorCorrectionLevel.H: 0.30,   # ~30% recovery
}

# Characters allowed in alphanumeric mode besides 0-9 and A-Z
_ALPHANUMERIC_EXTRA = set(' $%*+-./:')


class Mode(_ParseableEnum):
    NUMERIC = 'numeric'
    ALPHANUMERIC = 'alphanumeric'
    BYTE = 'byte'
    KANJI = 'kanji'

    @classmethod
    def detect(cls, data: str) -> "Mode":
        """
        Pick the most compact mode able to hold ``data``.

        Kanji is never auto-selected.

        Example:
            >>> Mode.detect("12345")
            <Mode.NUMERIC: 'numeric'>
            >>> Mode.detect("HELLO WORLD")
            <Mode.ALPHANUMERIC: 'alphanumeric'>
        """
        if all('0' <= ch <= '9' for ch in data):
            return cls.NUMERIC
        if all(('0' <= ch <= '9') or ('A' <= ch <= 'Z') or ch in _ALPHANUMERIC_EXTRA for ch in data):
            return cls.ALPHANUMERIC
        return cls.BYTE


class OutputFormat(_ParseableEnum):
    SVG = 'svg'
    PNG = 'png'
    JPEG = 'jpeg'
    WEBP = 'webp'
    PDF = 'pdf'

    @classmethod
    def parse(cls, value):
        if isinstance(value, str) and value.strip().lower() == 'jpg':
            return cls.JPEG
        return super().parse(value)

    @property
    def mime_type(self) -> str:
        return {
            OutputFormat.SVG: 'image/svg+xml',
            OutputFormat.PNG: 'image/png',
            OutputFormat.JPEG: 'image/jpeg',
            OutputFormat.WEBP: 'image/webp',
            OutputFormat.PDF: 'application/pdf',
        }[self]

    @property
    def extension(self) -> str:
        return self.value

    @property
    def is_raster(self) -> bool:
        return self in (OutputFormat.PNG, OutputFormat.JPEG, OutputFormat.WEBP)
