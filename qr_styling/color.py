# -*- coding: utf-8 -*-
"""
Color and Gradient Definitions

Classes:
    Color: RGBA color parsed from / serialized to hex strings
    ColorStop: (offset, color) pair of a gradient ramp
    Gradient: Linear or radial gradient definition
"""

import re
from dataclasses import dataclass, field
from typing import Sequence, Tuple, Union

from .errors import EmptyGradientError, InvalidColorError
from .types import GradientType

_HEX_DIGITS = re.compile(r'^[0-9a-fA-F]+$')


@dataclass(frozen=True)
class Color:
    """RGBA color, every channel in 0..255."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self):
        for channel in (self.r, self.g, self.b, self.a):
            if isinstance(channel, bool) or not isinstance(channel, int) or not 0 <= channel <= 255:
                raise InvalidColorError(repr((self.r, self.g, self.b, self.a)))

    @classmethod
    def rgb(cls, r: int, g: int, b: int) -> "Color":
        return cls(r, g, b, 255)

    @classmethod
    def rgba(cls, r: int, g: int, b: int, a: int) -> "Color":
        return cls(r, g, b, a)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """
        Parse a hex color string.

        Accepts an optional leading '#' followed by 3, 6 or 8 hex digits.
        The short form replicates each nibble, so ``"#F80"`` becomes
        ``(255, 136, 0)``.

        Args:
            value (str): Hex string such as "#FF0000", "0f0" or "#FF000080"

        Returns:
            Color: Parsed color (alpha 255 unless 8 digits are given)

        Raises:
            InvalidColorError: If the string is not a valid hex color
        """
        text = value.strip() if isinstance(value, str) else ''
        if text.startswith('#'):
            text = text[1:]
        if not _HEX_DIGITS.match(text):
            raise InvalidColorError(str(value))

        if len(text) == 3:
            r, g, b = (int(ch, 16) * 17 for ch in text)
            return cls(r, g, b)
        if len(text) == 6:
            return cls(int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
        if len(text) == 8:
            return cls(int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16), int(text[6:8], 16))

        raise InvalidColorError(str(value))

    @classmethod
    def parse(cls, value: Union["Color", str, Sequence[int]]) -> "Color":
        """Coerce a Color, hex string or (r, g, b[, a]) tuple into a Color."""
        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        try:
            channels = [int(c) for c in value]
        except (TypeError, ValueError) as ex:
            raise InvalidColorError(repr(value)) from ex
        if len(channels) not in (3, 4):
            raise InvalidColorError(repr(value))
        return cls(*channels)

    def to_hex(self) -> str:
        if self.a == 255:
            return f"#{self.r:02X}{self.g:02X}{self.b:02X}"
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}{self.a:02X}"

    def to_rgba_string(self) -> str:
        if self.a == 255:
            return f"rgb({self.r}, {self.g}, {self.b})"
        return f"rgba({self.r}, {self.g}, {self.b}, {self.a / 255:.3f})"

    def __str__(self) -> str:
        return self.to_hex()


Color.BLACK = Color(0, 0, 0)
Color.WHITE = Color(255, 255, 255)
Color.TRANSPARENT = Color(0, 0, 0, 0)


@dataclass(frozen=True)
class ColorStop:
    offset: float
    color: Color

    def __post_init__(self):
        # offsets outside the ramp are clamped, not rejected
        object.__setattr__(self, 'offset', min(1.0, max(0.0, float(self.offset))))
        object.__setattr__(self, 'color', Color.parse(self.color))


@dataclass(frozen=True)
class Gradient:
    """
    Gradient definition.

    ``rotation`` is in radians and only used by linear gradients. Stops are
    kept in the given order; an empty stop list renders as an empty paint
    server, call ``validate()`` to reject it up front.
    """

    gradient_type: GradientType = GradientType.LINEAR
    rotation: float = 0.0
    color_stops: Tuple[ColorStop, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'gradient_type', GradientType.parse(self.gradient_type))
        object.__setattr__(self, 'color_stops', tuple(self.color_stops))

    @classmethod
    def linear(cls, color_stops: Sequence[ColorStop]) -> "Gradient":
        return cls(GradientType.LINEAR, 0.0, tuple(color_stops))

    @classmethod
    def linear_rotated(cls, rotation: float, color_stops: Sequence[ColorStop]) -> "Gradient":
        return cls(GradientType.LINEAR, rotation, tuple(color_stops))

    @classmethod
    def radial(cls, color_stops: Sequence[ColorStop]) -> "Gradient":
        return cls(GradientType.RADIAL, 0.0, tuple(color_stops))

    @classmethod
    def simple_linear(cls, start: Color, end: Color) -> "Gradient":
        return cls.linear([ColorStop(0.0, start), ColorStop(1.0, end)])

    @classmethod
    def simple_radial(cls, center: Color, edge: Color) -> "Gradient":
        return cls.radial([ColorStop(0.0, center), ColorStop(1.0, edge)])

    def validate(self) -> "Gradient":
        if not self.color_stops:
            raise EmptyGradientError()
        return self
