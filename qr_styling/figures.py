# -*- coding: utf-8 -*-
"""
QR Figures Module

Pure geometry for the three kinds of QR ornaments:

- dots: ordinary modules; the rounded and classy families pick their shape
  from the 4-neighbor occupancy (left, right, top, bottom)
- corner squares: the 7x7 outer ring of a finder pattern
- corner dots: the 3x3 center of a finder pattern

Every drawer returns one SVG element string. Rotations are radians about
the shape's own center and only emitted when non-zero.

Classes:
    NeighborQuery: Capability answering "is the module at an offset dark?"
    Neighborhood: 4-neighbor occupancy of one module
    ShapeKind: Primitive dot shapes
    DotDrawer: Neighbor-adaptive dot shapes
    CornerSquareDrawer: Finder outer ring shapes
    CornerDotDrawer: Finder center shapes

Functions:
    select_dot_shape: Shape and rotation chosen for a dot type and neighborhood
"""

import math
from enum import Enum
from typing import NamedTuple, Optional, Protocol, Tuple

from .svg import path_data, rotate_transform, svg_circle, svg_path, svg_rect
from .types import CornerDotType, CornerSquareType, DotType

PI = math.pi


class NeighborQuery(Protocol):
    """Anything able to tell whether the module (row+dy, col+dx) is filled."""

    def neighbor(self, row: int, col: int, dx: int, dy: int) -> bool:
        ...


class Neighborhood(NamedTuple):
    left: bool = False
    right: bool = False
    top: bool = False
    bottom: bool = False

    @classmethod
    def of(cls, query: NeighborQuery, row: int, col: int) -> "Neighborhood":
        return cls(
            left=query.neighbor(row, col, -1, 0),
            right=query.neighbor(row, col, 1, 0),
            top=query.neighbor(row, col, 0, -1),
            bottom=query.neighbor(row, col, 0, 1),
        )

    @property
    def count(self) -> int:
        return int(self.left) + int(self.right) + int(self.top) + int(self.bottom)

    def rotated_clockwise(self) -> "Neighborhood":
        """The same occupancy turned a quarter turn clockwise (left becomes top)."""
        return Neighborhood(left=self.bottom, right=self.top, top=self.left, bottom=self.right)


class ShapeKind(Enum):
    CIRCLE = 'circle'
    SQUARE = 'square'
    SIDE_ROUNDED = 'side-rounded'
    CORNER_ROUNDED = 'corner-rounded'
    CORNER_EXTRA_ROUNDED = 'corner-extra-rounded'
    CORNERS_ROUNDED = 'corners-rounded'


def _pair_rotation(n: Neighborhood) -> float:
    # two adjacent neighbors: the rounded corner faces away from both
    if n.left and n.top:
        return PI / 2
    if n.top and n.right:
        return PI
    if n.right and n.bottom:
        return -PI / 2
    return 0.0


def _single_rotation(n: Neighborhood) -> float:
    # one neighbor: the rounded side faces away from it
    if n.top:
        return PI / 2
    if n.right:
        return PI
    if n.bottom:
        return -PI / 2
    return 0.0


def select_dot_shape(dot_type: DotType, neighborhood: Optional[Neighborhood] = None) -> Tuple[ShapeKind, float]:
    """
    Choose the primitive shape and rotation for one dark module.

    Rounded / extra-rounded:
        - no neighbors -> circle
        - more than two neighbors, or an opposite pair -> square
        - two adjacent neighbors -> one rounded corner
        - one neighbor -> rounded side facing away from it

    Classy / classy-rounded:
        - no neighbors -> two diagonally opposite rounded corners
        - no left and no top neighbor -> rounded top-left corner
        - no right and no bottom neighbor -> rounded bottom-right corner
        - otherwise -> square

    Args:
        dot_type (DotType): Dot style
        neighborhood (Optional[Neighborhood]): Occupancy of the four
            adjacent modules, None meaning isolated

    Returns:
        Tuple[ShapeKind, float]: Shape and rotation in radians

    Example:
        >>> select_dot_shape(DotType.ROUNDED, Neighborhood(right=True))
        (<ShapeKind.SIDE_ROUNDED: 'side-rounded'>, 3.141592653589793)
    """
    n = neighborhood or Neighborhood()

    if dot_type == DotType.SQUARE:
        return ShapeKind.SQUARE, 0.0
    if dot_type == DotType.DOTS:
        return ShapeKind.CIRCLE, 0.0

    if dot_type in (DotType.ROUNDED, DotType.EXTRA_ROUNDED):
        if n.count == 0:
            return ShapeKind.CIRCLE, 0.0
        if n.count > 2 or (n.left and n.right) or (n.top and n.bottom):
            return ShapeKind.SQUARE, 0.0
        if n.count == 2:
            corner = ShapeKind.CORNER_ROUNDED if dot_type == DotType.ROUNDED else ShapeKind.CORNER_EXTRA_ROUNDED
            return corner, _pair_rotation(n)
        return ShapeKind.SIDE_ROUNDED, _single_rotation(n)

    # classy family
    corner = ShapeKind.CORNER_ROUNDED if dot_type == DotType.CLASSY else ShapeKind.CORNER_EXTRA_ROUNDED
    if n.count == 0:
        return ShapeKind.CORNERS_ROUNDED, PI / 2
    if not n.left and not n.top:
        return corner, -PI / 2
    if not n.right and not n.bottom:
        return corner, PI / 2
    return ShapeKind.SQUARE, 0.0


def _basic_dot(x: float, y: float, size: float, rotation: float) -> str:
    return svg_circle(x + size / 2, y + size / 2, size / 2, rotate_transform(x, y, size, rotation))


def _basic_square(x: float, y: float, size: float, rotation: float) -> str:
    return svg_rect(x, y, size, size, rotate_transform(x, y, size, rotation))


def _basic_side_rounded(x: float, y: float, size: float, rotation: float) -> str:
    # rotation 0: right side rounded
    half = size / 2
    d = path_data('M', x, y, 'v', size, 'h', half, 'a', half, half, '0 0 0 0', -size)
    return svg_path(d, transform=rotate_transform(x, y, size, rotation))


def _basic_corner_rounded(x: float, y: float, size: float, rotation: float) -> str:
    # rotation 0: top right corner rounded
    half = size / 2
    d = path_data('M', x, y, 'v', size, 'h', size, 'v', -half,
                  'a', half, half, '0 0 0', -half, -half)
    return svg_path(d, transform=rotate_transform(x, y, size, rotation))


def _basic_corner_extra_rounded(x: float, y: float, size: float, rotation: float) -> str:
    d = path_data('M', x, y, 'v', size, 'h', size, 'a', size, size, '0 0 0', -size, -size)
    return svg_path(d, transform=rotate_transform(x, y, size, rotation))


def _basic_corners_rounded(x: float, y: float, size: float, rotation: float) -> str:
    # rotation 0: bottom left and top right corners rounded
    half = size / 2
    d = path_data('M', x, y, 'v', half, 'a', half, half, '0 0 0', half, half,
                  'h', half, 'v', -half, 'a', half, half, '0 0 0', -half, -half)
    return svg_path(d, transform=rotate_transform(x, y, size, rotation))


_SHAPE_BUILDERS = {
    ShapeKind.CIRCLE: _basic_dot,
    ShapeKind.SQUARE: _basic_square,
    ShapeKind.SIDE_ROUNDED: _basic_side_rounded,
    ShapeKind.CORNER_ROUNDED: _basic_corner_rounded,
    ShapeKind.CORNER_EXTRA_ROUNDED: _basic_corner_extra_rounded,
    ShapeKind.CORNERS_ROUNDED: _basic_corners_rounded,
}


class DotDrawer:
    """Draws ordinary modules of one dot type."""

    def __init__(self, dot_type: DotType = DotType.SQUARE):
        self.dot_type = DotType.parse(dot_type)

    def draw(self, x: float, y: float, size: float, neighborhood: Optional[Neighborhood] = None) -> str:
        kind, rotation = select_dot_shape(self.dot_type, neighborhood)
        return _SHAPE_BUILDERS[kind](x, y, size, rotation)

    def draw_module(self, query: NeighborQuery, row: int, col: int, x: float, y: float, size: float) -> str:
        """Draw module (row, col) using ``query`` for its neighbor occupancy."""
        return self.draw(x, y, size, Neighborhood.of(query, row, col))


class CornerSquareDrawer:
    """
    Draws the 7x7 outer ring of a finder pattern.

    ``rotation`` identifies the corner: 0 top-left, pi/2 top-right,
    -pi/2 bottom-left.
    """

    def __init__(self, square_type: CornerSquareType = CornerSquareType.SQUARE):
        self.square_type = CornerSquareType.parse(square_type)

    def draw(self, x: float, y: float, size: float, rotation: float = 0.0) -> str:
        if self.square_type == CornerSquareType.DOT:
            return self._ring(x, y, size, rotation)
        if self.square_type == CornerSquareType.EXTRA_ROUNDED:
            return self._extra_rounded(x, y, size, rotation)
        return self._square(x, y, size, rotation)

    @staticmethod
    def _ring(x, y, size, rotation):
        dot_size = size / 7
        half = size / 2
        inner = half - dot_size
        d = path_data('M', x + half, y, 'a', half, half, '0 1 0 0.1 0 z',
                      'm 0', dot_size, 'a', inner, inner, '0 1 1 -0.1 0 Z')
        return svg_path(d, 'evenodd', rotate_transform(x, y, size, rotation))

    @staticmethod
    def _square(x, y, size, rotation):
        dot_size = size / 7
        inner = size - 2 * dot_size
        d = path_data('M', x, y, 'v', size, 'h', size, 'v', -size, 'z',
                      'M', x + dot_size, y + dot_size, 'h', inner, 'v', inner, 'h', -inner, 'z')
        return svg_path(d, 'evenodd', rotate_transform(x, y, size, rotation))

    @staticmethod
    def _extra_rounded(x, y, size, rotation):
        s = size / 7
        outer = path_data(
            'M', x, y + 2.5 * s,
            'v', 2 * s,
            'a', 2.5 * s, 2.5 * s, '0 0 0', 2.5 * s, 2.5 * s,
            'h', 2 * s,
            'a', 2.5 * s, 2.5 * s, '0 0 0', 2.5 * s, -2.5 * s,
            'v', -2 * s,
            'a', 2.5 * s, 2.5 * s, '0 0 0', -2.5 * s, -2.5 * s,
            'h', -2 * s,
            'a', 2.5 * s, 2.5 * s, '0 0 0', -2.5 * s, 2.5 * s,
        )
        inner = path_data(
            'M', x + 2.5 * s, y + s,
            'h', 2 * s,
            'a', 1.5 * s, 1.5 * s, '0 0 1', 1.5 * s, 1.5 * s,
            'v', 2 * s,
            'a', 1.5 * s, 1.5 * s, '0 0 1', -1.5 * s, 1.5 * s,
            'h', -2 * s,
            'a', 1.5 * s, 1.5 * s, '0 0 1', -1.5 * s, -1.5 * s,
            'v', -2 * s,
            'a', 1.5 * s, 1.5 * s, '0 0 1', 1.5 * s, -1.5 * s,
        )
        return svg_path(f"{outer} {inner}", 'evenodd', rotate_transform(x, y, size, rotation))


class CornerDotDrawer:
    """Draws the 3x3 center of a finder pattern."""

    def __init__(self, dot_type: CornerDotType = CornerDotType.DOT):
        self.dot_type = CornerDotType.parse(dot_type)

    def draw(self, x: float, y: float, size: float, rotation: float = 0.0) -> str:
        if self.dot_type == CornerDotType.SQUARE:
            return _basic_square(x, y, size, rotation)
        return _basic_dot(x, y, size, rotation)
