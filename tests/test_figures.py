import itertools
import math

import pytest

from qr_styling import CornerDotType, CornerSquareType, DotType
from qr_styling.figures import (
    CornerDotDrawer,
    CornerSquareDrawer,
    DotDrawer,
    Neighborhood,
    ShapeKind,
    select_dot_shape,
)
from qr_styling.svg import fmt, rotate_transform

ALL_NEIGHBORHOODS = [Neighborhood(*flags) for flags in itertools.product([False, True], repeat=4)]


def _angle_delta(a: float, b: float) -> float:
    return (a - b) % (2 * math.pi)


@pytest.mark.parametrize("dot_type", [DotType.ROUNDED, DotType.EXTRA_ROUNDED])
def test_rounded_family_is_rotation_symmetric(dot_type):
    for n in ALL_NEIGHBORHOODS:
        kind, rotation = select_dot_shape(dot_type, n)
        turned_kind, turned_rotation = select_dot_shape(dot_type, n.rotated_clockwise())
        assert kind == turned_kind
        if kind not in (ShapeKind.CIRCLE, ShapeKind.SQUARE):
            assert _angle_delta(turned_rotation, rotation) == pytest.approx(math.pi / 2)


@pytest.mark.parametrize("dot_type", [DotType.ROUNDED, DotType.EXTRA_ROUNDED])
def test_rounded_family_degrades_to_square(dot_type):
    for n in ALL_NEIGHBORHOODS:
        opposite = (n.left and n.right) or (n.top and n.bottom)
        if n.count > 2 or opposite:
            assert select_dot_shape(dot_type, n) == (ShapeKind.SQUARE, 0.0)


def test_isolated_dots():
    assert select_dot_shape(DotType.ROUNDED)[0] == ShapeKind.CIRCLE
    assert select_dot_shape(DotType.CLASSY)[0] == ShapeKind.CORNERS_ROUNDED
    assert select_dot_shape(DotType.SQUARE, Neighborhood())[0] == ShapeKind.SQUARE
    assert select_dot_shape(DotType.DOTS, Neighborhood(True, True, True, True))[0] == ShapeKind.CIRCLE


def test_single_neighbor_faces_away():
    kind, rotation = select_dot_shape(DotType.ROUNDED, Neighborhood(left=True))
    assert kind == ShapeKind.SIDE_ROUNDED
    assert rotation == 0.0


def test_classy_corners():
    kind, _ = select_dot_shape(DotType.CLASSY, Neighborhood(right=True, bottom=True))
    assert kind == ShapeKind.CORNER_ROUNDED
    kind, _ = select_dot_shape(DotType.CLASSY_ROUNDED, Neighborhood(left=True, top=True))
    assert kind == ShapeKind.CORNER_EXTRA_ROUNDED
    assert select_dot_shape(DotType.CLASSY, Neighborhood(True, True, True, True))[0] == ShapeKind.SQUARE


def test_dot_drawer_output():
    assert DotDrawer(DotType.SQUARE).draw(0, 0, 10) == '<rect x="0" y="0" width="10" height="10"/>'
    assert DotDrawer('dots').draw(10, 20, 10) == '<circle cx="15" cy="25" r="5"/>'


def test_dot_drawer_rotation_transform():
    svg = DotDrawer(DotType.ROUNDED).draw(0, 0, 10, Neighborhood(top=True))
    assert svg.startswith('<path ')
    assert 'transform="rotate(90,5,5)"' in svg


def test_corner_square_shapes_use_evenodd():
    for square_type in CornerSquareType:
        svg = CornerSquareDrawer(square_type).draw(0, 0, 70)
        assert 'clip-rule="evenodd"' in svg
        assert 'transform' not in svg


def test_corner_dot_shapes():
    assert CornerDotDrawer(CornerDotType.DOT).draw(20, 20, 30) == '<circle cx="35" cy="35" r="15"/>'
    assert CornerDotDrawer(CornerDotType.SQUARE).draw(20, 20, 30).startswith('<rect ')


def test_svg_helpers():
    assert fmt(10.0) == '10'
    assert fmt(2.5) == '2.5'
    assert fmt(1 / 3) == '0.333333'
    assert fmt(-0.0000001) == '0'
    assert rotate_transform(0, 0, 10, 0.00001) is None
    assert rotate_transform(0, 0, 10, -math.pi / 2) == 'rotate(-90,5,5)'
