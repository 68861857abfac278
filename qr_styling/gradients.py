# -*- coding: utf-8 -*-
"""
Paint Resolution Module

Turns a solid color or a gradient plus a bounding box into an SVG paint
value and the gradient definition backing it.

Functions:
    linear_gradient_vector: Endpoints of a linear gradient spanning a box
    resolve_paint: (defs markup, fill value) for a color or gradient
"""

import math
from typing import Optional, Tuple

from .color import Color, Gradient
from .svg import fmt
from .types import GradientType

TWO_PI = 2 * math.pi


def linear_gradient_vector(
    rotation: float,
    x: float,
    y: float,
    width: float,
    height: float,
) -> Tuple[float, float, float, float]:
    """
    Compute the endpoints of a linear gradient crossing a box at an angle.

    The angle is split into four quarter-turn bands. In the bands centered
    on the horizontal axis the vector spans the full width and its vertical
    extent is ``tan(angle)`` scaled by half the height; in the vertical
    bands the roles swap. Both endpoints sit on the box edges, point
    symmetric about the box center.

    Args:
        rotation (float): Gradient angle in radians (any value, reduced mod 2*pi)
        x (float): Box left edge
        y (float): Box top edge
        width (float): Box width
        height (float): Box height

    Returns:
        Tuple[float, float, float, float]: (x1, y1, x2, y2)

    Example:
        >>> linear_gradient_vector(0.0, 0, 0, 100, 50)
        (0.0, 25.0, 100.0, 25.0)
    """
    angle = rotation % TWO_PI
    cx = x + width / 2
    cy = y + height / 2
    x0, y0, x1, y1 = cx, cy, cx, cy
    tan = math.tan(angle)

    if angle <= 0.25 * math.pi or angle > 1.75 * math.pi:
        x0 -= width / 2
        y0 -= height / 2 * tan
        x1 += width / 2
        y1 += height / 2 * tan
    elif angle <= 0.75 * math.pi:
        y0 -= height / 2
        x0 -= width / 2 / tan
        y1 += height / 2
        x1 += width / 2 / tan
    elif angle <= 1.25 * math.pi:
        x0 += width / 2
        y0 += height / 2 * tan
        x1 -= width / 2
        y1 -= height / 2 * tan
    else:
        y0 += height / 2
        x0 += width / 2 / tan
        y1 -= height / 2
        x1 -= width / 2 / tan

    return float(x0), float(y0), float(x1), float(y1)


def _stops(gradient: Gradient) -> str:
    return ''.join(
        f'<stop offset="{fmt(stop.offset * 100)}%" stop-color="{stop.color.to_hex()}"/>\n'
        for stop in gradient.color_stops
    )


def resolve_paint(
    gradient: Optional[Gradient],
    color: Color,
    additional_rotation: float,
    x: float,
    y: float,
    height: float,
    width: float,
    name: str,
) -> Tuple[str, str]:
    """
    Resolve the paint for one styled element group.

    Args:
        gradient (Optional[Gradient]): Gradient, takes precedence over color
        color (Color): Solid color used when there is no gradient
        additional_rotation (float): Extra rotation (radians) added to a
            linear gradient, e.g. the corner rotation of a finder ornament
        x, y, height, width (float): Bounding box the gradient spans
        name (str): Id of the gradient definition

    Returns:
        Tuple[str, str]: (defs markup, fill value). Solid colors return
        empty defs and the hex value; gradients return their definition
        and ``url(#name)``.
    """
    if gradient is None:
        return '', color.to_hex()

    if gradient.gradient_type == GradientType.RADIAL:
        cx = x + width / 2
        cy = y + height / 2
        r = max(width, height) / 2
        defs = (f'<radialGradient id="{name}" gradientUnits="userSpaceOnUse" '
                f'fx="{fmt(cx)}" fy="{fmt(cy)}" cx="{fmt(cx)}" cy="{fmt(cy)}" r="{fmt(r)}">\n'
                f'{_stops(gradient)}</radialGradient>\n')
    else:
        x1, y1, x2, y2 = linear_gradient_vector(gradient.rotation + additional_rotation, x, y, width, height)
        defs = (f'<linearGradient id="{name}" gradientUnits="userSpaceOnUse" '
                f'x1="{fmt(x1)}" y1="{fmt(y1)}" x2="{fmt(x2)}" y2="{fmt(y2)}">\n'
                f'{_stops(gradient)}</linearGradient>\n')

    return defs, f'url(#{name})'
