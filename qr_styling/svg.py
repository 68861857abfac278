# -*- coding: utf-8 -*-
"""
SVG Primitive Helpers

Small string builders shared by the shape drawers, the renderer and the
border plugin.
"""

import math
from typing import Optional


def fmt(value: float) -> str:
    """
    Format a number for SVG attributes.

    Integral values are written without a fractional part, others with up
    to 6 decimals and no trailing zeros.

    Example:
        >>> fmt(10.0), fmt(2.5), fmt(1 / 3)
        ('10', '2.5', '0.333333')
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    text = f"{value:.6f}".rstrip('0').rstrip('.')
    return '0' if text in ('-0', '') else text


def rotate_transform(x: float, y: float, size: float, rotation: float) -> Optional[str]:
    """SVG rotation about the center of the (x, y, size) box, None when ~0 radians."""
    if abs(rotation) < 0.0001:
        return None
    cx = x + size / 2
    cy = y + size / 2
    degrees = math.degrees(rotation)
    return f"rotate({fmt(degrees)},{fmt(cx)},{fmt(cy)})"


def svg_circle(cx: float, cy: float, r: float, transform: Optional[str] = None) -> str:
    if transform:
        return f'<circle cx="{fmt(cx)}" cy="{fmt(cy)}" r="{fmt(r)}" transform="{transform}"/>'
    return f'<circle cx="{fmt(cx)}" cy="{fmt(cy)}" r="{fmt(r)}"/>'


def svg_rect(x: float, y: float, width: float, height: float, transform: Optional[str] = None) -> str:
    if transform:
        return (f'<rect x="{fmt(x)}" y="{fmt(y)}" width="{fmt(width)}" height="{fmt(height)}" '
                f'transform="{transform}"/>')
    return f'<rect x="{fmt(x)}" y="{fmt(y)}" width="{fmt(width)}" height="{fmt(height)}"/>'


def svg_path(d: str, clip_rule: Optional[str] = None, transform: Optional[str] = None) -> str:
    attrs = f'd="{d}"'
    if clip_rule:
        attrs += f' clip-rule="{clip_rule}"'
    if transform:
        attrs += f' transform="{transform}"'
    return f'<path {attrs}/>'


def path_data(*parts) -> str:
    """Join path commands and numbers into a ``d`` attribute value."""
    return ' '.join(part if isinstance(part, str) else fmt(part) for part in parts)
