# -*- coding: utf-8 -*-
"""
QR Border Module

Post-processes a rendered SVG document: draws a frame (plus optional inner
and outer frames) around the code and places text or image decorations at
the four sides. With a roundness of 0.5 or more the frame is a circle and
text follows semicircular arcs.

Classes:
    Position: Side of the frame a decoration is attached to
    BorderOptions: Thickness, color and dash pattern of one frame
    Decoration: Text or image placed on one side
    QRBorderOptions: Complete border configuration
    BorderPlugin: Injects the border into SVG markup

Functions:
    inject_svg_content: Insert definitions and elements into a document
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, NamedTuple, Optional, Tuple
from xml.sax.saxutils import escape, quoteattr

from .ids import IdSource
from .svg import fmt
from .types import _ParseableEnum

logger = logging.getLogger(__name__)

DEFAULT_TEXT_STYLE = "font-size: 14px; font-family: Arial, sans-serif;"

# Roundness from which the frame is drawn as a circle with curved text
CIRCULAR_ROUNDNESS = 0.5


class Position(_ParseableEnum):
    TOP = 'top'
    BOTTOM = 'bottom'
    LEFT = 'left'
    RIGHT = 'right'


# Decorations are always emitted in this order
POSITION_ORDER = (Position.TOP, Position.BOTTOM, Position.LEFT, Position.RIGHT)


class DecorationType(Enum):
    TEXT = 'text'
    IMAGE = 'image'


@dataclass(frozen=True)
class BorderOptions:
    thickness: float = 10.0
    color: str = "#000000"
    dasharray: Optional[str] = None

    def with_dasharray(self, dasharray: str) -> "BorderOptions":
        return replace(self, dasharray=dasharray)


@dataclass(frozen=True)
class Decoration:
    """
    Text or image attached to one side of the frame.

    For images ``value`` is the ``href`` (URL or data URI).

    Example:
        >>> Decoration.text("SCAN ME").with_style("font-size: 20px; fill: #333;")
    """

    decoration_type: DecorationType
    value: str
    style: Optional[str] = None

    @classmethod
    def text(cls, value: str) -> "Decoration":
        return cls(DecorationType.TEXT, value)

    @classmethod
    def image(cls, href: str) -> "Decoration":
        return cls(DecorationType.IMAGE, href)

    def with_style(self, style: str) -> "Decoration":
        return replace(self, style=style)


@dataclass(frozen=True)
class QRBorderOptions:
    """
    Border configuration.

    Attributes:
        border (BorderOptions): The main frame
        round (float): Corner roundness, 0 square to 1 circle
        border_inner (Optional[BorderOptions]): Frame drawn inside the main one
        border_outer (Optional[BorderOptions]): Frame drawn outside the main one
        decorations (Dict[Position, Decoration]): At most one per side

    Example:
        >>> options = (QRBorderOptions.create(15, "#2C3E50")
        ...            .with_round(0.5)
        ...            .with_text(Position.TOP, "SCAN ME"))
    """

    border: BorderOptions = field(default_factory=BorderOptions)
    round: float = 0.0
    border_inner: Optional[BorderOptions] = None
    border_outer: Optional[BorderOptions] = None
    decorations: Dict[Position, Decoration] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'round', min(1.0, max(0.0, float(self.round))))

    @classmethod
    def create(cls, thickness: float, color: str) -> "QRBorderOptions":
        return cls(border=BorderOptions(thickness, color))

    def with_round(self, round: float) -> "QRBorderOptions":
        return replace(self, round=round)

    def with_inner_border(self, border: BorderOptions) -> "QRBorderOptions":
        return replace(self, border_inner=border)

    def with_outer_border(self, border: BorderOptions) -> "QRBorderOptions":
        return replace(self, border_outer=border)

    def with_decoration(self, position: Position, decoration: Decoration) -> "QRBorderOptions":
        decorations = dict(self.decorations)
        decorations[Position.parse(position)] = decoration
        return replace(self, decorations=decorations)

    def with_text(self, position: Position, text: str) -> "QRBorderOptions":
        return self.with_decoration(position, Decoration.text(text))

    def with_styled_text(self, position: Position, text: str, style: str) -> "QRBorderOptions":
        return self.with_decoration(position, Decoration.text(text).with_style(style))

    @property
    def is_circular(self) -> bool:
        return self.round >= CIRCULAR_ROUNDNESS


class RectAttributes(NamedTuple):
    x: float
    y: float
    width: float
    height: float
    rx: float
    stroke: str
    stroke_width: float
    dasharray: Optional[str]

    def to_svg(self) -> str:
        dash = f' stroke-dasharray={quoteattr(self.dasharray)}' if self.dasharray else ''
        return (f'<rect x="{fmt(self.x)}" y="{fmt(self.y)}" width="{fmt(self.width)}" '
                f'height="{fmt(self.height)}" rx="{fmt(self.rx)}" stroke={quoteattr(self.stroke)} '
                f'stroke-width="{fmt(self.stroke_width)}"{dash} fill="none"/>\n')


def inject_svg_content(svg: str, defs: str, elements: str) -> str:
    """
    Insert ``defs`` into the document's ``<defs>`` (creating one when it
    has none) and append ``elements`` just before the closing ``</svg>``.
    Markup without a closing tag gets the elements appended at its end.
    """
    close = svg.rfind('</svg>')
    if close == -1:
        return f"{svg.rstrip()}\n{elements}"

    body = svg[:close]
    if defs:
        defs_close = body.find('</defs>')
        if defs_close != -1:
            body = body[:defs_close] + defs + body[defs_close:]
        else:
            elements = f"<defs>\n{defs}</defs>\n{elements}"

    return f"{body}{elements}</svg>"


class BorderPlugin:
    """
    Applies a QRBorderOptions configuration to SVG markup.

    Args:
        options (QRBorderOptions): Border configuration
        ids (Optional[IdSource]): Suffixes for text-path ids; a fresh
            source (random namespace) when None
    """

    def __init__(self, options: QRBorderOptions, ids: Optional[IdSource] = None):
        self.options = options
        self.ids = ids if ids is not None else IdSource()

    def apply(self, svg: str, width: float, height: float) -> str:
        """
        Add the frames and decorations to ``svg`` drawn on a width x height canvas.

        Returns:
            str: The decorated document
        """
        width, height = float(width), float(height)
        defs, elements = [], []

        elements.append(self.rect_attributes(width, height, self.options.border).to_svg())
        if self.options.border_inner is not None:
            elements.append(self.inner_rect_attributes(width, height, self.options.border_inner).to_svg())
        if self.options.border_outer is not None:
            elements.append(self.rect_attributes(width, height, self.options.border_outer).to_svg())

        for position in POSITION_ORDER:
            decoration = self.options.decorations.get(position)
            if decoration is None:
                continue
            if decoration.decoration_type == DecorationType.TEXT:
                path_def, text = self.text_decoration(position, decoration.value, decoration.style, width, height)
                defs.append(path_def)
                elements.append(text)
            else:
                elements.append(self.image_decoration(position, decoration.value, decoration.style, width, height))

        logger.debug(f"Border: {len(elements)} elements, {len(self.options.decorations)} decorations, "
                     f"round={self.options.round}")
        return inject_svg_content(svg, ''.join(defs), ''.join(elements))

    def rect_attributes(self, width: float, height: float, border: BorderOptions) -> RectAttributes:
        size = min(width, height)
        thickness = border.thickness
        return RectAttributes(
            x=(width - size + thickness) / 2,
            y=(height - size + thickness) / 2,
            width=size - thickness,
            height=size - thickness,
            rx=max(0.0, size / 2 * self.options.round - thickness / 2),
            stroke=border.color,
            stroke_width=thickness,
            dasharray=border.dasharray,
        )

    def inner_rect_attributes(self, width: float, height: float, inner: BorderOptions) -> RectAttributes:
        attrs = self.rect_attributes(width, height, inner)
        delta = inner.thickness - self.options.border.thickness
        return attrs._replace(
            x=attrs.x - delta,
            y=attrs.y - delta,
            width=attrs.width + 2 * delta,
            height=attrs.height + 2 * delta,
            rx=max(0.0, attrs.rx + delta),
        )

    def text_decoration(
        self,
        position: Position,
        text: str,
        style: Optional[str],
        width: float,
        height: float,
    ) -> Tuple[str, str]:
        """
        Build one text decoration.

        Returns:
            Tuple[str, str]: (path definition, text element); the definition
            is empty for straight text
        """
        style_attr = quoteattr(style or DEFAULT_TEXT_STYLE)
        if self.options.is_circular:
            path_id = f"{position.value}-text-path-{self.ids.next_id()}"
            d = self.arc_path(position, width, height)
            path_def = f'<path id="{path_id}" d="{d}" fill="none"/>\n'
            element = (f'<text style={style_attr}><textPath xlink:href="#{path_id}" href="#{path_id}" '
                       f'startOffset="50%" text-anchor="middle" dominant-baseline="central">'
                       f'{escape(text)}</textPath></text>\n')
            return path_def, element

        x, y, rotation = self.straight_text_anchor(position, width, height)
        transform = f' transform="rotate({fmt(rotation)},{fmt(x)},{fmt(y)})"' if rotation else ''
        element = (f'<text x="{fmt(x)}" y="{fmt(y)}" text-anchor="middle" dominant-baseline="middle" '
                   f'style={style_attr}{transform}>{escape(text)}</text>\n')
        return '', element

    def arc_path(self, position: Position, width: float, height: float) -> str:
        """Semicircle through the middle of the frame stroke on the given side."""
        size = min(width, height)
        r = (size - self.options.border.thickness) / 2
        cx, cy = width / 2, height / 2
        arc = f"A {fmt(r)},{fmt(r)} 0 0"

        if position == Position.TOP:
            return f"M {fmt(cx - r)},{fmt(cy)} {arc} 1 {fmt(cx + r)},{fmt(cy)}"
        if position == Position.BOTTOM:
            return f"M {fmt(cx - r)},{fmt(cy)} {arc} 0 {fmt(cx + r)},{fmt(cy)}"
        if position == Position.LEFT:
            return f"M {fmt(cx)},{fmt(cy - r)} {arc} 0 {fmt(cx)},{fmt(cy + r)}"
        return f"M {fmt(cx)},{fmt(cy - r)} {arc} 1 {fmt(cx)},{fmt(cy + r)}"

    def straight_text_anchor(self, position: Position, width: float, height: float) -> Tuple[float, float, int]:
        """(x, y, rotation in degrees) of straight text centered on the frame stroke."""
        size = min(width, height)
        thickness = self.options.border.thickness
        offset = thickness / 2
        half = (size - thickness) / 2
        cx, cy = width / 2, height / 2

        if position == Position.TOP:
            return cx, cy - half - offset, 0
        if position == Position.BOTTOM:
            return cx, cy + half + offset, 0
        if position == Position.LEFT:
            return cx - half - offset, cy, -90
        return cx + half + offset, cy, 90

    def image_decoration(
        self,
        position: Position,
        href: str,
        style: Optional[str],
        width: float,
        height: float,
    ) -> str:
        size = min(width, height)
        thickness = self.options.border.thickness
        x = (width - size + thickness) / 2
        y = (height - size + thickness) / 2
        inner = size - thickness

        if position == Position.TOP:
            x += inner / 2
        elif position == Position.RIGHT:
            x += inner
            y += inner / 2
        elif position == Position.BOTTOM:
            x += inner / 2
            y += inner
        else:
            y += inner / 2

        href_attr = quoteattr(href)
        style_attr = f' style={quoteattr(style)}' if style else ''
        return f'<image href={href_attr} xlink:href={href_attr} x="{fmt(x)}" y="{fmt(y)}"{style_attr}/>\n'
