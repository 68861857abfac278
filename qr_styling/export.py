# -*- coding: utf-8 -*-
"""
Export Module

Converts SVG markup produced by the renderer (and border plugin) into
raster images and PDF documents. SVG rasterisation is done by cairosvg,
raster encoding by Pillow.

cairosvg needs the cairo system library and is imported on first use, so
SVG rendering keeps working on hosts without it.

Functions:
    render_raster: PNG / JPEG / WebP bytes from SVG markup
    render_pdf: One-page PDF bytes from SVG markup
    convert: Dispatch on OutputFormat (SVG is passed through as UTF-8)
"""

import logging
from io import BytesIO
from xml.etree.ElementTree import ParseError

from PIL import Image, UnidentifiedImageError

from .errors import ImageEncodeError, MarkupError
from .types import OutputFormat

logger = logging.getLogger(__name__)

JPEG_QUALITY = 95


def _svg_to_png(svg: str, width: int, height: int) -> bytes:
    import cairosvg

    try:
        return cairosvg.svg2png(bytestring=svg.encode('utf-8'), output_width=width, output_height=height)
    except (ParseError, ValueError) as ex:
        raise MarkupError(f"Failed to parse SVG: {ex}") from ex


def render_raster(svg: str, width: int, height: int, fmt=OutputFormat.PNG) -> bytes:
    """
    Rasterise SVG markup onto a white width x height canvas.

    Args:
        svg (str): SVG document
        width (int): Output width in pixels
        height (int): Output height in pixels
        fmt (OutputFormat): PNG, JPEG or WEBP

    Returns:
        bytes: Encoded image

    Raises:
        ImageEncodeError: If fmt is not a raster format or encoding fails
        MarkupError: If the SVG can't be parsed
    """
    fmt = OutputFormat.parse(fmt)
    if not fmt.is_raster:
        raise ImageEncodeError(f"Unsupported raster format: {fmt.value}")

    png = _svg_to_png(svg, width, height)
    try:
        rendered = Image.open(BytesIO(png)).convert('RGBA')
    except (UnidentifiedImageError, OSError) as ex:
        raise ImageEncodeError(f"Failed to read rasterised SVG: {ex}") from ex

    canvas = Image.new('RGB', (width, height), (255, 255, 255))
    offset = ((width - rendered.width) // 2, (height - rendered.height) // 2)
    canvas.paste(rendered, offset, rendered)

    buf = BytesIO()
    try:
        if fmt == OutputFormat.JPEG:
            canvas.save(buf, format='JPEG', quality=JPEG_QUALITY, optimize=True, progressive=True)
        elif fmt == OutputFormat.WEBP:
            canvas.save(buf, format='WEBP', quality=JPEG_QUALITY)
        else:
            canvas.save(buf, format='PNG', optimize=True)
    except (OSError, ValueError, KeyError) as ex:
        raise ImageEncodeError(f"Failed to encode {fmt.value}: {ex}") from ex

    logger.debug(f"Rendered {width}x{height} {fmt.value} ({buf.tell()} bytes)")
    return buf.getvalue()


def render_pdf(svg: str, width: int, height: int) -> bytes:
    """
    Convert SVG markup into a one-page PDF of width x height points.

    Raises:
        MarkupError: If the SVG can't be parsed
    """
    import cairosvg

    try:
        pdf = cairosvg.svg2pdf(bytestring=svg.encode('utf-8'), output_width=width, output_height=height)
    except (ParseError, ValueError) as ex:
        raise MarkupError(f"Failed to parse SVG: {ex}") from ex

    logger.debug(f"Rendered {width}x{height} pdf ({len(pdf)} bytes)")
    return pdf


def convert(svg: str, width: int, height: int, fmt) -> bytes:
    """Encode ``svg`` in the given output format."""
    fmt = OutputFormat.parse(fmt)
    if fmt == OutputFormat.SVG:
        return svg.encode('utf-8')
    if fmt == OutputFormat.PDF:
        return render_pdf(svg, width, height)
    return render_raster(svg, width, height, fmt)
