# -*- coding: utf-8 -*-
"""
Logo Sizing Module

Decides how many modules an embedded logo may hide, given the logo aspect
ratio and the error correction budget, and prepares the logo for
embedding as a data URI.

Functions:
    max_hidden_dots: Module budget a logo may occlude
    calculate_image_size: Odd, centered occlusion rectangle for a logo
    sniff_mime_type: MIME type from image magic bytes
    logo_dimensions: Pixel size of the logo (decoded with Pillow)
    logo_data_uri: base64 data URI of the logo
"""

import base64
import logging
import math
from io import BytesIO
from typing import NamedTuple, Tuple

from PIL import Image, UnidentifiedImageError

from .errors import ImageEncodeError, ImageLoadError
from .types import ErrorCorrectionLevel

logger = logging.getLogger(__name__)

# A logo must never cover the finder patterns on both sides of an axis
FINDER_AXIS_RESERVE = 14


class ImageSizeResult(NamedTuple):
    width: float
    height: float
    hide_x_dots: int
    hide_y_dots: int


def max_hidden_dots(image_size: float, ec_level: ErrorCorrectionLevel, count: int) -> int:
    """
    Maximum number of modules a logo may hide.

    Args:
        image_size (float): Requested logo size ratio (0..1)
        ec_level (ErrorCorrectionLevel): Error correction level of the symbol
        count (int): Modules per side

    Returns:
        int: floor(image_size * ec_percentage * count^2)

    Example:
        >>> max_hidden_dots(0.4, ErrorCorrectionLevel.Q, 25)
        62
    """
    return int(math.floor(image_size * ErrorCorrectionLevel.parse(ec_level).percentage * count * count))


def max_hidden_axis_dots(count: int) -> int:
    return max(0, count - FINDER_AXIS_RESERVE)


def _hide_y(hide_x: int, k: float) -> int:
    return 1 + 2 * max(0, math.ceil((hide_x * k - 1) / 2))


def calculate_image_size(
    original_width: int,
    original_height: int,
    max_hidden: int,
    max_hidden_axis: int,
    dot_size: float,
) -> ImageSizeResult:
    """
    Compute the centered occlusion rectangle for a logo.

    The horizontal extent is solved from the budget and the aspect ratio
    k = height / width, forced odd so it is symmetric around the grid
    center and clamped to ``max_hidden_axis``. The vertical extent follows
    from k, rounded up to the next odd number. While the rectangle exceeds
    the budget the horizontal extent shrinks by two (staying odd).

    Args:
        original_width (int): Logo width in pixels
        original_height (int): Logo height in pixels
        max_hidden (int): Module budget (see max_hidden_dots)
        max_hidden_axis (int): Axis limit, module count - 14
        dot_size (float): Module size in pixels

    Returns:
        ImageSizeResult: Pixel size of the logo box and the hidden module
        counts along each axis (both odd)

    Example:
        >>> calculate_image_size(100, 100, 100, 15, 10.0)
        ImageSizeResult(width=90.0, height=90.0, hide_x_dots=9, hide_y_dots=9)
    """
    k = original_height / original_width if original_width else 1.0

    hide_x = int(math.floor(math.sqrt(max_hidden / k))) if max_hidden > 0 else 0
    if hide_x <= 0:
        hide_x = 1
    if hide_x % 2 == 0:
        hide_x -= 1
    hide_x = min(hide_x, max_hidden_axis)

    hide_y = _hide_y(hide_x, k)
    while hide_x * hide_y > max_hidden and hide_x > 3:
        hide_x -= 2
        hide_y = _hide_y(hide_x, k)

    hide_y = min(hide_y, max_hidden_axis)

    return ImageSizeResult(
        width=hide_x * dot_size,
        height=hide_y * dot_size,
        hide_x_dots=hide_x,
        hide_y_dots=hide_y,
    )


def sniff_mime_type(data: bytes) -> str:
    """Detect PNG / JPEG / WebP from magic bytes, defaulting to PNG."""
    if data[:4] == b'\x89PNG':
        return 'image/png'
    if data[:2] == b'\xff\xd8':
        return 'image/jpeg'
    if data[:4] == b'RIFF' and len(data) > 12 and data[8:12] == b'WEBP':
        return 'image/webp'
    return 'image/png'


def logo_dimensions(data: bytes) -> Tuple[int, int]:
    """
    Read the pixel size of a logo.

    Raises:
        ImageLoadError: If Pillow can't identify or decode the image
    """
    try:
        with Image.open(BytesIO(data)) as img:
            return img.size
    except (UnidentifiedImageError, OSError) as ex:
        raise ImageLoadError(f"Failed to load image: {ex}") from ex


def logo_data_uri(data: bytes, save_as_blob: bool = True) -> str:
    """
    Build the data URI embedded in the ``<image>`` element.

    Args:
        data (bytes): Raw logo bytes
        save_as_blob (bool): Embed the bytes as-is with their sniffed MIME
            type; when False the logo is re-encoded to PNG first

    Raises:
        ImageLoadError: If re-encoding is requested and the logo can't be decoded
        ImageEncodeError: If the PNG encoding fails
    """
    if save_as_blob:
        mime = sniff_mime_type(data)
        payload = data
    else:
        try:
            img = Image.open(BytesIO(data))
            img.load()
        except (UnidentifiedImageError, OSError) as ex:
            raise ImageLoadError(f"Failed to load image: {ex}") from ex
        buf = BytesIO()
        try:
            img.convert('RGBA').save(buf, format='PNG')
        except (OSError, ValueError) as ex:
            raise ImageEncodeError(f"Failed to encode image: {ex}") from ex
        mime = 'image/png'
        payload = buf.getvalue()

    b64 = base64.b64encode(payload).decode('ascii')
    logger.debug(f"Embedding {len(payload)} byte logo as {mime}")
    return f"data:{mime};base64,{b64}"
