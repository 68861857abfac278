# -*- coding: utf-8 -*-
"""
QR Code Generator Module

Thin wrapper around segno producing the bit matrix the styling engine
draws. Only standard (non-micro) QR symbols are produced and the requested
error correction level is honoured exactly, since the logo occlusion budget
is computed from it.

Functions:
    make_qr: Generate a QR symbol for the given data and QR options
"""

import logging
from typing import Optional, Union

import segno

from .errors import DataTooLargeError, GenerationError, InvalidVersionError, MissingDataError
from .types import ErrorCorrectionLevel, Mode

logger = logging.getLogger(__name__)


def make_qr(
    text: str,
    ecc: Union[ErrorCorrectionLevel, str] = ErrorCorrectionLevel.Q,
    version: int = 0,
    mode: Optional[Union[Mode, str]] = None,
) -> segno.QRCode:
    """
    Generate a QR code symbol.

    Args:
        text (str): The data to encode
        ecc (Union[ErrorCorrectionLevel, str]): Error correction level
            - L: ~7% recovery capability
            - M: ~15% recovery capability
            - Q: ~25% recovery capability (default)
            - H: ~30% recovery capability
        version (int): QR code version (1-40), 0 selects the smallest
            version that fits the data
        mode (Optional[Union[Mode, str]]): Encoding mode; None detects it
            from the data (digits -> numeric, restricted charset ->
            alphanumeric, anything else -> byte)

    Returns:
        segno.QRCode: Generated QR code object

    Raises:
        MissingDataError: If text is empty
        InvalidVersionError: If version is outside 0..40
        DataTooLargeError: If the data doesn't fit in the requested version
        GenerationError: For any other encoder failure (e.g. data not
            representable in the explicit mode)

    Example:
        >>> qr = make_qr("https://example.com", ecc='M')
        >>> qr.version
        2
    """
    if not text:
        raise MissingDataError()

    version = int(version or 0)
    if not 0 <= version <= 40:
        raise InvalidVersionError(version)

    ecc = ErrorCorrectionLevel.parse(ecc)
    mode = Mode.detect(text) if mode is None else Mode.parse(mode)

    try:
        qr = segno.make(
            text,
            error=ecc.value,
            version=version or None,
            mode=mode.value,
            micro=False,
            boost_error=False,
        )
    except segno.DataOverflowError as ex:
        raise DataTooLargeError(str(ex)) from ex
    except ValueError as ex:
        raise GenerationError(str(ex)) from ex

    logger.debug(f"Generated QR version {qr.version} (ecc={ecc.value}, mode={mode.value})")
    return qr
