# -*- coding: utf-8 -*-
"""
QR Code Styling Facade

Ties the pipeline together: options -> module matrix -> SVG -> optional
border -> output format -> file.

Example:
    >>> qr = (QRCodeStyling.builder()
    ...       .data("https://example.com")
    ...       .size(400)
    ...       .dots_options(DotsOptions(DotType.ROUNDED, "#4267B2"))
    ...       .build())
    >>> qr.save("qr.png")
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .border import BorderPlugin, QRBorderOptions
from .errors import ConfigurationError
from .export import convert
from .ids import IdSource
from .matrix import QRMatrix
from .options import StylingBuilder, StylingOptions
from .renderer import SvgRenderer
from .types import OutputFormat

logger = logging.getLogger(__name__)


class QRCodeStyling:
    """
    A styled QR code.

    The data is encoded once at construction; rendering is repeatable and
    never re-encodes.

    Args:
        options (StylingOptions): Validated options (see StylingBuilder)

    Raises:
        DataTooLargeError / GenerationError: If the data can't be encoded
    """

    def __init__(self, options: StylingOptions):
        self.options = options
        self.matrix = QRMatrix.from_data(options.data, options.qr_options)
        logger.info(f"QR code created: {self.module_count}x{self.module_count} modules")

    @staticmethod
    def builder() -> StylingBuilder:
        return StylingBuilder()

    @property
    def module_count(self) -> int:
        return self.matrix.size

    def render_svg(self, ids: Optional[IdSource] = None) -> str:
        return SvgRenderer(self.options, ids).render(self.matrix)

    def render(
        self,
        fmt: Union[OutputFormat, str] = OutputFormat.SVG,
        border: Optional[QRBorderOptions] = None,
        ids: Optional[IdSource] = None,
    ) -> bytes:
        """
        Render to the given output format.

        Args:
            fmt (Union[OutputFormat, str]): svg, png, jpeg (jpg), webp or pdf
            border (Optional[QRBorderOptions]): Border drawn over the code
            ids (Optional[IdSource]): Shared id source for renderer and border

        Returns:
            bytes: Encoded document (UTF-8 for SVG)
        """
        fmt = OutputFormat.parse(fmt)
        ids = ids if ids is not None else IdSource()
        svg = self.render_svg(ids)
        if border is not None:
            svg = BorderPlugin(border, ids).apply(svg, self.options.width, self.options.height)
        return convert(svg, self.options.width, self.options.height, fmt)

    def save(
        self,
        path: Union[str, Path],
        fmt: Optional[Union[OutputFormat, str]] = None,
        border: Optional[QRBorderOptions] = None,
    ) -> Path:
        """
        Render and write to ``path``; the format is taken from the file
        suffix when not given.

        Raises:
            ConfigurationError: If no format is given and the suffix is unknown
        """
        path = Path(path)
        if fmt is None:
            if not path.suffix:
                raise ConfigurationError(f"Cannot infer output format from '{path}'")
            fmt = path.suffix[1:]
        data = self.render(fmt, border)
        path.write_bytes(data)
        logger.info(f"Saved {path} ({len(data)} bytes)")
        return path

    def update(self, data: str) -> None:
        """Replace the encoded data, keeping every styling option."""
        options = self.options.with_data(data)
        self.matrix = QRMatrix.from_data(options.data, options.qr_options)
        self.options = options

    def regenerate(self) -> None:
        """Re-encode the current data (e.g. after options were swapped)."""
        self.matrix = QRMatrix.from_data(self.options.data, self.options.qr_options)
