# -*- coding: utf-8 -*-
"""
QR Matrix Module

Read-only view over the encoder's bit grid with bounds-safe module queries,
signed-offset neighbor lookup and finder pattern classification.
"""

import logging
from typing import Iterable, Sequence

import numpy as np

from . import functional_areas
from .qr_generator import make_qr

logger = logging.getLogger(__name__)


class QRMatrix:
    """
    Immutable square grid of dark (True) / light (False) modules.

    Any coordinate outside the grid, negative ones included, reads as light.

    Example:
        >>> matrix = QRMatrix.from_data("Hello")
        >>> matrix.size
        21
        >>> matrix.is_dark(0, 0), matrix.is_dark(-1, 0)
        (True, False)
    """

    def __init__(self, rows: Iterable[Sequence[int]]):
        modules = np.array([[bool(v) for v in row] for row in rows], dtype=bool)
        if modules.ndim != 2 or modules.shape[0] != modules.shape[1]:
            raise ValueError(f"QR matrix must be square, got shape {modules.shape}")
        modules.setflags(write=False)
        self._modules = modules

    @classmethod
    def from_qr(cls, qr) -> "QRMatrix":
        """Wrap a segno.QRCode (its ``matrix`` is a tuple of bytearrays)."""
        return cls(qr.matrix)

    @classmethod
    def from_data(cls, data: str, qr_options=None) -> "QRMatrix":
        """Encode ``data`` with the given QROptions (defaults when None)."""
        if qr_options is None:
            qr = make_qr(data)
        else:
            qr = make_qr(data, ecc=qr_options.error_correction_level,
                         version=qr_options.type_number, mode=qr_options.mode)
        matrix = cls.from_qr(qr)
        logger.debug(f"Built {matrix.size}x{matrix.size} module matrix")
        return matrix

    @property
    def size(self) -> int:
        return int(self._modules.shape[0])

    @property
    def module_count(self) -> int:
        return self.size

    @property
    def modules(self) -> np.ndarray:
        return self._modules

    def is_dark(self, row: int, col: int) -> bool:
        if row < 0 or col < 0 or row >= self.size or col >= self.size:
            return False
        return bool(self._modules[row, col])

    def neighbor(self, row: int, col: int, dx: int, dy: int) -> bool:
        """State of the module ``dx`` columns and ``dy`` rows away from (row, col)."""
        return self.is_dark(row + dy, col + dx)

    def is_finder_pattern(self, row: int, col: int) -> bool:
        return functional_areas.is_finder_region(self.size, row, col)

    def is_finder_pattern_outer(self, row: int, col: int) -> bool:
        return functional_areas.is_finder_outer(self.size, row, col)

    def is_finder_pattern_inner(self, row: int, col: int) -> bool:
        return functional_areas.is_finder_inner(self.size, row, col)

    def dark_count(self) -> int:
        return int(self._modules.sum())

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"QRMatrix(size={self.size})"
