# -*- coding: utf-8 -*-
"""
QR Code Functional Areas Module

Classification of the three finder patterns. Every QR symbol, whatever its
size, carries 7x7 finder patterns at the top-left (0, 0), top-right
(0, size-7) and bottom-left (size-7, 0) corners. The renderer draws those
as dedicated corner ornaments, so the ordinary module shapes must be
skipped there.

Functions:
    finder_origins: Top-left coordinates of the three finder patterns
    finder_local: Translate a module into its finder's local 0..6 frame
    is_finder_region: Module lies inside one of the three 7x7 regions
    is_finder_outer: Module lies on the 7x7 outer ring
    is_finder_inner: Module lies in the 3x3 center dot
    build_finder_masks: Boolean masks for the outer rings and inner dots
"""

from typing import List, Optional, Tuple

FINDER_SIZE = 7

# Finder pattern layout
#   1111111
#   1000001
#   1011101
#   1011101
#   1011101
#   1000001
#   1111111
SQUARE_MASK = (
    (1, 1, 1, 1, 1, 1, 1),
    (1, 0, 0, 0, 0, 0, 1),
    (1, 0, 0, 0, 0, 0, 1),
    (1, 0, 0, 0, 0, 0, 1),
    (1, 0, 0, 0, 0, 0, 1),
    (1, 0, 0, 0, 0, 0, 1),
    (1, 1, 1, 1, 1, 1, 1),
)

DOT_MASK = (
    (0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0),
    (0, 0, 1, 1, 1, 0, 0),
    (0, 0, 1, 1, 1, 0, 0),
    (0, 0, 1, 1, 1, 0, 0),
    (0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0),
)


def finder_origins(size: int) -> List[Tuple[int, int]]:
    """
    Return the (row, col) origins of the finder patterns.

    Args:
        size (int): QR code size in modules (21 for v1, 25 for v2, ...)

    Returns:
        List[Tuple[int, int]]: Top-left, top-right and bottom-left origins

    Example:
        >>> finder_origins(21)
        [(0, 0), (0, 14), (14, 0)]
    """
    return [(0, 0), (0, size - FINDER_SIZE), (size - FINDER_SIZE, 0)]


def finder_local(size: int, row: int, col: int) -> Optional[Tuple[int, int]]:
    """
    Translate a module into the local frame of the finder containing it.

    Args:
        size (int): QR code size in modules
        row (int): Module row
        col (int): Module column

    Returns:
        Optional[Tuple[int, int]]: (local_row, local_col) in 0..6, or None
        when the module is outside every finder pattern
    """
    for (r0, c0) in finder_origins(size):
        if r0 <= row < r0 + FINDER_SIZE and c0 <= col < c0 + FINDER_SIZE:
            return row - r0, col - c0
    return None


def is_finder_region(size: int, row: int, col: int) -> bool:
    return finder_local(size, row, col) is not None


def is_finder_outer(size: int, row: int, col: int) -> bool:
    local = finder_local(size, row, col)
    return local is not None and SQUARE_MASK[local[0]][local[1]] == 1


def is_finder_inner(size: int, row: int, col: int) -> bool:
    local = finder_local(size, row, col)
    return local is not None and DOT_MASK[local[0]][local[1]] == 1


def build_finder_masks(size: int) -> Tuple[List[List[bool]], List[List[bool]]]:
    """
    Build masks of the finder outer rings and inner dots.

    The two masks are disjoint; the light ring between them belongs to
    neither.

    Args:
        size (int): QR code size in modules

    Returns:
        Tuple[List[List[bool]], List[List[bool]]]: (outer_mask, inner_mask)
    """
    outer_mask = [[False] * size for _ in range(size)]
    inner_mask = [[False] * size for _ in range(size)]

    for (r0, c0) in finder_origins(size):
        for lr in range(FINDER_SIZE):
            for lc in range(FINDER_SIZE):
                r, c = r0 + lr, c0 + lc
                if 0 <= r < size and 0 <= c < size:
                    outer_mask[r][c] = SQUARE_MASK[lr][lc] == 1
                    inner_mask[r][c] = DOT_MASK[lr][lc] == 1

    return outer_mask, inner_mask
