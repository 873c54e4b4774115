"""
Native integer width helpers.

Python ints carry no width, so every native conversion names one
explicitly (8/16/32/64/128 bits).  numpy integer scalars carry their own
width and signedness, which is used when no width is given.

Values handled here never exceed 128 bits; anything wider goes through
the block kernel.
"""

from typing import List, Optional, Tuple

import numpy as np

from .constants import BLOCK_SIZE, BLOCK_MASK, NATIVE_WIDTHS


def check_width(width: int) -> int:
    """Return width if it is a supported native width, else raise ValueError."""
    if width not in NATIVE_WIDTHS:
        raise ValueError(
            f"unsupported native width {width}, expected one of {NATIVE_WIDTHS}"
        )
    return width


def unsigned_max(width: int) -> int:
    return (1 << check_width(width)) - 1


def signed_min(width: int) -> int:
    return -(1 << (check_width(width) - 1))


def signed_max(width: int) -> int:
    return (1 << (check_width(width) - 1)) - 1


def resolve_native(
    value, width: Optional[int], default_width: int = 64,
) -> Tuple[int, int, bool]:
    """Normalise a native argument.

    Args:
        value: Python int or numpy integer scalar.
        width: Explicit width, or None to take it from a numpy scalar
               (or default_width for a plain int).
        default_width: Width assumed for plain ints when width is None.

    Returns:
        (value as Python int, width, True if the source type was signed).
        The signed flag is only meaningful for numpy scalars; plain ints
        report signed=True when negative.
    """
    if isinstance(value, (bool, np.bool_)):
        raise TypeError("bool is not a native integer")
    if isinstance(value, np.integer):
        info = np.iinfo(value.dtype)
        if width is None:
            width = int(info.bits)
        return int(value), check_width(width), info.min < 0
    if not isinstance(value, int):
        raise TypeError(f"expected a native integer, got {type(value).__name__}")
    if width is None:
        width = default_width
    return value, check_width(width), value < 0


def check_unsigned(value: int, width: int) -> int:
    """Raise ValueError unless 0 <= value <= u{width}::MAX."""
    if value < 0 or value > unsigned_max(width):
        raise ValueError(f"{value} is out of range for u{width}")
    return value


def check_signed(value: int, width: int) -> int:
    """Raise ValueError unless i{width}::MIN <= value <= i{width}::MAX."""
    if value < signed_min(width) or value > signed_max(width):
        raise ValueError(f"{value} is out of range for i{width}")
    return value


def split_words(value: int) -> List[int]:
    """Split a non-negative native value (at most 128 bits) into 64-bit words.

    The returned list is little-endian and carries no zero top word, so zero
    maps to the empty list.
    """
    words = []
    while value:
        words.append(value & BLOCK_MASK)
        value >>= BLOCK_SIZE
    return words


def join_words(words: List[int]) -> int:
    """Inverse of split_words."""
    value = 0
    for word in reversed(words):
        value = (value << BLOCK_SIZE) | word
    return value
