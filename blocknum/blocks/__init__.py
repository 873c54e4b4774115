"""
Block-vector kernel for blocknum.

Pure functions over little-endian lists of 64-bit words.  The value
types (UnsignedMagnitude and friends) wrap these and enforce canonical
form at their boundary.
"""

from .reference import (
    Blocks,
    trim, is_canonical, bit_length, compare, trailing_zeros,
    add, add_into, sub, sub_into, mul,
    shift_left, shift_left_one_into, shift_right, truncate, extract_bits,
    bit_and, bit_or,
    div_mod, div_mod_word, gcd,
    to_float, from_float,
)

__all__ = [
    "Blocks",
    "trim", "is_canonical", "bit_length", "compare", "trailing_zeros",
    "add", "add_into", "sub", "sub_into", "mul",
    "shift_left", "shift_left_one_into", "shift_right", "truncate", "extract_bits",
    "bit_and", "bit_or",
    "div_mod", "div_mod_word", "gcd",
    "to_float", "from_float",
]
