"""
String conversion for block vectors (base 2, 10 and 16).

Hex and binary are rendered word by word straight from the storage,
decimal by repeated short division by ten.  Zero renders as "0", other
values carry no leading zeros.  Hex output is uppercase.
"""

from typing import List

from .blocks import Blocks, trim, div_mod_word
from .constants import BLOCK_SIZE
from .errors import HexParseError

HEX_DIGITS = "0123456789ABCDEF"
_NIBBLES_PER_BLOCK = BLOCK_SIZE // 4


def _nibble(char: str) -> int:
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    if "A" <= char <= "F":
        return ord(char) - ord("A") + 10
    if "a" <= char <= "f":
        return ord(char) - ord("a") + 10
    return -1


def parse_hex(text: str) -> Blocks:
    """Parse hex digits (no sign, no prefix) into canonical words.

    Raises HexParseError naming the first offending character, scanning
    from the least significant end.  The empty string parses as zero.
    """
    blocks = []
    register = 0
    last = len(text) - 1
    for idx, char in enumerate(reversed(text)):
        nibble = _nibble(char)
        if nibble < 0:
            raise HexParseError(char, last - idx)
        register |= nibble << ((idx % _NIBBLES_PER_BLOCK) * 4)
        if idx % _NIBBLES_PER_BLOCK == _NIBBLES_PER_BLOCK - 1:
            blocks.append(register)
            register = 0
    if register:
        blocks.append(register)
    return trim(blocks)


def _render_word(word: int, bits_per_digit: int, n_digits: int) -> str:
    mask = (1 << bits_per_digit) - 1
    return "".join(
        HEX_DIGITS[(word >> shift) & mask]
        for shift in range((n_digits - 1) * bits_per_digit, -1, -bits_per_digit)
    )


def _render_power_of_two(blocks: Blocks, bits_per_digit: int) -> str:
    if not blocks:
        return "0"
    per_block = BLOCK_SIZE // bits_per_digit
    top = blocks[-1]
    top_digits = -(-top.bit_length() // bits_per_digit)
    parts = [_render_word(top, bits_per_digit, top_digits)]
    for word in reversed(blocks[:-1]):
        parts.append(_render_word(word, bits_per_digit, per_block))
    return "".join(parts)


def format_hex(blocks: Blocks) -> str:
    return _render_power_of_two(blocks, 4)


def format_bin(blocks: Blocks) -> str:
    return _render_power_of_two(blocks, 1)


def format_dec(blocks: Blocks) -> str:
    """Decimal digits via repeated divide-by-ten, one digit per step."""
    if not blocks:
        return "0"
    digits: List[str] = []
    work = list(blocks)
    while work:
        work, digit = div_mod_word(work, 10)
        digits.append(HEX_DIGITS[digit])
    return "".join(reversed(digits))
