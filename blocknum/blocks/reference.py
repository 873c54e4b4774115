"""
Pure-Python block-vector kernel.

A magnitude is a little-endian list of 64-bit words (Python ints in
[0, 2**64)).  Inputs are expected in canonical form (no most-significant
zero word, zero is the empty list) and every list returned or mutated
here is left canonical.

No intermediate value is ever wider than 128 bits: carries, borrows and
word products are handled one word at a time.
"""

from typing import List, Tuple
import math

from ..constants import (
    BLOCK_SIZE, BLOCK_MASK, BLOCK_BASE, HALF_BLOCK, HALF_MASK,
    TWO_POW_32, TWO_POW_64,
)
from ..errors import UnderflowError

Blocks = List[int]


# ---------------------------------------------------------------------------
# Canonical form
# ---------------------------------------------------------------------------

def trim(blocks: Blocks) -> Blocks:
    """Drop most-significant zero words in place and return the list."""
    while blocks and blocks[-1] == 0:
        blocks.pop()
    return blocks


def is_canonical(blocks: Blocks) -> bool:
    if blocks and blocks[-1] == 0:
        return False
    return all(0 <= word <= BLOCK_MASK for word in blocks)


def bit_length(blocks: Blocks) -> int:
    """Index of the highest set bit plus one (0 for zero)."""
    if not blocks:
        return 0
    return (len(blocks) - 1) * BLOCK_SIZE + blocks[-1].bit_length()


def compare(a: Blocks, b: Blocks) -> int:
    """Three-way compare: -1, 0 or 1."""
    if len(a) != len(b):
        return 1 if len(a) > len(b) else -1
    for x, y in zip(reversed(a), reversed(b)):
        if x != y:
            return 1 if x > y else -1
    return 0


def trailing_zeros(blocks: Blocks) -> int:
    """Number of zero bits below the lowest set bit (0 for zero)."""
    for idx, word in enumerate(blocks):
        if word:
            return idx * BLOCK_SIZE + (word & -word).bit_length() - 1
    return 0


# ---------------------------------------------------------------------------
# Addition / subtraction
# ---------------------------------------------------------------------------

def add(a: Blocks, b: Blocks) -> Blocks:
    """a + b as a new list."""
    if len(a) < len(b):
        a, b = b, a
    result = []
    carry = 0
    for idx in range(len(b)):
        total = a[idx] + b[idx] + carry
        result.append(total & BLOCK_MASK)
        carry = total >> BLOCK_SIZE
    idx = len(b)
    while carry and idx < len(a):
        total = a[idx] + carry
        result.append(total & BLOCK_MASK)
        carry = total >> BLOCK_SIZE
        idx += 1
    if carry:
        result.append(carry)
    else:
        result.extend(a[idx:])
    return result


def add_into(a: Blocks, b: Blocks) -> Blocks:
    """a += b in place; returns a."""
    if len(a) < len(b):
        a.extend([0] * (len(b) - len(a)))
    carry = 0
    for idx in range(len(b)):
        total = a[idx] + b[idx] + carry
        a[idx] = total & BLOCK_MASK
        carry = total >> BLOCK_SIZE
    idx = len(b)
    while carry and idx < len(a):
        total = a[idx] + carry
        a[idx] = total & BLOCK_MASK
        carry = total >> BLOCK_SIZE
        idx += 1
    if carry:
        a.append(carry)
    return a


def sub(a: Blocks, b: Blocks) -> Blocks:
    """a - b as a new list.  Raises UnderflowError if a < b."""
    return sub_into(list(a), b)


def sub_into(a: Blocks, b: Blocks) -> Blocks:
    """a -= b in place; returns a.  Raises UnderflowError if a < b."""
    order = compare(a, b)
    if order < 0:
        raise UnderflowError()
    if order == 0:
        a.clear()
        return a

    borrow = 0
    for idx in range(len(b)):
        register = a[idx] - b[idx] - borrow
        if register < 0:
            register += BLOCK_BASE
            borrow = 1
        else:
            borrow = 0
        a[idx] = register

    # a > b, so the borrow settles before the top word
    idx = len(b)
    while borrow:
        if a[idx]:
            a[idx] -= 1
            borrow = 0
        else:
            a[idx] = BLOCK_MASK
        idx += 1
    return trim(a)


# ---------------------------------------------------------------------------
# Multiplication
# ---------------------------------------------------------------------------

def _add_at_into(acc: Blocks, words: Blocks, offset: int) -> None:
    """acc += words << (offset * 64), growing acc as needed."""
    need = offset + len(words)
    if len(acc) < need:
        acc.extend([0] * (need - len(acc)))
    carry = 0
    for k, word in enumerate(words):
        total = acc[offset + k] + word + carry
        acc[offset + k] = total & BLOCK_MASK
        carry = total >> BLOCK_SIZE
    idx = need
    while carry:
        if idx == len(acc):
            acc.append(carry)
            break
        total = acc[idx] + carry
        acc[idx] = total & BLOCK_MASK
        carry = total >> BLOCK_SIZE
        idx += 1


def mul(a: Blocks, b: Blocks) -> Blocks:
    """Schoolbook product.

    Every pair of words yields a 128-bit product which is added in at
    word offset i + j.  Quadratic in the number of words.
    """
    if not a or not b:
        return []
    result: Blocks = []
    for j, y in enumerate(b):
        for i, x in enumerate(a):
            product = x * y
            if product:
                _add_at_into(result, [product & BLOCK_MASK, product >> BLOCK_SIZE], i + j)
    return trim(result)


# ---------------------------------------------------------------------------
# Shifts and bit ranges
# ---------------------------------------------------------------------------

def shift_left(a: Blocks, n: int) -> Blocks:
    """a << n as a new list."""
    if not a:
        return []
    if n == 0:
        return list(a)
    whole, part = divmod(n, BLOCK_SIZE)
    result = [0] * whole
    if part == 0:
        result.extend(a)
        return result
    back = BLOCK_SIZE - part
    carry = 0
    for word in a:
        result.append(((word << part) & BLOCK_MASK) | carry)
        carry = word >> back
    if carry:
        result.append(carry)
    return result


def shift_left_one_into(a: Blocks, low_bit: int = 0) -> Blocks:
    """a = (a << 1) | low_bit in place; returns a."""
    carry = low_bit
    for idx in range(len(a)):
        word = a[idx]
        a[idx] = ((word << 1) & BLOCK_MASK) | carry
        carry = word >> (BLOCK_SIZE - 1)
    if carry:
        a.append(carry)
    return a


def shift_right(a: Blocks, n: int) -> Blocks:
    """a >> n as a new list; zero once n reaches the bit length."""
    whole, part = divmod(n, BLOCK_SIZE)
    if whole >= len(a):
        return []
    if part == 0:
        return a[whole:]
    back = BLOCK_SIZE - part
    src = a[whole:]
    result = []
    for idx in range(len(src) - 1):
        result.append((src[idx] >> part) | ((src[idx + 1] << back) & BLOCK_MASK))
    result.append(src[-1] >> part)
    return trim(result)


def truncate(a: Blocks, count: int) -> Blocks:
    """Lowest `count` bits of a as a new list."""
    whole, part = divmod(count, BLOCK_SIZE)
    if whole >= len(a):
        return list(a)
    result = a[:whole]
    if part:
        result.append(a[whole] & ((1 << part) - 1))
    return trim(result)


def extract_bits(a: Blocks, low: int, count: int) -> Blocks:
    """Bits [low, low + count) of a, shifted down to bit 0.

    The range may straddle any number of word boundaries; the caller is
    responsible for checking it against the bit length.
    """
    if count <= 0:
        return []
    return truncate(shift_right(a, low), count)


# ---------------------------------------------------------------------------
# Bitwise
# ---------------------------------------------------------------------------

def bit_and(a: Blocks, b: Blocks) -> Blocks:
    return trim([x & y for x, y in zip(a, b)])


def bit_or(a: Blocks, b: Blocks) -> Blocks:
    if len(a) < len(b):
        a, b = b, a
    result = [x | y for x, y in zip(a, b)]
    result.extend(a[len(b):])
    return result


# ---------------------------------------------------------------------------
# Division
# ---------------------------------------------------------------------------

def div_mod(a: Blocks, b: Blocks) -> Tuple[Blocks, Blocks]:
    """Restoring binary long division: (a // b, a % b).

    Walks the dividend from its top bit down, shifting each bit into the
    remainder register and subtracting the divisor whenever it fits.
    Raises ZeroDivisionError if b is zero.
    """
    if not b:
        raise ZeroDivisionError("division by zero")
    order = compare(a, b)
    if order < 0:
        return [], list(a)
    if order == 0:
        return [1], []

    quotient = [0] * len(a)
    remainder: Blocks = []
    for index in range(bit_length(a) - 1, -1, -1):
        block, offset = divmod(index, BLOCK_SIZE)
        shift_left_one_into(remainder, (a[block] >> offset) & 1)
        if compare(remainder, b) >= 0:
            sub_into(remainder, b)
            quotient[block] |= 1 << offset
    return trim(quotient), remainder


def div_mod_word(a: Blocks, divisor: int) -> Tuple[Blocks, int]:
    """Short division by a single word: (a // divisor, a % divisor)."""
    if divisor == 0:
        raise ZeroDivisionError("division by zero")
    if not 0 < divisor <= BLOCK_MASK:
        raise ValueError(f"divisor {divisor} does not fit a single word")
    quotient = [0] * len(a)
    remainder = 0
    for idx in range(len(a) - 1, -1, -1):
        current = (remainder << BLOCK_SIZE) | a[idx]
        quotient[idx], remainder = divmod(current, divisor)
    return trim(quotient), remainder


# ---------------------------------------------------------------------------
# GCD
# ---------------------------------------------------------------------------

def gcd(a: Blocks, b: Blocks) -> Blocks:
    """Binary GCD (Stein): shifts and subtraction only, no division."""
    if not a:
        return list(b)
    if not b:
        return list(a)

    i = trailing_zeros(a)
    u = shift_right(a, i)
    j = trailing_zeros(b)
    v = shift_right(b, j)
    k = min(i, j)

    while True:
        # both odd here
        if compare(u, v) > 0:
            u, v = v, u
        sub_into(v, u)
        if not v:
            return shift_left(u, k)
        v = shift_right(v, trailing_zeros(v))


# ---------------------------------------------------------------------------
# Float conversion
# ---------------------------------------------------------------------------

def to_float(a: Blocks) -> float:
    """Accumulate words most-significant first as 32-bit halves.

    A single 64-bit word does not fit the double mantissa, two halves do.
    The result may be infinite; the caller decides what to do with that.
    """
    register = 0.0
    for word in reversed(a):
        register = register * TWO_POW_32 + float(word >> HALF_BLOCK)
        register = register * TWO_POW_32 + float(word & HALF_MASK)
    return register


def from_float(value: float) -> Blocks:
    """Integer part of a finite, non-negative double as words."""
    blocks = []
    register = value
    while register >= 1.0:
        blocks.append(int(math.fmod(register, TWO_POW_64)))
        register /= TWO_POW_64
    return trim(blocks)
