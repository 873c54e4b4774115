"""
UnsignedMagnitude: arbitrary-size non-negative integer on 64-bit blocks.

Storage is a little-endian list of words plus the bit length.  The value
is always canonical: zero is (length 0, no blocks), otherwise the top
block is non-zero and length is the index of the highest set bit plus
one.  Every public mutation leaves the value canonical.

Named methods are the primary API, each with a pure form (returns a new
value) and an in-place form (``*_into``).  Python operators are a thin
layer on top.

Usage:
    a = UnsignedMagnitude.from_native(0x80000000)
    q, r = a.div_mod(UnsignedMagnitude.from_native(0x3000))
    print(q.to_hex_string(), r.to_hex_string())   # 2AAAA 2000
"""

import functools
import math
from typing import Iterator, List, Optional, Tuple

import numpy as np

from . import blocks as kernel
from .constants import BLOCK_SIZE, BLOCK_MASK
from .errors import BitRangeError, NegativeValueError, NonFiniteError, ValueTooLargeError
from .native import check_unsigned, check_width, join_words, resolve_native, split_words
from .radix import format_bin, format_dec, format_hex, parse_hex


@functools.total_ordering
class UnsignedMagnitude:
    """Non-negative integer of unbounded size."""

    __slots__ = ("_length", "_blocks")

    def __init__(self):
        self._length = 0
        self._blocks: List[int] = []

    @classmethod
    def _wrap(cls, blocks: List[int]) -> "UnsignedMagnitude":
        """Adopt an already-canonical word list (no copy)."""
        res = cls.__new__(cls)
        res._blocks = blocks
        res._length = kernel.bit_length(blocks)
        return res

    def _assign(self, blocks: List[int]) -> None:
        self._blocks = blocks
        self._length = kernel.bit_length(blocks)

    # -- construction -------------------------------------------------------

    @classmethod
    def zero(cls) -> "UnsignedMagnitude":
        return cls()

    @classmethod
    def one(cls) -> "UnsignedMagnitude":
        return cls._wrap([1])

    @classmethod
    def power_of_two(cls, exponent: int) -> "UnsignedMagnitude":
        """2**exponent."""
        if exponent < 0:
            raise ValueError("exponent must be non-negative")
        return cls._wrap(kernel.shift_left([1], exponent))

    @classmethod
    def from_native(cls, value, width: Optional[int] = None) -> "UnsignedMagnitude":
        """Construct from an unsigned native integer of the given width.

        Args:
            value: Python int or numpy unsigned integer scalar.
            width: 8, 16, 32, 64 or 128.  Taken from the numpy dtype when
                   omitted, 64 for plain ints.

        Raises:
            NegativeValueError: value is negative.
            ValueError: value does not fit the width.
        """
        value, width, _ = resolve_native(value, width)
        if value < 0:
            raise NegativeValueError(f"{value} is negative")
        check_unsigned(value, width)
        return cls._wrap(split_words(value))

    @classmethod
    def from_u64(cls, value: int) -> "UnsignedMagnitude":
        return cls.from_native(value, 64)

    @classmethod
    def from_u128(cls, value: int) -> "UnsignedMagnitude":
        return cls.from_native(value, 128)

    @classmethod
    def from_hex_str(cls, text: str) -> "UnsignedMagnitude":
        """Parse hex digits; raises HexParseError on a non-hex character."""
        return cls._wrap(parse_hex(text))

    @classmethod
    def from_float(cls, value: float) -> "UnsignedMagnitude":
        """Integer part of a non-negative double (values below 1 give zero)."""
        if not math.isfinite(value):
            raise NonFiniteError(f"cannot convert {value!r} to an integer")
        if value < 0:
            raise NegativeValueError(f"{value!r} is negative")
        return cls._wrap(kernel.from_float(value))

    @classmethod
    def from_array(cls, array) -> "UnsignedMagnitude":
        """Construct from a little-endian uint64 block array (trimmed on entry)."""
        words = np.asarray(array, dtype=np.uint64)
        if words.ndim != 1:
            raise ValueError("block array must be one-dimensional")
        return cls._wrap(kernel.trim([int(word) for word in words]))

    def copy(self) -> "UnsignedMagnitude":
        return UnsignedMagnitude._wrap(list(self._blocks))

    __copy__ = copy

    def __deepcopy__(self, memo):
        return self.copy()

    # -- inspection ---------------------------------------------------------

    @property
    def length(self) -> int:
        """Number of significant bits."""
        return self._length

    @property
    def blocks(self) -> Tuple[int, ...]:
        return tuple(self._blocks)

    def to_array(self) -> np.ndarray:
        """Blocks as a little-endian uint64 numpy array."""
        return np.array(self._blocks, dtype=np.uint64)

    def is_zero(self) -> bool:
        return self._length == 0

    def is_even(self) -> bool:
        return self.is_zero() or (self._blocks[0] & 1) == 0

    def is_odd(self) -> bool:
        return not self.is_even()

    def trailing_zeros(self) -> int:
        return kernel.trailing_zeros(self._blocks)

    def compare(self, other: "UnsignedMagnitude") -> int:
        """-1, 0 or 1: bit length first, then blocks from the top."""
        if self._length != other._length:
            return 1 if self._length > other._length else -1
        return kernel.compare(self._blocks, other._blocks)

    # -- single bits --------------------------------------------------------

    def get(self, index: int) -> Optional[bool]:
        """Bit at index (0 = least significant), None past the top bit."""
        if index < 0:
            raise BitRangeError(f"negative bit index {index}")
        if index >= self._length:
            return None
        block, offset = divmod(index, BLOCK_SIZE)
        return (self._blocks[block] >> offset) & 1 == 1

    def set(self, index: int, bit: bool) -> Optional[bool]:
        """Set the bit at index and return its previous value.

        Returns None when the index was not allocated before.  Setting a 1
        past the top grows the value; clearing the top bit re-trims.
        """
        if index < 0:
            raise BitRangeError(f"negative bit index {index}")
        block, offset = divmod(index, BLOCK_SIZE)
        if index >= self._length:
            if not bit:
                return None
            if block >= len(self._blocks):
                self._blocks.extend([0] * (block + 1 - len(self._blocks)))
            self._blocks[block] |= 1 << offset
            self._length = index + 1
            return None

        previous = (self._blocks[block] >> offset) & 1 == 1
        if bit:
            self._blocks[block] |= 1 << offset
        else:
            self._blocks[block] &= BLOCK_MASK ^ (1 << offset)
            if index == self._length - 1:
                self._assign(kernel.trim(self._blocks))
        return previous

    def get_bits(self, start: int, count: int) -> "UnsignedMagnitude":
        """Extract `count` bits counting down from bit `start` (inclusive).

        The result holds bits start .. start - count + 1, shifted down.

        Raises:
            BitRangeError: start is past the top bit, or fewer than `count`
                           bits exist at and below start.
        """
        if start < 0 or start >= self._length:
            raise BitRangeError(
                f"start is too big: start >= length {start}>={self._length}"
            )
        if count < 0 or count > start + 1:
            raise BitRangeError(
                f"start index {start} does not leave enough bits for {count}"
            )
        return UnsignedMagnitude._wrap(
            kernel.extract_bits(self._blocks, start + 1 - count, count)
        )

    def shift_out(self, count: int) -> "UnsignedMagnitude":
        """Remove the top `count` bits from self and return them.

        Raises BitRangeError if count exceeds the bit length.
        """
        if count < 0 or count > self._length:
            raise BitRangeError(f"cannot shift out {count} of {self._length} bits")
        if count == 0:
            return UnsignedMagnitude()
        keep = self._length - count
        top = UnsignedMagnitude._wrap(kernel.shift_right(self._blocks, keep))
        self._assign(kernel.truncate(self._blocks, keep))
        return top

    def iter_bits(self) -> Iterator[bool]:
        """Bits from most to least significant."""
        for index in range(self._length - 1, -1, -1):
            block, offset = divmod(index, BLOCK_SIZE)
            yield (self._blocks[block] >> offset) & 1 == 1

    __iter__ = iter_bits

    # -- shifts and bitwise -------------------------------------------------

    def shift_left(self, n: int) -> "UnsignedMagnitude":
        return UnsignedMagnitude._wrap(kernel.shift_left(self._blocks, _shift_count(n)))

    def shift_left_into(self, n: int) -> None:
        self._assign(kernel.shift_left(self._blocks, _shift_count(n)))

    def shift_right(self, n: int) -> "UnsignedMagnitude":
        return UnsignedMagnitude._wrap(kernel.shift_right(self._blocks, _shift_count(n)))

    def shift_right_into(self, n: int) -> None:
        self._assign(kernel.shift_right(self._blocks, _shift_count(n)))

    def bit_and(self, other: "UnsignedMagnitude") -> "UnsignedMagnitude":
        return UnsignedMagnitude._wrap(kernel.bit_and(self._blocks, other._blocks))

    def and_into(self, other: "UnsignedMagnitude") -> None:
        self._assign(kernel.bit_and(self._blocks, other._blocks))

    def bit_or(self, other: "UnsignedMagnitude") -> "UnsignedMagnitude":
        return UnsignedMagnitude._wrap(kernel.bit_or(self._blocks, other._blocks))

    def or_into(self, other: "UnsignedMagnitude") -> None:
        self._assign(kernel.bit_or(self._blocks, other._blocks))

    # -- arithmetic ---------------------------------------------------------

    def add_to(self, other: "UnsignedMagnitude") -> "UnsignedMagnitude":
        """self + other."""
        return UnsignedMagnitude._wrap(kernel.add(self._blocks, other._blocks))

    def add_into(self, other: "UnsignedMagnitude") -> None:
        """self += other."""
        self._assign(kernel.add_into(self._blocks, other._blocks))

    def sub_from(self, other: "UnsignedMagnitude") -> "UnsignedMagnitude":
        """self - other.  Raises UnderflowError if other > self."""
        return UnsignedMagnitude._wrap(kernel.sub(self._blocks, other._blocks))

    def sub_into(self, other: "UnsignedMagnitude") -> None:
        """self -= other.  Raises UnderflowError (self untouched) if other > self."""
        self._assign(kernel.sub_into(self._blocks, other._blocks))

    def mul_with(self, other: "UnsignedMagnitude") -> "UnsignedMagnitude":
        return UnsignedMagnitude._wrap(kernel.mul(self._blocks, other._blocks))

    def mul_into(self, other: "UnsignedMagnitude") -> None:
        self._assign(kernel.mul(self._blocks, other._blocks))

    def div_mod(self, other: "UnsignedMagnitude") -> Tuple["UnsignedMagnitude", "UnsignedMagnitude"]:
        """(quotient, remainder).  Raises ZeroDivisionError for a zero divisor."""
        quotient, remainder = kernel.div_mod(self._blocks, other._blocks)
        return UnsignedMagnitude._wrap(quotient), UnsignedMagnitude._wrap(remainder)

    def div_mod_into(self, other: "UnsignedMagnitude") -> "UnsignedMagnitude":
        """Replace self by the quotient and return the remainder."""
        quotient, remainder = kernel.div_mod(self._blocks, other._blocks)
        self._assign(quotient)
        return UnsignedMagnitude._wrap(remainder)

    def div_by(self, other: "UnsignedMagnitude") -> "UnsignedMagnitude":
        return self.div_mod(other)[0]

    def powi(self, power: int) -> "UnsignedMagnitude":
        """self ** power by repeated multiplication (power >= 0)."""
        if power < 0:
            raise ValueError("power must be non-negative")
        res = UnsignedMagnitude.one()
        for _ in range(power):
            res.mul_into(self)
        return res

    def gcd(self, other: "UnsignedMagnitude") -> "UnsignedMagnitude":
        """Greatest common divisor (binary GCD); gcd(0, x) == x."""
        return UnsignedMagnitude._wrap(kernel.gcd(self._blocks, other._blocks))

    # -- conversion ---------------------------------------------------------

    def to_native(self, width: int = 64) -> int:
        """Value as a Python int, provided it fits `width` bits.

        Raises:
            ValueTooLargeError: more than `width` significant bits.
        """
        check_width(width)
        if self._length > width:
            raise ValueTooLargeError(self._length, width)
        return join_words(self._blocks)

    def to_u64(self) -> int:
        return self.to_native(64)

    def to_u128(self) -> int:
        return self.to_native(128)

    def to_float(self) -> float:
        """Nearest double; raises NonFiniteError if it overflows."""
        register = kernel.to_float(self._blocks)
        if math.isnan(register):
            raise NonFiniteError(f"{self!r} produced an invalid f64")
        if math.isinf(register):
            raise NonFiniteError(f"{self!r} produced an infinite f64")
        return register

    def to_bin_string(self) -> str:
        return format_bin(self._blocks)

    def to_hex_string(self) -> str:
        return format_hex(self._blocks)

    def to_dec_string(self) -> str:
        return format_dec(self._blocks)

    def __str__(self) -> str:
        return self.to_dec_string()

    def __repr__(self) -> str:
        return f"(L:{self._length},0x{self.to_hex_string()})"

    # -- operator sugar -----------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, UnsignedMagnitude):
            return NotImplemented
        return self._length == other._length and self._blocks == other._blocks

    def __lt__(self, other) -> bool:
        if not isinstance(other, UnsignedMagnitude):
            return NotImplemented
        return self.compare(other) < 0

    __hash__ = None

    def __bool__(self) -> bool:
        return self._length != 0

    def __int__(self) -> int:
        return join_words(self._blocks)

    __index__ = __int__

    def __add__(self, other):
        if not isinstance(other, UnsignedMagnitude):
            return NotImplemented
        return self.add_to(other)

    def __iadd__(self, other):
        if not isinstance(other, UnsignedMagnitude):
            return NotImplemented
        self.add_into(other)
        return self

    def __sub__(self, other):
        if not isinstance(other, UnsignedMagnitude):
            return NotImplemented
        return self.sub_from(other)

    def __isub__(self, other):
        if not isinstance(other, UnsignedMagnitude):
            return NotImplemented
        self.sub_into(other)
        return self

    def __mul__(self, other):
        if not isinstance(other, UnsignedMagnitude):
            return NotImplemented
        return self.mul_with(other)

    def __imul__(self, other):
        if not isinstance(other, UnsignedMagnitude):
            return NotImplemented
        self.mul_into(other)
        return self

    def __floordiv__(self, other):
        if not isinstance(other, UnsignedMagnitude):
            return NotImplemented
        return self.div_by(other)

    def __ifloordiv__(self, other):
        if not isinstance(other, UnsignedMagnitude):
            return NotImplemented
        self.div_mod_into(other)
        return self

    def __mod__(self, other):
        if not isinstance(other, UnsignedMagnitude):
            return NotImplemented
        return self.div_mod(other)[1]

    def __divmod__(self, other):
        if not isinstance(other, UnsignedMagnitude):
            return NotImplemented
        return self.div_mod(other)

    def __lshift__(self, n: int):
        return self.shift_left(n)

    def __ilshift__(self, n: int):
        self.shift_left_into(n)
        return self

    def __rshift__(self, n: int):
        return self.shift_right(n)

    def __irshift__(self, n: int):
        self.shift_right_into(n)
        return self

    def __and__(self, other):
        if not isinstance(other, UnsignedMagnitude):
            return NotImplemented
        return self.bit_and(other)

    def __iand__(self, other):
        if not isinstance(other, UnsignedMagnitude):
            return NotImplemented
        self.and_into(other)
        return self

    def __or__(self, other):
        if not isinstance(other, UnsignedMagnitude):
            return NotImplemented
        return self.bit_or(other)

    def __ior__(self, other):
        if not isinstance(other, UnsignedMagnitude):
            return NotImplemented
        self.or_into(other)
        return self


def _shift_count(n: int) -> int:
    if n < 0:
        raise ValueError(f"negative shift count {n}")
    return n
