"""
SignedInteger: a sign flag on top of an UnsignedMagnitude.

Addition and subtraction dispatch on the operand signs: equal signs add
magnitudes, differing signs subtract the smaller magnitude from the
larger and take the sign of the larger.  Multiplication and division XOR
the signs.  Zero is never negative.
"""

import functools
from typing import Optional, Tuple

from .errors import NegativeValueError, ValueTooLargeError
from .magnitude import UnsignedMagnitude
from .native import check_signed, check_unsigned, check_width, resolve_native, split_words


@functools.total_ordering
class SignedInteger:
    """Integer of unbounded size with sign-magnitude storage."""

    __slots__ = ("_negative", "_magnitude")

    def __init__(self, magnitude: Optional[UnsignedMagnitude] = None, negative: bool = False):
        self._magnitude = magnitude if magnitude is not None else UnsignedMagnitude()
        self._negative = bool(negative) and not self._magnitude.is_zero()

    def _normalize(self) -> None:
        if self._magnitude.is_zero():
            self._negative = False

    # -- construction -------------------------------------------------------

    @classmethod
    def from_native(cls, value, width: Optional[int] = None,
                    signed: Optional[bool] = None) -> "SignedInteger":
        """Construct from a native integer.

        Args:
            value: Python int or numpy integer scalar.
            width: Native width; taken from a numpy dtype, else 64.
            signed: Range to check the value against.  Defaults to the
                    numpy dtype's signedness, and to signed for plain ints.

        Raises:
            ValueError: value outside the width's range.
        """
        is_numpy = not isinstance(value, int)
        value, width, type_signed = resolve_native(value, width)
        if signed is None:
            signed = type_signed if is_numpy else True
        if signed:
            check_signed(value, width)
        else:
            check_unsigned(value, width)
        return cls(UnsignedMagnitude._wrap(split_words(abs(value))), value < 0)

    @classmethod
    def from_i8(cls, value: int) -> "SignedInteger":
        return cls.from_native(value, 8, signed=True)

    @classmethod
    def from_i16(cls, value: int) -> "SignedInteger":
        return cls.from_native(value, 16, signed=True)

    @classmethod
    def from_i32(cls, value: int) -> "SignedInteger":
        return cls.from_native(value, 32, signed=True)

    @classmethod
    def from_i64(cls, value: int) -> "SignedInteger":
        return cls.from_native(value, 64, signed=True)

    @classmethod
    def from_i128(cls, value: int) -> "SignedInteger":
        return cls.from_native(value, 128, signed=True)

    @classmethod
    def from_magnitude(cls, magnitude: UnsignedMagnitude, negative: bool = False) -> "SignedInteger":
        """Wrap a copy of magnitude with the given sign."""
        return cls(magnitude.copy(), negative)

    def copy(self) -> "SignedInteger":
        return SignedInteger(self._magnitude.copy(), self._negative)

    __copy__ = copy

    def __deepcopy__(self, memo):
        return self.copy()

    # -- inspection ---------------------------------------------------------

    @property
    def magnitude(self) -> UnsignedMagnitude:
        """Absolute value (a copy)."""
        return self._magnitude.copy()

    @property
    def length(self) -> int:
        return self._magnitude.length

    def is_negative(self) -> bool:
        return self._negative

    def is_positive(self) -> bool:
        """True for values strictly greater than zero."""
        return not self._negative and not self._magnitude.is_zero()

    def is_zero(self) -> bool:
        return self._magnitude.is_zero()

    def as_unsigned(self) -> UnsignedMagnitude:
        """Magnitude of a non-negative value; NegativeValueError otherwise."""
        if self._negative:
            raise NegativeValueError(f"{self} has no unsigned representation")
        return self._magnitude.copy()

    def compare(self, other: "SignedInteger") -> int:
        if self._negative != other._negative:
            return -1 if self._negative else 1
        order = self._magnitude.compare(other._magnitude)
        return -order if self._negative else order

    # -- sign-aware add / subtract ------------------------------------------

    def _sub_magnitudes(self, other: "SignedInteger") -> "SignedInteger":
        """self - other for operands of the same sign."""
        order = self._magnitude.compare(other._magnitude)
        if order > 0:
            return SignedInteger(self._magnitude.sub_from(other._magnitude), self._negative)
        if order < 0:
            # sign reversal
            return SignedInteger(other._magnitude.sub_from(self._magnitude), not self._negative)
        return SignedInteger()

    def _sub_magnitudes_into(self, other: "SignedInteger") -> None:
        order = self._magnitude.compare(other._magnitude)
        if order > 0:
            self._magnitude.sub_into(other._magnitude)
        elif order < 0:
            self._magnitude = other._magnitude.sub_from(self._magnitude)
            self._negative = not self._negative
        else:
            self._magnitude = UnsignedMagnitude()
            self._negative = False

    def add_to(self, other: "SignedInteger") -> "SignedInteger":
        if self._negative == other._negative:
            return SignedInteger(self._magnitude.add_to(other._magnitude), self._negative)
        if self._negative:
            # -a + b == b - a
            return other._sub_magnitudes(self.negate())
        return self._sub_magnitudes(other.negate())

    def add_into(self, other: "SignedInteger") -> None:
        if self._negative == other._negative:
            self._magnitude.add_into(other._magnitude)
        else:
            self._sub_magnitudes_into(other.negate())

    def sub_from(self, other: "SignedInteger") -> "SignedInteger":
        """self - other."""
        if self._negative == other._negative:
            return self._sub_magnitudes(other)
        return SignedInteger(self._magnitude.add_to(other._magnitude), self._negative)

    def sub_into(self, other: "SignedInteger") -> None:
        if self._negative == other._negative:
            self._sub_magnitudes_into(other)
        else:
            self._magnitude.add_into(other._magnitude)

    # -- multiply / divide --------------------------------------------------

    def mul_with(self, other: "SignedInteger") -> "SignedInteger":
        return SignedInteger(
            self._magnitude.mul_with(other._magnitude),
            self._negative != other._negative,
        )

    def mul_into(self, other: "SignedInteger") -> None:
        self._negative = self._negative != other._negative
        self._magnitude.mul_into(other._magnitude)
        self._normalize()

    def div_mod(self, other: "SignedInteger") -> Tuple["SignedInteger", "SignedInteger"]:
        """Truncating division: quotient rounds toward zero, the remainder
        takes the dividend's sign.  Raises ZeroDivisionError for zero."""
        quotient, remainder = self._magnitude.div_mod(other._magnitude)
        return (
            SignedInteger(quotient, self._negative != other._negative),
            SignedInteger(remainder, self._negative),
        )

    def div_by(self, other: "SignedInteger") -> "SignedInteger":
        return self.div_mod(other)[0]

    def pow(self, power: int) -> "SignedInteger":
        """self ** power; negative only for a negative base and odd power."""
        return SignedInteger(self._magnitude.powi(power), self._negative and power % 2 == 1)

    powi = pow

    def negate(self) -> "SignedInteger":
        return SignedInteger(self._magnitude.copy(), not self._negative)

    def abs(self) -> "SignedInteger":
        return SignedInteger(self._magnitude.copy())

    # -- conversion ---------------------------------------------------------

    def to_native(self, width: int = 64) -> int:
        """Value as a Python int in the i{width} range.

        The magnitude may use all `width` bits only for the minimum value
        -2**(width - 1).

        Raises:
            ValueTooLargeError: value outside the signed range.
        """
        check_width(width)
        length = self._magnitude.length
        if length >= width:
            limit = UnsignedMagnitude.power_of_two(width - 1)
            if not (self._negative and self._magnitude == limit):
                raise ValueTooLargeError(length, width, signed=True)
        value = self._magnitude.to_native(width)
        return -value if self._negative else value

    def to_i64(self) -> int:
        return self.to_native(64)

    def to_i128(self) -> int:
        return self.to_native(128)

    def to_float(self) -> float:
        register = self._magnitude.to_float()
        return -register if self._negative else register

    def to_dec_string(self) -> str:
        digits = self._magnitude.to_dec_string()
        return "-" + digits if self._negative else digits

    def __str__(self) -> str:
        return self.to_dec_string()

    def __repr__(self) -> str:
        return f"(L:{self._magnitude.length},{self.to_dec_string()})"

    def __int__(self) -> int:
        value = int(self._magnitude)
        return -value if self._negative else value

    # -- operator sugar -----------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, SignedInteger):
            return NotImplemented
        return self._negative == other._negative and self._magnitude == other._magnitude

    def __lt__(self, other) -> bool:
        if not isinstance(other, SignedInteger):
            return NotImplemented
        return self.compare(other) < 0

    __hash__ = None

    def __bool__(self) -> bool:
        return not self._magnitude.is_zero()

    def __neg__(self):
        return self.negate()

    def __abs__(self):
        return self.abs()

    def __add__(self, other):
        if not isinstance(other, SignedInteger):
            return NotImplemented
        return self.add_to(other)

    def __iadd__(self, other):
        if not isinstance(other, SignedInteger):
            return NotImplemented
        self.add_into(other)
        return self

    def __sub__(self, other):
        if not isinstance(other, SignedInteger):
            return NotImplemented
        return self.sub_from(other)

    def __isub__(self, other):
        if not isinstance(other, SignedInteger):
            return NotImplemented
        self.sub_into(other)
        return self

    def __mul__(self, other):
        if not isinstance(other, SignedInteger):
            return NotImplemented
        return self.mul_with(other)

    def __imul__(self, other):
        if not isinstance(other, SignedInteger):
            return NotImplemented
        self.mul_into(other)
        return self

    def __divmod__(self, other):
        if not isinstance(other, SignedInteger):
            return NotImplemented
        return self.div_mod(other)

    def __pow__(self, power: int):
        return self.pow(power)
