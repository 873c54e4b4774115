"""
Rational: exact fractions over UnsignedMagnitude.

A rational is a sign flag plus a numerator/denominator pair of
magnitudes.  Every value is kept in lowest terms (reduced by the binary
GCD after construction and after every arithmetic operation), the
denominator is never zero, and zero is always stored as positive 0/1.

Square roots are computed by Newton's method on x**2 - S = 0 in exact
rational arithmetic; see newton_sqrt.

Usage:
    third = Rational.from_ints(1, 3)
    print(third)                  # 1/3
    root, steps = newton_sqrt(Rational.from_ints(2))
    print(root.to_float())        # 1.4142135623730951
"""

import functools
import math
import warnings
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .constants import (
    BLOCK_SIZE, F64_MANTISSA_DIGITS, F64_EPSILON_BITS,
    SQRT_MAX_ITERATIONS, SQRT_TOLERANCE_BITS, FROM_FLOAT_MAX_STEPS,
)
from .errors import ConvergenceError, NegativeValueError, NonFiniteError, ZeroDenominatorError
from .magnitude import UnsignedMagnitude
from .signed import SignedInteger


# ---------------------------------------------------------------------------
# Square-root configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SqrtConfig:
    """Parameters of the Newton square root.

    Attributes:
        tolerance_bits: Stop once successive iterates differ by less
                        than 1 / 2**tolerance_bits.
        epsilon_bits: Give up if 2 * x_n drops below 1 / 2**epsilon_bits.
        max_iterations: Give up after this many Newton steps.
    """
    tolerance_bits: int = SQRT_TOLERANCE_BITS
    epsilon_bits: int = F64_EPSILON_BITS
    max_iterations: int = SQRT_MAX_ITERATIONS

    def __post_init__(self):
        if self.tolerance_bits < 0 or self.epsilon_bits < 0:
            raise ValueError("tolerance_bits and epsilon_bits must be non-negative")
        if self.max_iterations <= 0:
            raise ValueError("max_iterations must be positive")

    @functools.cached_property
    def tolerance(self) -> "Rational":
        return Rational.power_of_two(-self.tolerance_bits)

    @functools.cached_property
    def epsilon(self) -> "Rational":
        return Rational.power_of_two(-self.epsilon_bits)


# ---------------------------------------------------------------------------
# Rational
# ---------------------------------------------------------------------------

@functools.total_ordering
class Rational:
    """Signed fraction numerator / denominator in lowest terms."""

    __slots__ = ("_negative", "_numerator", "_denominator")

    def __init__(self, numerator: Optional[UnsignedMagnitude] = None,
                 denominator: Optional[UnsignedMagnitude] = None,
                 negative: bool = False):
        """Build numerator / denominator from magnitudes (both copied).

        Raises:
            ZeroDenominatorError: denominator is zero.
        """
        num = numerator.copy() if numerator is not None else UnsignedMagnitude()
        den = denominator.copy() if denominator is not None else UnsignedMagnitude.one()
        if den.is_zero():
            raise ZeroDenominatorError("rational with zero denominator")
        self._set(num, den, negative)

    @classmethod
    def _wrap(cls, numerator: UnsignedMagnitude, denominator: UnsignedMagnitude,
              negative: bool) -> "Rational":
        """Adopt magnitudes without copying; the denominator must be non-zero."""
        res = cls.__new__(cls)
        res._set(numerator, denominator, negative)
        return res

    def _set(self, numerator: UnsignedMagnitude, denominator: UnsignedMagnitude,
             negative: bool) -> None:
        self._numerator = numerator
        self._denominator = denominator
        self._negative = bool(negative)
        self._reduce()

    def _reduce(self) -> None:
        if self._numerator.is_zero():
            self._denominator = UnsignedMagnitude.one()
            self._negative = False
            return
        divisor = self._numerator.gcd(self._denominator)
        if divisor.length > 1:
            self._numerator.div_mod_into(divisor)
            self._denominator.div_mod_into(divisor)

    def _assign(self, other: "Rational") -> None:
        self._numerator = other._numerator
        self._denominator = other._denominator
        self._negative = other._negative

    # -- construction -------------------------------------------------------

    @classmethod
    def zero(cls) -> "Rational":
        return cls()

    @classmethod
    def one(cls) -> "Rational":
        return cls(UnsignedMagnitude.one())

    @classmethod
    def power_of_two(cls, exponent: int) -> "Rational":
        """2**exponent for any integer exponent."""
        power = UnsignedMagnitude.power_of_two(abs(exponent))
        if exponent >= 0:
            return cls._wrap(power, UnsignedMagnitude.one(), False)
        return cls._wrap(UnsignedMagnitude.one(), power, False)

    @classmethod
    def from_ints(cls, numerator, denominator=1, width: Optional[int] = None) -> "Rational":
        """numerator / denominator from native integers.

        The sign is the XOR of the operand signs.  Both values must fit the
        signed native width (64 bits unless given or taken from numpy).
        """
        return cls.from_signed_pair(
            SignedInteger.from_native(numerator, width),
            SignedInteger.from_native(denominator, width),
        )

    @classmethod
    def from_integer(cls, value: Union[SignedInteger, UnsignedMagnitude]) -> "Rational":
        if isinstance(value, SignedInteger):
            return cls._wrap(value.magnitude, UnsignedMagnitude.one(), value.is_negative())
        return cls(value)

    @classmethod
    def from_signed_pair(cls, numerator: SignedInteger, denominator: SignedInteger) -> "Rational":
        if denominator.is_zero():
            raise ZeroDenominatorError("rational with zero denominator")
        return cls._wrap(
            numerator.magnitude,
            denominator.magnitude,
            numerator.is_negative() != denominator.is_negative(),
        )

    @classmethod
    def from_float(cls, value: float) -> "Rational":
        """Exact rational approximation of a finite double.

        The integer part is taken directly.  The fractional error is then
        reduced step by step: round its reciprocal to the nearest integer k,
        add the signed 1/k and subtract it from the error, until the error
        is negligible relative to the input (2**-53) or its reciprocal is
        no longer finite.

        Raises:
            NonFiniteError: value is NaN or infinite.
        """
        if not math.isfinite(value):
            raise NonFiniteError(f"cannot convert {value!r} to a rational")
        magnitude = abs(value)
        res = cls(UnsignedMagnitude.from_float(magnitude))
        error = magnitude - math.floor(magnitude)
        limit = math.ldexp(magnitude, -F64_MANTISSA_DIGITS)

        steps = 0
        while abs(error) > limit:
            if steps == FROM_FLOAT_MAX_STEPS:
                warnings.warn(
                    f"from_float({value!r}) stopped after {steps} steps with "
                    f"residual {error!r}",
                    RuntimeWarning,
                )
                break
            recip = 1.0 / error
            if math.isinf(recip):
                break
            k = UnsignedMagnitude.from_float(abs(recip) + 0.5)
            res.add_into(cls._wrap(UnsignedMagnitude.one(), k, recip < 0))
            error -= math.copysign(1.0 / k.to_float(), recip)
            steps += 1

        if value < 0:
            res._negative = not res.is_zero()
        return res

    def copy(self) -> "Rational":
        res = Rational.__new__(Rational)
        res._numerator = self._numerator.copy()
        res._denominator = self._denominator.copy()
        res._negative = self._negative
        return res

    __copy__ = copy

    def __deepcopy__(self, memo):
        return self.copy()

    # -- inspection ---------------------------------------------------------

    @property
    def numerator(self) -> UnsignedMagnitude:
        return self._numerator.copy()

    @property
    def denominator(self) -> UnsignedMagnitude:
        return self._denominator.copy()

    def is_negative(self) -> bool:
        return self._negative

    def is_positive(self) -> bool:
        """True for values strictly greater than zero."""
        return not self._negative and not self._numerator.is_zero()

    def is_zero(self) -> bool:
        return self._numerator.is_zero()

    def is_integer(self) -> bool:
        return self._denominator.length == 1

    def compare(self, other: "Rational") -> int:
        if self._negative != other._negative:
            return -1 if self._negative else 1
        left = self._numerator.mul_with(other._denominator)
        right = other._numerator.mul_with(self._denominator)
        order = left.compare(right)
        return -order if self._negative else order

    # -- add / subtract -----------------------------------------------------

    def _combine(self, other: "Rational", other_negative: bool) -> "Rational":
        """self + other with other's sign replaced by other_negative.

        a/b + c/d = (ad + cb) / bd.  When the signs differ the smaller
        cross product is subtracted from the larger and the larger one's
        sign is kept.
        """
        left = self._numerator.mul_with(other._denominator)
        right = other._numerator.mul_with(self._denominator)
        denominator = self._denominator.mul_with(other._denominator)
        if self._negative == other_negative:
            left.add_into(right)
            return Rational._wrap(left, denominator, self._negative)
        order = left.compare(right)
        if order > 0:
            left.sub_into(right)
            return Rational._wrap(left, denominator, self._negative)
        if order < 0:
            right.sub_into(left)
            return Rational._wrap(right, denominator, other_negative)
        return Rational()

    def add_to(self, other: "Rational") -> "Rational":
        return self._combine(other, other._negative)

    def add_into(self, other: "Rational") -> None:
        self._assign(self._combine(other, other._negative))

    def sub_from(self, other: "Rational") -> "Rational":
        """self - other."""
        return self._combine(other, not other._negative and not other.is_zero())

    def sub_into(self, other: "Rational") -> None:
        self._assign(self.sub_from(other))

    # -- multiply / divide --------------------------------------------------

    def mul_by(self, other: "Rational") -> "Rational":
        return Rational._wrap(
            self._numerator.mul_with(other._numerator),
            self._denominator.mul_with(other._denominator),
            self._negative != other._negative,
        )

    mul_with = mul_by

    def mul_into(self, other: "Rational") -> None:
        self._assign(self.mul_by(other))

    def invert(self) -> "Rational":
        """1 / self.  Raises ZeroDivisionError for zero."""
        if self.is_zero():
            raise ZeroDivisionError("inverse of zero")
        return Rational._wrap(self._denominator.copy(), self._numerator.copy(), self._negative)

    def invert_into(self) -> None:
        if self.is_zero():
            raise ZeroDivisionError("inverse of zero")
        self._numerator, self._denominator = self._denominator, self._numerator

    def div_by(self, other: "Rational") -> "Rational":
        """self / other.  Raises ZeroDivisionError if other is zero."""
        return self.mul_by(other.invert())

    def div_into(self, other: "Rational") -> None:
        self._assign(self.div_by(other))

    def negate(self) -> "Rational":
        res = self.copy()
        res._negative = not self._negative and not self.is_zero()
        return res

    def abs(self) -> "Rational":
        res = self.copy()
        res._negative = False
        return res

    def powi(self, power: int) -> "Rational":
        """self ** power; a negative power inverts first."""
        if power < 0:
            return self.invert().powi(-power)
        return Rational._wrap(
            self._numerator.powi(power),
            self._denominator.powi(power),
            self._negative and power % 2 == 1,
        )

    def trunc(self) -> SignedInteger:
        """Integer part, rounded toward zero."""
        return SignedInteger(self._numerator.div_by(self._denominator), self._negative)

    def sqrt(self, config: Optional[SqrtConfig] = None) -> "Rational":
        """Square root by Newton's method; see newton_sqrt."""
        return newton_sqrt(self, config)[0]

    # -- conversion ---------------------------------------------------------

    def to_float(self) -> float:
        """Nearest double, computed from the top 64 bits of each part so that
        numerators and denominators beyond the double range still convert.

        Raises:
            NonFiniteError: the quotient overflows a double.
        """
        if self.is_zero():
            return 0.0
        num, num_shift = _leading_bits(self._numerator)
        den, den_shift = _leading_bits(self._denominator)
        try:
            register = math.ldexp(num / den, num_shift - den_shift)
        except OverflowError as exc:
            raise NonFiniteError(f"{self!r} produced an infinite f64") from exc
        return -register if self._negative else register

    def __float__(self) -> float:
        return self.to_float()

    def __str__(self) -> str:
        sign = "-" if self._negative else ""
        if self.is_integer():
            return f"{sign}{self._numerator}"
        return f"{sign}{self._numerator}/{self._denominator}"

    def __repr__(self) -> str:
        sign = "-" if self._negative else ""
        if self.is_integer():
            return f"({sign}{self._numerator!r})"
        return f"({sign}{self._numerator!r}/{self._denominator!r})"

    # -- operator sugar -----------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, Rational):
            return NotImplemented
        return (self._negative == other._negative
                and self._numerator == other._numerator
                and self._denominator == other._denominator)

    def __lt__(self, other) -> bool:
        if not isinstance(other, Rational):
            return NotImplemented
        return self.compare(other) < 0

    __hash__ = None

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __neg__(self):
        return self.negate()

    def __abs__(self):
        return self.abs()

    def __add__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        return self.add_to(other)

    def __iadd__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        self.add_into(other)
        return self

    def __sub__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        return self.sub_from(other)

    def __isub__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        self.sub_into(other)
        return self

    def __mul__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        return self.mul_by(other)

    def __imul__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        self.mul_into(other)
        return self

    def __truediv__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        return self.div_by(other)

    def __itruediv__(self, other):
        if not isinstance(other, Rational):
            return NotImplemented
        self.div_into(other)
        return self

    def __pow__(self, power: int):
        return self.powi(power)


def _leading_bits(value: UnsignedMagnitude) -> Tuple[float, int]:
    """(top bits as a double, number of bits dropped below them)."""
    count = min(value.length, BLOCK_SIZE)
    shift = value.length - count
    return value.get_bits(value.length - 1, count).to_float(), shift


# ---------------------------------------------------------------------------
# Newton square root
# ---------------------------------------------------------------------------

def initial_guess(value: Rational) -> Rational:
    """2**(d // 2) where d is the bit-length difference of numerator and
    denominator, inverted when the denominator is longer."""
    diff = value._numerator.length - value._denominator.length
    if diff >= 0:
        return Rational.power_of_two(diff // 2)
    return Rational.power_of_two(-((-diff) // 2))


def newton_sqrt(value: Rational, config: Optional[SqrtConfig] = None) -> Tuple[Rational, int]:
    """Square root of a non-negative rational.

    Iterates x_{n+1} = x_n - (x_n**2 - S) / (2 x_n) exactly until
    |x_n - x_{n+1}| < config.tolerance.

    Args:
        value: The radicand S.
        config: Iteration parameters (defaults to SqrtConfig()).

    Returns:
        (root, number of Newton steps taken)

    Raises:
        NegativeValueError: value is negative.
        ConvergenceError: 2 x_n fell below config.epsilon, or no
                          convergence within config.max_iterations.
    """
    if config is None:
        config = DEFAULT_SQRT_CONFIG
    if value.is_negative():
        raise NegativeValueError(f"square root of negative value {value}")
    if value.is_zero():
        return Rational(), 0

    two = Rational(UnsignedMagnitude.from_native(2))
    x = initial_guess(value)
    for iteration in range(1, config.max_iterations + 1):
        derivative = x.mul_by(two)
        if derivative < config.epsilon:
            raise ConvergenceError(
                f"sqrt({value}) derivative {derivative.to_float()!r} below epsilon "
                f"after {iteration - 1} iterations"
            )
        step = x.mul_by(x).sub_from(value).div_by(derivative)
        x.sub_into(step)
        if step.abs() < config.tolerance:
            return x, iteration
    raise ConvergenceError(
        f"sqrt({value}) did not converge in {config.max_iterations} iterations"
    )


DEFAULT_SQRT_CONFIG = SqrtConfig()
