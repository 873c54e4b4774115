"""
Exception hierarchy for blocknum.

Recoverable conditions (narrowing conversions, float conversions, hex
parsing, zero denominators) and contract violations (underflow, bad bit
ranges, Newton non-convergence) share a common base so callers can catch
everything raised by the library with one clause.
"""


class BlockNumError(ArithmeticError):
    """Base class for all blocknum errors."""


# ---------------------------------------------------------------------------
# Recoverable
# ---------------------------------------------------------------------------

class ValueTooLargeError(BlockNumError, OverflowError):
    """Value does not fit the requested native width."""

    def __init__(self, bits: int, width: int, signed: bool = False):
        self.bits = bits
        self.width = width
        self.signed = signed
        kind = "i" if signed else "u"
        super().__init__(f"value too large for {kind}{width} ({bits} bits)")


class NonFiniteError(BlockNumError, ValueError):
    """A float conversion produced or received NaN or infinity."""


class HexParseError(BlockNumError, ValueError):
    """Non-hex character found while parsing a hex string."""

    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(
            f"invalid character encountered in hex string: {char!r} "
            f"at position {position}"
        )


class ZeroDenominatorError(BlockNumError, ZeroDivisionError):
    """Rational constructed with a zero denominator."""


class NegativeValueError(BlockNumError, ValueError):
    """Negative value where an unsigned magnitude is required."""


# ---------------------------------------------------------------------------
# Contract violations
# ---------------------------------------------------------------------------

class UnderflowError(BlockNumError):
    """Magnitude subtraction would go below zero."""

    def __init__(self, message: str = "integer underflow"):
        super().__init__(message)


class BitRangeError(BlockNumError, IndexError):
    """Requested bit range lies outside the value."""


class ConvergenceError(BlockNumError, RuntimeError):
    """Newton iteration failed to converge."""
