"""
Numeric constants for the block-vector engine.

Block geometry:
  - BLOCK_SIZE: bits per storage word (64)
  - BLOCK_MASK / BLOCK_BASE: all-ones word and 2**64

IEEE-754 double parameters come from numpy.finfo(numpy.float64) so the
square-root tolerance and float decomposition agree with the platform
double.  Everything here is computed once at import and never mutated.
"""

import numpy as np

BLOCK_SIZE = 64
BLOCK_MASK = (1 << BLOCK_SIZE) - 1
BLOCK_BASE = 1 << BLOCK_SIZE

HALF_BLOCK = 32
HALF_MASK = (1 << HALF_BLOCK) - 1

# Native integer widths accepted by the construction/conversion helpers
NATIVE_WIDTHS = (8, 16, 32, 64, 128)

_F64 = np.finfo(np.float64)

# 53: explicit mantissa bits plus the implicit leading one
F64_MANTISSA_DIGITS = int(_F64.nmant) + 1
# 52: machine epsilon is 2**-52
F64_EPSILON_BITS = -int(_F64.machep)

TWO_POW_32 = float(2 ** HALF_BLOCK)
TWO_POW_64 = float(2 ** BLOCK_SIZE)

# Newton square root defaults
SQRT_MAX_ITERATIONS = 100
SQRT_TOLERANCE_BITS = F64_MANTISSA_DIGITS

# Demo error bound: 10 / 2**53
DEMO_ERROR_NUMERATOR = 10
DEMO_ERROR_BITS = F64_MANTISSA_DIGITS
DEMO_INPUTS = (2, 3, 4, 5, 100, 10000, 1000000)

# Upper bound on reciprocal-rounding steps in Rational.from_float
FROM_FLOAT_MAX_STEPS = 64
