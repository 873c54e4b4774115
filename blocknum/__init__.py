"""
blocknum: arbitrary-precision integers and rationals built from 64-bit words.

Layers (each depends only on the ones before it):
  UnsignedMagnitude   canonical little-endian block vector, all bit-level
                      and arithmetic primitives
  SignedInteger       sign flag + magnitude, sign-aware add/sub dispatch
  Rational            reduced fraction of magnitudes, Newton square root,
                      float decomposition

No platform bignum is used for the arithmetic itself: every intermediate
is at most 128 bits wide.
"""

__version__ = "0.1.0"

from .errors import (
    BlockNumError, ValueTooLargeError, NonFiniteError, HexParseError,
    ZeroDenominatorError, NegativeValueError, UnderflowError,
    BitRangeError, ConvergenceError,
)
from .magnitude import UnsignedMagnitude
from .signed import SignedInteger
from .rational import Rational, SqrtConfig, newton_sqrt, DEFAULT_SQRT_CONFIG
from .demo import DemoConfig, SqrtResult, load_config, run_sqrt_demo
from .logging import RunLogger, RunManifest, create_manifest

__all__ = [
    "BlockNumError", "ValueTooLargeError", "NonFiniteError", "HexParseError",
    "ZeroDenominatorError", "NegativeValueError", "UnderflowError",
    "BitRangeError", "ConvergenceError",
    "UnsignedMagnitude", "SignedInteger",
    "Rational", "SqrtConfig", "newton_sqrt", "DEFAULT_SQRT_CONFIG",
    "DemoConfig", "SqrtResult", "load_config", "run_sqrt_demo",
    "RunLogger", "RunManifest", "create_manifest",
]
