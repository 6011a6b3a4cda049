"""Mathematical utilities for pool quoting.

This package provides the numeric primitives used by every quote:
- Dec: 18-decimal signed fixed-point arithmetic
- pow_dec: fractional powers for weighted-pool math
"""

from poolquote.math.dec import ONE_18, PRECISION, Dec, DivisionByZero, MathError
from poolquote.math.pow import PowBaseOutOfBounds, pow_dec

__all__ = [
    "Dec",
    "MathError",
    "DivisionByZero",
    "PowBaseOutOfBounds",
    "pow_dec",
    "ONE_18",
    "PRECISION",
]
