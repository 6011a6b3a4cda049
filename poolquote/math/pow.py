"""Fractional powers over Dec.

Weighted pools raise a balance ratio to a weight ratio, which is rarely an
integer. The exponent is split into an integer part, computed exactly by
repeated squaring, and a fractional part, approximated with the binomial
series of (1 + x)^a around x = base - 1:

    (1 + x)^a = 1 + a*x + a(a-1)/2! * x^2 + a(a-1)(a-2)/3! * x^3 + ...

The series converges for |x| < 1, so the base must lie in (0, 2).
"""

from __future__ import annotations

from .dec import Dec, MathError

__all__ = [
    "PowBaseOutOfBounds",
    "pow_dec",
    "pow_int",
    "pow_approx",
    "POW_PRECISION",
]

# Series terms smaller than this are dropped
POW_PRECISION = Dec.from_str("0.00000001")

# Hard cap on series terms; convergence is far quicker for bases near 1
_MAX_SERIES_TERMS = 10_000

_ONE = Dec.one()
_TWO = Dec.from_int(2)


class PowBaseOutOfBounds(MathError):
    """Base must be strictly between 0 and 2."""

    pass


def pow_int(base: Dec, power: int) -> Dec:
    """Compute base^power for a non-negative integer power.

    Uses square-and-multiply with truncating multiplication.
    """
    if power < 0:
        raise ValueError(f"pow_int requires a non-negative power, got {power}")
    result = _ONE
    while power > 0:
        if power & 1:
            result = result.mul_truncate(base)
        power >>= 1
        if power:
            base = base.mul_truncate(base)
    return result


def pow_approx(base: Dec, exp: Dec, precision: Dec = POW_PRECISION) -> Dec:
    """Approximate base^exp for 0 <= exp < 1 with the binomial series.

    Terms are accumulated until one drops below ``precision``.
    """
    if exp.is_zero():
        return _ONE

    x = base.sub(_ONE).abs()
    x_negative = base < _ONE

    term = _ONE
    total = _ONE
    negative = False
    for k in range(1, _MAX_SERIES_TERMS + 1):
        big_k = Dec.from_int(k)
        # c = |a - (k - 1)|, sign tracked separately
        c_signed = exp.sub(big_k.sub(_ONE))
        c = c_signed.abs()
        term = term.mul_truncate(c.mul_truncate(x)).quo_truncate(big_k)
        if term.is_zero():
            break
        if x_negative:
            negative = not negative
        if c_signed.is_negative():
            negative = not negative
        total = total.sub(term) if negative else total.add(term)
        if term < precision:
            break
    return total


def pow_dec(base: Dec, exp: Dec, precision: Dec = POW_PRECISION) -> Dec:
    """Compute base^exp for a non-negative exponent.

    Integer exponents are computed exactly for any base. Only a fractional
    exponent goes through the series and needs the base in (0, 2).

    Args:
        base: Base, must satisfy 0 < base < 2 unless exp is an integer
        exp: Non-negative exponent
        precision: Series cut-off for the fractional part

    Returns:
        base^exp as Dec

    Raises:
        PowBaseOutOfBounds: If exp has a fractional part and base is outside (0, 2)
        ValueError: If exp is negative
    """
    if exp.is_negative():
        raise ValueError(f"pow_dec requires a non-negative exponent, got {exp}")

    integer = exp.truncate()
    fractional = exp.sub(Dec.from_int(integer))
    if fractional.is_zero():
        return pow_int(base, integer)

    if not base.is_positive():
        raise PowBaseOutOfBounds(f"Base must be greater than 0, got {base}")
    if base >= _TWO:
        raise PowBaseOutOfBounds(f"Base must be less than 2, got {base}")

    integer_pow = pow_int(base, integer)
    partial = pow_approx(base, fractional, precision)
    return integer_pow.mul_truncate(partial)
