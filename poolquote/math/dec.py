"""Signed 18-decimal fixed-point arithmetic.

All values are stored as integers scaled by 10^18, the precision used by
on-chain Cosmos SDK decimals. Multiplication and division truncate toward
zero.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import ClassVar

__all__ = [
    # Classes
    "Dec",
    # Errors
    "MathError",
    "DivisionByZero",
    # Constants
    "PRECISION",
    "ONE_18",
]

PRECISION = 18
ONE_18 = 10**PRECISION

_DEC_PATTERN = re.compile(r"^([+-])?(\d+)(?:\.(\d*))?$")


class MathError(ArithmeticError):
    """Base error for fixed-point operations."""

    pass


class DivisionByZero(MathError):
    """Division by a zero Dec."""

    pass


def _div_trunc(a: int, b: int) -> int:
    """Integer division with truncation toward zero.

    Python's // floors toward negative infinity; Cosmos SDK decimals
    truncate toward zero. The two differ only when the signs differ.

    Raises:
        DivisionByZero: If b is zero
    """
    if b == 0:
        raise DivisionByZero("Division by zero")
    if (a >= 0) == (b >= 0):
        return a // b
    return -(abs(a) // abs(b))


def _div_round(a: int, b: int) -> int:
    """Integer division rounding half away from zero."""
    if b == 0:
        raise DivisionByZero("Division by zero")
    quotient = _div_trunc(a, b)
    remainder = abs(a - quotient * b)
    if 2 * remainder >= abs(b):
        quotient += 1 if (a >= 0) == (b >= 0) else -1
    return quotient


class Dec:
    """18-decimal signed fixed-point number stored as int.

    Example: 1.5 is stored as 1_500_000_000_000_000_000

    ``Dec(value)`` takes the raw scaled mantissa; use ``from_int``,
    ``from_str`` or ``from_decimal`` for human values.
    """

    PRECISION: ClassVar[int] = PRECISION
    ONE: ClassVar[int] = ONE_18

    __slots__ = ("value",)

    def __init__(self, value: int = 0) -> None:
        """Create Dec from raw scaled value."""
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"Dec requires a raw int mantissa, got {type(value).__name__}")
        self.value = value

    @classmethod
    def from_int(cls, i: int) -> Dec:
        """Create from integer (will be scaled by 10^18)."""
        return cls(i * cls.ONE)

    @classmethod
    def from_str(cls, s: str) -> Dec:
        """Parse an exact decimal string such as ``"-12.5"``.

        Raises:
            ValueError: If the string is not a plain decimal number or carries
                more than 18 fractional digits
        """
        match = _DEC_PATTERN.match(s.strip())
        if match is None:
            raise ValueError(f"Invalid decimal string: {s!r}")
        sign, whole, fraction = match.groups()
        fraction = fraction or ""
        if len(fraction) > PRECISION:
            raise ValueError(f"Too many fractional digits ({len(fraction)} > {PRECISION}): {s!r}")
        value = int(whole) * ONE_18 + int(fraction.ljust(PRECISION, "0") or "0")
        return cls(-value if sign == "-" else value)

    @classmethod
    def from_decimal(cls, d: Decimal) -> Dec:
        """Create from a finite Decimal, truncating beyond 18 digits."""
        if not d.is_finite():
            raise ValueError(f"Dec.from_decimal requires a finite value, got {d}")
        sign, digits, exponent = d.as_tuple()
        mantissa = int("".join(map(str, digits)) or "0")
        shift = int(exponent) + PRECISION
        value = mantissa * 10**shift if shift >= 0 else mantissa // 10**-shift
        return cls(-value if sign else value)

    @classmethod
    def zero(cls) -> Dec:
        return cls(0)

    @classmethod
    def one(cls) -> Dec:
        return cls(cls.ONE)

    def to_decimal(self) -> Decimal:
        """Convert to Decimal (exact)."""
        return Decimal(str(self))

    def add(self, other: Dec) -> Dec:
        return Dec(self.value + other.value)

    def sub(self, other: Dec) -> Dec:
        return Dec(self.value - other.value)

    def mul_truncate(self, other: Dec) -> Dec:
        """Multiply, truncating toward zero: (a * b) / 10^18"""
        return Dec(_div_trunc(self.value * other.value, self.ONE))

    def mul_round(self, other: Dec) -> Dec:
        """Multiply, rounding half away from zero."""
        return Dec(_div_round(self.value * other.value, self.ONE))

    def quo_truncate(self, other: Dec) -> Dec:
        """Divide, truncating toward zero: (a * 10^18) / b

        Raises:
            DivisionByZero: If other is zero
        """
        if other.value == 0:
            raise DivisionByZero(f"Dec division by zero ({self} / 0)")
        return Dec(_div_trunc(self.value * self.ONE, other.value))

    def move_decimal_point(self, places: int) -> Dec:
        """Multiply by 10^places.

        Moving right (places > 0) is exact. Moving left truncates the digits
        that fall off the 18-digit fraction.
        """
        if places >= 0:
            return Dec(self.value * 10**places)
        return Dec(_div_trunc(self.value, 10**-places))

    def truncate(self) -> int:
        """Integer part, truncated toward zero."""
        return _div_trunc(self.value, self.ONE)

    def ceil(self) -> int:
        """Smallest integer >= self."""
        return -((-self.value) // self.ONE)

    def neg(self) -> Dec:
        return Dec(-self.value)

    def abs(self) -> Dec:
        return Dec(abs(self.value))

    def is_zero(self) -> bool:
        return self.value == 0

    def is_negative(self) -> bool:
        return self.value < 0

    def is_positive(self) -> bool:
        return self.value > 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dec):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Dec):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Dec):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Dec):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Dec):
            return NotImplemented
        return self.value >= other.value

    def __repr__(self) -> str:
        return f"Dec('{self}')"

    def __str__(self) -> str:
        """Canonical form: optional '-', integer digits, '.', 18 digits."""
        sign = "-" if self.value < 0 else ""
        whole, fraction = divmod(abs(self.value), self.ONE)
        return f"{sign}{whole}.{fraction:0{PRECISION}d}"
