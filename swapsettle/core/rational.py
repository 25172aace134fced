"""Exact rational arithmetic for interest and payment math.

All rates and intermediate amounts are fractions.Fraction. No float, no
math module. A settlement amount is derived from integers and exact ratios
only, and rounded to the smallest currency unit exactly once.

RoundingMode.HALF_EVEN is the default: ties go to the even neighbour, the
same rule Python's ``round(Fraction)`` applies.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import assert_never

from swapsettle.core.result import Err, Ok

_HALF = Fraction(1, 2)


class RoundingMode(Enum):
    """How a rational amount is rounded to an integer number of units."""

    HALF_EVEN = "HalfEven"
    HALF_AWAY_FROM_ZERO = "HalfAwayFromZero"


def to_rational(n: int) -> Fraction:
    """Lift an integer amount into the rationals."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"to_rational requires int, got {type(n).__name__}")
    return Fraction(n)


def parse_rational(raw: object) -> Ok[Fraction] | Err[str]:  # noqa: PLR0911
    """Parse an exact rational from int, Fraction, finite Decimal or "n/d" text.

    Floats are rejected: a binary float is not an exact rate.
    """
    if isinstance(raw, bool):
        return Err("Rational cannot be a bool")
    if isinstance(raw, Fraction):
        return Ok(raw)
    if isinstance(raw, int):
        return Ok(Fraction(raw))
    if isinstance(raw, float):
        return Err(f"Rational must not be a float, got {raw!r}")
    if isinstance(raw, Decimal):
        if not raw.is_finite():
            return Err(f"Rational must be finite, got {raw}")
        return Ok(Fraction(raw))
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return Err("Rational text must be non-empty")
        num, sep, den = text.partition("/")
        try:
            numerator = int(num)
            denominator = int(den) if sep else 1
        except ValueError:
            return Err(f"Rational text must look like 'n/d', got '{raw}'")
        if denominator == 0:
            return Err(f"Rational denominator must be non-zero, got '{raw}'")
        return Ok(Fraction(numerator, denominator))
    return Err(f"Cannot parse rational from {type(raw).__name__}")


def round_rational(x: Fraction, mode: RoundingMode = RoundingMode.HALF_EVEN) -> int:
    """Round x to the nearest integer, breaking ties per mode."""
    floor = x.numerator // x.denominator
    remainder = x - floor
    if remainder < _HALF:
        return floor
    if remainder > _HALF:
        return floor + 1
    match mode:
        case RoundingMode.HALF_EVEN:
            return floor if floor % 2 == 0 else floor + 1
        case RoundingMode.HALF_AWAY_FROM_ZERO:
            return floor + 1 if x > 0 else floor
        case _never:
            assert_never(_never)


def format_rational(x: Fraction) -> str:
    """Canonical text form: "n/d", or "n" when the denominator is 1."""
    if x.denominator == 1:
        return str(x.numerator)
    return f"{x.numerator}/{x.denominator}"
