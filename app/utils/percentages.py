"""
Rounding helpers shared by the record model and the analytics services.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float, Decimal]


def round_half_away_from_zero(value: Number) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def ratio(numerator: int, denominator: int) -> int:
    """Rounded ``numerator / denominator``, 0 when the denominator is 0."""
    if denominator == 0:
        return 0
    return round_half_away_from_zero(Decimal(numerator) / Decimal(denominator))


def percentage(part: int, whole: int) -> int:
    """
    Rounded ``part / whole * 100``.

    The quotient is computed on exact decimals so that values such as 12.5
    round consistently. Returns 0 when ``whole`` is 0.
    """
    if whole == 0:
        return 0
    return round_half_away_from_zero(Decimal(part) * 100 / Decimal(whole))
