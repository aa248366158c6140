"""Decimal rounding helpers shared by stage and confidence scoring."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float, Decimal]


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # Go through the shortest repr so 4.35 rounds like the literal it prints as.
    return Decimal(str(value))


def round2(value: Number) -> float:
    """Round half-up to two decimal places."""
    return float(to_decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def round_whole(value: Number) -> int:
    """Round half-up to the nearest integer."""
    return int(to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
