"""Decimal helpers for currency arithmetic"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Union

CENT = Decimal("0.01")
WHOLE = Decimal("1")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert to Decimal; floats go through str() to avoid binary noise"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_cents(amount: Decimal) -> Decimal:
    """Round half-up to the cent"""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def round_whole(amount: Decimal) -> Decimal:
    """Round half-up to the nearest whole currency unit"""
    return amount.quantize(WHOLE, rounding=ROUND_HALF_UP)


def mean(values: Iterable[Decimal]) -> Decimal:
    """Arithmetic mean of a non-empty sequence"""
    items = list(values)
    return sum(items, Decimal("0")) / len(items)


def format_currency(amount: Decimal, symbol: str = "$") -> str:
    """Format as US currency, e.g. $1,234.50"""
    rounded = round_cents(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.2f}"
