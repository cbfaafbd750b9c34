"""Display formatting for money values."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[Decimal, int, float]


def _group_indian(digits: str) -> str:
    """Group an integer digit string as 12,34,56,789."""

    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_amount(amount: Number, decimals: int = 0) -> str:
    """Format a number with Indian digit grouping and no symbol."""

    value = Decimal(str(amount))
    quantum = Decimal(1).scaleb(-decimals)
    value = value.quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    text = format(abs(value), "f")
    whole, _, fraction = text.partition(".")
    grouped = _group_indian(whole)
    return f"{sign}{grouped}.{fraction}" if fraction else f"{sign}{grouped}"


def format_currency(amount: Number, symbol: str = "₹", decimals: int = 0) -> str:
    """Format an amount for display, e.g. ``₹1,25,000`` or ``-₹500``."""

    text = format_amount(amount, decimals)
    if text.startswith("-"):
        return f"-{symbol}{text[1:]}"
    return f"{symbol}{text}"


def plain_amount(amount: Number) -> str:
    """Render an amount the way it would be typed in, e.g. ``250000`` or ``99.5``."""

    text = format(Decimal(str(amount)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
