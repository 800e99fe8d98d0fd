"""Rupee formatting with Indian digit grouping (1,23,456.00)."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union


RUPEE_SYMBOL = "₹"
CENTS = Decimal("0.01")


def group_indian(digits: str) -> str:
    """Group an integer digit string as en-IN does: 12,34,56,789."""
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


def format_currency(amount: Union[Decimal, int, float]) -> str:
    """Format an amount as '₹ 1,23,456.00'."""
    value = Decimal(str(amount)).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    rupees, paise = f"{abs(value):.2f}".split(".")
    return f"{sign}{RUPEE_SYMBOL} {group_indian(rupees)}.{paise}"
