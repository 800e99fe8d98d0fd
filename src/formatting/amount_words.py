"""
Amount to Words

Renders the rupee part of an amount in English words using the Indian
numbering system (Hundred, Thousand, Lakh), the way it is written on a
printed receipt: "One Lakh Twenty Thousand Only".

Paise are dropped: the amount is truncated toward zero before conversion.
"""

from decimal import Decimal, InvalidOperation
from typing import Union


# Amounts at or above one crore are not spelled out
WORDS_LIMIT = 10_000_000
AMOUNT_TOO_LARGE = "Amount too large"
ONLY_SUFFIX = "Only"

ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight",
    "Nine", "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen",
    "Sixteen", "Seventeen", "Eighteen", "Nineteen",
]
TENS = [
    "", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy",
    "Eighty", "Ninety",
]


def _in_words(n: int) -> list[str]:
    """Words for 0 <= n < WORDS_LIMIT, one place-value band per call."""
    if n < 20:
        return [ONES[n]] if n else []
    if n < 100:
        return [TENS[n // 10]] + _in_words(n % 10)
    if n < 1_000:
        return [ONES[n // 100], "Hundred"] + _in_words(n % 100)
    if n < 100_000:
        return _in_words(n // 1_000) + ["Thousand"] + _in_words(n % 1_000)
    return _in_words(n // 100_000) + ["Lakh"] + _in_words(n % 100_000)


def _to_decimal(amount: Union[Decimal, int, float, str]) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    try:
        # str() keeps floats at their shortest repr (0.1 -> "0.1")
        return Decimal(str(amount))
    except InvalidOperation:
        raise ValueError(f"Not a number: {amount!r}")


def words_for(amount: Union[Decimal, int, float, str]) -> str:
    """
    Convert an amount to English words.

    Returns "" for amounts below one rupee and AMOUNT_TOO_LARGE for
    amounts of one crore or more.

    Raises:
        ValueError: If the amount is negative or not a finite number
    """
    value = _to_decimal(amount)
    if not value.is_finite():
        raise ValueError(f"Amount must be finite, got {amount!r}")
    if value < 0:
        raise ValueError(f"Amount must not be negative, got {amount!r}")

    rupees = int(value)  # truncates toward zero
    if rupees >= WORDS_LIMIT:
        return AMOUNT_TOO_LARGE

    words = _in_words(rupees)
    if not words:
        return ""
    return " ".join(words + [ONLY_SUFFIX])
