"""Amount formatting package."""

from src.formatting.amount_words import AMOUNT_TOO_LARGE, WORDS_LIMIT, words_for
from src.formatting.currency import format_currency, group_indian

__all__ = [
    "AMOUNT_TOO_LARGE",
    "WORDS_LIMIT",
    "format_currency",
    "group_indian",
    "words_for",
]
