"""Receipt editor package."""

from src.editor.controller import (
    DISPLAY_DATE_FORMAT,
    EDITABLE_FIELDS,
    ReceiptEditor,
    parse_amount,
)

__all__ = [
    "DISPLAY_DATE_FORMAT",
    "EDITABLE_FIELDS",
    "ReceiptEditor",
    "parse_amount",
]
