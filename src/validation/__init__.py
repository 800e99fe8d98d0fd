"""Receipt validation package."""

from src.validation.validator import (
    ERROR_MESSAGES,
    ReceiptValidationError,
    ReceiptValidator,
    ValidationErrorCode,
)

__all__ = [
    "ERROR_MESSAGES",
    "ReceiptValidationError",
    "ReceiptValidator",
    "ValidationErrorCode",
]
