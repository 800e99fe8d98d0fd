"""
Receipt Validation

Runs before every save. Two checks, in order:
1. The member name must not be blank
2. The receipt total must be greater than zero

The first failing check wins; errors are not accumulated. A failed check
aborts the save and leaves both the draft and the ledger as they were.

IMPORTANT: Validation NEVER fixes the receipt. It only reports.
"""

from enum import Enum
from typing import Optional

from src.models.receipt import Receipt


class ValidationErrorCode(str, Enum):
    """Why a receipt was refused."""
    EMPTY_NAME = "empty_name"
    NON_POSITIVE_TOTAL = "non_positive_total"


# Shown to the operator as a status message
ERROR_MESSAGES = {
    ValidationErrorCode.EMPTY_NAME: "Member name is required.",
    ValidationErrorCode.NON_POSITIVE_TOTAL: "Enter an amount before saving the receipt.",
}


class ReceiptValidationError(Exception):
    """A receipt failed a pre-save check."""

    def __init__(self, code: ValidationErrorCode):
        self.code = code
        self.message = ERROR_MESSAGES[code]
        super().__init__(self.message)


class ReceiptValidator:
    """Pre-save checks for a receipt draft."""

    def check(self, receipt: Receipt) -> Optional[ValidationErrorCode]:
        """First failing check, or None if the receipt can be saved."""
        if not receipt.name.strip():
            return ValidationErrorCode.EMPTY_NAME
        if receipt.total <= 0:
            return ValidationErrorCode.NON_POSITIVE_TOTAL
        return None

    def validate(self, receipt: Receipt) -> None:
        """
        Raises:
            ReceiptValidationError: If any check fails
        """
        code = self.check(receipt)
        if code is not None:
            raise ReceiptValidationError(code)
