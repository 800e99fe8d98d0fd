"""
Receipt Editor

Holds the receipt currently on the form (the draft) and applies edits to it.

GUARANTEES:
- `total` always equals the sum of the row amounts
- `words` always spells out the current `total`
- Every edit swaps in a complete new draft, so there is never a moment
  where rows have changed but total/words have not
- Drafts never share row objects with each other or with the ledger

The editor never touches the ledger. Saving and deleting go through the
ledger store.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Callable, Optional, Sequence, Union
from uuid import UUID, uuid4

import structlog

from src.formatting import words_for
from src.models.receipt import AMOUNT_LIMIT, CENTS, Receipt, ReceiptLineItem, utcnow_millis


logger = structlog.get_logger(__name__)

DISPLAY_DATE_FORMAT = "%d - %m - %Y"

# Free-text fields the form may change, by Python and by wire name
EDITABLE_FIELDS = {
    "receipt_no": "receipt_no",
    "receiptNo": "receipt_no",
    "date": "date",
    "house_no": "house_no",
    "houseNo": "house_no",
    "name": "name",
    "payer": "payer",
    "check_details": "check_details",
    "checkDetails": "check_details",
}

AmountInput = Union[Decimal, int, float, str, None]


def parse_amount(value: AmountInput) -> Decimal:
    """
    Amount typed into a row, as a two-decimal Decimal.

    Blank, non-numeric, negative and non-finite input all count as 0,
    and so does anything at or above AMOUNT_LIMIT.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0.00")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return Decimal("0.00")
    if not amount.is_finite() or amount < 0 or amount >= AMOUNT_LIMIT:
        return Decimal("0.00")
    try:
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # more digits than the decimal context can hold
        return Decimal("0.00")


class ReceiptEditor:
    """Single mutable draft slot for the receipt form."""

    def __init__(
        self,
        line_item_labels: Sequence[str],
        date_format: str = DISPLAY_DATE_FORMAT,
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = utcnow_millis,
        new_id: Callable[[], UUID] = uuid4,
    ):
        if not line_item_labels:
            raise ValueError("At least one line item label is required")
        self._labels = tuple(line_item_labels)
        self._date_format = date_format
        self._today = today
        self._now = now
        self._new_id = new_id
        self._draft: Optional[Receipt] = None

    @property
    def draft(self) -> Receipt:
        """Copy of the current draft."""
        return self._current().model_copy(deep=True)

    @property
    def line_item_labels(self) -> tuple[str, ...]:
        return self._labels

    def _current(self) -> Receipt:
        if self._draft is None:
            raise RuntimeError("No draft: call new_draft() or load_for_edit() first")
        return self._draft

    def new_draft(self, suggested_receipt_no: str) -> Receipt:
        """Replace the draft with a blank receipt."""
        self._draft = Receipt(
            id=self._new_id(),
            receipt_no=str(suggested_receipt_no),
            date=self._today().strftime(self._date_format),
            rows=[ReceiptLineItem(label=label) for label in self._labels],
            total=Decimal("0.00"),
            words="",
            created_at=self._now(),
        )
        logger.debug("draft_started", receipt_id=str(self._draft.id))
        return self.draft

    def load_for_edit(self, receipt: Receipt) -> Receipt:
        """Replace the draft with a copy of a saved receipt, keeping its id."""
        self._draft = receipt.model_copy(deep=True)
        logger.debug("draft_loaded", receipt_id=str(receipt.id))
        return self.draft

    def update_row_amount(self, index: int, value: AmountInput) -> Receipt:
        """
        Set one row's amount and recompute total and words.

        Raises:
            IndexError: If there is no row at `index`
        """
        current = self._current()
        if not 0 <= index < len(current.rows):
            raise IndexError(f"No line item at index {index}")

        rows = [row.model_copy() for row in current.rows]
        rows[index] = ReceiptLineItem(label=rows[index].label, amount=parse_amount(value))
        updated = current.model_copy(update={"rows": rows})
        if updated.rows_total >= AMOUNT_LIMIT:
            # the total must stay storable too
            rows[index] = ReceiptLineItem(label=rows[index].label)
            updated = current.model_copy(update={"rows": rows})

        total = updated.rows_total
        self._draft = updated.model_copy(update={
            "total": total,
            "words": words_for(total),
        })
        return self.draft

    def update_field(self, field: str, value: Optional[str]) -> Receipt:
        """
        Set one free-text field.

        Raises:
            ValueError: If `field` is not an editable free-text field
        """
        attr = EDITABLE_FIELDS.get(field)
        if attr is None:
            raise ValueError(f"Field '{field}' cannot be edited directly")

        current = self._current()
        self._draft = current.model_copy(update={attr: "" if value is None else str(value)})
        return self.draft
