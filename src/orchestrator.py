"""
Main Orchestrator for the Receipt Ledger

This module ties together all the components and defines the flows the
form triggers:
1. New receipt (suggest number → blank draft)
2. Save (validate → upsert → persist → status message)
3. Edit / Delete (with operator confirmation)
4. Search, stats and CSV export

DESIGN DECISION: The desk owns the ledger store and the editor, and they
only meet here. The editor never sees the ledger; the store never sees
the draft until it is saved. All state lives on the desk object, never
in module globals, so the UI can hold one desk per session.
"""

from datetime import date
from typing import Callable, Optional
from uuid import UUID

from src.audit import AuditLogger
from src.config import LedgerSettings, get_settings
from src.editor import ReceiptEditor
from src.editor.controller import AmountInput
from src.export import export_csv, export_filename
from src.ledger import LedgerStore
from src.models.audit import AuditEventBuilder
from src.models.receipt import LedgerStats, Receipt, SearchQuery
from src.notifications import StatusKind, StatusNotifier
from src.queries import compute_stats, filter_receipts
from src.services.storage import (
    JsonFileSlot,
    LedgerSlot,
    StorageReadError,
    StorageWriteError,
)
from src.validation import ReceiptValidationError, ReceiptValidator


# Asked before a receipt is deleted; returns True to go ahead
ConfirmDelete = Callable[[Receipt], bool]


class ReceiptDesk:
    """
    Orchestrates the receipt form and the ledger behind it.

    Flow:
    1. start() → load ledger, open a blank draft with the next number
    2. update_row()/update_field() → edit the draft
    3. save() → validate, then upsert into the ledger and persist
    4. edit()/delete() → work on saved receipts

    A save that fails validation changes nothing and reports the problem
    through the status notifier before re-raising.
    """

    def __init__(
        self,
        store: LedgerStore,
        editor: ReceiptEditor,
        validator: Optional[ReceiptValidator] = None,
        notifier: Optional[StatusNotifier] = None,
        audit_logger: Optional[AuditLogger] = None,
        export_prefix: str = "Receipts_Report",
    ):
        self._store = store
        self._editor = editor
        self._validator = validator or ReceiptValidator()
        self._notifier = notifier or StatusNotifier()
        self._audit_logger = audit_logger or AuditLogger()
        self._export_prefix = export_prefix

    @property
    def draft(self) -> Receipt:
        return self._editor.draft

    @property
    def receipts(self) -> list[Receipt]:
        return self._store.receipts

    @property
    def notifier(self) -> StatusNotifier:
        return self._notifier

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    @property
    def load_error(self) -> Optional[StorageReadError]:
        """Why the stored ledger could not be read, if it could not."""
        return self._store.last_load_error

    def start(self) -> Receipt:
        """Load the ledger and open a blank draft."""
        self._store.load()

        if self._store.last_load_error is not None:
            self._audit_logger.log(
                AuditEventBuilder.ledger_load_failed(str(self._store.last_load_error))
            )

        next_no = self._store.next_receipt_no()
        self._audit_logger.log(AuditEventBuilder.ledger_loaded(len(self._store), next_no))

        return self._editor.new_draft(next_no)

    def new_receipt(self) -> Receipt:
        """Discard the draft and start a blank receipt with the next number."""
        draft = self._editor.new_draft(self._store.next_receipt_no())
        self._audit_logger.log(AuditEventBuilder.draft_started(draft.id, draft.receipt_no))
        self._notifier.show("You can now fill in a new receipt.")
        return draft

    def update_row(self, index: int, value: AmountInput) -> Receipt:
        return self._editor.update_row_amount(index, value)

    def update_field(self, field: str, value: Optional[str]) -> Receipt:
        return self._editor.update_field(field, value)

    def save(self) -> Receipt:
        """
        Save the draft into the ledger.

        Updates the saved receipt with the same id, or adds the draft as
        the newest receipt.

        Raises:
            ReceiptValidationError: If the draft fails a pre-save check
            StorageWriteError: If the ledger could not be written
        """
        draft = self._editor.draft

        try:
            self._validator.validate(draft)
        except ReceiptValidationError as e:
            self._audit_logger.log(AuditEventBuilder.validation_failed(
                receipt_id=draft.id,
                code=e.code.value,
                message=e.message,
            ))
            self._notifier.show(e.message, StatusKind.ERROR)
            raise

        created = self._store.get(draft.id) is None
        try:
            self._store.upsert(draft)
        except StorageWriteError as e:
            self._audit_logger.log_error(
                error_type="ledger_write_failed",
                error_message=str(e),
                details={"receipt_id": str(draft.id)},
            )
            self._notifier.show("Could not save the receipt. Please try again.", StatusKind.ERROR)
            raise

        self._audit_logger.log(AuditEventBuilder.receipt_saved(
            receipt_id=draft.id,
            receipt_no=draft.receipt_no,
            amount=f"{draft.total:.2f}",
            created=created,
        ))
        self._notifier.show("New receipt saved!" if created else "Receipt updated!")
        return draft

    def edit(self, receipt_id: UUID) -> Receipt:
        """
        Open a saved receipt in the editor.

        Raises:
            KeyError: If no receipt has this id
        """
        receipt = self._store.get(receipt_id)
        if receipt is None:
            raise KeyError(f"No receipt with id {receipt_id}")
        draft = self._editor.load_for_edit(receipt)
        self._audit_logger.log(AuditEventBuilder.draft_loaded(draft.id, draft.receipt_no))
        return draft

    def delete(self, receipt_id: UUID, confirm: ConfirmDelete) -> bool:
        """
        Delete a saved receipt after the operator confirms.

        The draft is left alone, even if it shows the deleted receipt.

        Returns:
            True if a receipt was deleted
        """
        receipt = self._store.get(receipt_id)
        if receipt is None:
            return False
        if not confirm(receipt):
            return False

        self._store.delete(receipt_id)
        self._audit_logger.log(AuditEventBuilder.receipt_deleted(receipt.id, receipt.receipt_no))
        self._notifier.show("Receipt deleted.", StatusKind.ERROR)
        return True

    def search(self, query: Optional[SearchQuery] = None) -> list[Receipt]:
        return filter_receipts(self._store.receipts, query or SearchQuery())

    def stats(self) -> LedgerStats:
        return compute_stats(self._store.receipts)

    def export_csv(self, today: Optional[date] = None) -> tuple[str, str]:
        """
        CSV report of the whole ledger.

        Returns:
            (filename, csv_text)
        """
        receipts = self._store.receipts
        filename = export_filename(self._export_prefix, today or date.today())
        return filename, export_csv(receipts)

    def record_export(self, filename: str) -> None:
        """Audit a report that was handed to the operator."""
        self._audit_logger.log(AuditEventBuilder.ledger_exported(len(self._store), filename))


def create_receipt_desk(
    settings: Optional[LedgerSettings] = None,
    slot: Optional[LedgerSlot] = None,
) -> ReceiptDesk:
    """
    Factory function to create the application's receipt desk.

    Args:
        settings: Ledger settings; read from the environment if None
        slot: Storage slot; the JSON file from settings if None

    Returns:
        A started ReceiptDesk with a blank draft
    """
    settings = settings or get_settings().ledger
    slot = slot or JsonFileSlot(settings.data_dir, settings.storage_key)

    desk = ReceiptDesk(
        store=LedgerStore(slot, receipt_no_seed=settings.receipt_no_seed),
        editor=ReceiptEditor(
            line_item_labels=settings.line_item_labels,
            date_format=settings.date_format,
        ),
        notifier=StatusNotifier(dismiss_after=settings.status_dismiss_seconds),
        export_prefix=settings.export_prefix,
    )
    desk.start()
    return desk
