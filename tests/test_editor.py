"""Tests for the receipt editor and the pre-save validator."""

from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID

import pytest

from src.editor import ReceiptEditor, parse_amount
from src.formatting import words_for
from src.models.receipt import Receipt, ReceiptLineItem
from src.validation import ReceiptValidationError, ReceiptValidator, ValidationErrorCode


LABELS = ["Maintenance Charges", "Water Charges", "Other Charges"]
FIXED_ID = UUID("00000000-0000-4000-8000-000000000001")


@pytest.fixture
def editor():
    """Editor with a fixed clock and id."""
    ed = ReceiptEditor(
        line_item_labels=LABELS,
        today=lambda: date(2024, 12, 15),
        now=lambda: datetime(2024, 12, 15, 9, 30, tzinfo=timezone.utc),
        new_id=lambda: FIXED_ID,
    )
    ed.new_draft("101")
    return ed


class TestParseAmount:
    """Tests for row amount parsing."""

    @pytest.mark.parametrize("value, expected", [
        ("1500", Decimal("1500.00")),
        (" 12.5 ", Decimal("12.50")),
        (250.25, Decimal("250.25")),
        (Decimal("3.333"), Decimal("3.33")),
        ("", Decimal("0.00")),
        ("abc", Decimal("0.00")),
        (None, Decimal("0.00")),
        (-50, Decimal("0.00")),
        ("NaN", Decimal("0.00")),
        (float("inf"), Decimal("0.00")),
        ("12345678901234567.89", Decimal("0.00")),
        ("9999999999999.99", Decimal("9999999999999.99")),
    ])
    def test_parse_amount(self, value, expected):
        """Invalid input counts as zero."""
        assert parse_amount(value) == expected


class TestNewDraft:
    """Tests for ReceiptEditor.new_draft."""

    def test_blank_draft(self, editor):
        """A new draft has the template rows, zero total and empty fields."""
        draft = editor.draft
        assert draft.id == FIXED_ID
        assert draft.receipt_no == "101"
        assert draft.date == "15 - 12 - 2024"
        assert [row.label for row in draft.rows] == LABELS
        assert all(row.amount == Decimal("0.00") for row in draft.rows)
        assert draft.total == Decimal("0.00")
        assert draft.words == ""
        assert (draft.name, draft.house_no, draft.payer, draft.check_details) == ("", "", "", "")

    def test_drafts_do_not_share_rows(self):
        """Editing one draft never shows up in the next one."""
        ed = ReceiptEditor(LABELS)
        first = ed.new_draft("101")
        ed.update_row_amount(0, "500")
        second = ed.new_draft("102")

        assert second.rows[0].amount == Decimal("0.00")
        assert first.rows[0].amount == Decimal("0.00")
        assert second.id != first.id

    def test_requires_labels(self):
        """An empty template is a configuration error."""
        with pytest.raises(ValueError):
            ReceiptEditor([])

    def test_no_draft_yet(self):
        """Using the editor before a draft exists is an error."""
        with pytest.raises(RuntimeError):
            ReceiptEditor(LABELS).draft


class TestUpdateRowAmount:
    """Tests for row edits and derived fields."""

    def test_total_and_words_follow_rows(self, editor):
        """Total and words are recomputed with every row edit."""
        editor.update_row_amount(0, "1000")
        draft = editor.update_row_amount(1, "234.75")

        assert draft.total == Decimal("1234.75")
        assert draft.words == "One Thousand Two Hundred Thirty Four Only"

    def test_total_always_equals_sum_of_rows(self, editor):
        """Any sequence of edits keeps total == sum(rows)."""
        edits = [(0, "100"), (1, "20.5"), (0, "abc"), (2, "7.25"), (1, "-3"), (2, "1000000")]
        for index, value in edits:
            draft = editor.update_row_amount(index, value)
            assert draft.total == sum(row.amount for row in draft.rows)
            assert draft.words == words_for(draft.total)

    def test_invalid_input_is_zero(self, editor):
        """Non-numeric input resets the row to zero."""
        editor.update_row_amount(0, "500")
        draft = editor.update_row_amount(0, "five hundred")
        assert draft.rows[0].amount == Decimal("0.00")
        assert draft.total == Decimal("0.00")
        assert draft.words == ""

    def test_row_that_would_overflow_total_is_zero(self, editor):
        """A row that pushes the total past AMOUNT_LIMIT counts as 0."""
        editor.update_row_amount(0, "9000000000000")
        draft = editor.update_row_amount(1, "9000000000000")

        assert draft.rows[1].amount == Decimal("0.00")
        assert draft.total == Decimal("9000000000000.00")
        assert draft.total == draft.rows_total

    def test_labels_unchanged(self, editor):
        """Amount edits never touch labels."""
        draft = editor.update_row_amount(2, "10")
        assert [row.label for row in draft.rows] == LABELS

    def test_bad_index(self, editor):
        """There is no row to edit outside the template."""
        with pytest.raises(IndexError):
            editor.update_row_amount(len(LABELS), "10")
        with pytest.raises(IndexError):
            editor.update_row_amount(-1, "10")

    def test_returned_draft_is_a_copy(self, editor):
        """Mutating the returned draft does not change the editor's draft."""
        draft = editor.update_row_amount(0, "100")
        draft.rows[0].amount = Decimal("5")
        assert editor.draft.rows[0].amount == Decimal("100.00")


class TestUpdateField:
    """Tests for free-text field edits."""

    def test_updates_named_field_only(self, editor):
        """Only the named field changes."""
        editor.update_row_amount(0, "300")
        draft = editor.update_field("name", "Ramesh Patel")

        assert draft.name == "Ramesh Patel"
        assert draft.total == Decimal("300.00")
        assert draft.words == "Three Hundred Only"

    def test_accepts_wire_names(self, editor):
        """camelCase names from the form work too."""
        editor.update_field("houseNo", "B/12")
        draft = editor.update_field("checkDetails", "SBI 15-12")
        assert draft.house_no == "B/12"
        assert draft.check_details == "SBI 15-12"

    @pytest.mark.parametrize("field", ["total", "words", "rows", "id", "created_at", "bogus"])
    def test_rejects_derived_and_unknown_fields(self, editor, field):
        """Derived fields and identity cannot be edited directly."""
        with pytest.raises(ValueError):
            editor.update_field(field, "x")


class TestLoadForEdit:
    """Tests for opening a saved receipt."""

    def test_keeps_identity(self, editor):
        """The loaded draft keeps the saved id, so a save is an update."""
        saved = Receipt(
            receipt_no="117",
            name="Asha",
            rows=[ReceiptLineItem(label="Maintenance Charges", amount=Decimal("900"))],
            total=Decimal("900"),
            words="Nine Hundred Only",
        )
        draft = editor.load_for_edit(saved)
        assert draft.id == saved.id
        assert draft == saved

    def test_does_not_alias_saved_receipt(self, editor):
        """Edits to the draft never reach the receipt it was loaded from."""
        saved = Receipt(rows=[ReceiptLineItem(label="Maintenance Charges")])
        editor.load_for_edit(saved)
        editor.update_row_amount(0, "50")
        assert saved.rows[0].amount == Decimal("0.00")


class TestReceiptValidator:
    """Tests for the pre-save checks."""

    def test_valid_receipt(self):
        """Named receipt with a positive total passes."""
        receipt = Receipt(name="Asha", total=Decimal("10"))
        assert ReceiptValidator().check(receipt) is None
        ReceiptValidator().validate(receipt)

    @pytest.mark.parametrize("name", ["", "   ", "\t\n"])
    def test_empty_name(self, name):
        """Blank names fail with EMPTY_NAME."""
        with pytest.raises(ReceiptValidationError) as exc_info:
            ReceiptValidator().validate(Receipt(name=name, total=Decimal("10")))
        assert exc_info.value.code == ValidationErrorCode.EMPTY_NAME

    def test_non_positive_total(self):
        """Zero total fails with NON_POSITIVE_TOTAL."""
        with pytest.raises(ReceiptValidationError) as exc_info:
            ReceiptValidator().validate(Receipt(name="Asha", total=Decimal("0")))
        assert exc_info.value.code == ValidationErrorCode.NON_POSITIVE_TOTAL

    def test_name_check_wins(self):
        """Both problems: the name check is reported."""
        code = ReceiptValidator().check(Receipt(name=" ", total=Decimal("0")))
        assert code == ValidationErrorCode.EMPTY_NAME

    def test_error_has_message(self):
        """Errors carry a message for the status line."""
        error = ReceiptValidationError(ValidationErrorCode.EMPTY_NAME)
        assert error.message
        assert str(error) == error.message
