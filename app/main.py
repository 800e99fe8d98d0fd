"""
Streamlit Frontend for the Receipt Ledger

This is the screen the society office uses to issue receipts.

DESIGN PRINCIPLES:
1. The receipt form looks like the printed receipt book
2. Nothing is saved without an explicit "Save" click
3. Deleting always asks for confirmation
4. Every action shows a short status message

The page keeps one ReceiptDesk per browser session; all ledger logic
lives in the desk, never in this file.
"""

from datetime import date
from html import escape

import streamlit as st
import streamlit.components.v1 as components

from src.config import get_settings, validate_all_settings
from src.formatting import format_currency
from src.models.receipt import Receipt, SearchQuery
from src.notifications import StatusKind
from src.orchestrator import ReceiptDesk, create_receipt_desk
from src.services.storage import StorageWriteError
from src.validation import ReceiptValidationError


# Page configuration
st.set_page_config(
    page_title="Society Receipt Manager",
    page_icon="🧾",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Printed receipt styling
RECEIPT_CSS = """
<style>
    .receipt { border: 5px double #c0392b; padding: 16px; font-family: sans-serif; color: #c0392b; }
    .receipt h2 { text-align: center; margin: 0; }
    .receipt .sub { text-align: center; font-size: 0.8em; margin-bottom: 12px; }
    .receipt table { width: 100%; border-collapse: collapse; margin: 12px 0; }
    .receipt td, .receipt th { border: 1px solid #c0392b; padding: 4px 8px; }
    .receipt .amount { text-align: right; color: #000; font-weight: bold; }
    .receipt .value { color: #000; font-weight: bold; }
    .receipt .sign { text-align: right; margin-top: 32px; }
    @media print { button { display: none; } }
</style>
"""


def get_desk() -> ReceiptDesk:
    """Get or create the receipt desk for this session."""
    if "desk" not in st.session_state:
        st.session_state.desk = create_receipt_desk()
        st.session_state.form_version = 0
        st.session_state.pending_delete = None
    return st.session_state.desk


def reset_form_widgets() -> None:
    """Force form widgets to re-read the draft after new/edit."""
    st.session_state.form_version += 1


def main():
    """Main application entry point."""
    checks = validate_all_settings()
    failed = [group for group in ("ledger", "app") if not checks[group]]
    if failed:
        st.error("Configuration error. Check the LEDGER_ environment variables.")
        for group in failed:
            st.code(checks[f"{group}_error"])
        st.stop()

    desk = get_desk()
    settings = get_settings().ledger
    app_settings = get_settings().app

    # Sidebar navigation
    st.sidebar.title(f"🧾 {settings.society_name}")
    st.sidebar.caption(app_settings.app_environment)
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["🧾 Receipt", "📚 Receipt Database", "🖨️ Print"],
        index=0,
    )

    st.sidebar.markdown("---")
    st.sidebar.markdown(
        """
        **How to use:**
        1. Fill in the member and the amounts
        2. Click Save
        3. Print or export from the database
        """
    )

    if app_settings.debug_mode:
        render_audit_trail(desk)

    if desk.load_error is not None:
        st.warning(
            "The saved receipts could not be read, so the database starts empty. "
            "The old file has not been changed."
        )

    render_status(desk)
    render_stats(desk)

    # Route to appropriate page
    if page == "🧾 Receipt":
        render_receipt_page(desk)
    elif page == "📚 Receipt Database":
        render_database_page(desk)
    elif page == "🖨️ Print":
        render_print_page(desk, settings.society_name)


def render_status(desk: ReceiptDesk):
    """Show the current status message, if it has not expired."""
    message = desk.notifier.current
    if message is None:
        return
    if message.kind == StatusKind.ERROR:
        st.error(message.text)
    else:
        st.success(message.text)


def render_audit_trail(desk: ReceiptDesk):
    """Debug view of this session's audit events."""
    with st.sidebar.expander("Audit trail"):
        for event in desk.audit_logger.history[:20]:
            st.caption(f"{event.timestamp:%H:%M:%S} · {event.event_type.value}")
            st.write(event.description)


def render_stats(desk: ReceiptDesk):
    """Render the collection summary cards."""
    stats = desk.stats()
    col1, col2 = st.columns(2)
    with col1:
        st.metric("Total Collection", format_currency(stats.total_collection))
    with col2:
        st.metric("Total Receipts Issued", stats.total_receipts)


def render_receipt_page(desk: ReceiptDesk):
    """Render the editable receipt form."""
    draft = desk.draft
    version = st.session_state.form_version

    st.title("🧾 Receipt")

    col1, col2, col3 = st.columns([1, 1, 1])
    with col1:
        receipt_no = st.text_input("Receipt No", value=draft.receipt_no, key=f"receipt_no_{version}")
    with col2:
        receipt_date = st.text_input("Date", value=draft.date, key=f"date_{version}")
    with col3:
        house_no = st.text_input("Block / House No", value=draft.house_no, key=f"house_no_{version}")

    name = st.text_input("Shri / Smt. *", value=draft.name, key=f"name_{version}")
    payer = st.text_input("Received through", value=draft.payer, key=f"payer_{version}")

    for field, value in (
        ("receipt_no", receipt_no),
        ("date", receipt_date),
        ("house_no", house_no),
        ("name", name),
        ("payer", payer),
    ):
        if value != getattr(draft, field):
            draft = desk.update_field(field, value)

    st.markdown("### Charges")
    for index, row in enumerate(draft.rows):
        amount = st.number_input(
            f"{index + 1}. {row.label}",
            value=float(row.amount),
            min_value=0.0,
            step=1.0,
            format="%.2f",
            key=f"row_{index}_{version}",
        )
        if amount != float(row.amount):
            draft = desk.update_row(index, amount)

    st.markdown(f"**Total:** {format_currency(draft.total)}")
    st.markdown(f"**In words:** {draft.words or '-'}")

    check_details = st.text_area(
        "Cheque details",
        value=draft.check_details,
        placeholder="Date: ______  Bank: ______",
        key=f"check_details_{version}",
    )
    if check_details != draft.check_details:
        desk.update_field("check_details", check_details)

    st.markdown("---")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("💾 Save", type="primary"):
            try:
                desk.save()
                st.rerun()
            except ReceiptValidationError as e:
                st.error(e.message)
            except StorageWriteError as e:
                st.error(f"Failed to save: {str(e)}")
    with col2:
        if st.button("➕ New Receipt"):
            desk.new_receipt()
            reset_form_widgets()
            st.rerun()


def render_database_page(desk: ReceiptDesk):
    """Render the searchable list of saved receipts."""
    st.title("📚 Receipt Database")

    col1, col2, col3 = st.columns(3)
    with col1:
        name = st.text_input("Search by name")
    with col2:
        house = st.text_input("Block / House No")
    with col3:
        receipt_no = st.text_input("Receipt No")

    results = desk.search(SearchQuery(name=name, house=house, receipt_no=receipt_no))

    filename, csv_text = desk.export_csv(date.today())
    st.download_button(
        "📊 Excel Export (CSV)",
        data=csv_text.encode("utf-8"),
        file_name=filename,
        mime="text/csv",
        on_click=desk.record_export,
        args=(filename,),
    )

    if not results:
        st.info("No receipts found.")
        return

    header = st.columns([1, 1.5, 1, 2.5, 1.5, 1, 1])
    for col, title in zip(header, ["No", "Date", "Block", "Name", "Total", "", ""]):
        col.markdown(f"**{title}**")

    for receipt in results:
        render_database_row(desk, receipt)


def render_database_row(desk: ReceiptDesk, receipt: Receipt):
    """One ledger row with edit and delete actions."""
    cols = st.columns([1, 1.5, 1, 2.5, 1.5, 1, 1])
    cols[0].write(receipt.receipt_no)
    cols[1].write(receipt.date)
    cols[2].write(receipt.house_no)
    cols[3].write(receipt.name)
    cols[4].write(format_currency(receipt.total))

    if cols[5].button("✏️", key=f"edit_{receipt.id}", help="Edit"):
        desk.edit(receipt.id)
        reset_form_widgets()
        st.rerun()

    pending = st.session_state.pending_delete
    if pending == receipt.id:
        if cols[6].button("Confirm", key=f"confirm_{receipt.id}", type="primary"):
            desk.delete(receipt.id, confirm=lambda r: True)
            st.session_state.pending_delete = None
            st.rerun()
    elif cols[6].button("🗑️", key=f"delete_{receipt.id}", help="Delete"):
        st.session_state.pending_delete = receipt.id
        st.rerun()


def render_receipt_html(receipt: Receipt, society_name: str) -> str:
    """Fixed-layout printable receipt."""
    rows = "".join(
        f"<tr><td>{i + 1}</td><td>{escape(row.label)}</td>"
        f"<td class='amount'>{row.amount:.2f}</td></tr>"
        for i, row in enumerate(receipt.rows)
    )
    return f"""
    {RECEIPT_CSS}
    <div class="receipt">
        <h2>{escape(society_name)}</h2>
        <div class="sub">Co-operative Housing Service Society Ltd. | Receipt</div>
        <p>Receipt No: <span class="value">{escape(receipt.receipt_no)}</span>
           &nbsp; Date: <span class="value">{escape(receipt.date)}</span>
           &nbsp; Block/House No: <span class="value">{escape(receipt.house_no)}</span></p>
        <p>Received from Shri/Smt. <span class="value">{escape(receipt.name)}</span>
           through <span class="value">{escape(receipt.payer)}</span></p>
        <table>
            <tr><th>#</th><th>Particulars</th><th>Amount (₹)</th></tr>
            {rows}
            <tr><th colspan="2">Total</th><td class="amount">{receipt.total:.2f}</td></tr>
        </table>
        <p>Rupees: <span class="value">{escape(receipt.words)}</span></p>
        <p>Cheque details: <span class="value">{escape(receipt.check_details)}</span></p>
        <div class="sign">Receiver's signature</div>
    </div>
    <button onclick="window.print()">🖨️ Print</button>
    """


def render_print_page(desk: ReceiptDesk, society_name: str):
    """Render the current draft as a printable receipt."""
    st.title("🖨️ Print")
    components.html(render_receipt_html(desk.draft, society_name), height=720, scrolling=True)


if __name__ == "__main__":
    main()
