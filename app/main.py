"""
Streamlit Frontend for Bill Calendar

Renders the calendar screen held by BillCalendarFlow:
1. Pick a day
2. See the bills due that day, colored by due status
3. Add, edit or delete a bill in the form below the list

The page only renders flow state and forwards button presses;
all store access goes through the flow.
"""

import asyncio
import atexit
from datetime import date

import streamlit as st

from bill_calendar.classification import STATUS_COLORS
from bill_calendar.config import get_settings
from bill_calendar.orchestrator import (
    BillCalendarFlow,
    bill_label,
    create_app_components,
)


# Page configuration
st.set_page_config(
    page_title="Bill Calendar",
    page_icon="📅",
    layout="centered",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
    .bill-item {
        margin-bottom: 10px;
        padding: 10px;
        border-radius: 5px;
        font-size: 16px;
    }
</style>
""", unsafe_allow_html=True)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components():
    """Get or create the bill store (cached for the process)."""
    bill_store, client = create_app_components()
    atexit.register(client.close)
    return bill_store


def get_flow() -> BillCalendarFlow:
    """One flow per browser session; started once."""
    if "flow" not in st.session_state:
        flow = BillCalendarFlow(get_components())
        run_async(flow.start())
        st.session_state.flow = flow
    return st.session_state.flow


def main():
    """Main application entry point."""
    flow = get_flow()
    accent = get_settings().app.accent_color

    st.title("📅 Bills Calendar")

    picked = st.date_input(
        "Day",
        value=date.fromisoformat(flow.selected_date),
        help="Pick a day to see the bills due on it",
    )
    if picked.isoformat() != flow.selected_date:
        run_async(flow.select_day(picked.isoformat()))

    if flow.selected_date == flow.today:
        st.caption(f"Today · {flow.today}")
    else:
        st.caption(f"Selected · {flow.selected_date} (today is {flow.today})")

    if flow.last_error:
        st.error(f"Storage error: {flow.last_error}")

    render_bill_list(flow)

    if st.button("➕ Add Bill", type="primary"):
        flow.open_modal(None)
        st.rerun()

    if flow.modal_visible:
        render_bill_form(flow, accent)


def render_bill_list(flow: BillCalendarFlow):
    """Render the bills of the selected day."""
    rows = flow.bill_rows()
    if not rows:
        st.info("No bills due on this day.")
        return

    for bill, status in rows:
        col1, col2 = st.columns([4, 1])
        with col1:
            st.markdown(
                f'<div class="bill-item" style="background-color: {STATUS_COLORS[status]};">'
                f"{bill_label(bill)}</div>",
                unsafe_allow_html=True,
            )
        with col2:
            if st.button("Edit", key=f"edit-{bill.id}"):
                flow.open_modal(bill)
                st.rerun()


def render_bill_form(flow: BillCalendarFlow, accent: str):
    """Render the add/edit form."""
    st.markdown("---")
    st.markdown(
        f"<h3 style='color: {accent};'>{flow.modal_title}</h3>",
        unsafe_allow_html=True,
    )

    with st.form("bill-form"):
        title = st.text_input("Title", value=flow.title_text)
        amount = st.text_input("Amount", value=flow.amount_text)
        submitted = st.form_submit_button(flow.modal_title)

    if submitted:
        flow.title_text = title
        flow.amount_text = amount
        result = run_async(flow.submit())
        if result.skipped:
            st.warning("Enter a title and a numeric amount.")
        else:
            st.rerun()

    if flow.selected_bill is not None:
        if st.button("🗑️ Delete Bill"):
            run_async(flow.remove())
            st.rerun()

    if st.button("Cancel"):
        flow.close_modal()
        st.rerun()


if __name__ == "__main__":
    main()
