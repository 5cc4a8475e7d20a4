"""
Streamlit Frontend for Expense Tracker

One page:
1. Entry form (amount, category, date, optional note)
2. Daily totals line chart
3. Recent expenses list

The page talks to the same ExpenseFlow the HTTP API serves, through
an ExpenseClient whose cache is invalidated after every successful
create, so the chart and list always reflect the new record.
"""

import asyncio

import altair as alt
import streamlit as st
import structlog

from src.audit import configure_logging
from src.config import get_settings
from src.orchestrator import create_app_components
from src.queries import aggregate_by_day, recent_expenses
from src.services.storage import StorageError
from src.ui import (
    AXIS_DATE_FORMAT,
    EMPTY_CHART_MESSAGE,
    TOOLTIP_DATE_FORMAT,
    ExpenseClient,
    daily_totals_frame,
    default_form_values,
    form_to_payload,
    format_expense_line,
)
from src.validation import ExpenseValidationError


logger = structlog.get_logger(__name__)


st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💸",
    layout="centered",
)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_client() -> ExpenseClient:
    """Get or create the expense client (cached across reruns)."""
    configure_logging(get_settings().app.log_level)
    flow, _ = create_app_components(use_storage=True)
    return ExpenseClient(flow)


def render_form(client: ExpenseClient):
    """Entry form. Clears back to defaults after a submit."""
    app_settings = get_settings().app
    categories = app_settings.categories_list
    defaults = default_form_values(categories, app_settings.default_category)

    with st.form("expense_form", clear_on_submit=True):
        amount = st.text_input("Amount", value=defaults["amount"], placeholder="Amount")
        category = st.selectbox(
            "Category",
            options=categories,
            index=categories.index(defaults["category"]) if categories else 0,
        )
        expense_date = st.date_input("Date", value=defaults["date"])
        note = st.text_input("Note (optional)", value=defaults["note"], placeholder="Note (optional)")
        submitted = st.form_submit_button("Add Expense", type="primary")

    if not submitted:
        return

    payload = form_to_payload({
        "amount": amount,
        "category": category,
        "date": expense_date,
        "note": note,
    })
    try:
        run_async(client.create_expense(payload))
    except ExpenseValidationError as e:
        st.error(e.message)
    except StorageError:
        st.error("Could not save the expense. Please try again.")
    else:
        st.success("Expense added")


def render_chart(expenses):
    """Daily totals line chart, or a placeholder when there's no data."""
    st.subheader("Daily Totals")

    series = aggregate_by_day(expenses)
    if not series:
        st.info(EMPTY_CHART_MESSAGE)
        return

    frame = daily_totals_frame(series)
    chart = (
        alt.Chart(frame)
        .mark_line(point=True, color="#8884d8")
        .encode(
            x=alt.X("date:T", title="Date", axis=alt.Axis(format=AXIS_DATE_FORMAT)),
            y=alt.Y("total:Q", title="Total"),
            tooltip=[
                alt.Tooltip("date:T", title="Date", format=TOOLTIP_DATE_FORMAT),
                alt.Tooltip("total:Q", title="Total"),
            ],
        )
    )
    st.altair_chart(chart, use_container_width=True)


def render_recent(expenses):
    """Most recently dated expenses, one per line."""
    st.subheader("Recent Expenses")
    limit = get_settings().app.recent_expenses_limit
    lines = [format_expense_line(e) for e in recent_expenses(expenses, limit=limit)]
    if lines:
        st.markdown("\n".join(f"- {line}" for line in lines))


def main():
    """Main application entry point."""
    client = get_client()

    st.title("Expense Tracker")
    render_form(client)

    try:
        expenses = run_async(client.list_expenses())
    except StorageError as e:
        logger.warning("expense_list_unavailable", error=str(e))
        expenses = []

    render_chart(expenses)
    render_recent(expenses)


if __name__ == "__main__":
    main()
