"""Display helpers for the expense page."""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

import pandas as pd

from src.models.expense import Expense
from src.queries.aggregation import DailyTotal


EMPTY_CHART_MESSAGE = "No data yet"
AXIS_DATE_FORMAT = "%m-%d"
TOOLTIP_DATE_FORMAT = "%B %d, %Y"


def format_amount(amount: Decimal) -> str:
    """Plain number without trailing zeros: 42.50 -> '42.5', 100 -> '100'."""
    return format(amount.normalize(), "f")


def format_expense_line(expense: Expense) -> str:
    """'YYYY-MM-DD — Category — amount (note)', note part omitted when empty."""
    line = f"{expense.day} — {expense.category} — {format_amount(expense.amount)}"
    if expense.note:
        line += f" ({expense.note})"
    return line


def daily_totals_frame(series: Iterable[DailyTotal]) -> pd.DataFrame:
    """Chart data: one row per day with a datetime `date` and float `total`."""
    rows = [(pd.Timestamp(day), float(total)) for day, total in series]
    return pd.DataFrame(rows, columns=["date", "total"])


def default_form_values(
    categories: Sequence[str],
    default_category: str,
    today: Optional[date] = None,
) -> dict:
    """Initial/reset state of the entry form."""
    if default_category not in categories and categories:
        default_category = categories[0]
    return {
        "amount": "",
        "category": default_category,
        "date": today or date.today(),
        "note": "",
    }


def form_to_payload(values: dict) -> dict:
    """Shape submitted form values like the POST /api/expenses body."""
    submitted_date = values.get("date")
    return {
        "amount": values.get("amount", ""),
        "category": values.get("category", ""),
        "date": submitted_date.isoformat() if isinstance(submitted_date, date) else submitted_date,
        "note": values.get("note", ""),
    }
