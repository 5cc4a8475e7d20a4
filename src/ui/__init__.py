"""Presentation helpers package."""

from src.ui.cache import ExpenseListCache
from src.ui.client import EXPENSES_KEY, ExpenseClient
from src.ui.formatting import (
    AXIS_DATE_FORMAT,
    EMPTY_CHART_MESSAGE,
    TOOLTIP_DATE_FORMAT,
    daily_totals_frame,
    default_form_values,
    form_to_payload,
    format_amount,
    format_expense_line,
)

__all__ = [
    "AXIS_DATE_FORMAT",
    "EMPTY_CHART_MESSAGE",
    "EXPENSES_KEY",
    "ExpenseClient",
    "ExpenseListCache",
    "TOOLTIP_DATE_FORMAT",
    "daily_totals_frame",
    "default_form_values",
    "form_to_payload",
    "format_amount",
    "format_expense_line",
]
