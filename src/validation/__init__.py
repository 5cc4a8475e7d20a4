"""Payload validation package."""

from src.validation.validator import (
    REQUIRED_FIELDS_MESSAGE,
    ExpenseValidationError,
    ExpenseValidator,
    coerce_amount,
    parse_calendar_day,
    start_of_day,
)

__all__ = [
    "REQUIRED_FIELDS_MESSAGE",
    "ExpenseValidationError",
    "ExpenseValidator",
    "coerce_amount",
    "parse_calendar_day",
    "start_of_day",
]
