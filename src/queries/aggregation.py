"""
Daily Aggregation

DESIGN DECISION: Aggregation is DETERMINISTIC and side-effect free.
It works on whatever list of expenses it is handed and never touches
storage, so the same input always produces the same series.

The day key is the ISO calendar date of each expense's (already
midnight-normalized) date. Days without expenses are simply absent -
the series is never zero-filled.
"""

from decimal import Decimal
from typing import Iterable, NamedTuple, Sequence

from src.models.expense import Expense


class DailyTotal(NamedTuple):
    """Total spent on one calendar day."""
    day: str
    total: Decimal


def aggregate_by_day(records: Iterable[Expense]) -> list[DailyTotal]:
    """
    Sum expense amounts per calendar day.

    Args:
        records: Expenses in any order

    Returns:
        One DailyTotal per day that has expenses, oldest day first.
        ISO day keys sort lexicographically in calendar order.
    """
    totals: dict[str, Decimal] = {}
    for record in records:
        totals[record.day] = totals.get(record.day, Decimal("0")) + record.amount

    return [DailyTotal(day, total) for day, total in sorted(totals.items())]


def recent_expenses(records: Sequence[Expense], limit: int = 20) -> list[Expense]:
    """
    The first `limit` expenses of a list already sorted newest-first.

    The storage layer does the ordering; this only caps the length.
    """
    if limit < 0:
        raise ValueError("limit must not be negative")
    return list(records[:limit])
