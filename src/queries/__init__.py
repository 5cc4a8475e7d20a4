"""Aggregation package."""

from src.queries.aggregation import DailyTotal, aggregate_by_day, recent_expenses

__all__ = ["DailyTotal", "aggregate_by_day", "recent_expenses"]
