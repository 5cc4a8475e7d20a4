"""
Expense Client for the Page

Wraps ExpenseFlow with the client cache:
- Reads are served from the cache when possible
- A successful create invalidates the cached list and refetches it

A failed create raises and leaves the cache as it was.
"""

from typing import Any, Optional

from src.models.expense import Expense
from src.orchestrator import ExpenseFlow
from src.ui.cache import ExpenseListCache


EXPENSES_KEY = "/api/expenses"


class ExpenseClient:
    """Cached access to expenses for the presentation layer."""

    def __init__(
        self,
        flow: ExpenseFlow,
        cache: Optional[ExpenseListCache] = None,
    ):
        self._flow = flow
        self._cache = cache if cache is not None else ExpenseListCache()

    @property
    def cache(self) -> ExpenseListCache:
        return self._cache

    async def list_expenses(self) -> list[Expense]:
        """Expenses newest day first, from cache when available."""
        cached = self._cache.get(EXPENSES_KEY)
        if cached is not None:
            return cached

        expenses = await self._flow.list_expenses()
        self._cache.set(EXPENSES_KEY, expenses)
        return expenses

    async def create_expense(self, payload: Any) -> Expense:
        """
        Record an expense, then revalidate the cached list.

        Raises:
            ExpenseValidationError: payload rejected
            StorageError: the store failed
        """
        expense = await self._flow.record_expense(payload)
        self._cache.invalidate(EXPENSES_KEY)
        await self.list_expenses()
        return expense
