"""
In-Memory Storage Implementation

Process-local storage used by the tests and as the fallback when no
durable backend is configured. Data is lost when the process exits.
"""

from src.models.audit import AuditEvent
from src.models.expense import Expense, ExpenseCreate
from src.services.storage.interface import (
    AuditStorageInterface,
    ExpenseStorageInterface,
)


class InMemoryExpenseStorage(ExpenseStorageInterface):
    """Expenses kept in a list, in insertion order."""

    def __init__(self):
        self._expenses: list[Expense] = []

    async def create_expense(self, draft: ExpenseCreate) -> Expense:
        expense = Expense.from_draft(draft)
        self._expenses.append(expense)
        return expense

    async def list_expenses(self) -> list[Expense]:
        # sorted() is stable, so same-day expenses stay in insertion order
        return sorted(self._expenses, key=lambda e: e.date, reverse=True)

    def __len__(self) -> int:
        return len(self._expenses)


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only audit events kept in a list."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    async def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        events = sorted(self._events, key=lambda e: e.timestamp, reverse=True)
        return events[:limit]
