"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep Google Sheets as the durable backend and swap it later
2. Use in-memory storage for testing
3. Keep the validation and HTTP layers decoupled from storage

The interface is intentionally tiny. Expenses are only ever created
and listed; there is no update or delete.
"""

from abc import ABC, abstractmethod

from src.models.audit import AuditEvent
from src.models.expense import Expense, ExpenseCreate


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for expense storage operations.

    Any storage implementation (Google Sheets, in-memory, ...)
    must implement these methods.
    """

    @abstractmethod
    async def create_expense(self, draft: ExpenseCreate) -> Expense:
        """
        Persist a validated expense.

        The store assigns the record's id and created_at.

        Args:
            draft: The validated, date-normalized expense

        Returns:
            The stored Expense

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def list_expenses(self) -> list[Expense]:
        """
        List every stored expense.

        Returns:
            All expenses ordered by date descending. Expenses on the
            same day keep the order the store holds them in.

        Raises:
            StorageError: If the read fails
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Args:
            limit: Maximum number of events to return

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
