"""
Main Orchestrator for Expense Tracker

This module ties together all the components and defines the
end-to-end flows for:
1. Recording an expense (payload → validate → persist → audit)
2. Listing expenses (storage → audit)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing reaches storage without passing validation
- Every create, rejection and failure is audited
- Errors propagate to the caller unchanged; the HTTP layer decides
  what the client sees
"""

from typing import Any, Optional
from uuid import UUID

import structlog

from src.audit import AuditLogger, create_correlation_id
from src.config import get_settings
from src.models.expense import Expense
from src.services.storage import (
    ExpenseStorageInterface,
    GoogleSheetsAuditStorage,
    GoogleSheetsClient,
    GoogleSheetsExpenseStorage,
    InMemoryExpenseStorage,
    StorageError,
)
from src.validation import ExpenseValidationError, ExpenseValidator


logger = structlog.get_logger(__name__)


class ExpenseFlow:
    """
    Orchestrates recording and listing expenses.

    Record flow:
    1. Validate → ExpenseValidator (rejects with ExpenseValidationError)
    2. Persist → storage assigns id and created_at
    3. Audit → expense_created

    Every operation is all-or-nothing: a rejected or failed create
    leaves storage untouched.
    """

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        validator: Optional[ExpenseValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._validator = validator or ExpenseValidator()
        self._audit_logger = audit_logger

    @property
    def audit_logger(self) -> Optional[AuditLogger]:
        return self._audit_logger

    async def record_expense(
        self,
        payload: Any,
        correlation_id: Optional[UUID] = None,
    ) -> Expense:
        """
        Validate a raw payload and persist it.

        Returns:
            The stored expense

        Raises:
            ExpenseValidationError: payload rejected (nothing stored)
            StorageError: the store failed
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            draft = self._validator.validate(payload)
        except ExpenseValidationError as e:
            if self._audit_logger:
                await self._audit_logger.log_validation_failed(
                    message=e.message,
                    issues=e.issues_as_dicts(),
                    correlation_id=correlation_id,
                )
            raise

        try:
            expense = await self._storage.create_expense(draft)
        except StorageError as e:
            if self._audit_logger:
                await self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={"operation": "create_expense"},
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_expense_created(
                expense_id=expense.id,
                category=expense.category,
                amount=str(expense.amount),
                day=expense.day,
                correlation_id=correlation_id,
            )

        return expense

    async def list_expenses(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> list[Expense]:
        """
        List every expense, newest day first.

        Raises:
            StorageError: the store failed
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            expenses = await self._storage.list_expenses()
        except StorageError as e:
            if self._audit_logger:
                await self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={"operation": "list_expenses"},
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_expenses_listed(
                result_count=len(expenses),
                correlation_id=correlation_id,
            )

        return expenses


def create_app_components(
    use_storage: bool = True,
) -> tuple[ExpenseFlow, Optional[GoogleSheetsClient]]:
    """
    Factory function to create all application components.

    Args:
        use_storage: Whether to initialize the configured durable storage.
                    Set to False to run on in-memory storage.

    Returns:
        (expense_flow, sheets_client)
    """
    app_settings = get_settings().app
    sheets_client = None
    expense_storage: ExpenseStorageInterface
    audit_logger: AuditLogger

    if use_storage and app_settings.storage_backend == "google_sheets":
        try:
            sheets_client = GoogleSheetsClient()
            expense_storage = GoogleSheetsExpenseStorage(sheets_client)
            audit_logger = AuditLogger(GoogleSheetsAuditStorage(sheets_client))
        except Exception as e:
            # Storage not configured - continue without it
            logger.warning("storage_not_configured", error=str(e), fallback="memory")
            sheets_client = None
            expense_storage = InMemoryExpenseStorage()
            audit_logger = AuditLogger()  # Local-only logging
    else:
        expense_storage = InMemoryExpenseStorage()
        audit_logger = AuditLogger()  # Local-only logging

    expense_flow = ExpenseFlow(
        storage=expense_storage,
        validator=ExpenseValidator(app_settings.tzinfo),
        audit_logger=audit_logger,
    )

    return expense_flow, sheets_client
