"""
Shared fixtures.

Everything runs on in-memory storage with UTC as the configured zone,
so results don't depend on the machine's local timezone.
"""

from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from src.api import create_api_app
from src.audit import AuditLogger
from src.models.expense import Expense
from src.orchestrator import ExpenseFlow
from src.services.storage import InMemoryAuditStorage, InMemoryExpenseStorage
from src.validation import ExpenseValidator


@pytest.fixture
def validator() -> ExpenseValidator:
    return ExpenseValidator(timezone.utc)


@pytest.fixture
def expense_storage() -> InMemoryExpenseStorage:
    return InMemoryExpenseStorage()


@pytest.fixture
def audit_storage() -> InMemoryAuditStorage:
    return InMemoryAuditStorage()


@pytest.fixture
def flow(expense_storage, validator, audit_storage) -> ExpenseFlow:
    return ExpenseFlow(
        storage=expense_storage,
        validator=validator,
        audit_logger=AuditLogger(audit_storage),
    )


@pytest.fixture
def api_client(flow) -> TestClient:
    return TestClient(create_api_app(flow))


@pytest.fixture
def make_expense():
    """Factory for stored-looking expenses on a given ISO day."""

    def _make(
        amount,
        day: str,
        category: str = "Food",
        note: Optional[str] = None,
    ) -> Expense:
        return Expense(
            amount=Decimal(str(amount)),
            category=category,
            note=note,
            date=datetime.combine(date.fromisoformat(day), time.min, tzinfo=timezone.utc),
        )

    return _make
