"""
Tests for Expense Tracker models

Test strategy:
1. Unit tests for individual components (models, validator, aggregation)
2. Integration tests for flows and the HTTP API (in-memory storage)
3. No real API calls in tests (Google Sheets is mocked)
"""

import pytest
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from src.models.expense import (
    DEFAULT_CATEGORIES,
    Expense,
    ExpenseCreate,
)
from src.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


MIDNIGHT = datetime(2024, 3, 15, tzinfo=timezone.utc)


class TestExpenseModels:
    """Tests for expense Pydantic models."""

    def test_expense_create_strips_whitespace(self):
        """Test that whitespace is stripped from category."""
        draft = ExpenseCreate(amount=Decimal("10"), category="  Food  ", date=MIDNIGHT)
        assert draft.category == "Food"

    def test_expense_create_empty_note_becomes_none(self):
        """Test that an empty note is stored as None."""
        draft = ExpenseCreate(amount=Decimal("10"), category="Food", note="", date=MIDNIGHT)
        assert draft.note is None

    def test_expense_create_rejects_zero_amount(self):
        """Test that zero amounts are rejected."""
        with pytest.raises(ValueError):
            ExpenseCreate(amount=Decimal("0"), category="Food", date=MIDNIGHT)

    def test_expense_create_rejects_time_of_day(self):
        """Test that dates must be normalized to midnight."""
        with pytest.raises(ValueError, match="normalized to midnight"):
            ExpenseCreate(
                amount=Decimal("10"),
                category="Food",
                date=datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc),
            )

    def test_expense_from_draft_assigns_identity(self):
        """Test that a record built from a draft gets an id and timestamp."""
        draft = ExpenseCreate(amount=Decimal("12.50"), category="Food", date=MIDNIGHT)
        first = Expense.from_draft(draft)
        second = Expense.from_draft(draft)

        assert isinstance(first.id, UUID)
        assert first.id != second.id
        assert first.created_at.tzinfo is not None
        assert first.amount == Decimal("12.50")
        assert first.date == MIDNIGHT

    def test_expense_day_key(self):
        """Test the ISO day key."""
        expense = Expense(amount=Decimal("1"), category="Food", date=MIDNIGHT)
        assert expense.day == "2024-03-15"

    def test_expense_api_dict_uses_camel_case(self):
        """Test the JSON shape returned by the API."""
        expense = Expense(
            id=uuid4(),
            amount=Decimal("42.50"),
            category="Food",
            date=MIDNIGHT,
        )
        data = expense.to_api_dict()

        assert set(data) == {"id", "amount", "category", "note", "date", "createdAt"}
        assert data["amount"] == 42.5
        assert isinstance(data["amount"], float)
        assert data["note"] is None
        assert data["date"].startswith("2024-03-15T00:00:00")

    def test_expense_python_dump_keeps_decimal(self):
        """Test that non-JSON dumps keep the exact Decimal."""
        expense = Expense(amount=Decimal("0.10"), category="Food", date=MIDNIGHT)
        assert expense.model_dump()["amount"] == Decimal("0.10")

    def test_expense_is_immutable(self):
        """Test that stored records can't be modified."""
        expense = Expense(amount=Decimal("1"), category="Food", date=MIDNIGHT)
        with pytest.raises(ValueError):
            expense.amount = Decimal("2")

    def test_default_categories(self):
        """Test the suggested category set."""
        assert DEFAULT_CATEGORIES == (
            "Food", "Transport", "Bills", "Entertainment", "Shopping", "Other",
        )


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_CREATED,
            description="Test expense recorded",
        )
        assert event.event_type == AuditEventType.EXPENSE_CREATED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_CREATED,
            description="Expense recorded",
            details={"category": "Food", "amount": "10"},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "expense_created"
        assert log_dict["details"]["category"] == "Food"

    def test_audit_event_to_sheets_row(self):
        """Test conversion to sheets row."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            description="Expense rejected",
            error_message="amount, category and date are required",
        )
        row = event.to_sheets_row()
        assert len(row) == 10  # Expected number of columns
        assert row[2] == "expense_validation_failed"
        assert row[3] == "warning"
        assert row[9] == "amount, category and date are required"

    def test_audit_event_builder_expense_created(self):
        """Test AuditEventBuilder.expense_created."""
        expense_id = uuid4()
        correlation_id = uuid4()

        event = AuditEventBuilder.expense_created(
            expense_id=expense_id,
            category="Food",
            amount="12.50",
            day="2024-03-15",
            correlation_id=correlation_id,
        )

        assert event.event_type == AuditEventType.EXPENSE_CREATED
        assert event.entity_id == expense_id
        assert event.correlation_id == correlation_id
        assert event.details["day"] == "2024-03-15"

    def test_audit_event_builder_validation_failed(self):
        """Test AuditEventBuilder.validation_failed."""
        event = AuditEventBuilder.validation_failed(
            message="amount must be a number",
            issues=[{"field": "amount", "issue_type": "invalid_format", "message": "x"}],
        )

        assert event.event_type == AuditEventType.EXPENSE_VALIDATION_FAILED
        assert event.severity == AuditSeverity.WARNING
        assert event.error_message == "amount must be a number"
        assert len(event.details["issues"]) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
