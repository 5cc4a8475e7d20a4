"""
Core Data Models for Expense Tracker

These models define the schemas for expense data flowing through the system.
They are designed to:
1. Enforce the record invariants at runtime
2. Serialize to the camelCase JSON the HTTP API returns
3. Be convertible to and from storage rows

DESIGN DECISION: Amounts are Decimal internally so daily totals add up
exactly. They are rendered as plain JSON numbers on the way out.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)
from pydantic.alias_generators import to_camel


# Suggested set shown in the entry form. The store accepts any label.
DEFAULT_CATEGORIES = (
    "Food",
    "Transport",
    "Bills",
    "Entertainment",
    "Shopping",
    "Other",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _ensure_midnight(v: datetime) -> datetime:
    if (v.hour, v.minute, v.second, v.microsecond) != (0, 0, 0, 0):
        raise ValueError("Expense date must be normalized to midnight")
    return v


# =============================================================================
# EXPENSE MODELS
# =============================================================================

class ExpenseCreate(BaseModel):
    """
    A validated, normalized expense that hasn't been stored yet.

    Produced by ExpenseValidator from a raw request payload. The store
    assigns id and created_at when it persists one of these.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount spent (must be positive)"
    )
    category: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Short category label"
    )
    note: Optional[str] = Field(
        default=None,
        max_length=1000,
        description="Optional free text"
    )
    date: datetime = Field(
        ...,
        description="Calendar day of the expense, at midnight in the configured zone"
    )

    @field_validator('date')
    @classmethod
    def validate_date_is_midnight(cls, v: datetime) -> datetime:
        return _ensure_midnight(v)

    @field_validator('note')
    @classmethod
    def empty_note_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class Expense(BaseModel):
    """
    A persisted expense record.

    Records are immutable once stored: there is no update or delete
    operation anywhere in the system.

    JSON uses camelCase keys (createdAt) to match the HTTP contract.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique expense ID, assigned by the store"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount spent"
    )
    category: str = Field(
        ...,
        min_length=1,
        max_length=100
    )
    note: Optional[str] = None
    date: datetime = Field(
        ...,
        description="Calendar day of the expense, at midnight"
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        description="When the record was stored (UTC)"
    )

    @field_validator('date')
    @classmethod
    def validate_date_is_midnight(cls, v: datetime) -> datetime:
        return _ensure_midnight(v)

    @field_serializer('amount', when_used='json')
    def serialize_amount(self, amount: Decimal) -> float:
        return float(amount)

    @classmethod
    def from_draft(cls, draft: ExpenseCreate) -> "Expense":
        """Build a new record from a validated draft (fresh id and timestamp)."""
        return cls(
            amount=draft.amount,
            category=draft.category,
            note=draft.note,
            date=draft.date,
        )

    @property
    def day(self) -> str:
        """ISO calendar-day key (YYYY-MM-DD) used for daily buckets."""
        return self.date.date().isoformat()

    def to_api_dict(self) -> dict:
        """JSON-ready dict in the shape the HTTP API returns."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in a create payload."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'invalid_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
