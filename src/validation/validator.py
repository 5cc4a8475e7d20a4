"""
Expense Payload Validation

Turns the raw body of a create request into a validated ExpenseCreate,
or rejects it with an ExpenseValidationError.

Checks run in order:
1. PRESENCE - amount, category and date must be truthy. A missing key,
   None, "" and 0 all count as absent, and so does an amount that
   coerces to exactly zero.
2. COERCION - amount must be a finite number (or numeric string) and
   positive; date must be an ISO-8601 date or datetime.
3. NORMALIZATION - the calendar day becomes midnight in the configured
   timezone, and an empty note becomes None.

IMPORTANT: Validation never guesses. Anything that can't be read
unambiguously is rejected and reported back to the caller.
"""

import math
from datetime import date, datetime, time, tzinfo
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from src.models.expense import ExpenseCreate, ValidationIssue


REQUIRED_FIELDS_MESSAGE = "amount, category and date are required"
INVALID_BODY_MESSAGE = "request body must be a JSON object"
INVALID_AMOUNT_MESSAGE = "amount must be a number"
NON_POSITIVE_AMOUNT_MESSAGE = "amount must be a positive number"
INVALID_CATEGORY_MESSAGE = "category must be a string"
INVALID_DATE_MESSAGE = "date must be a valid ISO date"
INVALID_NOTE_MESSAGE = "note must be a string"

_USE_SETTINGS = object()


class ExpenseValidationError(ValueError):
    """
    A create payload was rejected.

    Carries the single message shown to the client plus the
    individual issues (for logs and the audit trail).
    """

    def __init__(self, message: str, issues: Optional[list[ValidationIssue]] = None):
        super().__init__(message)
        self.message = message
        self.issues = issues or []

    def issues_as_dicts(self) -> list[dict]:
        return [issue.model_dump() for issue in self.issues]


def coerce_amount(value: Any) -> Decimal:
    """
    Convert a raw amount into a Decimal.

    Accepts ints, floats, Decimals and numeric strings (surrounding
    whitespace allowed). Booleans, NaN, infinities and values too large
    to be represented as a float are rejected.

    Raises:
        ExpenseValidationError: if the value isn't a finite number
    """
    # bool is a subclass of int; true/false are never amounts
    if isinstance(value, bool):
        raise _invalid("amount", "invalid_format", INVALID_AMOUNT_MESSAGE)

    if isinstance(value, (int, float, Decimal)):
        raw = str(value)
    elif isinstance(value, str):
        raw = value.strip()
    else:
        raise _invalid("amount", "invalid_format", INVALID_AMOUNT_MESSAGE)

    try:
        amount = Decimal(raw)
    except InvalidOperation:
        raise _invalid("amount", "invalid_format", INVALID_AMOUNT_MESSAGE)

    if not amount.is_finite():
        raise _invalid("amount", "invalid_format", INVALID_AMOUNT_MESSAGE)

    # Amounts are served as JSON numbers, so they must fit in a float
    if not math.isfinite(float(amount)):
        raise _invalid("amount", "invalid_value", INVALID_AMOUNT_MESSAGE)

    return amount


def parse_calendar_day(value: str, tz: Optional[tzinfo] = None) -> date:
    """
    Read the calendar day out of an ISO-8601 string.

    "YYYY-MM-DD" names its day directly. A full datetime with an
    offset is first converted into `tz` (the server's local zone when
    None); a naive datetime is taken as already local.

    Raises:
        ExpenseValidationError: if the string isn't ISO-8601
    """
    raw = value.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass

    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        raise _invalid("date", "invalid_format", INVALID_DATE_MESSAGE)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz) if tz is not None else parsed.astimezone()
    return parsed.date()


def start_of_day(day: date, tz: Optional[tzinfo] = None) -> datetime:
    """
    Midnight (00:00:00.000) of `day` as an aware datetime.

    With tz=None the server's local zone is used, including whatever
    DST offset applied on that day.
    """
    midnight = datetime.combine(day, time.min)
    if tz is None:
        return midnight.astimezone()
    return midnight.replace(tzinfo=tz)


class ExpenseValidator:
    """
    Validates and normalizes create-expense payloads.

    The timezone used for midnight normalization comes from
    settings unless one is passed explicitly (None = server local).
    """

    def __init__(self, tz: Any = _USE_SETTINGS):
        if tz is _USE_SETTINGS:
            from src.config import get_settings
            tz = get_settings().app.tzinfo
        self._tz: Optional[tzinfo] = tz

    @property
    def tz(self) -> Optional[tzinfo]:
        return self._tz

    def validate(self, payload: Any) -> ExpenseCreate:
        """
        Validate a raw payload and return the normalized draft.

        Raises:
            ExpenseValidationError: describing the first problem found
        """
        if not isinstance(payload, Mapping):
            raise _invalid("body", "invalid_format", INVALID_BODY_MESSAGE)

        self._check_required(payload)

        amount = coerce_amount(payload["amount"])
        if amount == 0:
            raise _invalid("amount", "missing", REQUIRED_FIELDS_MESSAGE)
        if amount < 0 or float(amount) == 0:
            raise _invalid("amount", "invalid_value", NON_POSITIVE_AMOUNT_MESSAGE)

        category = payload["category"]
        if not isinstance(category, str):
            raise _invalid("category", "invalid_format", INVALID_CATEGORY_MESSAGE)
        category = category.strip()
        if not category:
            raise _invalid("category", "missing", REQUIRED_FIELDS_MESSAGE)

        raw_date = payload["date"]
        if not isinstance(raw_date, str):
            raise _invalid("date", "invalid_format", INVALID_DATE_MESSAGE)
        day = parse_calendar_day(raw_date, self._tz)

        try:
            normalized = start_of_day(day, self._tz)
        except (OverflowError, ValueError, OSError):
            raise _invalid("date", "invalid_value", INVALID_DATE_MESSAGE)

        note = payload.get("note") or None
        if note is not None and not isinstance(note, str):
            raise _invalid("note", "invalid_format", INVALID_NOTE_MESSAGE)

        try:
            return ExpenseCreate(
                amount=amount,
                category=category,
                note=note,
                date=normalized,
            )
        except PydanticValidationError as e:
            # Length limits and the like, enforced by the model itself
            issues = [
                ValidationIssue(
                    field=".".join(str(part) for part in err["loc"]),
                    issue_type=err["type"],
                    message=err["msg"],
                )
                for err in e.errors()
            ]
            first = issues[0]
            raise ExpenseValidationError(f"{first.field}: {first.message}", issues)

    def _check_required(self, payload: Mapping) -> None:
        issues = [
            ValidationIssue(
                field=name,
                issue_type="missing",
                message=f"{name} is required",
            )
            for name in ("amount", "category", "date")
            if not payload.get(name)
        ]
        if issues:
            raise ExpenseValidationError(REQUIRED_FIELDS_MESSAGE, issues)


def _invalid(field: str, issue_type: str, message: str) -> ExpenseValidationError:
    return ExpenseValidationError(
        message,
        [ValidationIssue(field=field, issue_type=issue_type, message=message)],
    )
