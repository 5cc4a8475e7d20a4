"""Tests for create-payload validation and date normalization."""

import pytest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from src.validation import (
    REQUIRED_FIELDS_MESSAGE,
    ExpenseValidationError,
    ExpenseValidator,
    coerce_amount,
    parse_calendar_day,
    start_of_day,
)


def _payload(**overrides):
    payload = {"amount": "42.50", "category": "Food", "date": "2024-03-15", "note": ""}
    payload.update(overrides)
    return payload


class TestRequiredFields:
    """Falsy amount, category or date are all rejected with the same message."""

    @pytest.mark.parametrize("field", ["amount", "category", "date"])
    def test_missing_field(self, validator, field):
        payload = _payload()
        del payload[field]
        with pytest.raises(ExpenseValidationError) as exc_info:
            validator.validate(payload)
        assert exc_info.value.message == REQUIRED_FIELDS_MESSAGE
        assert exc_info.value.issues[0].field == field

    @pytest.mark.parametrize("field", ["amount", "category", "date"])
    def test_empty_string_field(self, validator, field):
        with pytest.raises(ExpenseValidationError, match=REQUIRED_FIELDS_MESSAGE):
            validator.validate(_payload(**{field: ""}))

    @pytest.mark.parametrize("amount", [0, 0.0, "0", "0.00", None])
    def test_zero_amount_counts_as_missing(self, validator, amount):
        with pytest.raises(ExpenseValidationError) as exc_info:
            validator.validate(_payload(amount=amount))
        assert exc_info.value.message == REQUIRED_FIELDS_MESSAGE

    def test_blank_category_counts_as_missing(self, validator):
        with pytest.raises(ExpenseValidationError, match=REQUIRED_FIELDS_MESSAGE):
            validator.validate(_payload(category="   "))

    def test_every_missing_field_is_reported(self, validator):
        with pytest.raises(ExpenseValidationError) as exc_info:
            validator.validate({})
        assert [i.field for i in exc_info.value.issues] == ["amount", "category", "date"]

    @pytest.mark.parametrize("body", [None, [], "amount=1", 42])
    def test_non_object_body(self, validator, body):
        with pytest.raises(ExpenseValidationError, match="must be a JSON object"):
            validator.validate(body)


class TestAmountCoercion:
    """Numbers and numeric strings become Decimals; everything else is rejected."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("42.50", Decimal("42.50")),
            (" 7 ", Decimal("7")),
            (12, Decimal("12")),
            (3.25, Decimal("3.25")),
            ("1e3", Decimal("1000")),
        ],
    )
    def test_valid_amounts(self, raw, expected):
        assert coerce_amount(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "1,000", "NaN", "nan", "Infinity", float("nan"), float("inf"), True, [1]])
    def test_invalid_amounts(self, raw):
        with pytest.raises(ExpenseValidationError, match="amount must be a number"):
            coerce_amount(raw)

    def test_nan_payload_rejected(self, validator):
        with pytest.raises(ExpenseValidationError, match="amount must be a number"):
            validator.validate(_payload(amount="NaN"))

    def test_negative_amount_rejected(self, validator):
        with pytest.raises(ExpenseValidationError, match="positive"):
            validator.validate(_payload(amount="-5"))

    @pytest.mark.parametrize("raw", ["1e400", "-1e400", 10 ** 400])
    def test_amount_too_large_for_a_float_rejected(self, raw):
        with pytest.raises(ExpenseValidationError, match="amount must be a number"):
            coerce_amount(raw)

    @pytest.mark.parametrize("raw", ["1e-400", "-1e-400"])
    def test_amount_that_rounds_to_zero_rejected(self, validator, raw):
        with pytest.raises(ExpenseValidationError, match="amount must be a positive number"):
            validator.validate(_payload(amount=raw))

    def test_smallest_cent_amount_accepted(self, validator):
        assert validator.validate(_payload(amount="0.01")).amount == Decimal("0.01")


class TestDateNormalization:
    """Dates become midnight of their calendar day in the configured zone."""

    def test_date_only_string(self, validator):
        draft = validator.validate(_payload())
        assert draft.date == datetime(2024, 3, 15, tzinfo=timezone.utc)
        assert (draft.date.hour, draft.date.minute, draft.date.second, draft.date.microsecond) == (0, 0, 0, 0)

    def test_time_of_day_is_stripped(self, validator):
        draft = validator.validate(_payload(date="2024-03-15T18:45:12.345Z"))
        assert draft.date == datetime(2024, 3, 15, tzinfo=timezone.utc)

    def test_offset_datetime_is_converted_before_taking_the_day(self):
        tz = timezone(timedelta(hours=-5))
        validator = ExpenseValidator(tz)
        # 02:00 UTC on the 16th is still the 15th five hours west
        draft = validator.validate(_payload(date="2024-03-16T02:00:00+00:00"))
        assert draft.date == datetime(2024, 3, 15, tzinfo=tz)

    def test_date_only_string_keeps_its_day_in_any_zone(self):
        tz = timezone(timedelta(hours=-8))
        draft = ExpenseValidator(tz).validate(_payload())
        assert draft.date.date() == date(2024, 3, 15)
        assert draft.date.utcoffset() == timedelta(hours=-8)

    def test_server_local_zone(self):
        draft = ExpenseValidator(None).validate(_payload())
        assert draft.date.tzinfo is not None
        assert draft.date.date() == date(2024, 3, 15)
        assert draft.date.hour == 0

    @pytest.mark.parametrize("raw", ["yesterday", "15/03/2024", "2024-13-01", "2024-02-30"])
    def test_invalid_date_strings(self, validator, raw):
        with pytest.raises(ExpenseValidationError, match="valid ISO date"):
            validator.validate(_payload(date=raw))

    def test_non_string_date(self, validator):
        with pytest.raises(ExpenseValidationError, match="valid ISO date"):
            validator.validate(_payload(date=20240315))

    def test_parse_calendar_day_naive_datetime(self):
        assert parse_calendar_day("2024-03-15T23:59:59", timezone.utc) == date(2024, 3, 15)

    def test_start_of_day(self):
        assert start_of_day(date(2024, 1, 1), timezone.utc) == datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestOptionalFields:

    def test_empty_note_becomes_none(self, validator):
        assert validator.validate(_payload(note="")).note is None

    def test_missing_note_becomes_none(self, validator):
        payload = _payload()
        del payload["note"]
        assert validator.validate(payload).note is None

    def test_note_is_kept(self, validator):
        assert validator.validate(_payload(note="lunch")).note == "lunch"

    def test_non_string_note_rejected(self, validator):
        with pytest.raises(ExpenseValidationError, match="note must be a string"):
            validator.validate(_payload(note=5))

    def test_non_string_category_rejected(self, validator):
        with pytest.raises(ExpenseValidationError, match="category must be a string"):
            validator.validate(_payload(category=5))

    def test_overlong_category_is_a_validation_error(self, validator):
        with pytest.raises(ExpenseValidationError) as exc_info:
            validator.validate(_payload(category="x" * 101))
        assert exc_info.value.issues[0].field == "category"

    def test_free_form_category_accepted(self, validator):
        assert validator.validate(_payload(category="Gifts")).category == "Gifts"
