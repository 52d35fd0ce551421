"""
Input validation helpers shared by the schedule, record and issue managers.

Each helper raises ValidationError with a field-specific message; nothing here
touches the database.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Union

from app.buisness.core.errors import ValidationError

MAX_MONEY = Decimal('99999999.99')


def validate_id(value, field_name: str) -> int:
    """Ids must be positive integers"""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    return value


def parse_date(value: Union[str, date, None], field_name: str) -> date:
    """Parse a YYYY-MM-DD calendar date (date objects pass through)"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be in format YYYY-MM-DD")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be in format YYYY-MM-DD")


def parse_optional_date(value, field_name: str) -> Optional[date]:
    if value is None:
        return None
    return parse_date(value, field_name)


def parse_datetime(value: Union[str, datetime, None], field_name: str) -> datetime:
    """Parse an ISO-8601 local date-time"""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a valid date-time (ISO format)")
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a valid date-time (ISO format)")


def parse_money(value, field_name: str) -> Decimal:
    """
    Parse a monetary decimal.

    Rules: valid decimal, non-negative, at most 2 fractional digits,
    at most 99,999,999.99.
    """
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a valid decimal number")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a valid decimal number")
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    if -amount.as_tuple().exponent > 2:
        raise ValidationError(f"{field_name} cannot have more than 2 decimal places")
    if amount > MAX_MONEY:
        raise ValidationError(f"{field_name} is too large (max {MAX_MONEY})")
    return amount


def parse_optional_money(value, field_name: str) -> Optional[Decimal]:
    if value is None:
        return None
    return parse_money(value, field_name)


def validate_choice(value, choices: Iterable[str], field_name: str, case_insensitive: bool = False) -> str:
    """Check value against a closed set; returns the canonical spelling"""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} cannot be empty")
    candidate = value.upper() if case_insensitive else value
    choices = list(choices)
    if candidate not in choices:
        raise ValidationError(f"{field_name} must be one of: {', '.join(choices)}")
    return candidate


def validate_text(value, field_name: str, max_length: int, required: bool = True) -> Optional[str]:
    """Non-blank (when required) text no longer than max_length"""
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(f"{field_name} cannot be empty")
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    if len(value) > max_length:
        raise ValidationError(f"{field_name} cannot exceed {max_length} characters")
    return value
