from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from ..core.constants import PHONE_MAX_DIGITS, PHONE_MIN_DIGITS
from ..core.exceptions import ValidationError

_PHONE_ALLOWED = re.compile(r"^\+?[\d\s().-]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} can't be blank")
    return value.strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


def normalize_phone(value: Optional[str]) -> Optional[str]:
    """Return the phone number trimmed, or None when blank.

    Raises ValidationError when the number has disallowed characters or a digit
    count outside PHONE_MIN_DIGITS..PHONE_MAX_DIGITS.
    """
    value = optional_text(value)
    if value is None:
        return None
    digits = re.sub(r"\D", "", value)
    if not _PHONE_ALLOWED.match(value) or not PHONE_MIN_DIGITS <= len(digits) <= PHONE_MAX_DIGITS:
        raise ValidationError("Phone number is invalid")
    return value


def require_percentage(value: Optional[str], field_name: str) -> Optional[int]:
    value = optional_text(value)
    if value is None:
        return None
    try:
        number = int(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a whole number")
    if not 0 <= number <= 100:
        raise ValidationError(f"{field_name} must be between 0 and 100")
    return number


def require_date(value: Optional[str], field_name: str) -> date:
    """Parse an ISO ``YYYY-MM-DD`` form value."""
    value = optional_text(value)
    if value is None:
        raise ValidationError(f"{field_name} can't be blank")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid date")


def optional_id(value: Optional[str], field_name: str) -> Optional[int]:
    value = optional_text(value)
    if value is None:
        return None
    if not value.isdigit():
        raise ValidationError(f"{field_name} is not valid")
    return int(value)
