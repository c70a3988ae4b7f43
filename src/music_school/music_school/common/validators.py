from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import is_month_key, parse_iso_date


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_iso_date(value: str, field_name: str) -> str:
    try:
        parse_iso_date(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")
    return value


def require_month(value: str, field_name: str = "Month") -> str:
    if not is_month_key(value or ""):
        raise ValidationError(f"{field_name} must be formatted as YYYY-MM")
    return value


def require_int(value: Any, field_name: str, *, minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field_name} must be at least {minimum}")
    if maximum is not None and number > maximum:
        raise ValidationError(f"{field_name} must be at most {maximum}")
    return number


def optional_int(value: Any, field_name: str, *, minimum: Optional[int] = None) -> Optional[int]:
    if value is None or value == "":
        return None
    return require_int(value, field_name, minimum=minimum)


def to_optional_int(value: Any) -> Optional[int]:
    """Lenient numeric read for stored records: blank or unreadable becomes None."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(round(float(value)))
    except (TypeError, ValueError):
        return None
