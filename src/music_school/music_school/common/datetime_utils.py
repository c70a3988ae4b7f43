from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta

_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def is_month_key(value: str) -> bool:
    return bool(value) and bool(_MONTH_RE.match(value)) and 1 <= int(value[5:7]) <= 12


def month_key(value: date) -> str:
    """YYYY-MM of a date, used as a lexicographic prefix of ISO dates."""
    return value.strftime("%Y-%m")


def month_bounds(value: date) -> tuple[date, date]:
    """First and last day of the month containing `value`."""
    last_day = calendar.monthrange(value.year, value.month)[1]
    return value.replace(day=1), value.replace(day=last_day)


def start_of_week(value: date) -> date:
    """Sunday on or before `value` (weeks run Sunday..Saturday)."""
    return value - timedelta(days=(value.weekday() + 1) % 7)


def add_months(value: date, months: int) -> date:
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def today_local() -> date:
    return now_local().date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
