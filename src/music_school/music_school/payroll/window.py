"""Date windows a report is scoped to.

Lesson dates are zero-padded ISO strings, so both window kinds compare them
as plain strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from ..common.datetime_utils import format_iso_date, month_bounds, month_key
from ..common.validators import require_iso_date, require_month
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class MonthWindow:
    month: str

    def contains(self, day: str) -> bool:
        return day.startswith(self.month)

    @property
    def label(self) -> str:
        return self.month


@dataclass(frozen=True)
class RangeWindow:
    start: str
    end: str

    def contains(self, day: str) -> bool:
        return self.start <= day <= self.end

    @property
    def label(self) -> str:
        return f"{self.start}_{self.end}"


DateWindow = Union[MonthWindow, RangeWindow]


def month_window(month: str) -> MonthWindow:
    return MonthWindow(month=require_month(month))


def range_window(start: str, end: str) -> RangeWindow:
    require_iso_date(start, "Start date")
    require_iso_date(end, "End date")
    if start > end:
        raise ValidationError("Start date must not be after end date")
    return RangeWindow(start=start, end=end)


def window_from_args(
    *,
    month: Optional[str] = None,
    start: Optional[str] = None,
    end: Optional[str] = None,
    today: date,
    default_to_range: bool = False,
) -> DateWindow:
    """Explicit range wins over month; otherwise the current month."""
    if start or end:
        if not (start and end):
            raise ValidationError("Both start and end dates are required")
        return range_window(start, end)
    if month:
        return month_window(month)
    if default_to_range:
        first, last = month_bounds(today)
        return RangeWindow(start=format_iso_date(first), end=format_iso_date(last))
    return MonthWindow(month=month_key(today))
