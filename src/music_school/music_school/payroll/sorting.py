"""Search and single-key sorting for tabular report rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

from ..core.enums import SortDirection
from .model import PayrollRecord

T = TypeVar("T")

PAYROLL_SORT_KEYS = ("teacherName", "total", "lessons", "hours", "avg")


@dataclass(frozen=True)
class SortState:
    key: str = "total"
    direction: SortDirection = SortDirection.DESC

    def request(self, key: str) -> "SortState":
        """Header click: a new key starts ascending; the same key flips direction."""
        if key == self.key and self.direction == SortDirection.ASC:
            return SortState(key=key, direction=SortDirection.DESC)
        return SortState(key=key, direction=SortDirection.ASC)

    @classmethod
    def parse(cls, key: Optional[str], direction: Optional[str], *, default: "SortState") -> "SortState":
        if not key:
            return default
        try:
            return cls(key=key, direction=SortDirection((direction or "asc").lower()))
        except ValueError:
            return cls(key=key, direction=SortDirection.ASC)

    def to_dict(self) -> dict:
        return {"key": self.key, "direction": self.direction.value}


def search_by_name(rows: Iterable[T], term: Optional[str], name_of: Callable[[T], str]) -> list[T]:
    """Case-insensitive substring match; an empty term keeps every row."""
    needle = (term or "").strip().lower()
    rows = list(rows)
    if not needle:
        return rows
    return [r for r in rows if needle in (name_of(r) or "").lower()]


def sort_rows(rows: Iterable[T], state: SortState, value_of: Callable[[T, str], Any]) -> list[T]:
    # sorted() keeps equal rows in their prior order in both directions.
    return sorted(rows, key=lambda r: value_of(r, state.key), reverse=state.direction == SortDirection.DESC)


def payroll_sort_value(record: PayrollRecord, key: str) -> Any:
    if key == "teacherName":
        return record.teacher_name
    if key == "total":
        return record.total_pay
    if key == "lessons":
        return record.total_lessons
    if key == "hours":
        return record.total_hours
    if key == "avg":
        return record.average_pay
    return record.amount_for(key)


def search_and_sort_payroll(
    records: Sequence[PayrollRecord],
    *,
    search: Optional[str] = None,
    state: SortState = SortState(),
) -> list[PayrollRecord]:
    matched = search_by_name(records, search, lambda r: r.teacher_name)
    return sort_rows(matched, state, payroll_sort_value)
