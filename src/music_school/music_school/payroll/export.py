"""CSV renderings of payroll and report tables.

Files are UTF-8 with a BOM so spreadsheet tools pick the right encoding.
"""

from __future__ import annotations

import csv
import io
from typing import Iterable, Mapping, Sequence

from ..catalog.model import ClassType
from ..lessons.model import Lesson
from .model import PayrollRecord
from .window import DateWindow


def _to_bytes(header: Sequence[str], rows: Iterable[Sequence]) -> bytes:
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return out.getvalue().encode("utf-8-sig")


def payroll_filename(window: DateWindow) -> str:
    return f"payroll_{window.label}.csv"


def payroll_csv(records: Iterable[PayrollRecord], class_types: Sequence[ClassType]) -> bytes:
    header = ["Teacher", "Lessons", "Hours"] + [f"{ct.name} pay" for ct in class_types] + ["Total pay"]
    rows = (
        [r.teacher_name, r.total_lessons, f"{r.total_hours:.1f}"]
        + [r.amount_for(ct.id) for ct in class_types]
        + [r.total_pay]
        for r in records
    )
    return _to_bytes(header, rows)


def report_filename(start: str, end: str) -> str:
    return f"report_{start}_{end}.csv"


def report_lessons_csv(lessons: Iterable[Lesson], teacher_names: Mapping[str, str]) -> bytes:
    header = ["Date", "Time", "Title", "Subject", "Teacher", "Students", "Duration (min)", "Cost", "Status"]
    rows = (
        [
            lesson.date,
            lesson.start_time,
            lesson.title,
            lesson.subject,
            teacher_names.get(lesson.teacher_id, "Unknown"),
            len(lesson.student_ids),
            lesson.duration_minutes,
            lesson.cost or 0,
            "Completed" if lesson.is_completed else "Not completed",
        ]
        for lesson in lessons
    )
    return _to_bytes(header, rows)
