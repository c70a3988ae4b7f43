"""Payroll aggregation.

Pure functions over an in-memory snapshot of lessons, teachers and the
class-type catalog. Missing money fields count as zero and unknown class
types get a breakdown slot on first encounter; nothing here raises for
malformed lesson data.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..catalog.model import ClassType
from ..lessons.model import Lesson, lesson_sort_key
from ..roster.model import Teacher
from .model import ClassTypeTotals, PayrollRecord
from .window import DateWindow


def completed_in_window(
    lessons: Iterable[Lesson],
    window: DateWindow,
    teacher_ids: Optional[Iterable[str]] = None,
) -> list[Lesson]:
    """Completed lessons dated inside the window, optionally for some teachers only."""
    allowed = None if teacher_ids is None else frozenset(teacher_ids)
    return [
        lesson for lesson in lessons
        if lesson.is_completed
        and window.contains(lesson.date)
        and (allowed is None or lesson.teacher_id in allowed)
    ]


def aggregate_payroll(
    lessons: Iterable[Lesson],
    teachers: Sequence[Teacher],
    class_types: Sequence[ClassType],
    window: DateWindow,
) -> list[PayrollRecord]:
    """One record per teacher in `teachers`, in the given order.

    `teachers` must already be narrowed to the viewer's scope. Every catalog
    class type is pre-seeded in the breakdown so empty types report zero.
    """
    scoped = completed_in_window(lessons, window, [t.id for t in teachers])
    by_teacher: dict[str, list[Lesson]] = {t.id: [] for t in teachers}
    for lesson in scoped:
        by_teacher[lesson.teacher_id].append(lesson)

    records: list[PayrollRecord] = []
    for teacher in teachers:
        slots: dict[str, list] = {ct.id: [0, 0.0, 0] for ct in class_types}
        total_hours = 0.0
        total_pay = 0
        teacher_lessons = by_teacher[teacher.id]

        for lesson in teacher_lessons:
            hours = lesson.duration_minutes / 60
            amount = lesson.cost or 0
            total_hours += hours
            total_pay += amount

            slot = slots.setdefault(lesson.class_type, [0, 0.0, 0])
            slot[0] += 1
            slot[1] += hours
            slot[2] += amount

        records.append(
            PayrollRecord(
                teacher_id=teacher.id,
                teacher_name=teacher.name,
                total_hours=total_hours,
                total_lessons=len(teacher_lessons),
                total_pay=total_pay,
                breakdown={k: ClassTypeTotals(count=c, hours=h, amount=a) for k, (c, h, a) in slots.items()},
            )
        )
    return records


def total_revenue(
    lessons: Iterable[Lesson],
    window: DateWindow,
    teacher_ids: Optional[Iterable[str]] = None,
) -> int:
    """Tuition collected for completed lessons in the window (missing price = 0)."""
    return sum(lesson.price or 0 for lesson in completed_in_window(lessons, window, teacher_ids))


def lessons_for_teacher(lessons: Iterable[Lesson], window: DateWindow, teacher_id: str) -> list[Lesson]:
    """A teacher's paid lessons in the window, ordered by date then start time."""
    return sorted(completed_in_window(lessons, window, [teacher_id]), key=lesson_sort_key)
