from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Lesson:
    """One scheduled teaching session.

    `cost` is what the teacher is paid for this lesson. It is snapshotted from
    the teacher's commission rate when the lesson is created and is not
    re-derived when that rate changes later.
    """

    id: str
    teacher_id: str
    date: str
    start_time: str
    duration_minutes: int
    class_type: str
    title: str = ""
    subject: str = ""
    student_ids: tuple[str, ...] = ()
    price: Optional[int] = None
    cost: Optional[int] = None
    is_completed: bool = False
    lesson_plan: str = ""
    student_notes: dict = field(default_factory=dict)

    @property
    def hours(self) -> float:
        return self.duration_minutes / 60

    @property
    def start_minutes(self) -> int:
        hh, _, mm = self.start_time.partition(":")
        return int(hh or 0) * 60 + int(mm or 0)

    @property
    def end_minutes(self) -> int:
        return self.start_minutes + self.duration_minutes


@dataclass(frozen=True)
class LessonDraft:
    """Input for scheduling a lesson (single or recurring)."""

    teacher_id: str
    date: str
    start_time: str
    duration_minutes: int
    class_type: str
    title: str = ""
    subject: str = ""
    student_ids: tuple[str, ...] = ()
    price: Optional[int] = None
    cost: Optional[int] = None
    lesson_plan: str = ""


def compute_lesson_cost(price: Optional[int], commission_rate: Optional[int]) -> Optional[int]:
    """Teacher pay for a lesson: price x rate / 100, rounded half up."""
    if price is None:
        return None
    if not commission_rate:
        return 0
    return int(math.floor(price * commission_rate / 100 + 0.5))


def lesson_sort_key(lesson: Lesson) -> tuple[str, str]:
    return lesson.date, lesson.start_time
