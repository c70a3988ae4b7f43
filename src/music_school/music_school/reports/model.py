from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..lessons.model import Lesson


@dataclass(frozen=True)
class CountPoint:
    name: str
    count: int

    def to_dict(self) -> dict:
        return {"name": self.name, "count": self.count}


@dataclass(frozen=True)
class TeacherStat:
    """Per-teacher line of the operating report.

    Lessons and hours count every lesson in range; cost counts completed
    lessons only.
    """

    teacher_id: str
    name: str
    lessons: int
    hours: float
    cost: int
    avg: int

    def to_dict(self) -> dict:
        return {
            "teacher_id": self.teacher_id,
            "name": self.name,
            "lessons": self.lessons,
            "hours": self.hours,
            "cost": self.cost,
            "avg": self.avg,
        }


@dataclass(frozen=True)
class OperatingReport:
    start: str
    end: str
    total_lessons: int
    completed_lessons: int
    completion_rate: int
    total_cost: int
    total_hours: float
    active_students: int
    subjects: list[CountPoint] = field(default_factory=list)
    daily: list[CountPoint] = field(default_factory=list)
    teacher_stats: list[TeacherStat] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "start": self.start,
            "end": self.end,
            "total_lessons": self.total_lessons,
            "completed_lessons": self.completed_lessons,
            "completion_rate": self.completion_rate,
            "total_cost": self.total_cost,
            "total_hours": self.total_hours,
            "active_students": self.active_students,
            "subjects": [p.to_dict() for p in self.subjects],
            "daily": [p.to_dict() for p in self.daily],
            "teacher_stats": [s.to_dict() for s in self.teacher_stats],
        }


@dataclass(frozen=True)
class Dashboard:
    today: str
    view: str
    today_lessons: int
    teacher_count: Optional[int]
    monthly_hours: Optional[float]
    student_count: Optional[int]
    top_subjects: list[CountPoint]
    last_days: list[CountPoint]
    lessons_by_date: dict[str, list[Lesson]]
    in_progress: list[str]
