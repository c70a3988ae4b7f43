"""Operating report and dashboard figures.

Unlike payroll these count every lesson in range, completed or not; only the
cost figures are restricted to completed lessons.
"""

from __future__ import annotations

import logging
import math
from collections import Counter, OrderedDict
from datetime import datetime, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import format_iso_date, month_key, start_of_week
from ..core.constants import DASHBOARD_ACTIVITY_DAYS, DASHBOARD_TOP_SUBJECTS
from ..core.enums import SortDirection
from ..core.exceptions import ValidationError
from ..lessons.model import Lesson, lesson_sort_key
from ..lessons.repository import LessonRepository
from ..payroll.export import report_filename, report_lessons_csv
from ..payroll.sorting import SortState, search_by_name, sort_rows
from ..payroll.visibility import teacher_id_scope
from ..payroll.window import RangeWindow
from ..roster.repository import StudentRepository, TeacherRepository
from ..users.viewer import AdminViewer, Viewer
from .model import CountPoint, Dashboard, OperatingReport, TeacherStat

logger = logging.getLogger(__name__)

REPORT_SORT_KEYS = ("name", "lessons", "hours", "cost", "avg")
DEFAULT_REPORT_SORT = SortState(key="cost", direction=SortDirection.DESC)
DASHBOARD_VIEWS = ("day", "week", "month")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def main_subject(subject: str) -> str:
    """`Piano (classical)` -> `Piano`."""
    return (subject or "").split(" ")[0]


def subject_distribution(lessons: Iterable[Lesson], limit: Optional[int] = None) -> list[CountPoint]:
    counts = Counter(main_subject(lesson.subject) for lesson in lessons)
    # Counter keeps first-seen order, so ties stay in encounter order.
    points = sorted((CountPoint(name=k, count=v) for k, v in counts.items()), key=lambda p: p.count, reverse=True)
    return points[:limit] if limit is not None else points


def daily_activity(lessons: Iterable[Lesson]) -> list[CountPoint]:
    counts = Counter(lesson.date[5:] for lesson in lessons)
    return [CountPoint(name=day, count=counts[day]) for day in sorted(counts)]


def teacher_stats(lessons: Iterable[Lesson], teacher_names: dict[str, str]) -> list[TeacherStat]:
    acc: "OrderedDict[str, list]" = OrderedDict()
    for lesson in lessons:
        row = acc.setdefault(lesson.teacher_id, [0, 0.0, 0])
        row[0] += 1
        row[1] += lesson.duration_minutes / 60
        if lesson.is_completed:
            row[2] += lesson.cost or 0
    return [
        TeacherStat(
            teacher_id=tid,
            name=teacher_names.get(tid, "Unknown"),
            lessons=count,
            hours=hours,
            cost=cost,
            avg=_round_half_up(cost / count) if count else 0,
        )
        for tid, (count, hours, cost) in acc.items()
    ]


def _stat_value(stat: TeacherStat, key: str):
    return getattr(stat, key)


class ReportService:
    def __init__(self, lessons: LessonRepository, teachers: TeacherRepository, students: StudentRepository):
        self._lessons = lessons
        self._teachers = teachers
        self._students = students

    def _scoped_lessons(self, viewer: Viewer) -> list[Lesson]:
        scope = teacher_id_scope(viewer)
        if scope is not None and not scope:
            return []
        lessons = self._lessons.list_all()
        if scope is None:
            return list(lessons)
        return [lesson for lesson in lessons if lesson.teacher_id in scope]

    def _teacher_names(self) -> dict[str, str]:
        return {t.id: t.name for t in self._teachers.list_all()}

    def lessons_in_range(self, viewer: Viewer, window: RangeWindow) -> list[Lesson]:
        in_range = [lesson for lesson in self._scoped_lessons(viewer) if window.contains(lesson.date)]
        return sorted(in_range, key=lesson_sort_key)

    def build_report(
        self,
        viewer: Viewer,
        window: RangeWindow,
        *,
        search: Optional[str] = None,
        sort: SortState = DEFAULT_REPORT_SORT,
    ) -> OperatingReport:
        if sort.key not in REPORT_SORT_KEYS:
            raise ValidationError(f"Unknown sort key: {sort.key}")
        lessons = self.lessons_in_range(viewer, window)
        completed = [lesson for lesson in lessons if lesson.is_completed]
        total = len(lessons)

        stats = teacher_stats(lessons, self._teacher_names())
        stats = sort_rows(search_by_name(stats, search, lambda s: s.name), sort, _stat_value)
        logger.debug("report %s..%s: %d lesson(s), %d teacher row(s)", window.start, window.end, total, len(stats))

        return OperatingReport(
            start=window.start,
            end=window.end,
            total_lessons=total,
            completed_lessons=len(completed),
            completion_rate=_round_half_up(len(completed) / total * 100) if total else 0,
            total_cost=sum(lesson.cost or 0 for lesson in completed),
            total_hours=sum(lesson.duration_minutes / 60 for lesson in lessons),
            active_students=len({sid for lesson in lessons for sid in lesson.student_ids}),
            subjects=subject_distribution(lessons),
            daily=daily_activity(lessons),
            teacher_stats=stats,
        )

    def export_report(self, viewer: Viewer, window: RangeWindow) -> tuple[str, bytes]:
        lessons = self.lessons_in_range(viewer, window)
        return report_filename(window.start, window.end), report_lessons_csv(lessons, self._teacher_names())

    def dashboard(self, viewer: Viewer, *, now: datetime, view: str = "day") -> Dashboard:
        """Landing page figures.

        The schedule lists are school-wide; the head-count and hour cards
        are admin only.
        """
        if view not in DASHBOARD_VIEWS:
            raise ValidationError(f"View must be one of {', '.join(DASHBOARD_VIEWS)}")
        lessons = sorted(self._lessons.list_all(), key=lesson_sort_key)
        today = now.date()
        today_s = format_iso_date(today)
        month = month_key(today)
        month_lessons = [lesson for lesson in lessons if lesson.date.startswith(month)]

        last_days: list[CountPoint] = []
        for offset in range(DASHBOARD_ACTIVITY_DAYS - 1, -1, -1):
            day = format_iso_date(today - timedelta(days=offset))
            last_days.append(CountPoint(name=day[5:], count=sum(1 for lesson in lessons if lesson.date == day)))

        if view == "day":
            listed = [lesson for lesson in lessons if lesson.date == today_s]
        elif view == "week":
            first = start_of_week(today)
            start_s, end_s = format_iso_date(first), format_iso_date(first + timedelta(days=6))
            listed = [lesson for lesson in lessons if start_s <= lesson.date <= end_s]
        else:
            listed = month_lessons

        grouped: dict[str, list[Lesson]] = {}
        for lesson in listed:
            grouped.setdefault(lesson.date, []).append(lesson)

        minute_now = now.hour * 60 + now.minute
        in_progress = [
            lesson.id for lesson in lessons
            if lesson.date == today_s and lesson.start_minutes <= minute_now < lesson.end_minutes
        ]

        is_admin = isinstance(viewer, AdminViewer)
        return Dashboard(
            today=today_s,
            view=view,
            today_lessons=sum(1 for lesson in lessons if lesson.date == today_s),
            teacher_count=len(self._teachers.list_all()) if is_admin else None,
            monthly_hours=sum(lesson.duration_minutes / 60 for lesson in month_lessons) if is_admin else None,
            student_count=len(self._students.list_all()) if is_admin else None,
            top_subjects=subject_distribution(month_lessons, DASHBOARD_TOP_SUBJECTS),
            last_days=last_days,
            lessons_by_date=grouped,
            in_progress=in_progress,
        )
