from __future__ import annotations

import logging
import re
from dataclasses import replace
from datetime import date, timedelta
from typing import Any, Iterable, Optional, Sequence

from ..catalog.service import CatalogService
from ..common.datetime_utils import add_months, format_iso_date, parse_iso_date
from ..common.validators import optional_int, require_int, require_iso_date, require_non_empty
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..roster.repository import TeacherRepository
from ..users.viewer import AdminViewer, Viewer
from .model import Lesson, LessonDraft, compute_lesson_cost, lesson_sort_key
from .repository import LessonRepository

logger = logging.getLogger(__name__)

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def next_lesson_id(day: str, existing: Iterable[Lesson], extra: int = 0) -> str:
    """Lesson ids are `YYYYMMDD` plus a 3-digit per-day sequence.

    Every id is scanned, not only lessons still dated `day`: a lesson moved to
    another day keeps its id.
    """
    date_part = day.replace("-", "")
    pattern = re.compile(rf"^{date_part}(\d{{3}})$")
    max_seq = 0
    for lesson in existing:
        m = pattern.match(lesson.id)
        if m:
            max_seq = max(max_seq, int(m.group(1)))
    return f"{date_part}{max_seq + 1 + extra:03d}"


def find_conflicts(candidate: Lesson, lessons: Iterable[Lesson]) -> list[Lesson]:
    """Same-teacher lessons on the same day whose time ranges overlap."""
    return [
        lesson for lesson in lessons
        if lesson.id != candidate.id
        and lesson.teacher_id == candidate.teacher_id
        and lesson.date == candidate.date
        and candidate.start_minutes < lesson.end_minutes
        and candidate.end_minutes > lesson.start_minutes
    ]


def generate_weekly_series(draft: LessonDraft, *, months: int) -> list[Lesson]:
    """Preview of a weekly recurring lesson from `draft.date` for `months` months.

    Preview lessons carry `temp-YYYY-MM-DD` ids until they are saved.
    """
    months = require_int(months, "Months", minimum=1, maximum=12)
    start = parse_iso_date(draft.date)
    end = add_months(start, months)
    out: list[Lesson] = []
    current = start
    while current < end:
        day = format_iso_date(current)
        out.append(
            Lesson(
                id=f"temp-{day}",
                teacher_id=draft.teacher_id,
                date=day,
                start_time=draft.start_time,
                duration_minutes=draft.duration_minutes,
                class_type=draft.class_type,
                title=draft.title,
                subject=draft.subject,
                student_ids=tuple(draft.student_ids),
                price=draft.price,
                cost=draft.cost,
                lesson_plan=draft.lesson_plan,
            )
        )
        current += timedelta(days=7)
    return out


class LessonService:
    """Use case: schedule lessons and record their progress."""

    def __init__(self, lessons: LessonRepository, teachers: TeacherRepository, catalog: CatalogService):
        self._lessons = lessons
        self._teachers = teachers
        self._catalog = catalog

    def list_lessons(self) -> Sequence[Lesson]:
        return sorted(self._lessons.list_all(), key=lesson_sort_key)

    def lessons_between(self, start: date, end: date, *, teacher_id: Optional[str] = None) -> list[Lesson]:
        start_s, end_s = format_iso_date(start), format_iso_date(end)
        return [
            lesson for lesson in self.list_lessons()
            if start_s <= lesson.date <= end_s and (teacher_id is None or lesson.teacher_id == teacher_id)
        ]

    def get(self, lesson_id: str) -> Lesson:
        lesson = self._lessons.get_by_id(lesson_id)
        if not lesson:
            raise NotFoundError("Lesson does not exist")
        return lesson

    def _validate_draft(self, draft: LessonDraft) -> LessonDraft:
        require_non_empty(draft.teacher_id, "Teacher")
        require_iso_date(draft.date, "Lesson date")
        if not _TIME_RE.match(draft.start_time or ""):
            raise ValidationError("Start time must be HH:MM")
        require_int(draft.duration_minutes, "Duration", minimum=1)
        if draft.price is not None:
            require_int(draft.price, "Price", minimum=0)
        config = self._catalog.get_config()
        if not config.find_class_type(draft.class_type):
            raise ValidationError(f"Unknown class type: {draft.class_type}")
        return replace(
            draft,
            title=(draft.title or "").strip(),
            subject=draft.subject or (config.subjects[0] if config.subjects else ""),
        )

    def _cost_for(self, teacher_id: str, price: Optional[int]) -> Optional[int]:
        teacher = self._teachers.get_by_id(teacher_id)
        if not teacher:
            raise ValidationError("Teacher does not exist")
        return compute_lesson_cost(price, teacher.commission_rate)

    def _build(self, draft: LessonDraft, lesson_id: str) -> Lesson:
        cost = draft.cost if draft.cost is not None else self._cost_for(draft.teacher_id, draft.price)
        return Lesson(
            id=lesson_id,
            teacher_id=draft.teacher_id,
            date=draft.date,
            start_time=draft.start_time,
            duration_minutes=int(draft.duration_minutes),
            class_type=draft.class_type,
            title=draft.title,
            subject=draft.subject,
            student_ids=tuple(draft.student_ids),
            price=draft.price,
            cost=cost,
            lesson_plan=draft.lesson_plan,
        )

    def create(self, draft: LessonDraft, *, force: bool = False) -> Lesson:
        """Schedule one lesson; refuses a teacher double-booking unless forced."""
        draft = self._validate_draft(draft)
        existing = self._lessons.list_all()
        lesson = self._build(draft, next_lesson_id(draft.date, existing))

        conflicts = find_conflicts(lesson, existing)
        if conflicts and not force:
            raise ValidationError(
                f"Teacher already has {len(conflicts)} lesson(s) overlapping {lesson.date} {lesson.start_time}"
            )

        self._lessons.add(lesson)
        logger.info("Scheduled lesson %s for teacher %s (cost=%s)", lesson.id, lesson.teacher_id, lesson.cost)
        return lesson

    def preview_weekly_series(self, draft: LessonDraft, *, months: int) -> list[Lesson]:
        """Unsaved series with costs filled in, for confirmation before saving."""
        draft = self._validate_draft(draft)
        return [self._build(replace(draft, date=p.date), p.id) for p in generate_weekly_series(draft, months=months)]

    def create_weekly_series(self, draft: LessonDraft, *, months: int) -> list[Lesson]:
        draft = self._validate_draft(draft)
        existing = list(self._lessons.list_all())
        counters: dict[str, int] = {}
        out: list[Lesson] = []
        for preview in generate_weekly_series(draft, months=months):
            extra = counters.get(preview.date, 0)
            counters[preview.date] = extra + 1
            lesson_id = next_lesson_id(preview.date, existing, extra)
            out.append(self._build(replace(draft, date=preview.date), lesson_id))
        self._lessons.add_many(out)
        logger.info("Scheduled %d weekly lesson(s) from %s", len(out), draft.date)
        return out

    def update(self, lesson_id: str, *, force: bool = False, **changes: Any) -> Lesson:
        """Edit scheduling fields.

        The stored cost is kept unless the teacher or price changes and no
        explicit cost is supplied; then it is derived from the current rate.
        """
        lesson = self.get(lesson_id)
        allowed = {
            "teacher_id", "date", "start_time", "duration_minutes", "class_type", "title", "subject",
            "student_ids", "price", "cost", "lesson_plan",
        }
        changes = {k: v for k, v in changes.items() if k in allowed}
        if "date" in changes:
            require_iso_date(changes["date"], "Lesson date")
        if "start_time" in changes and not _TIME_RE.match(changes["start_time"] or ""):
            raise ValidationError("Start time must be HH:MM")
        if "duration_minutes" in changes:
            changes["duration_minutes"] = require_int(changes["duration_minutes"], "Duration", minimum=1)
        if "class_type" in changes and changes["class_type"] != lesson.class_type:
            if not self._catalog.get_config().find_class_type(changes["class_type"]):
                raise ValidationError(f"Unknown class type: {changes['class_type']}")
        if "price" in changes:
            changes["price"] = optional_int(changes["price"], "Price", minimum=0)
        if "cost" in changes:
            changes["cost"] = optional_int(changes["cost"], "Cost", minimum=0)
        if "student_ids" in changes:
            changes["student_ids"] = tuple(changes["student_ids"] or ())

        updated = replace(lesson, **changes)
        repriced = updated.teacher_id != lesson.teacher_id or updated.price != lesson.price
        if repriced and "cost" not in changes:
            updated = replace(updated, cost=self._cost_for(updated.teacher_id, updated.price))

        if not force and find_conflicts(updated, self._lessons.list_all()):
            raise ValidationError(f"Teacher already has a lesson overlapping {updated.date} {updated.start_time}")

        self._lessons.update(updated)
        return updated

    def record_progress(
        self,
        lesson_id: str,
        *,
        viewer: Viewer,
        can_edit_calendar: bool,
        completed: Optional[bool] = None,
        lesson_plan: Optional[str] = None,
        student_notes: Optional[dict] = None,
    ) -> Lesson:
        """Completion flag and notes; the lesson's own teacher may always do this."""
        lesson = self.get(lesson_id)
        is_owner = bool(getattr(viewer, "teacher_id", None)) and viewer.teacher_id == lesson.teacher_id
        if not (isinstance(viewer, AdminViewer) or can_edit_calendar or is_owner):
            raise AuthorizationError("You can only update your own lessons")

        changes: dict[str, Any] = {}
        if completed is not None:
            changes["is_completed"] = bool(completed)
        if lesson_plan is not None:
            changes["lesson_plan"] = lesson_plan
        if student_notes is not None:
            if not isinstance(student_notes, dict):
                raise ValidationError("Student notes must be an object keyed by student id")
            notes = dict(lesson.student_notes)
            notes.update({str(k): str(v) for k, v in student_notes.items()})
            changes["student_notes"] = notes
        if not changes:
            return lesson

        updated = replace(lesson, **changes)
        self._lessons.update(updated)
        if completed is not None:
            logger.info("Lesson %s marked %s", lesson_id, "completed" if completed else "not completed")
        return updated

    def delete(self, lesson_id: str) -> None:
        if not self._lessons.delete(lesson_id):
            raise NotFoundError("Lesson does not exist")
