from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from ..common.validators import to_optional_int
from ..storage.repository import CollectionStore
from .model import Lesson


def lesson_from_item(item: dict[str, Any]) -> Lesson:
    student_ids = item.get("studentIds") or []
    notes = item.get("studentNotes")
    return Lesson(
        id=str(item["id"]),
        teacher_id=str(item.get("teacherId") or ""),
        date=str(item.get("date") or ""),
        start_time=str(item.get("startTime") or "00:00"),
        duration_minutes=to_optional_int(item.get("durationMinutes")) or 0,
        class_type=str(item.get("type") or ""),
        title=item.get("title") or "",
        subject=item.get("subject") or "",
        student_ids=tuple(str(s) for s in student_ids) if isinstance(student_ids, list) else (),
        price=to_optional_int(item.get("price")),
        cost=to_optional_int(item.get("cost")),
        is_completed=bool(item.get("isCompleted")),
        lesson_plan=item.get("lessonPlan") or "",
        student_notes=dict(notes) if isinstance(notes, dict) else {},
    )


def lesson_to_item(lesson: Lesson) -> dict[str, Any]:
    return {
        "id": lesson.id,
        "title": lesson.title,
        "subject": lesson.subject,
        "teacherId": lesson.teacher_id,
        "studentIds": list(lesson.student_ids),
        "date": lesson.date,
        "startTime": lesson.start_time,
        "durationMinutes": lesson.duration_minutes,
        "type": lesson.class_type,
        "price": lesson.price,
        "cost": lesson.cost,
        "isCompleted": lesson.is_completed,
        "lessonPlan": lesson.lesson_plan,
        "studentNotes": dict(lesson.student_notes),
    }


class LessonRepository:
    COLLECTION = "lessons"

    def __init__(self, store: CollectionStore):
        self._store = store

    def list_all(self) -> Sequence[Lesson]:
        return [lesson_from_item(i) for i in self._store.get(self.COLLECTION)]

    def get_by_id(self, lesson_id: str) -> Optional[Lesson]:
        for lesson in self.list_all():
            if lesson.id == lesson_id:
                return lesson
        return None

    def add(self, lesson: Lesson) -> None:
        self._store.add(self.COLLECTION, lesson_to_item(lesson))

    def add_many(self, lessons: Iterable[Lesson]) -> int:
        return self._store.add_many(self.COLLECTION, [lesson_to_item(lesson) for lesson in lessons])

    def update(self, lesson: Lesson) -> bool:
        return self._store.update(self.COLLECTION, lesson_to_item(lesson))

    def delete(self, lesson_id: str) -> bool:
        return self._store.delete(self.COLLECTION, lesson_id)
