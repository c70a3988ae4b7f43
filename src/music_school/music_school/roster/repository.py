from __future__ import annotations

from typing import Any, Optional, Sequence

from ..common.validators import to_optional_int
from ..storage.repository import CollectionStore
from .model import Student, Teacher


def teacher_from_item(item: dict[str, Any]) -> Teacher:
    return Teacher(
        id=str(item["id"]),
        name=str(item.get("name") or ""),
        commission_rate=to_optional_int(item.get("commissionRate")) or 0,
        email=item.get("email") or "",
        phone=item.get("phone") or "",
        color=item.get("color") or "",
    )


def teacher_to_item(t: Teacher) -> dict[str, Any]:
    return {
        "id": t.id,
        "name": t.name,
        "email": t.email,
        "phone": t.phone,
        "commissionRate": t.commission_rate,
        "color": t.color,
    }


def student_from_item(item: dict[str, Any]) -> Student:
    return Student(
        id=str(item["id"]),
        name=str(item.get("name") or ""),
        grade=item.get("grade") or "",
        phone=item.get("phone") or "",
        parent_name=item.get("parentName") or "",
        notes=item.get("notes") or "",
        joined_date=item.get("joinedDate") or "",
    )


def student_to_item(s: Student) -> dict[str, Any]:
    return {
        "id": s.id,
        "name": s.name,
        "grade": s.grade,
        "phone": s.phone,
        "parentName": s.parent_name,
        "notes": s.notes,
        "joinedDate": s.joined_date,
    }


class TeacherRepository:
    COLLECTION = "teachers"

    def __init__(self, store: CollectionStore):
        self._store = store

    def list_all(self) -> Sequence[Teacher]:
        return [teacher_from_item(i) for i in self._store.get(self.COLLECTION)]

    def get_by_id(self, teacher_id: str) -> Optional[Teacher]:
        for t in self.list_all():
            if t.id == teacher_id:
                return t
        return None

    def add(self, teacher: Teacher) -> None:
        self._store.add(self.COLLECTION, teacher_to_item(teacher))

    def update(self, teacher: Teacher) -> bool:
        return self._store.update(self.COLLECTION, teacher_to_item(teacher))

    def delete(self, teacher_id: str) -> bool:
        return self._store.delete(self.COLLECTION, teacher_id)


class StudentRepository:
    COLLECTION = "students"

    def __init__(self, store: CollectionStore):
        self._store = store

    def list_all(self) -> Sequence[Student]:
        return [student_from_item(i) for i in self._store.get(self.COLLECTION)]

    def get_by_id(self, student_id: str) -> Optional[Student]:
        for s in self.list_all():
            if s.id == student_id:
                return s
        return None

    def add(self, student: Student) -> None:
        self._store.add(self.COLLECTION, student_to_item(student))

    def update(self, student: Student) -> bool:
        return self._store.update(self.COLLECTION, student_to_item(student))

    def delete(self, student_id: str) -> bool:
        return self._store.delete(self.COLLECTION, student_id)
