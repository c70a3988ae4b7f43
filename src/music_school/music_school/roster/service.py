from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Optional, Sequence

from ..common.datetime_utils import format_iso_date, today_local
from ..common.ids import new_id
from ..common.validators import require_int, require_non_empty
from ..core.exceptions import NotFoundError
from .model import Student, Teacher
from .repository import StudentRepository, TeacherRepository

logger = logging.getLogger(__name__)


class TeacherService:
    """Use case: manage teachers and their commission rates.

    A lesson's cost is fixed when the lesson is created, so changing a rate
    here only affects lessons created afterwards.
    """

    def __init__(self, teachers: TeacherRepository):
        self._teachers = teachers

    def list_teachers(self) -> Sequence[Teacher]:
        return self._teachers.list_all()

    def get(self, teacher_id: str) -> Teacher:
        teacher = self._teachers.get_by_id(teacher_id)
        if not teacher:
            raise NotFoundError("Teacher does not exist")
        return teacher

    def create(self, *, name: str, commission_rate: Any, email: str = "", phone: str = "", color: str = "") -> Teacher:
        teacher = Teacher(
            id=new_id("t"),
            name=require_non_empty(name, "Teacher name"),
            commission_rate=require_int(commission_rate, "Commission rate", minimum=0, maximum=100),
            email=(email or "").strip(),
            phone=(phone or "").strip(),
            color=(color or "").strip(),
        )
        self._teachers.add(teacher)
        logger.info("Created teacher %s (%s%%)", teacher.id, teacher.commission_rate)
        return teacher

    def update(self, teacher_id: str, **changes: Any) -> Teacher:
        teacher = self.get(teacher_id)
        if "name" in changes:
            changes["name"] = require_non_empty(changes["name"], "Teacher name")
        if "commission_rate" in changes:
            changes["commission_rate"] = require_int(changes["commission_rate"], "Commission rate", minimum=0, maximum=100)
        allowed = {k: v for k, v in changes.items() if k in {"name", "commission_rate", "email", "phone", "color"}}
        updated = replace(teacher, **allowed)
        self._teachers.update(updated)
        return updated

    def set_commission_rate(self, teacher_id: str, rate: Any) -> Teacher:
        updated = self.update(teacher_id, commission_rate=rate)
        logger.info("Teacher %s commission rate set to %s%%", teacher_id, updated.commission_rate)
        return updated

    def delete(self, teacher_id: str) -> None:
        if not self._teachers.delete(teacher_id):
            raise NotFoundError("Teacher does not exist")


class StudentService:
    def __init__(self, students: StudentRepository):
        self._students = students

    def list_students(self, *, search: Optional[str] = None) -> Sequence[Student]:
        students = self._students.list_all()
        term = (search or "").strip().lower()
        if not term:
            return students
        return [
            s for s in students
            if term in s.name.lower() or term in s.phone.lower() or term in s.parent_name.lower()
        ]

    def get(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student does not exist")
        return student

    def create(self, *, name: str, grade: str = "", phone: str = "", parent_name: str = "", notes: str = "",
               joined_date: Optional[str] = None) -> Student:
        student = Student(
            id=new_id("s"),
            name=require_non_empty(name, "Student name"),
            grade=(grade or "").strip(),
            phone=(phone or "").strip(),
            parent_name=(parent_name or "").strip(),
            notes=notes or "",
            joined_date=joined_date or format_iso_date(today_local()),
        )
        self._students.add(student)
        return student

    def update(self, student_id: str, **changes: Any) -> Student:
        student = self.get(student_id)
        if "name" in changes:
            changes["name"] = require_non_empty(changes["name"], "Student name")
        allowed = {
            k: v for k, v in changes.items()
            if k in {"name", "grade", "phone", "parent_name", "notes", "joined_date"}
        }
        updated = replace(student, **allowed)
        self._students.update(updated)
        return updated

    def delete(self, student_id: str) -> None:
        if not self._students.delete(student_id):
            raise NotFoundError("Student does not exist")
