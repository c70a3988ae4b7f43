from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_int, require_iso_date
from ..common.web import current_mode, current_viewer, json_body, login_required, module_required, session_can
from ..container import Container
from ..core.enums import ModuleId
from ..core.exceptions import ValidationError
from .model import LessonDraft
from .repository import lesson_to_item

_CHANGE_FIELDS = {
    "teacherId": "teacher_id",
    "date": "date",
    "startTime": "start_time",
    "durationMinutes": "duration_minutes",
    "type": "class_type",
    "title": "title",
    "subject": "subject",
    "studentIds": "student_ids",
    "price": "price",
    "cost": "cost",
    "lessonPlan": "lesson_plan",
}


def _draft_from(data: dict) -> LessonDraft:
    student_ids = data.get("studentIds") or []
    if not isinstance(student_ids, list):
        raise ValidationError("studentIds must be a list")
    return LessonDraft(
        teacher_id=data.get("teacherId") or "",
        date=data.get("date") or "",
        start_time=data.get("startTime") or "",
        duration_minutes=data.get("durationMinutes"),
        class_type=data.get("type") or "",
        title=data.get("title") or "",
        subject=data.get("subject") or "",
        student_ids=tuple(str(s) for s in student_ids),
        price=optional_int(data.get("price"), "Price", minimum=0),
        cost=optional_int(data.get("cost"), "Cost", minimum=0),
        lesson_plan=data.get("lessonPlan") or "",
    )


def register(app: Flask, container: Container) -> None:
    def services():
        return container.services(current_mode(container.default_mode))

    @app.route("/api/lessons", methods=["GET"], endpoint="list_lessons")
    @module_required(ModuleId.CALENDAR)
    def list_lessons():
        start, end = request.args.get("start"), request.args.get("end")
        svc = services().lesson_service
        if start or end:
            if not (start and end):
                raise ValidationError("Both start and end dates are required")
            lessons = svc.lessons_between(
                parse_iso_date(require_iso_date(start, "Start date")),
                parse_iso_date(require_iso_date(end, "End date")),
                teacher_id=request.args.get("teacher_id") or None,
            )
        else:
            lessons = svc.list_lessons()
        return jsonify([lesson_to_item(lesson) for lesson in lessons])

    @app.route("/api/lessons", methods=["POST"], endpoint="add_lesson")
    @module_required(ModuleId.CALENDAR, edit=True)
    def add_lesson():
        data = json_body()
        lesson = services().lesson_service.create(_draft_from(data), force=bool(data.get("force")))
        return jsonify(lesson_to_item(lesson)), 201

    @app.route("/api/lessons/series/preview", methods=["POST"], endpoint="preview_series")
    @module_required(ModuleId.CALENDAR, edit=True)
    def preview_series():
        data = json_body()
        lessons = services().lesson_service.preview_weekly_series(_draft_from(data), months=data.get("months", 1))
        return jsonify([lesson_to_item(lesson) for lesson in lessons])

    @app.route("/api/lessons/series", methods=["POST"], endpoint="add_series")
    @module_required(ModuleId.CALENDAR, edit=True)
    def add_series():
        data = json_body()
        lessons = services().lesson_service.create_weekly_series(_draft_from(data), months=data.get("months", 1))
        return jsonify([lesson_to_item(lesson) for lesson in lessons]), 201

    @app.route("/api/lessons/<lesson_id>", methods=["PUT"], endpoint="update_lesson")
    @module_required(ModuleId.CALENDAR, edit=True)
    def update_lesson(lesson_id: str):
        data = json_body()
        changes = {attr: data[key] for key, attr in _CHANGE_FIELDS.items() if key in data}
        lesson = services().lesson_service.update(lesson_id, force=bool(data.get("force")), **changes)
        return jsonify(lesson_to_item(lesson))

    @app.route("/api/lessons/<lesson_id>/progress", methods=["PATCH"], endpoint="lesson_progress")
    @login_required
    def lesson_progress(lesson_id: str):
        data = json_body()
        completed = data.get("isCompleted")
        lesson = services().lesson_service.record_progress(
            lesson_id,
            viewer=current_viewer(),
            can_edit_calendar=session_can(ModuleId.CALENDAR, edit=True),
            completed=bool(completed) if completed is not None else None,
            lesson_plan=data.get("lessonPlan"),
            student_notes=data.get("studentNotes"),
        )
        return jsonify(lesson_to_item(lesson))

    @app.route("/api/lessons/<lesson_id>", methods=["DELETE"], endpoint="delete_lesson")
    @module_required(ModuleId.CALENDAR, edit=True)
    def delete_lesson(lesson_id: str):
        services().lesson_service.delete(lesson_id)
        return jsonify({"success": True})
