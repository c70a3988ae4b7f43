from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_mode, json_body, login_required, module_required
from ..container import Container
from ..core.enums import ModuleId
from .repository import student_to_item, teacher_to_item

_TEACHER_FIELDS = {"name": "name", "commissionRate": "commission_rate", "email": "email", "phone": "phone", "color": "color"}
_STUDENT_FIELDS = {
    "name": "name",
    "grade": "grade",
    "phone": "phone",
    "parentName": "parent_name",
    "notes": "notes",
    "joinedDate": "joined_date",
}


def _pick(data: dict, fields: dict) -> dict:
    return {attr: data[key] for key, attr in fields.items() if key in data}


def register(app: Flask, container: Container) -> None:
    def services():
        return container.services(current_mode(container.default_mode))

    # Teachers are listed for every signed-in user: calendar and payroll need names.
    @app.route("/api/teachers", methods=["GET"], endpoint="list_teachers")
    @login_required
    def list_teachers():
        return jsonify([teacher_to_item(t) for t in services().teacher_service.list_teachers()])

    @app.route("/api/teachers", methods=["POST"], endpoint="add_teacher")
    @module_required(ModuleId.TEACHERS, edit=True)
    def add_teacher():
        data = json_body()
        teacher = services().teacher_service.create(
            name=data.get("name", ""),
            commission_rate=data.get("commissionRate"),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            color=data.get("color", ""),
        )
        return jsonify(teacher_to_item(teacher)), 201

    @app.route("/api/teachers/<teacher_id>", methods=["PUT"], endpoint="update_teacher")
    @module_required(ModuleId.TEACHERS, edit=True)
    def update_teacher(teacher_id: str):
        teacher = services().teacher_service.update(teacher_id, **_pick(json_body(), _TEACHER_FIELDS))
        return jsonify(teacher_to_item(teacher))

    @app.route("/api/teachers/<teacher_id>/commission-rate", methods=["PUT"], endpoint="set_commission_rate")
    @module_required(ModuleId.TEACHERS, edit=True)
    def set_commission_rate(teacher_id: str):
        teacher = services().teacher_service.set_commission_rate(teacher_id, json_body().get("commissionRate"))
        return jsonify(teacher_to_item(teacher))

    @app.route("/api/teachers/<teacher_id>", methods=["DELETE"], endpoint="delete_teacher")
    @module_required(ModuleId.TEACHERS, edit=True)
    def delete_teacher(teacher_id: str):
        services().teacher_service.delete(teacher_id)
        return jsonify({"success": True})

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @module_required(ModuleId.STUDENTS)
    def list_students():
        students = services().student_service.list_students(search=request.args.get("q"))
        return jsonify([student_to_item(s) for s in students])

    @app.route("/api/students", methods=["POST"], endpoint="add_student")
    @module_required(ModuleId.STUDENTS, edit=True)
    def add_student():
        student = services().student_service.create(**_pick(json_body(), _STUDENT_FIELDS))
        return jsonify(student_to_item(student)), 201

    @app.route("/api/students/<student_id>", methods=["PUT"], endpoint="update_student")
    @module_required(ModuleId.STUDENTS, edit=True)
    def update_student(student_id: str):
        student = services().student_service.update(student_id, **_pick(json_body(), _STUDENT_FIELDS))
        return jsonify(student_to_item(student))

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    @module_required(ModuleId.STUDENTS, edit=True)
    def delete_student(student_id: str):
        services().student_service.delete(student_id)
        return jsonify({"success": True})
