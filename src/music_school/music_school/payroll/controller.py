from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.web import csv_response, current_mode, current_viewer, module_required
from ..container import Container
from ..core.enums import ModuleId
from ..lessons.repository import lesson_to_item
from .sorting import SortState
from .window import window_from_args


def _window():
    return window_from_args(
        month=request.args.get("month"),
        start=request.args.get("start"),
        end=request.args.get("end"),
        today=today_local(),
    )


def _sort() -> SortState:
    return SortState.parse(request.args.get("sort"), request.args.get("dir"), default=SortState())


def register(app: Flask, container: Container) -> None:
    def payroll():
        return container.services(current_mode(container.default_mode)).payroll_report_service

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll")
    @module_required(ModuleId.PAYROLL)
    def payroll_view():
        summary = payroll().build_payroll(current_viewer(), _window(), search=request.args.get("q"), sort=_sort())
        return jsonify(summary.to_dict())

    @app.route("/api/payroll/export", methods=["GET"], endpoint="payroll_export")
    @module_required(ModuleId.PAYROLL)
    def payroll_export():
        filename, payload = payroll().export_payroll(
            current_viewer(), _window(), search=request.args.get("q"), sort=_sort()
        )
        return csv_response(app, filename, payload)

    @app.route("/api/payroll/<teacher_id>/lessons", methods=["GET"], endpoint="payroll_teacher_lessons")
    @module_required(ModuleId.PAYROLL)
    def payroll_teacher_lessons(teacher_id: str):
        lessons = payroll().teacher_lessons(current_viewer(), _window(), teacher_id)
        return jsonify([lesson_to_item(lesson) for lesson in lessons])
