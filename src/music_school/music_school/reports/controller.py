from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, today_local
from ..common.web import csv_response, current_mode, current_viewer, module_required
from ..container import Container
from ..core.enums import ModuleId
from ..lessons.repository import lesson_to_item
from ..payroll.sorting import SortState
from ..payroll.window import window_from_args
from .service import DEFAULT_REPORT_SORT


def _range_window():
    return window_from_args(
        start=request.args.get("start"),
        end=request.args.get("end"),
        today=today_local(),
        default_to_range=True,
    )


def register(app: Flask, container: Container) -> None:
    def reports():
        return container.services(current_mode(container.default_mode)).report_service

    @app.route("/api/reports", methods=["GET"], endpoint="reports")
    @module_required(ModuleId.REPORTS)
    def report_view():
        sort = SortState.parse(request.args.get("sort"), request.args.get("dir"), default=DEFAULT_REPORT_SORT)
        report = reports().build_report(current_viewer(), _range_window(), search=request.args.get("q"), sort=sort)
        return jsonify(report.to_dict())

    @app.route("/api/reports/export", methods=["GET"], endpoint="reports_export")
    @module_required(ModuleId.REPORTS)
    def report_export():
        filename, payload = reports().export_report(current_viewer(), _range_window())
        return csv_response(app, filename, payload)

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @module_required(ModuleId.DASHBOARD)
    def dashboard():
        data = reports().dashboard(current_viewer(), now=now_local(), view=request.args.get("view", "day"))
        body = {
            "today": data.today,
            "view": data.view,
            "today_lessons": data.today_lessons,
            "top_subjects": [p.to_dict() for p in data.top_subjects],
            "last_days": [p.to_dict() for p in data.last_days],
            "lessons_by_date": {d: [lesson_to_item(lesson) for lesson in ls] for d, ls in data.lessons_by_date.items()},
            "in_progress": data.in_progress,
        }
        if data.teacher_count is not None:
            body.update(
                teacher_count=data.teacher_count,
                monthly_hours=data.monthly_hours,
                student_count=data.student_count,
            )
        return jsonify(body)
