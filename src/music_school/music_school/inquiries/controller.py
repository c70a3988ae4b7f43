from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..common.web import current_mode, json_body, module_required
from ..container import Container
from ..core.enums import ModuleId


def register(app: Flask, container: Container) -> None:
    def inquiries():
        return container.services(current_mode(container.default_mode)).inquiry_service

    # Public website form; no login.
    @app.route("/api/inquiries", methods=["POST"], endpoint="submit_inquiry")
    def submit_inquiry():
        data = json_body()
        inquiry = inquiries().submit(
            name=data.get("name", ""),
            phone=data.get("phone", ""),
            subject=data.get("subject", ""),
            message=data.get("message", ""),
            now=now_local(),
        )
        return jsonify({"success": True, "id": inquiry.id}), 201

    @app.route("/api/inquiries", methods=["GET"], endpoint="list_inquiries")
    @module_required(ModuleId.INQUIRIES)
    def list_inquiries():
        rows = inquiries().list_inquiries(status=request.args.get("status"), search=request.args.get("q"))
        return jsonify([i.to_dict() for i in rows])

    @app.route("/api/inquiries/<inquiry_id>", methods=["PUT"], endpoint="follow_up_inquiry")
    @module_required(ModuleId.INQUIRIES, edit=True)
    def follow_up_inquiry(inquiry_id: str):
        data = json_body()
        inquiry = inquiries().follow_up(
            inquiry_id,
            status=data.get("status"),
            admin_notes=data.get("admin_notes"),
            contacted_by=session.get("name") or "",
            now=now_local(),
        )
        return jsonify(inquiry.to_dict())

    @app.route("/api/inquiries/<inquiry_id>", methods=["DELETE"], endpoint="delete_inquiry")
    @module_required(ModuleId.INQUIRIES, edit=True)
    def delete_inquiry(inquiry_id: str):
        inquiries().delete(inquiry_id)
        return jsonify({"success": True})
