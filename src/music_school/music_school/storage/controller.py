"""Generic collection REST endpoints and the data-mode switch."""

from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.web import admin_required, current_mode, error_response, login_required, session_can
from ..container import Container
from ..core.enums import DataMode, ModuleId
from ..core.exceptions import ValidationError
from .collections import normalize_incoming, require_collection

logger = logging.getLogger(__name__)


def _parse_mode(value) -> DataMode:
    try:
        return DataMode(value)
    except ValueError:
        raise ValidationError(f"Invalid mode: {value!r}")


def register(app: Flask, container: Container) -> None:
    def store_for_request():
        mode_arg = request.args.get("mode")
        mode = _parse_mode(mode_arg) if mode_arg else current_mode(container.default_mode)
        return container.services(mode).store

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        store = container.services().store
        ok = store.ping()
        return jsonify({"status": "ok" if ok else "degraded", "backend": container.backend, "database": ok}), (
            200 if ok else 503
        )

    @app.route("/api/mode", methods=["GET"], endpoint="get_mode")
    @login_required
    def get_mode():
        return jsonify({"success": True, "mode": current_mode(container.default_mode).value})

    @app.route("/api/mode", methods=["POST"], endpoint="set_mode")
    @login_required
    def set_mode():
        if not session_can(ModuleId.TEST_MODE, edit=True):
            return error_response("You do not have permission", 403)
        data = request.get_json(silent=True) or {}
        mode = _parse_mode(data.get("mode"))
        session["data_mode"] = mode.value
        logger.info("User %s switched to %s data", session.get("user_id"), mode.value)
        return jsonify({"success": True, "mode": mode.value})

    @app.route("/api/data", methods=["GET"], endpoint="data_get")
    @admin_required
    def data_get():
        collection = require_collection(request.args.get("collection", ""))
        return jsonify(store_for_request().get(collection))

    @app.route("/api/data", methods=["POST"], endpoint="data_add")
    @admin_required
    def data_add():
        collection = require_collection(request.args.get("collection", ""))
        body = request.get_json(silent=True)
        store = store_for_request()
        if isinstance(body, list):
            count = store.add_many(collection, [normalize_incoming(collection, i) for i in body])
            return jsonify({"success": True, "count": count})
        if not isinstance(body, dict):
            raise ValidationError("Request body must be a JSON object or array")
        store.add(collection, normalize_incoming(collection, body))
        return jsonify({"success": True, "count": 1})

    @app.route("/api/data", methods=["PUT"], endpoint="data_update")
    @admin_required
    def data_update():
        collection = require_collection(request.args.get("collection", ""))
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise ValidationError("Request body must be a JSON object")
        updated = store_for_request().update(collection, normalize_incoming(collection, body))
        return jsonify({"success": True, "updated": updated})

    @app.route("/api/data", methods=["DELETE"], endpoint="data_delete")
    @admin_required
    def data_delete():
        collection = require_collection(request.args.get("collection", ""))
        store = store_for_request()
        if request.args.get("truncate") in {"1", "true"}:
            store.truncate(collection)
            return jsonify({"success": True})
        item_id = request.args.get("id")
        if not item_id:
            raise ValidationError("Missing id")
        return jsonify({"success": True, "deleted": store.delete(collection, item_id)})
