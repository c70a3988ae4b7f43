"""Flask glue shared by the feature controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import DataMode, ModuleId, Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from ..users.viewer import Viewer, viewer_for

logger = logging.getLogger(__name__)

_STATUS = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (StorageError, 503),
)


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for exc_type, status in _STATUS:
            if isinstance(e, exc_type):
                return error_response(str(e), status)
        return error_response(str(e), 400)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return error_response(e.description or e.name, e.code or 500)
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if bool(app.config.get("DEBUG", False)):
            return error_response(f"Internal error: {e}", 500)
        return error_response("Internal error", 500)


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def current_role() -> Role:
    return Role(session.get("role") or Role.STAFF.value)


def current_viewer() -> Viewer:
    return viewer_for(current_role(), session.get("teacher_id"))


def current_mode(default: DataMode) -> DataMode:
    try:
        return DataMode(session.get("data_mode") or default)
    except ValueError:
        return DataMode(default)


def session_can(module: ModuleId, *, edit: bool = False) -> bool:
    if session.get("role") == Role.ADMIN.value:
        return True
    perm = (session.get("permissions") or {}).get(module.value) or {}
    return bool(perm.get("edit")) if edit else bool(perm.get("view"))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Please log in to continue", 401)
        if session.get("role") != Role.ADMIN.value:
            return error_response("You do not have permission", 403)
        return view(*args, **kwargs)

    return wrapper


def module_required(module: ModuleId, *, edit: bool = False):
    """Require view (or edit) permission on a module; admins always pass."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return error_response("Please log in to continue", 401)
            if not session_can(module, edit=edit):
                return error_response("You do not have permission", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def csv_response(app: Flask, filename: str, payload: bytes):
    return app.response_class(
        payload,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
