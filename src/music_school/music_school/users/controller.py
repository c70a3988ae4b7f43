from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.web import admin_required, current_mode, current_role, json_body, login_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .service import SessionUser

logger = logging.getLogger(__name__)


def _store_session(s_user: SessionUser) -> None:
    session["user_id"] = s_user.user_id
    session["name"] = s_user.name
    session["role"] = s_user.role.value
    session["teacher_id"] = s_user.teacher_id
    session["permissions"] = s_user.permissions
    session["must_reset_password"] = s_user.must_reset_password


def _me() -> dict:
    return {
        "user_id": session.get("user_id"),
        "name": session.get("name"),
        "role": session.get("role"),
        "teacher_id": session.get("teacher_id"),
        "permissions": session.get("permissions") or {},
        "must_reset_password": bool(session.get("must_reset_password")),
        "data_mode": session.get("data_mode"),
    }


def register(app: Flask, container: Container) -> None:
    def services():
        return container.services(current_mode(container.default_mode))

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = services().auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        mode = session.get("data_mode")
        session.clear()
        if mode:
            session["data_mode"] = mode
        _store_session(s_user)
        logger.info("User %s logged in (%s)", s_user.user_id, s_user.role.value)
        return jsonify({"success": True, "user": _me()})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify({"success": True, "user": _me()})

    @app.route("/api/auth/reset-password", methods=["POST"], endpoint="reset_password")
    @login_required
    def reset_password():
        data = json_body()
        s_user = services().auth_service.reset_first_login_password(session["user_id"], data.get("new_password") or "")
        _store_session(s_user)
        return jsonify({"success": True, "user": _me()})

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @admin_required
    def list_users():
        return jsonify({"success": True, "users": services().user_service.list_admin_view(current_role=current_role())})

    @app.route("/api/users", methods=["POST"], endpoint="add_user")
    @admin_required
    def add_user():
        data = json_body()
        try:
            role = Role(data.get("role") or Role.STAFF.value)
        except ValueError:
            raise ValidationError("Invalid account role")
        user = services().user_service.create_account(
            current_role=current_role(),
            username=data.get("username", ""),
            password=data.get("password", ""),
            name=data.get("name", ""),
            role=role,
            teacher_id=data.get("teacher_id"),
            permissions=data.get("permissions"),
        )
        return jsonify({"success": True, "id": user.id}), 201

    @app.route("/api/users/<user_id>", methods=["PUT"], endpoint="update_user")
    @admin_required
    def update_user(user_id: str):
        data = json_body()
        changes = {k: data[k] for k in ("name", "password", "teacher_id", "permissions") if k in data}
        user = services().user_service.update_account(current_role=current_role(), user_id=user_id, **changes)
        return jsonify({"success": True, "id": user.id, "is_first_login": user.is_first_login})

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    def delete_user(user_id: str):
        services().user_service.delete_user(
            current_role=current_role(),
            current_user_id=session["user_id"],
            user_id=user_id,
        )
        return jsonify({"success": True})
