from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional

from ..common.ids import new_id
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import ModuleId, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..roster.repository import TeacherRepository
from .model import AppUser, Permission, full_permissions, staff_default_permissions
from .repository import UserRepository
from .viewer import Viewer, viewer_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: str
    name: str
    role: Role
    teacher_id: Optional[str]
    permissions: dict
    must_reset_password: bool

    @property
    def viewer(self) -> Viewer:
        return viewer_for(self.role, self.teacher_id)


def _session_user(user: AppUser) -> SessionUser:
    perms = full_permissions() if user.is_admin else user.permissions
    return SessionUser(
        user_id=user.id,
        name=user.name,
        role=user.role,
        teacher_id=user.teacher_id,
        permissions={m.value: {"view": p.view, "edit": p.edit} for m, p in perms.items()},
        must_reset_password=user.is_first_login,
    )


class AuthService:
    """Use case: authenticate user (login) and the first-login password reset."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user or user.password != (password or ""):
            logger.info("Failed login for username=%r", username)
            raise AuthenticationError("Wrong username or password")
        return _session_user(user)

    def reset_first_login_password(self, user_id: str, new_password: str) -> SessionUser:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Account does not exist")
        require_min_length(new_password, "Password", MIN_PASSWORD_LENGTH)
        if new_password == user.password:
            raise ValidationError("New password must differ from the current one")
        updated = replace(user, password=new_password, is_first_login=False)
        self._users.update(updated)
        logger.info("Password reset for user %s", user_id)
        return _session_user(updated)


def _parse_permissions(raw: Any) -> dict[ModuleId, Permission]:
    if not isinstance(raw, dict):
        raise ValidationError("Permissions must be an object")
    perms = {m: Permission() for m in ModuleId}
    for key, value in raw.items():
        try:
            module = ModuleId(key)
        except ValueError:
            raise ValidationError(f"Unknown module: {key}")
        value = value if isinstance(value, dict) else {}
        edit = bool(value.get("edit"))
        perms[module] = Permission(view=bool(value.get("view")) or edit, edit=edit)
    return perms


class UserService:
    """Use case: manage accounts (admin)."""

    def __init__(self, users: UserRepository, teachers: TeacherRepository):
        self._users = users
        self._teachers = teachers

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

    def list_admin_view(self, *, current_role: Role) -> list[dict]:
        self._require_admin(current_role)
        teachers = {t.id: t.name for t in self._teachers.list_all()}
        out: list[dict] = []
        for u in self._users.list_all():
            out.append(
                {
                    "id": u.id,
                    "username": u.username,
                    "name": u.name,
                    "role": u.role.value,
                    "teacher_id": u.teacher_id,
                    "teacher_name": teachers.get(u.teacher_id or "", "-"),
                    "is_first_login": u.is_first_login,
                    "permissions": {m.value: {"view": p.view, "edit": p.edit} for m, p in u.permissions.items()},
                }
            )
        return out

    def _check_teacher(self, teacher_id: Optional[str]) -> Optional[str]:
        if not teacher_id:
            return None
        if not self._teachers.get_by_id(teacher_id):
            raise ValidationError("Linked teacher does not exist")
        return teacher_id

    def create_account(
        self,
        *,
        current_role: Role,
        username: str,
        password: str,
        name: str,
        role: Role = Role.STAFF,
        teacher_id: Optional[str] = None,
        permissions: Optional[dict] = None,
    ) -> AppUser:
        self._require_admin(current_role)
        username = require_non_empty(username, "Username")
        name = require_non_empty(name, "Name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        user = AppUser(
            id=new_id("user"),
            username=username,
            password=password,
            name=name,
            role=role,
            permissions=(
                full_permissions() if role == Role.ADMIN
                else _parse_permissions(permissions) if permissions is not None
                else staff_default_permissions()
            ),
            is_first_login=True,
            teacher_id=self._check_teacher(teacher_id),
        )
        self._users.add(user)
        logger.info("Created %s account %s", role.value, username)
        return user

    def update_account(self, *, current_role: Role, user_id: str, **changes: Any) -> AppUser:
        self._require_admin(current_role)
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Account does not exist")

        updates: dict[str, Any] = {}
        if "name" in changes:
            updates["name"] = require_non_empty(changes["name"], "Name")
        if "password" in changes and changes["password"]:
            updates["password"] = require_min_length(changes["password"], "Password", MIN_PASSWORD_LENGTH)
            updates["is_first_login"] = True
        if "teacher_id" in changes:
            updates["teacher_id"] = self._check_teacher(changes["teacher_id"])
        if "permissions" in changes and user.role != Role.ADMIN:
            updates["permissions"] = _parse_permissions(changes["permissions"])

        updated = replace(user, **updates)
        self._users.update(updated)
        return updated

    def delete_user(self, *, current_role: Role, current_user_id: str, user_id: str) -> None:
        self._require_admin(current_role)
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Account does not exist")
        if user.id == current_user_id:
            raise ValidationError("You cannot delete your own account")
        if user.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be deleted")
        self._users.delete_by_id(user_id)
        logger.info("Deleted account %s", user.username)
