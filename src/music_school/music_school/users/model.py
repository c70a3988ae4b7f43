from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import ModuleId, Role


@dataclass(frozen=True)
class Permission:
    view: bool = False
    edit: bool = False


def staff_default_permissions() -> dict[ModuleId, Permission]:
    """View-only access to the screens a teacher account normally needs."""
    perms = {m: Permission() for m in ModuleId}
    for m in (ModuleId.DASHBOARD, ModuleId.CALENDAR, ModuleId.STUDENTS, ModuleId.PAYROLL, ModuleId.SETTINGS):
        perms[m] = Permission(view=True, edit=False)
    return perms


def full_permissions() -> dict[ModuleId, Permission]:
    return {m: Permission(view=True, edit=True) for m in ModuleId}


@dataclass(frozen=True)
class AppUser:
    """Staff/admin login account.

    Passwords are compared as plain text; `teacher_id` links a staff account
    to the teacher whose payroll it may see.
    """

    id: str
    username: str
    password: str
    name: str
    role: Role
    permissions: dict = field(default_factory=dict)
    is_first_login: bool = False
    teacher_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def can(self, module: ModuleId, *, edit: bool = False) -> bool:
        if self.is_admin:
            return True
        perm = self.permissions.get(module) or Permission()
        return perm.edit if edit else perm.view
