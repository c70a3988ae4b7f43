from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import ModuleId, Role
from ..storage.repository import CollectionStore
from .model import AppUser, Permission


def _permissions_from(raw: Any) -> dict[ModuleId, Permission]:
    perms: dict[ModuleId, Permission] = {}
    if not isinstance(raw, dict):
        return perms
    for key, value in raw.items():
        try:
            module = ModuleId(key)
        except ValueError:
            continue
        value = value if isinstance(value, dict) else {}
        perms[module] = Permission(view=bool(value.get("view")), edit=bool(value.get("edit")))
    return perms


def user_from_item(item: dict[str, Any]) -> AppUser:
    return AppUser(
        id=str(item["id"]),
        username=str(item.get("username") or ""),
        password=str(item.get("password") or ""),
        name=str(item.get("name") or ""),
        role=Role(item.get("role") or Role.STAFF.value),
        permissions=_permissions_from(item.get("permissions")),
        is_first_login=bool(item.get("isFirstLogin")),
        teacher_id=item.get("teacherId") or None,
    )


def user_to_item(user: AppUser) -> dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "password": user.password,
        "name": user.name,
        "role": user.role.value,
        "permissions": {m.value: {"view": p.view, "edit": p.edit} for m, p in user.permissions.items()},
        "isFirstLogin": user.is_first_login,
        "teacherId": user.teacher_id,
    }


class UserRepository:
    COLLECTION = "users"

    def __init__(self, store: CollectionStore):
        self._store = store

    def list_all(self) -> Sequence[AppUser]:
        return [user_from_item(i) for i in self._store.get(self.COLLECTION)]

    def get_by_id(self, user_id: str) -> Optional[AppUser]:
        for u in self.list_all():
            if u.id == user_id:
                return u
        return None

    def get_by_username(self, username: str) -> Optional[AppUser]:
        for u in self.list_all():
            if u.username == username:
                return u
        return None

    def add(self, user: AppUser) -> None:
        self._store.add(self.COLLECTION, user_to_item(user))

    def update(self, user: AppUser) -> bool:
        return self._store.update(self.COLLECTION, user_to_item(user))

    def delete_by_id(self, user_id: str) -> bool:
        return self._store.delete(self.COLLECTION, user_id)
