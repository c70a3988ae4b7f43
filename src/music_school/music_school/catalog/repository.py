from __future__ import annotations

from typing import Any, Optional

from ..storage.repository import CollectionStore
from .model import SYSTEM_CONFIG_ID, ClassType, SystemConfig

COLLECTION = "system_config"


def config_from_item(item: dict[str, Any]) -> SystemConfig:
    defaults = SystemConfig.default()
    raw_types = item.get("classTypes")
    class_types = (
        tuple(ClassType(id=str(ct["id"]), name=str(ct.get("name") or ct["id"])) for ct in raw_types if ct.get("id"))
        if isinstance(raw_types, list)
        else defaults.class_types
    )
    subjects = item.get("subjects")
    categories = item.get("expenseCategories")
    app_info = item.get("appInfo")
    return SystemConfig(
        class_types=class_types,
        subjects=tuple(subjects) if isinstance(subjects, list) else defaults.subjects,
        expense_categories=tuple(categories) if isinstance(categories, list) else defaults.expense_categories,
        app_info=dict(app_info) if isinstance(app_info, dict) else defaults.app_info,
    )


def config_to_item(config: SystemConfig) -> dict[str, Any]:
    return {
        "id": SYSTEM_CONFIG_ID,
        "classTypes": [{"id": ct.id, "name": ct.name} for ct in config.class_types],
        "subjects": list(config.subjects),
        "expenseCategories": list(config.expense_categories),
        "appInfo": dict(config.app_info),
    }


class SystemConfigRepository:
    """Singleton `main` row of the system_config collection."""

    def __init__(self, store: CollectionStore):
        self._store = store

    def get(self) -> Optional[SystemConfig]:
        items = self._store.get(COLLECTION)
        for item in items:
            if item.get("id") == SYSTEM_CONFIG_ID:
                return config_from_item(item)
        return config_from_item(items[0]) if items else None

    def save(self, config: SystemConfig) -> None:
        item = config_to_item(config)
        if not self._store.update(COLLECTION, item):
            self._store.add(COLLECTION, item)
