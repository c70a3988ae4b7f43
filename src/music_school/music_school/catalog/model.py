from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..core.constants import (
    DEFAULT_APP_INFO,
    DEFAULT_CLASS_TYPES,
    DEFAULT_EXPENSE_CATEGORIES,
    DEFAULT_MUSIC_SUBJECTS,
)

SYSTEM_CONFIG_ID = "main"

_BUILTIN_LABELS = dict(DEFAULT_CLASS_TYPES)


@dataclass(frozen=True)
class ClassType:
    """Catalog entry: admin-defined short code plus display label."""

    id: str
    name: str


@dataclass(frozen=True)
class SystemConfig:
    class_types: tuple[ClassType, ...]
    subjects: tuple[str, ...]
    expense_categories: tuple[str, ...]
    app_info: dict = field(default_factory=dict)

    @classmethod
    def default(cls) -> "SystemConfig":
        return cls(
            class_types=tuple(ClassType(id=i, name=n) for i, n in DEFAULT_CLASS_TYPES),
            subjects=tuple(DEFAULT_MUSIC_SUBJECTS),
            expense_categories=tuple(DEFAULT_EXPENSE_CATEGORIES),
            app_info=dict(DEFAULT_APP_INFO),
        )

    def class_type_ids(self) -> list[str]:
        return [ct.id for ct in self.class_types]

    def find_class_type(self, type_id: str) -> Optional[ClassType]:
        for ct in self.class_types:
            if ct.id == type_id:
                return ct
        return None


def class_type_label(type_id: str, catalog: Optional[Sequence[ClassType]] = None) -> str:
    """Display label of a class type id.

    Types removed from the catalog still show up on historical lessons; they
    fall back to the built-in label and finally to the raw id.
    """
    for ct in catalog or ():
        if ct.id == type_id:
            return ct.name
    return _BUILTIN_LABELS.get(type_id, type_id)
