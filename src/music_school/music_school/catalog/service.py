from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import ClassType, SystemConfig
from .repository import SystemConfigRepository

logger = logging.getLogger(__name__)


class CatalogService:
    """Use case: read and edit the admin-configurable catalog.

    Removing a class type only edits the catalog; lessons that reference it
    keep their raw type id.
    """

    def __init__(self, configs: SystemConfigRepository):
        self._configs = configs

    def get_config(self) -> SystemConfig:
        return self._configs.get() or SystemConfig.default()

    def add_class_type(self, *, type_id: str, name: str) -> SystemConfig:
        type_id = require_non_empty(type_id, "Class type id")
        name = require_non_empty(name, "Class type name")
        config = self.get_config()
        if config.find_class_type(type_id):
            raise ValidationError(f"Class type {type_id} already exists")
        updated = replace(config, class_types=config.class_types + (ClassType(id=type_id, name=name),))
        self._configs.save(updated)
        logger.info("Added class type %s", type_id)
        return updated

    def rename_class_type(self, *, type_id: str, name: str) -> SystemConfig:
        name = require_non_empty(name, "Class type name")
        config = self.get_config()
        if not config.find_class_type(type_id):
            raise NotFoundError(f"Class type {type_id} does not exist")
        updated = replace(
            config,
            class_types=tuple(ClassType(id=ct.id, name=name) if ct.id == type_id else ct for ct in config.class_types),
        )
        self._configs.save(updated)
        return updated

    def remove_class_type(self, type_id: str) -> SystemConfig:
        config = self.get_config()
        if not config.find_class_type(type_id):
            raise NotFoundError(f"Class type {type_id} does not exist")
        updated = replace(config, class_types=tuple(ct for ct in config.class_types if ct.id != type_id))
        self._configs.save(updated)
        logger.info("Removed class type %s from catalog", type_id)
        return updated

    def set_subjects(self, subjects: Iterable[str]) -> SystemConfig:
        return self._save_list("subjects", subjects, "Subject")

    def set_expense_categories(self, categories: Iterable[str]) -> SystemConfig:
        return self._save_list("expense_categories", categories, "Expense category")

    def _save_list(self, attr: str, values: Iterable[str], label: str) -> SystemConfig:
        cleaned: list[str] = []
        for v in values:
            v = require_non_empty(v, label)
            if v not in cleaned:
                cleaned.append(v)
        if not cleaned:
            raise ValidationError(f"At least one {label.lower()} is required")
        updated = replace(self.get_config(), **{attr: tuple(cleaned)})
        self._configs.save(updated)
        return updated
