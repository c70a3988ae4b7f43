"""Collection catalogue of the key-value store.

Each collection is persisted as one table per data mode; the test namespace
uses the same table names with a `Test_` prefix.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ..core.constants import TEST_TABLE_PREFIX
from ..core.enums import DataMode
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

TABLES: dict[str, str] = {
    "students": "Students",
    "teachers": "Teachers",
    "lessons": "Lessons",
    "expenses": "Expenses",
    "sales": "Sales",
    "users": "Users",
    "system_config": "SystemConfig",
    "inquiries": "Inquiries",
}

# Fields that older clients send JSON-encoded inside a string.
JSON_FIELDS: dict[str, tuple[str, ...]] = {
    "lessons": ("studentIds", "studentNotes"),
    "users": ("permissions", "settings"),
    "system_config": ("subjects", "expenseCategories", "classTypes", "appInfo", "website"),
}

BOOL_FIELDS = ("isCompleted", "isFirstLogin")


def require_collection(collection: str) -> str:
    if collection not in TABLES:
        raise ValidationError(f"Invalid collection: {collection!r}")
    return collection


def table_prefix(mode: DataMode) -> str:
    return TEST_TABLE_PREFIX if mode == DataMode.TEST else ""


def table_name(collection: str, mode: DataMode) -> str:
    return f"{table_prefix(mode)}{TABLES[require_collection(collection)]}"


def normalize_incoming(collection: str, item: dict[str, Any]) -> dict[str, Any]:
    """Decode string-encoded JSON fields and coerce 0/1 flags to bool."""
    out = dict(item)
    for field in JSON_FIELDS.get(collection, ()):
        value = out.get(field)
        if isinstance(value, str) and value:
            try:
                out[field] = json.loads(value)
            except ValueError:
                logger.warning("Keeping undecodable %s.%s as plain string", collection, field)
    for field in BOOL_FIELDS:
        if field in out and out[field] is not None:
            out[field] = bool(out[field])
    return out
