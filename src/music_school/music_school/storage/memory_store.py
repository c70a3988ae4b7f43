from __future__ import annotations

import copy
import logging
from typing import Any, Iterable, Optional

from ..core.enums import DataMode
from ..core.exceptions import ValidationError
from .collections import require_collection

logger = logging.getLogger(__name__)


class InMemoryCollectionStore:
    """Process-local store used for tests and previews without MySQL.

    Sibling stores created by `with_mode` share the same backing dict, so a
    test-mode store and a production-mode store see separate namespaces of
    one shared state.
    """

    def __init__(self, mode: DataMode = DataMode.PRODUCTION, *, _data: Optional[dict] = None):
        self._mode = DataMode(mode)
        self._data: dict[tuple[DataMode, str], dict[str, dict[str, Any]]] = _data if _data is not None else {}

    @property
    def mode(self) -> DataMode:
        return self._mode

    def with_mode(self, mode: DataMode) -> "InMemoryCollectionStore":
        return InMemoryCollectionStore(mode, _data=self._data)

    def _table(self, collection: str) -> dict[str, dict[str, Any]]:
        require_collection(collection)
        return self._data.setdefault((self._mode, collection), {})

    @staticmethod
    def _require_id(item: dict[str, Any]) -> str:
        item_id = item.get("id")
        if item_id in (None, ""):
            raise ValidationError("Item must have an id")
        return str(item_id)

    def get(self, collection: str) -> list[dict[str, Any]]:
        return [copy.deepcopy(v) for v in self._table(collection).values()]

    def add(self, collection: str, item: dict[str, Any]) -> None:
        item_id = self._require_id(item)
        self._table(collection)[item_id] = copy.deepcopy(item)
        logger.debug("add %s/%s (%s)", collection, item_id, self._mode.value)

    def add_many(self, collection: str, items: Iterable[dict[str, Any]]) -> int:
        count = 0
        for item in items:
            self.add(collection, item)
            count += 1
        return count

    def update(self, collection: str, item: dict[str, Any]) -> bool:
        item_id = self._require_id(item)
        table = self._table(collection)
        if item_id not in table:
            return False
        merged = dict(table[item_id])
        merged.update(copy.deepcopy(item))
        table[item_id] = merged
        logger.debug("update %s/%s (%s)", collection, item_id, self._mode.value)
        return True

    def delete(self, collection: str, item_id: str) -> bool:
        removed = self._table(collection).pop(str(item_id), None) is not None
        logger.debug("delete %s/%s (%s) removed=%s", collection, item_id, self._mode.value, removed)
        return removed

    def truncate(self, collection: str) -> None:
        self._table(collection).clear()

    def ping(self) -> bool:
        return True
