from __future__ import annotations

import json
import logging
from typing import Any, Iterable

from ..core.enums import DataMode
from ..core.exceptions import StorageError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, decode_payload_row, executemany_chunked
from .collections import table_name

logger = logging.getLogger(__name__)


class MySQLCollectionStore:
    """Collection store backed by one `(id, payload)` table per collection.

    Payloads are stored as JSON documents; `update` merges the incoming
    fields over the stored document, mirroring a column-wise UPDATE.
    """

    def __init__(self, conn_factory: DatabaseConnection, mode: DataMode = DataMode.PRODUCTION):
        self._conn_factory = conn_factory
        self._mode = DataMode(mode)

    @property
    def mode(self) -> DataMode:
        return self._mode

    def with_mode(self, mode: DataMode) -> "MySQLCollectionStore":
        return MySQLCollectionStore(self._conn_factory, mode)

    def _table(self, collection: str) -> str:
        return table_name(collection, self._mode)

    @staticmethod
    def _require_id(item: dict[str, Any]) -> str:
        item_id = item.get("id")
        if item_id in (None, ""):
            raise ValidationError("Item must have an id")
        return str(item_id)

    def get(self, collection: str) -> list[dict[str, Any]]:
        table = self._table(collection)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT id, payload FROM `{table}` ORDER BY created_at, id")
                return [decode_payload_row(r) for r in cur.fetchall() or []]
        except Exception as e:
            logger.exception("Failed to read collection %s", table)
            raise StorageError(f"Cannot read {collection}") from e

    def add(self, collection: str, item: dict[str, Any]) -> None:
        self.add_many(collection, [item])

    def add_many(self, collection: str, items: Iterable[dict[str, Any]]) -> int:
        table = self._table(collection)
        rows = [(self._require_id(i), json.dumps(i, ensure_ascii=False)) for i in items]
        if not rows:
            return 0
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                executemany_chunked(
                    cur,
                    f"""
                    INSERT INTO `{table}` (id, payload) VALUES (%s, %s)
                    ON DUPLICATE KEY UPDATE payload=VALUES(payload)
                    """,
                    rows,
                )
        except Exception as e:
            logger.exception("Failed to write %d item(s) into %s", len(rows), table)
            raise StorageError(f"Cannot save {collection}") from e
        logger.debug("add %s: %d item(s)", table, len(rows))
        return len(rows)

    def update(self, collection: str, item: dict[str, Any]) -> bool:
        table = self._table(collection)
        item_id = self._require_id(item)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT id, payload FROM `{table}` WHERE id=%s FOR UPDATE", (item_id,))
                merged = decode_payload_row(cur.fetchone())
                if merged is None:
                    return False
                merged.update(item)
                cur.execute(
                    f"UPDATE `{table}` SET payload=%s WHERE id=%s",
                    (json.dumps(merged, ensure_ascii=False), item_id),
                )
        except Exception as e:
            logger.exception("Failed to update %s/%s", table, item_id)
            raise StorageError(f"Cannot update {collection}") from e
        logger.debug("update %s/%s", table, item_id)
        return True

    def delete(self, collection: str, item_id: str) -> bool:
        table = self._table(collection)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"DELETE FROM `{table}` WHERE id=%s", (str(item_id),))
                removed = cur.rowcount > 0
        except Exception as e:
            logger.exception("Failed to delete %s/%s", table, item_id)
            raise StorageError(f"Cannot delete from {collection}") from e
        logger.debug("delete %s/%s removed=%s", table, item_id, removed)
        return removed

    def truncate(self, collection: str) -> None:
        table = self._table(collection)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"DELETE FROM `{table}`")
        except Exception as e:
            logger.exception("Failed to truncate %s", table)
            raise StorageError(f"Cannot clear {collection}") from e
        logger.info("truncated %s", table)

    def ping(self) -> bool:
        try:
            with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
                cur.execute("SELECT 1")
                cur.fetchone()
            return True
        except Exception:
            logger.warning("Database ping failed", exc_info=True)
            return False
