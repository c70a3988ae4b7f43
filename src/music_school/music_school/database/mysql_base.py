from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Dict, Optional, Sequence, Tuple

from ..core.constants import BATCH_CHUNK_SIZE
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, with_database: bool = True):
    conn = conn_factory.connect(with_database=with_database)
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def decode_payload_row(row: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Turn an `(id, payload)` row into the stored item.

    The JSON column comes back as str, bytes or an already-parsed dict
    depending on the connector; the row id always wins over a payload id.
    """
    if not row:
        return None
    payload = row["payload"]
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8")
    item = json.loads(payload) if isinstance(payload, str) else dict(payload)
    item["id"] = row["id"]
    return item


def executemany_chunked(cur, sql: str, rows: Sequence[Tuple], chunk_size: int = BATCH_CHUNK_SIZE) -> int:
    for start in range(0, len(rows), chunk_size):
        cur.executemany(sql, rows[start:start + chunk_size])
    return len(rows)
