from __future__ import annotations

import json

import pytest

from src.music_school.music_school.core.enums import DataMode
from src.music_school.music_school.core.exceptions import StorageError
from src.music_school.music_school.storage.mysql_store import MySQLCollectionStore


class FakeCursor:
    def __init__(self, db):
        self._db = db
        self._result = []
        self.rowcount = 0

    def execute(self, sql, params=None):
        self._db.statements.append((" ".join(sql.split()), params))
        if self._db.fail:
            raise RuntimeError("connection lost")
        if sql.strip().startswith("SELECT id, payload"):
            rows = self._db.rows
            if params:
                rows = [r for r in rows if r["id"] == params[0]]
            self._result = list(rows)
        elif sql.strip().startswith("DELETE") and params:
            self.rowcount = 1

    def executemany(self, sql, rows):
        self._db.batches.append(list(rows))

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return self._result

    def close(self):
        pass


class FakeConnection:
    def __init__(self, db):
        self._db = db

    def cursor(self, dictionary=True):
        return FakeCursor(self._db)

    def commit(self):
        self._db.commits += 1

    def rollback(self):
        self._db.rollbacks += 1

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self, rows=None, fail=False):
        self.rows = rows or []
        self.fail = fail
        self.statements = []
        self.batches = []
        self.commits = 0
        self.rollbacks = 0

    def connect(self, *, with_database=True):
        return FakeConnection(self)


def test_get_decodes_payloads_from_mode_table():
    db = FakeConnFactory(rows=[{"id": "t1", "payload": json.dumps({"name": "Alice"})}])
    store = MySQLCollectionStore(db, DataMode.TEST)

    assert store.get("teachers") == [{"name": "Alice", "id": "t1"}]
    assert "`Test_Teachers`" in db.statements[0][0]


def test_add_many_writes_in_chunks_of_fifty():
    db = FakeConnFactory()
    store = MySQLCollectionStore(db)

    assert store.add_many("lessons", [{"id": str(i)} for i in range(120)]) == 120
    assert [len(b) for b in db.batches] == [50, 50, 20]
    assert db.commits == 1


def test_update_merges_over_stored_payload():
    db = FakeConnFactory(rows=[{"id": "t1", "payload": json.dumps({"name": "Alice", "commissionRate": 60})}])
    store = MySQLCollectionStore(db)

    assert store.update("teachers", {"id": "t1", "commissionRate": 75})

    sql, params = db.statements[-1]
    assert sql.startswith("UPDATE `Teachers`")
    assert json.loads(params[0]) == {"name": "Alice", "commissionRate": 75, "id": "t1"}


def test_backend_failure_is_wrapped_and_rolled_back():
    db = FakeConnFactory(fail=True)
    store = MySQLCollectionStore(db)

    with pytest.raises(StorageError):
        store.get("students")
    assert db.rollbacks == 1
    assert not store.ping()
