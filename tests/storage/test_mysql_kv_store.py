from __future__ import annotations

import pytest

from src.hr_payroll.hr_payroll.database.bootstrap import KV_TABLE, ensure_kv_table
from src.hr_payroll.hr_payroll.database.connection import DBConfig
from src.hr_payroll.hr_payroll.storage.mysql_kv_store import MySQLKeyValueStore


class FakeCursor:
    def __init__(self, db):
        self._db = db
        self._row = None

    def execute(self, sql, params=()):
        statement = " ".join(sql.split())
        self._db.executed.append(statement)
        if statement.startswith("SELECT store_value"):
            value = self._db.rows.get(params[0])
            self._row = {"store_value": value} if value is not None else None
        elif statement.startswith("INSERT INTO"):
            if self._db.fail_writes:
                raise RuntimeError("disk full")
            key, value = params
            self._db.pending[key] = value

    def fetchone(self):
        return self._row

    def fetchall(self):
        return []

    def close(self):
        pass


class FakeConnection:
    def __init__(self, db):
        self._db = db

    def cursor(self, dictionary=False):
        return FakeCursor(self._db)

    def commit(self):
        self._db.rows.update(self._db.pending)
        self._db.pending.clear()

    def rollback(self):
        self._db.pending.clear()
        self._db.rollbacks += 1

    def close(self):
        pass


class FakeDatabase:
    """Stands in for DatabaseConnection: hands out connections to one shared table."""

    def __init__(self):
        self.config = DBConfig(host="localhost", port=3306, user="root", password="", database="hr_portal_test")
        self.rows = {}
        self.pending = {}
        self.executed = []
        self.rollbacks = 0
        self.fail_writes = False

    def connect(self, *, with_database=True):
        return FakeConnection(self)


@pytest.fixture
def db():
    return FakeDatabase()


def test_get_missing_key_returns_none(db):
    assert MySQLKeyValueStore(db).get("hr_portal_state") is None


def test_set_then_get(db):
    store = MySQLKeyValueStore(db)
    store.set("hr_portal_state", '{"schemaVersion": 1}')
    store.set("hr_portal_state", '{"schemaVersion": 1, "employees": []}')

    assert store.get("hr_portal_state") == '{"schemaVersion": 1, "employees": []}'
    assert any("ON DUPLICATE KEY UPDATE" in sql for sql in db.executed)


def test_failed_write_is_rolled_back(db):
    store = MySQLKeyValueStore(db)
    db.fail_writes = True
    with pytest.raises(RuntimeError):
        store.set("hr_portal_state", "{}")
    assert db.rollbacks == 1
    assert store.get("hr_portal_state") is None


def test_ensure_kv_table_creates_database_and_table(db):
    ensure_kv_table(db)
    assert db.executed[0].startswith("CREATE DATABASE IF NOT EXISTS `hr_portal_test`")
    assert db.executed[1].startswith(f"CREATE TABLE IF NOT EXISTS {KV_TABLE}")
