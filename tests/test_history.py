"""Tests for rehab history stores."""
import json

import pytest

from ironplan.rehab.history import InMemoryStore, JsonFileStore, PostgresStore
from ironplan.rehab.rotation import RehabRotationSelector


class TestInMemoryStore:

    def test_get_set(self):
        store = InMemoryStore()
        assert store.get("k") is None
        store.set("k", "v")
        assert store.get("k") == "v"

    def test_initial_data_copied(self):
        initial = {"k": "v"}
        store = InMemoryStore(initial)
        store.set("k", "w")
        assert initial == {"k": "v"}


class TestJsonFileStore:

    def test_missing_file_reads_none(self, tmp_path):
        assert JsonFileStore(tmp_path / "history.json").get("k") is None

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "history.json"
        JsonFileStore(path).set("k", "v")
        assert JsonFileStore(path).get("k") == "v"
        assert json.loads(path.read_text()) == {"k": "v"}

    def test_keeps_other_keys(self, tmp_path):
        store = JsonFileStore(tmp_path / "history.json")
        store.set("a", "1")
        store.set("b", "2")
        assert store.get("a") == "1"

    def test_selector_round_trip(self, tmp_path):
        path = tmp_path / "history.json"
        RehabRotationSelector(JsonFileStore(path)).record_done(["Chin tuck"], now=123)
        assert RehabRotationSelector(JsonFileStore(path)).get_history() == {"Chin tuck": 123}

    def test_corrupt_file_is_empty_history(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text("{not json")
        assert RehabRotationSelector(JsonFileStore(path)).get_history() == {}


class TestPostgresStore:

    def test_dsn_from_environment(self, monkeypatch):
        monkeypatch.setenv("IRONPLAN_POSTGRES_DSN", "postgresql://coach@db:5432/ironplan")
        assert PostgresStore().dsn == "postgresql://coach@db:5432/ironplan"

    def test_explicit_dsn_wins(self, monkeypatch):
        monkeypatch.setenv("IRONPLAN_POSTGRES_DSN", "postgresql://coach@db:5432/ironplan")
        assert PostgresStore("postgresql://other/db").dsn == "postgresql://other/db"

    def test_no_connection_until_used(self):
        store = PostgresStore("postgresql://127.0.0.1:1/ironplan?connect_timeout=1")
        assert store._conn is None
        store.close()

    def test_unreachable_database_is_empty_history(self):
        store = PostgresStore("postgresql://127.0.0.1:1/ironplan?connect_timeout=1")
        selector = RehabRotationSelector(store)
        assert selector.get_history() == {}
        selector.record_done(["Chin tuck"], now=1)

    def test_failed_read_rolls_back(self):
        conn = FakeConnection(fail_on="SELECT")
        store = PostgresStore("postgresql://db/ironplan")
        store._conn = conn
        store._table_ready = True

        with pytest.raises(RuntimeError):
            store.get("k")
        assert conn.rollbacks == 1
        assert conn.cursors_closed == 1

        conn.fail_on = None
        assert store.get("k") == "stored"


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn

    def execute(self, query, params=None):
        if self.conn.fail_on and self.conn.fail_on in query:
            raise RuntimeError("current transaction is aborted")

    def fetchone(self):
        return ("stored",)

    def close(self):
        self.conn.cursors_closed += 1


class FakeConnection:
    closed = False

    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.rollbacks = 0
        self.cursors_closed = 0

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        pass

    def rollback(self):
        self.rollbacks += 1
