"""
Rehab History Stores

Key-value stores holding the last-performed history of rehab exercises.
The rotation selector only needs ``get`` and ``set``; faults are handled
by the selector, so stores are free to raise.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Protocol

import psycopg2
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal persistence port: string values by string key."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryStore:
    """Dict-backed store, for tests and one-shot runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """
    Store backed by one JSON object on disk.

    A missing file reads as empty; the file is created on first write.
    """

    def __init__(self, path):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path) as f:
            return json.load(f)

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(data, f, indent=2)


class PostgresStore:
    """
    Store backed by a ``kv_store`` table in Postgres.

    Connection DSN comes from IRONPLAN_POSTGRES_DSN (or POSTGRES_DSN).
    """

    TABLE_DDL = """
        CREATE TABLE IF NOT EXISTS kv_store (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    """

    def __init__(self, dsn: Optional[str] = None):
        load_dotenv()
        self.dsn = dsn or os.environ.get(
            "IRONPLAN_POSTGRES_DSN",
            os.environ.get("POSTGRES_DSN", "postgresql://localhost:5432/ironplan")
        )
        self._conn = None
        self._table_ready = False

    @property
    def conn(self):
        """Lazy connection."""
        if self._conn is None or self._conn.closed:
            self._conn = psycopg2.connect(self.dsn)
            self._table_ready = False
        return self._conn

    def close(self):
        """Close connection."""
        if self._conn and not self._conn.closed:
            self._conn.close()

    def _ensure_table(self):
        if self._table_ready:
            return
        with self.conn.cursor() as cursor:
            cursor.execute(self.TABLE_DDL)
        self.conn.commit()
        self._table_ready = True

    def get(self, key: str) -> Optional[str]:
        self._ensure_table()
        cursor = self.conn.cursor()
        try:
            cursor.execute("SELECT value FROM kv_store WHERE key = %s", (key,))
            row = cursor.fetchone()
            self.conn.commit()
        except Exception as e:
            self.conn.rollback()
            logger.error(f"Error reading {key} from kv_store: {e}")
            raise
        finally:
            cursor.close()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        self._ensure_table()
        cursor = self.conn.cursor()
        try:
            cursor.execute("""
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (%s, %s, now())
                ON CONFLICT (key) DO UPDATE
                SET value = EXCLUDED.value, updated_at = EXCLUDED.updated_at
            """, (key, value))
            self.conn.commit()
        except Exception as e:
            self.conn.rollback()
            logger.error(f"Error writing {key} to kv_store: {e}")
            raise
        finally:
            cursor.close()
