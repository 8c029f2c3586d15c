"""Client-local persistence for favorites and user edits.

The engine only needs get-all/replace-all semantics over string blobs, so the
backends expose ``get``/``set`` on string keys and ``JsonStore`` layers
``load``/``save`` of a whole JSON value on top.
"""
from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, List, Optional, Protocol, TypeVar

from . import config

logger = logging.getLogger(__name__)

T = TypeVar("T")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryKeyValueStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class SqliteKeyValueStore:
    def __init__(self, db_path: Optional[str] = None) -> None:
        self.db_path = db_path or config.STORE_DB_PATH
        self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row
        self._configure_conn()
        self._init_db()

    def _configure_conn(self) -> None:
        cur = self.conn.cursor()
        try:
            cur.execute("PRAGMA journal_mode=WAL")
            cur.fetchone()
        except sqlite3.DatabaseError:
            pass

    def _init_db(self) -> None:
        cur = self.conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT,
                updated_at TEXT
            )
            """
        )
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()

    def get(self, key: str) -> Optional[str]:
        cur = self.conn.cursor()
        cur.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
        row = cur.fetchone()
        if not row:
            return None
        return row["value"]

    def set(self, key: str, value: str) -> None:
        cur = self.conn.cursor()
        cur.execute(
            """
            INSERT OR REPLACE INTO kv_store (key, value, updated_at)
            VALUES (?, ?, ?)
            """,
            (key, value, utc_now_iso()),
        )
        self.conn.commit()


class JsonStore(Generic[T]):
    def __init__(self, kv: KeyValueStore, key: str, default_factory: Callable[[], T]) -> None:
        self.kv = kv
        self.key = key
        self.default_factory = default_factory

    def load(self) -> T:
        raw = self.kv.get(self.key)
        if raw is None:
            return self.default_factory()
        try:
            value = json.loads(raw)
        except ValueError:
            logger.warning("Stored value for %s is not valid JSON; using default", self.key)
            return self.default_factory()
        default = self.default_factory()
        if not isinstance(value, type(default)):
            logger.warning(
                "Stored value for %s is a %s, expected %s; using default",
                self.key,
                type(value).__name__,
                type(default).__name__,
            )
            return default
        return value

    def save(self, value: T) -> None:
        self.kv.set(self.key, json.dumps(value, ensure_ascii=False))


def favorites_store(kv: KeyValueStore) -> JsonStore[List[int]]:
    return JsonStore(kv, config.FAVORITES_KEY, list)


def overrides_store(kv: KeyValueStore) -> JsonStore[Dict[str, Dict[str, Any]]]:
    return JsonStore(kv, config.OVERRIDES_KEY, dict)
