"""
Key-value persistence for named collections.

Every collection (users, orgs, employees, teams, team_members, logs) is
stored as one ordered list of JSON records under a single key.  The
services read a whole collection, change it in memory and write it back;
serialization with ``json`` is the only durability mechanism.

Three backends are provided:

* ``MemoryStore`` keeps serialized collections in a dict.  Used by the
  tests and as the default.
* ``JsonFileStore`` keeps one ``<prefix><collection>.json`` file per
  collection in a directory.
* ``SQLiteStore`` keeps all collections in a ``kv_store`` table and
  applies its schema through a small versioned migration list.

Each backend can delay reads by a configurable amount to emulate the
latency of a remote API.  The delay is charged once per ``load``, so a
service call that reads three collections waits three times.  It lives
here so that business logic never sleeps and tests can run with zero
delay.
"""

from __future__ import annotations

import asyncio
import enum
import json
import logging
import os
import sqlite3
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from .config import Settings


logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class Collection(str, enum.Enum):
    """Names of the persisted collections."""

    USERS = "users"
    ORGS = "orgs"
    EMPLOYEES = "employees"
    TEAMS = "teams"
    TEAM_MEMBERS = "team_members"
    LOGS = "logs"


class KeyValueStore(ABC):
    """Abstract get/put access to named collections of records.

    Collections may be named by ``Collection`` member or by plain string
    (``"users"``).  Backends whose ``_read``/``_write`` touch the disk set
    ``blocking_io`` so those calls run in a worker thread instead of on
    the event loop.
    """

    blocking_io: bool = False

    def __init__(self, key_prefix: str = "nexushr_", latency_ms: int = 0) -> None:
        self.key_prefix = key_prefix
        self.latency_ms = latency_ms

    def key_for(self, collection: Union[Collection, str]) -> str:
        return f"{self.key_prefix}{Collection(collection).value}"

    async def simulate_latency(self) -> None:
        """Sleep for the configured latency, if any.

        Charged once per collection read, so an operation that loads
        three collections waits three times the configured latency.
        """
        if self.latency_ms > 0:
            await asyncio.sleep(self.latency_ms / 1000)

    async def _run(self, func: Callable[..., Any], *args: Any) -> Any:
        if self.blocking_io:
            return await asyncio.to_thread(func, *args)
        return func(*args)

    async def load(self, collection: Union[Collection, str]) -> List[Record]:
        """Return the records of ``collection`` (``[]`` if never written).

        The returned list and its dicts are fresh copies; callers may
        mutate them without affecting the stored data.
        """
        collection = Collection(collection)
        await self.simulate_latency()
        raw = await self._run(self._read, self.key_for(collection))
        logger.debug("Loaded collection %s", collection.value)
        return json.loads(raw) if raw else []

    async def save(self, collection: Union[Collection, str], records: List[Record]) -> None:
        """Replace the contents of ``collection`` with ``records``."""
        collection = Collection(collection)
        await self._run(self._write, self.key_for(collection), json.dumps(records))
        logger.debug("Saved %d records to %s", len(records), collection.value)

    async def save_many(self, updates: Dict[Union[Collection, str], List[Record]]) -> None:
        """Write several collections as one logical step.

        Collections are written in order.  If a write fails, collections
        already written by this call are restored to their previous
        contents and the error is re-raised.
        """
        normalized = {Collection(c): records for c, records in updates.items()}
        await self._run(self._save_many_sync, normalized)
        logger.debug("Saved collections %s", ", ".join(c.value for c in normalized))

    def _save_many_sync(self, updates: Dict[Collection, List[Record]]) -> None:
        written: List[tuple] = []
        try:
            for collection, records in updates.items():
                key = self.key_for(collection)
                previous = self._read(key)
                self._write(key, json.dumps(records))
                written.append((key, previous))
        except Exception:
            logger.error("Multi-collection write failed; rolling back %d collections", len(written))
            for key, previous in reversed(written):
                self._restore(key, previous)
            raise

    def _restore(self, key: str, previous: Optional[str]) -> None:
        if previous is None:
            self._delete(key)
        else:
            self._write(key, previous)

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        """Return the serialized value for ``key`` or ``None``."""

    @abstractmethod
    def _write(self, key: str, value: str) -> None:
        """Store the serialized value for ``key``."""

    @abstractmethod
    def _delete(self, key: str) -> None:
        """Remove ``key`` if present."""


class MemoryStore(KeyValueStore):
    """Process-local store holding serialized collections in a dict."""

    def __init__(self, key_prefix: str = "nexushr_", latency_ms: int = 0) -> None:
        super().__init__(key_prefix, latency_ms)
        self._data: Dict[str, str] = {}

    def _read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write(self, key: str, value: str) -> None:
        self._data[key] = value

    def _delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """Store keeping one JSON file per collection inside ``directory``.

    File reads and writes run in a worker thread via ``asyncio.to_thread``.
    """

    blocking_io = True

    def __init__(self, directory: str, key_prefix: str = "nexushr_", latency_ms: int = 0) -> None:
        super().__init__(key_prefix, latency_ms)
        self.directory = Path(directory).resolve()
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def _read(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def _write(self, key: str, value: str) -> None:
        # Write to a temp file first so a crash never leaves a truncated
        # collection behind.
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, self._path(key))
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def _delete(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()


class SQLiteStore(KeyValueStore):
    """Store keeping all collections in a single SQLite table.

    ``save_many`` runs inside one transaction instead of the generic
    write-then-restore strategy.  Like ``JsonFileStore`` every database
    call runs in a worker thread.
    """

    blocking_io = True

    # Append new migrations with an incremented version number.
    MIGRATIONS: List[tuple] = [
        (
            1,
            """
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );
            """,
        ),
    ]

    def __init__(self, database_path: str, key_prefix: str = "nexushr_", latency_ms: int = 0) -> None:
        super().__init__(key_prefix, latency_ms)
        self.database_path = database_path
        self.init_db()

    def get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def get_cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, commit on success and roll back on error."""
        conn = self.get_connection()
        try:
            yield conn.cursor()
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        """Create the ``migrations`` table and apply pending migrations."""
        with self.get_cursor() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
            current = row["version"] or 0
            for version, sql in self.MIGRATIONS:
                if version <= current:
                    continue
                logger.info("Applying storage migration %d", version)
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))

    def _read(self, key: str) -> Optional[str]:
        with self.get_cursor() as cursor:
            row = cursor.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else None

    def _write(self, key: str, value: str) -> None:
        with self.get_cursor() as cursor:
            self._upsert(cursor, key, value)

    def _delete(self, key: str) -> None:
        with self.get_cursor() as cursor:
            cursor.execute("DELETE FROM kv_store WHERE key = ?", (key,))

    @staticmethod
    def _upsert(cursor: sqlite3.Cursor, key: str, value: str) -> None:
        cursor.execute(
            "INSERT INTO kv_store (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP",
            (key, value),
        )

    def _save_many_sync(self, updates: Dict[Collection, List[Record]]) -> None:
        with self.get_cursor() as cursor:
            for collection, records in updates.items():
                self._upsert(cursor, self.key_for(collection), json.dumps(records))


def create_store(config: Settings) -> KeyValueStore:
    """Build the store selected by ``config.storage_backend``."""
    backend = config.storage_backend.lower()
    common = {
        "key_prefix": config.storage_key_prefix,
        "latency_ms": config.simulated_latency_ms,
    }
    if backend == "memory":
        return MemoryStore(**common)
    if backend == "json":
        return JsonFileStore(config.storage_dir, **common)
    if backend == "sqlite":
        return SQLiteStore(config.database_url, **common)
    raise ValueError(f"Unknown storage backend: {config.storage_backend}")
