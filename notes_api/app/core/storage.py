"""
Key‑value storage collaborator.

Everything the services persist lives in string values under string
keys.  ``KeyValueStore`` defines the contract the services depend on:
asynchronous ``get``, ``set`` (whole‑value overwrite) and ``remove``,
with every failure surfacing as ``StorageError``.  There is no
multi‑key transaction.

Two implementations are provided.  ``SQLiteKeyValueStore`` keeps the
values in a single ``kv`` table of an SQLite file and opens a new
connection for every call.  ``MemoryKeyValueStore`` keeps them in a
dictionary and can be told to fail reads, writes or removes, which is
how the degraded paths are tested.

``KeyLocks`` hands out one ``asyncio.Lock`` per key so that
read‑modify‑write sequences on the same key never interleave.
"""

import asyncio
import logging
import os
import sqlite3
import weakref
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Mapping, Optional

from .config import settings
from .errors import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Asynchronous string‑to‑string store."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key`` or ``None`` if absent."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Overwrite the value stored under ``key``."""

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Delete ``key``.  Removing a missing key is not an error."""


class MemoryKeyValueStore(KeyValueStore):
    """Dictionary backed store with switchable failures."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})
        self.fail_reads = False
        self.fail_writes = False
        self.fail_removes = False

    async def get(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise StorageError(f"Read of {key} failed")
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError(f"Write of {key} failed")
        self._data[key] = value

    async def remove(self, key: str) -> None:
        if self.fail_removes:
            raise StorageError(f"Remove of {key} failed")
        self._data.pop(key, None)

    def snapshot(self) -> Dict[str, str]:
        """Return a copy of every stored key and value."""
        return dict(self._data)


def get_database_path() -> str:
    """Compute the path to the SQLite file backing the store.

    If ``settings.storage_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the ``notes_api`` package directory.
    """
    storage_url = settings.storage_url
    if os.path.isabs(storage_url):
        return storage_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # notes_api/
    return str((base_dir / storage_url).resolve())


class SQLiteKeyValueStore(KeyValueStore):
    """Store values in the ``kv`` table of an SQLite database file."""

    def __init__(self, path: str) -> None:
        self.path = path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path)
        conn.execute(
            "CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
        )
        return conn

    def initialise(self) -> None:
        """Create the database file and the ``kv`` table if needed."""
        try:
            conn = self._connect()
            conn.commit()
            conn.close()
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open key-value store at {self.path}") from exc
        logger.info("Key-value store ready at %s", self.path)

    async def get(self, key: str) -> Optional[str]:
        try:
            conn = self._connect()
            try:
                row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise StorageError(f"Read of {key} failed") from exc
        return row[0] if row else None

    async def set(self, key: str, value: str) -> None:
        try:
            conn = self._connect()
            try:
                conn.execute(
                    "INSERT INTO kv (key, value) VALUES (?, ?)"
                    " ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (key, value),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise StorageError(f"Write of {key} failed") from exc

    async def remove(self, key: str) -> None:
        try:
            conn = self._connect()
            try:
                conn.execute("DELETE FROM kv WHERE key = ?", (key,))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise StorageError(f"Remove of {key} failed") from exc


class KeyLocks:
    """Registry of one ``asyncio.Lock`` per storage key.

    Locks are held weakly: once no caller holds or waits on a key's lock
    it is dropped, so the registry does not grow with every username seen.
    """

    def __init__(self) -> None:
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def lock(self, key: str) -> asyncio.Lock:
        """Return the lock guarding ``key``, creating it on first use."""
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock
