"""Durable, ordered key-value store backing the registry tables.

Each logical table lives in its own numeric namespace (memory id) of a
shared store so keys from different tables never collide:

- ``ASSETS_NAMESPACE`` (0): asset id -> serialized DigitalAsset
- ``CREATOR_INDEX_NAMESPACE`` (1): creator id -> JSON list of asset ids

Two backends satisfy the ``KeyValueStore`` Protocol:

1. **SQLite** (``SQLiteKeyValueStore``): Persistent, crash-safe, WAL
   journal. Recommended for anything that must survive a restart.
2. **In-memory** (``InMemoryKeyValueStore``): Volatile, suitable for tests
   and single-process demos.

Both support ``transaction()`` so a multi-key write (a FULL transfer
touches one asset and two index entries) applies all-or-nothing.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

ASSETS_NAMESPACE = 0
CREATOR_INDEX_NAMESPACE = 1


@runtime_checkable
class KeyValueStore(Protocol):
    """Ordered string-keyed map, partitioned into numeric namespaces."""

    def get(self, namespace: int, key: str) -> str | None:
        """Return the value at ``key``, or ``None`` if absent."""
        ...

    def insert(self, namespace: int, key: str, value: str) -> None:
        """Write ``value`` at ``key``, replacing any previous value."""
        ...

    def delete(self, namespace: int, key: str) -> bool:
        """Remove ``key``. Returns ``True`` if it existed."""
        ...

    def keys(self, namespace: int) -> list[str]:
        """Return every key in the namespace, in ascending order."""
        ...

    def transaction(self) -> AbstractContextManager[None]:
        """Context manager applying the enclosed writes atomically."""
        ...


# ---------------------------------------------------------------------------
# DDL
# ---------------------------------------------------------------------------

_CREATE_KV = """
CREATE TABLE IF NOT EXISTS kv (
    namespace  INTEGER NOT NULL,
    key        TEXT NOT NULL,
    value      TEXT NOT NULL,
    PRIMARY KEY (namespace, key)
) WITHOUT ROWID;
"""


class SQLiteKeyValueStore:
    """SQLite-backed ``KeyValueStore``.

    A single connection is shared by all threads and guarded by a
    re-entrant lock; a transaction holds the lock until it commits or
    rolls back, so readers never observe a half-applied write.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file. Created if it does not exist.
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.RLock()
        self._depth = 0
        self._conn = sqlite3.connect(
            str(self._db_path),
            check_same_thread=False,
            isolation_level=None,  # explicit BEGIN/COMMIT in transaction()
        )
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA synchronous=FULL")
        self._conn.execute(_CREATE_KV)
        logger.debug("SQLiteKeyValueStore opened at %s", self._db_path)

    @property
    def path(self) -> Path:
        return self._db_path

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, namespace: int, key: str) -> str | None:
        with self._lock:
            row = self._conn.execute(
                "SELECT value FROM kv WHERE namespace = ? AND key = ?",
                (namespace, key),
            ).fetchone()
        return row[0] if row else None

    def keys(self, namespace: int) -> list[str]:
        with self._lock:
            rows = self._conn.execute(
                "SELECT key FROM kv WHERE namespace = ? ORDER BY key ASC",
                (namespace,),
            ).fetchall()
        return [row[0] for row in rows]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, namespace: int, key: str, value: str) -> None:
        with self.transaction():
            self._conn.execute(
                "INSERT INTO kv (namespace, key, value) VALUES (?, ?, ?) "
                "ON CONFLICT(namespace, key) DO UPDATE SET value = excluded.value",
                (namespace, key, value),
            )

    def delete(self, namespace: int, key: str) -> bool:
        with self.transaction():
            cur = self._conn.execute(
                "DELETE FROM kv WHERE namespace = ? AND key = ?",
                (namespace, key),
            )
        return cur.rowcount > 0

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Apply every write in the block atomically.

        Nested calls join the outermost transaction.
        """
        with self._lock:
            outermost = self._depth == 0
            if outermost:
                self._conn.execute("BEGIN IMMEDIATE")
            self._depth += 1
            try:
                yield
            except BaseException:
                self._depth -= 1
                if outermost:
                    self._conn.execute("ROLLBACK")
                raise
            self._depth -= 1
            if outermost:
                self._conn.execute("COMMIT")

    def close(self) -> None:
        with self._lock:
            self._conn.close()


class InMemoryKeyValueStore:
    """Volatile ``KeyValueStore`` backed by a dict.

    A transaction snapshots the data on entry and restores it if the
    block raises.
    """

    def __init__(self) -> None:
        self._data: dict[tuple[int, str], str] = {}
        self._lock = threading.RLock()
        self._depth = 0

    def get(self, namespace: int, key: str) -> str | None:
        with self._lock:
            return self._data.get((namespace, key))

    def keys(self, namespace: int) -> list[str]:
        with self._lock:
            return sorted(k for ns, k in self._data if ns == namespace)

    def insert(self, namespace: int, key: str, value: str) -> None:
        with self._lock:
            self._data[(namespace, key)] = value

    def delete(self, namespace: int, key: str) -> bool:
        with self._lock:
            return self._data.pop((namespace, key), None) is not None

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            snapshot = dict(self._data) if self._depth == 0 else None
            self._depth += 1
            try:
                yield
            except BaseException:
                if snapshot is not None:
                    self._data = snapshot
                raise
            finally:
                self._depth -= 1

    def close(self) -> None:
        """No-op; present for interface parity with the SQLite store."""
