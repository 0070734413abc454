"""Per-key mutual exclusion.

``KeyedLock`` hands out one ``threading.Lock`` per key so read-modify-write
sequences on the same asset id run one at a time while different ids
proceed in parallel. Locks are reference counted and dropped once no
thread holds or waits on them.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class KeyedLock:
    """A lazily populated map of locks keyed by string."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._refs: dict[str, int] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        """Block until ``key`` is free, then hold it for the enclosed block."""
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._refs[key] = self._refs.get(key, 0) + 1
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                self._refs[key] -= 1
                if self._refs[key] == 0:
                    del self._refs[key]
                    del self._locks[key]

    def __len__(self) -> int:
        """Number of keys currently held or awaited."""
        with self._guard:
            return len(self._locks)
