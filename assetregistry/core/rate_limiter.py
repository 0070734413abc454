"""Per-creator request throttling.

A fixed-window counter keyed by creator id. Windows are evaluated lazily
on each request against an injected clock, so there are no timers to
leak and tests can advance time deterministically.

Throttling is advisory: disabling it has no effect on the registry's
ownership or index invariants.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    started_at: float
    count: int = 0


class FixedWindowRateLimiter:
    """Allow at most ``limit`` requests per ``window_seconds`` per key.

    Parameters
    ----------
    limit:
        Requests permitted in each window.
    window_seconds:
        Window length. A key's window starts at its first request and
        resets on the first request after it expires.
    clock:
        Monotonic time source in seconds. Defaults to ``time.monotonic``.
    """

    def __init__(
        self,
        limit: int = 10,
        window_seconds: float = 60.0,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self._limit = limit
        self._window = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: dict[str, _Window] = {}
        self._last_sweep = clock()

    def allow(self, key: str) -> bool:
        """Count one request for ``key``; ``False`` if the quota is spent.

        Expired windows of every key are swept at most once per window
        length, so keys that stop sending requests do not accumulate.
        """
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self._window:
                self._sweep(now)
            window = self._windows.get(key)
            if window is None or now - window.started_at >= self._window:
                window = _Window(started_at=now)
                self._windows[key] = window
            if window.count >= self._limit:
                logger.warning("Rate limit exceeded for %s", key)
                return False
            window.count += 1
            return True

    def prune(self) -> int:
        """Drop expired windows. Returns the number removed."""
        now = self._clock()
        with self._lock:
            return self._sweep(now)

    def __len__(self) -> int:
        """Number of keys with a tracked window."""
        with self._lock:
            return len(self._windows)

    def _sweep(self, now: float) -> int:
        expired = [
            k for k, w in self._windows.items()
            if now - w.started_at >= self._window
        ]
        for k in expired:
            del self._windows[k]
        self._last_sweep = now
        return len(expired)
