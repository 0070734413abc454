"""Tests for per-key locking."""

from __future__ import annotations

import threading
import time

from assetregistry.core.locks import KeyedLock


class TestKeyedLock:
    def test_same_key_is_exclusive(self):
        locks = KeyedLock()
        inside = 0
        peak = 0
        guard = threading.Lock()

        def worker():
            nonlocal inside, peak
            with locks.hold("asset"):
                with guard:
                    inside += 1
                    peak = max(peak, inside)
                time.sleep(0.005)
                with guard:
                    inside -= 1

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert peak == 1

    def test_different_keys_do_not_block(self):
        locks = KeyedLock()
        entered = threading.Event()

        with locks.hold("a"):
            def other():
                with locks.hold("b"):
                    entered.set()

            t = threading.Thread(target=other)
            t.start()
            assert entered.wait(timeout=2)
            t.join()

    def test_idle_keys_are_released(self):
        locks = KeyedLock()
        with locks.hold("a"):
            assert len(locks) == 1
        assert len(locks) == 0

    def test_released_on_exception(self):
        locks = KeyedLock()
        try:
            with locks.hold("a"):
                raise ValueError
        except ValueError:
            pass
        with locks.hold("a"):
            pass
        assert len(locks) == 0
