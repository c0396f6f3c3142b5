"""Tests for per-key serialisation used by checkout and webhook handling."""

import threading
import time

from ordering.checkout.locks import KeyedLock


class TestKeyedLock:
    def test_entry_released_after_use(self):
        locks = KeyedLock()
        with locks.hold("cart-1"):
            assert len(locks) == 1
        assert len(locks) == 0

    def test_entry_released_on_exception(self):
        locks = KeyedLock()
        try:
            with locks.hold("cart-1"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert len(locks) == 0

    def test_same_key_is_mutually_exclusive(self):
        locks = KeyedLock()
        active = 0
        peak = 0
        counter = threading.Lock()

        def worker():
            nonlocal active, peak
            with locks.hold("cart-1"):
                with counter:
                    active += 1
                    peak = max(peak, active)
                time.sleep(0.01)
                with counter:
                    active -= 1

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert peak == 1
        assert len(locks) == 0

    def test_different_keys_run_in_parallel(self):
        locks = KeyedLock()
        both_inside = threading.Barrier(2, timeout=2)
        results = []

        def worker(key):
            with locks.hold(key):
                both_inside.wait()
                results.append(key)

        threads = [threading.Thread(target=worker, args=(k,)) for k in ("cart-1", "cart-2")]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(results) == ["cart-1", "cart-2"]

    def test_keys_are_normalised_to_strings(self):
        locks = KeyedLock()
        with locks.hold(42):
            assert len(locks) == 1
        assert len(locks) == 0
