"""Keyed in-process locks.

Serialise work on a single cart or order while letting unrelated keys run in
parallel. Entries are reference counted and dropped once nobody holds or waits
on them.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class KeyedLock:
    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, list] = {}  # key -> [lock, holders]

    @contextmanager
    def hold(self, key) -> Iterator[None]:
        key = str(key)
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1

        entry[0].acquire()
        try:
            yield
        finally:
            entry[0].release()
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


cart_locks = KeyedLock()
order_locks = KeyedLock()
