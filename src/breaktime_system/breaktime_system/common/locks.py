from __future__ import annotations

import threading
from collections.abc import Hashable
from contextlib import contextmanager
from typing import Iterator


class KeyedLocks:
    """Lock table: one mutex per logical key (user, break type, ...).

    Unrelated keys never block each other; the table itself is only guarded
    while looking a lock up.
    Entries are never evicted, so the table grows by one lock per key ever seen.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[Hashable, threading.Lock] = {}

    def lock_for(self, key: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, *keys: Hashable) -> Iterator[None]:
        """Acquire the locks for ``keys`` in the given order, release in reverse.

        Callers must always pass keys in the same relative order to avoid deadlocks.
        """
        acquired: list[threading.Lock] = []
        try:
            for key in keys:
                lock = self.lock_for(key)
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()
