from __future__ import annotations

import threading
from collections.abc import Hashable
from typing import Callable, Generic, Iterable, Optional, TypeVar

from ..core.exceptions import DuplicateRecordError

T = TypeVar("T")

TABLES = ("departments", "users", "break_types", "breaks")


class StoreUnavailableError(RuntimeError):
    """Raised when the store is used after it was closed."""


class Table(Generic[T]):
    """Keyed collection with generated, monotonically increasing ids.

    Records are immutable values; updates replace the stored value under the
    table lock. Iteration order is insertion (= id) order.
    """

    def __init__(self, name: str, database: "InMemoryDatabase"):
        self.name = name
        self._database = database
        self._lock = threading.RLock()
        self._rows: dict[int, T] = {}
        self._next_id = 1

    def insert(self, build: Callable[[int], T], *, unique: Optional[Callable[[T], Hashable]] = None) -> T:
        with self._lock:
            self._database.ensure_open()
            record_id = self._next_id
            record = build(record_id)
            if unique is not None:
                key = unique(record)
                if any(unique(r) == key for r in self._rows.values()):
                    raise DuplicateRecordError(f"{self.name}: {key!r} already exists")
            self._rows[record_id] = record
            self._next_id += 1
            return record

    def get(self, record_id: int) -> Optional[T]:
        with self._lock:
            self._database.ensure_open()
            return self._rows.get(record_id)

    def first(self, predicate: Callable[[T], bool]) -> Optional[T]:
        with self._lock:
            self._database.ensure_open()
            for row in self._rows.values():
                if predicate(row):
                    return row
            return None

    def select(self, predicate: Optional[Callable[[T], bool]] = None) -> list[T]:
        with self._lock:
            self._database.ensure_open()
            if predicate is None:
                return list(self._rows.values())
            return [r for r in self._rows.values() if predicate(r)]

    def count(self, predicate: Callable[[T], bool]) -> int:
        with self._lock:
            self._database.ensure_open()
            return sum(1 for r in self._rows.values() if predicate(r))

    def update(self, record_id: int, change: Callable[[T], T]) -> Optional[T]:
        """Replace one record in place. ``change`` may raise to abort the update."""
        with self._lock:
            self._database.ensure_open()
            current = self._rows.get(record_id)
            if current is None:
                return None
            updated = change(current)
            self._rows[record_id] = updated
            return updated

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)


class InMemoryDatabase:
    """Process-local record store shared by all repositories.

    Built once by the container and passed by reference; nothing survives a
    restart.
    """

    def __init__(self, tables: Iterable[str] = TABLES):
        self._closed = False
        self._tables: dict[str, Table] = {name: Table(name, self) for name in tables}

    def table(self, name: str) -> Table:
        try:
            return self._tables[name]
        except KeyError:
            raise StoreUnavailableError(f"Unknown table {name!r}") from None

    def ensure_open(self) -> None:
        if self._closed:
            raise StoreUnavailableError("Record store is closed")

    @property
    def is_open(self) -> bool:
        return not self._closed

    def close(self) -> None:
        self._closed = True
