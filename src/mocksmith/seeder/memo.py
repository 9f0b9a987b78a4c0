"""
Reference stores consulted by foreign-key columns.

``ReferenceMemo`` belongs to exactly one seeder run and is filled as parent
rows are produced. ``ForeignValueStore`` is an engine-level table of values
supplied from outside, read-mostly and guarded by a readers-writer lock.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Sequence


class ReferenceMemo:
    """Transient ``table.column -> values`` map for one seeder run."""

    def __init__(self):
        self._values: Dict[str, List[Any]] = {}

    @staticmethod
    def key(table: str, column: str) -> str:
        return f"{table}.{column}"

    def declare(self, table: str, column: str) -> None:
        """Make an empty list exist for a reference target."""
        self._values.setdefault(self.key(table, column), [])

    def add(self, table: str, column: str, value: Any) -> None:
        self._values.setdefault(self.key(table, column), []).append(value)

    def record_row(self, table: str, row: Mapping[str, Any], targets: Iterable[str]) -> None:
        """Memoize the target columns of a completed row."""
        for column in targets:
            if column in row:
                self.add(table, column, row[column])

    def values(self, key: str) -> Sequence[Any]:
        """Values memoized under ``key``; empty when nothing was recorded."""
        return self._values.get(key, [])

    def counts(self) -> Dict[str, int]:
        return {key: len(vals) for key, vals in sorted(self._values.items())}

    def clear(self) -> None:
        self._values.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)


class _ReadWriteLock:
    """Many concurrent readers or one writer."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._readers:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class ForeignValueStore:
    """
    Externally supplied foreign values keyed by ``table.column``.

    Updates must finish before any run that depends on them starts; reads
    may happen from many threads at once.
    """

    def __init__(self, initial: Mapping[str, Iterable[Any]] | None = None):
        self._lock = _ReadWriteLock()
        self._values: Dict[str, List[Any]] = {}
        for key, values in (initial or {}).items():
            self._values[key] = list(values)

    def set(self, key: str, values: Iterable[Any]) -> None:
        """Replace the values stored under ``key``."""
        snapshot = list(values)
        with self._lock.write():
            self._values[key] = snapshot

    def extend(self, key: str, values: Iterable[Any]) -> None:
        extra = list(values)
        with self._lock.write():
            self._values.setdefault(key, []).extend(extra)

    def remove(self, key: str) -> None:
        with self._lock.write():
            self._values.pop(key, None)

    def values(self, key: str) -> Sequence[Any]:
        """Return a copy of the values under ``key``."""
        with self._lock.read():
            return list(self._values.get(key, []))

    def keys(self) -> List[str]:
        with self._lock.read():
            return sorted(self._values)
