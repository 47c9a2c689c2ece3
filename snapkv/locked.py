"""Locked: one exclusive lock around a Versioned store."""

from __future__ import annotations

import threading
from typing import Any, Hashable

from .snapshot import Snapshot
from .versioned import Versioned


class Locked:
    """Serializes every call to a wrapped ``Versioned``.

    A single re-entrant lock guards the whole store. In-place head
    updates and backward chain walks are not safe to interleave, so
    locking per key or per node would not be enough.

    Iterating methods (``keys()``, ``history()``) return lists built
    under the lock. Snapshots from ``checkout()`` read through this
    wrapper and take the lock on each call.

    Implements the ``Store`` protocol.
    """

    def __init__(self, versioned: Versioned | None = None) -> None:
        self._versioned = versioned if versioned is not None else Versioned()
        self._lock = threading.RLock()

    @property
    def versioned(self) -> Versioned:
        """The wrapped store. Calls made on it directly bypass the lock."""
        return self._versioned

    # -- Write operations --

    def set(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._versioned.set(key, value)

    def erase(self, key: Hashable) -> None:
        with self._lock:
            self._versioned.erase(key)

    def save(self) -> int:
        with self._lock:
            return self._versioned.save()

    # -- Read operations --

    def get(self, key: Hashable, version: int | None = None) -> Any:
        with self._lock:
            return self._versioned.get(key, version)

    def exists(self, key: Hashable, version: int | None = None) -> bool:
        with self._lock:
            return self._versioned.exists(key, version)

    def lookup(self, key: Hashable, version: int | None = None) -> tuple[bool, Any]:
        with self._lock:
            return self._versioned.lookup(key, version)

    def size(self, version: int | None = None) -> int:
        with self._lock:
            return self._versioned.size(version)

    def max_version(self) -> int:
        with self._lock:
            return self._versioned.max_version()

    def keys(self, version: int | None = None) -> list[Hashable]:
        with self._lock:
            return self._versioned.keys(version)

    def __contains__(self, key: Hashable) -> bool:
        return self.exists(key)

    def __len__(self) -> int:
        # len() rejects negatives, which "unguarded" erases can produce
        return max(self.size(), 0)

    def checkout(self, version: int) -> Snapshot:
        with self._lock:
            return Snapshot(self, version)

    # -- History --

    def history(self, key: Hashable) -> list[tuple[int, Any, bool]]:
        with self._lock:
            return list(self._versioned.history(key))

    def chain_length(self, key: Hashable) -> int:
        with self._lock:
            return self._versioned.chain_length(key)

    # -- Lifecycle --

    def clear(self) -> None:
        with self._lock:
            self._versioned.clear()

    def close(self) -> None:
        with self._lock:
            self._versioned.close()

    def __enter__(self) -> Locked:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
