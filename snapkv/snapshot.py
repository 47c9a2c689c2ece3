"""Snapshot: read-only mapping view of one version."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any, Hashable

from .ledger import check_version

if TYPE_CHECKING:
    from .store import Store


class Snapshot(Mapping):
    """A read-only ``Mapping`` over a store as of one version.

    Out-of-range versions (negative, or past the store's
    ``max_version()``) are clamped to ``max_version()`` when the
    snapshot is taken. A snapshot of a sealed version never changes;
    a snapshot of the open version sees writes made to that version
    until it is saved.

    The version is fixed at checkout. After the store is cleared or
    closed, a snapshot may name a version past the new
    ``max_version()`` and then reads the current state, as the store's
    own reads do for out-of-range versions.

    Unlike ``Versioned.get()``, ``__getitem__`` raises ``KeyError`` for
    absent keys and ``get()`` takes a per-call default, as for any
    ``Mapping``. Each key read is a single ``lookup()`` on the store,
    so over a ``Locked`` store it happens under one lock hold.
    """

    def __init__(self, store: Store, version: int) -> None:
        self._store = store
        max_version = store.max_version()
        version = check_version(version)
        if version < 0 or version > max_version:
            version = max_version
        self._version = version

    @property
    def version(self) -> int:
        return self._version

    def get(self, key: Hashable, default: Any = None) -> Any:
        found, value = self._store.lookup(key, self._version)
        return value if found else default

    def exists(self, key: Hashable) -> bool:
        return self._store.exists(key, self._version)

    def __contains__(self, key: object) -> bool:
        return self._store.exists(key, self._version)  # type: ignore[arg-type]

    def __getitem__(self, key: Hashable) -> Any:
        found, value = self._store.lookup(key, self._version)
        if not found:
            raise KeyError(key)
        return value

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._store.keys(self._version))

    def __len__(self) -> int:
        return max(self._store.size(self._version), 0)

    def __repr__(self) -> str:
        return f"Snapshot(version={self._version}, size={len(self)})"
