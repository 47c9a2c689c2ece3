"""Versioned: a key-value map with numbered point-in-time versions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Hashable, Iterator, Literal

from . import diff
from .diff import DiffNode
from .ledger import Ledger

if TYPE_CHECKING:
    from .snapshot import Snapshot

log = logging.getLogger(__name__)

ErasePolicy = Literal["guarded", "unguarded"]
ERASE_POLICIES: tuple[str, ...] = ("guarded", "unguarded")


class Versioned:
    """An in-memory map that keeps the history of every saved version.

    Writes always go to the open version. ``save()`` seals it and
    opens the next one; sealed versions stay readable through the
    ``version`` argument of ``get()``, ``exists()`` and ``size()``.

    Each key keeps a chain of diffs, one per version in which its
    observable state changed, so history costs space proportional to
    changes rather than to versions. A ``Ledger`` keeps the live-key
    count of every version.

    Missing keys and out-of-range versions (negative, or past
    ``max_version()``) never raise: reads return the default value,
    ``False``, or answer from the current state.

    Args:
        default: Value returned for missing keys.
        default_factory: Zero-argument callable producing the value
            returned for missing keys. Exclusive with ``default``.
        erase_policy: ``"guarded"`` (default) only counts an erase
            against ``size()`` when the key was live. ``"unguarded"``
            decrements on every erase, and ``size()`` may then drift
            below the true live count.

    Not thread-safe; see ``Locked``.
    """

    def __init__(
        self,
        *,
        default: Any = None,
        default_factory: Callable[[], Any] | None = None,
        erase_policy: ErasePolicy = "guarded",
    ) -> None:
        if default is not None and default_factory is not None:
            raise ValueError("Pass either default or default_factory, not both")
        if erase_policy not in ERASE_POLICIES:
            raise ValueError(f"Unknown erase_policy: {erase_policy!r}")
        self._default = default
        self._default_factory = default_factory
        self._erase_policy = erase_policy
        self._heads: dict[Hashable, DiffNode] = {}
        self._ledger = Ledger()

    @property
    def erase_policy(self) -> ErasePolicy:
        return self._erase_policy

    # -- Write operations --

    def set(self, key: Hashable, value: Any) -> None:
        """Set ``key`` to ``value`` in the open version."""
        version = self._ledger.max_version()
        head = self._heads.get(key)
        if head is None:
            self._ledger.adjust(1)
        elif head.deleted and (
            head.version < version or self._erase_policy == "guarded"
        ):
            # In-place revival only counts when erase counted the drop
            self._ledger.adjust(1)
        self._store_head(
            key, diff.write(head, value, deleted=False, version=version)
        )

    def erase(self, key: Hashable) -> None:
        """Erase ``key`` from the open version. Missing keys are ignored."""
        head = self._heads.get(key)
        if self._erase_policy == "unguarded" or (head is not None and head.live):
            self._ledger.adjust(-1)
        if head is None:
            return
        version = self._ledger.max_version()
        self._store_head(key, diff.write(head, None, deleted=True, version=version))

    def save(self) -> int:
        """Seal the open version and open a new one.

        Returns:
            The id of the sealed version; pass it to the ``version``
            argument of reads to see this state later.
        """
        return self._ledger.save()

    # -- Read operations --

    def get(self, key: Hashable, version: int | None = None) -> Any:
        """Value of ``key`` at ``version`` (current if omitted), or the default."""
        node = self._lookup(key, version)
        if node is None or node.deleted:
            return self._missing()
        return node.value

    def exists(self, key: Hashable, version: int | None = None) -> bool:
        """Whether ``key`` is live at ``version`` (current if omitted)."""
        node = self._lookup(key, version)
        return node is not None and node.live

    def lookup(self, key: Hashable, version: int | None = None) -> tuple[bool, Any]:
        """Return ``(found, value)`` for ``key`` at ``version``.

        ``(False, None)`` when the key is absent. Answers ``exists()``
        and ``get()`` together from one chain walk, without substituting
        the store's default.
        """
        node = self._lookup(key, version)
        if node is None or node.deleted:
            return False, None
        return True, node.value

    def size(self, version: int | None = None) -> int:
        """Live keys at ``version``; out-of-range versions read as current."""
        return self._ledger.size(version)

    def max_version(self) -> int:
        """Highest version id in use; this is the open version."""
        return self._ledger.max_version()

    def keys(self, version: int | None = None) -> list[Hashable]:
        """Keys live at ``version`` (current if omitted), in no particular order."""
        return [key for key in self._heads if self.exists(key, version)]

    def __contains__(self, key: Hashable) -> bool:
        return self.exists(key)

    def __len__(self) -> int:
        # len() rejects negatives, which "unguarded" erases can produce
        return max(self.size(), 0)

    def checkout(self, version: int) -> Snapshot:
        """Return a read-only ``Snapshot`` mapping of ``version``."""
        from .snapshot import Snapshot

        return Snapshot(self, version)

    # -- History --

    def history(self, key: Hashable) -> Iterator[tuple[int, Any, bool]]:
        """Yield ``(version, value, deleted)`` for each retained diff of ``key``.

        Newest first. Only versions in which the key's state changed
        appear.
        """
        for node in diff.walk(self._heads.get(key)):
            yield node.version, node.value, node.deleted

    def chain_length(self, key: Hashable) -> int:
        """Number of diffs retained for ``key``."""
        return sum(1 for _ in diff.walk(self._heads.get(key)))

    # -- Lifecycle --

    def clear(self) -> None:
        """Drop every chain and all versions. The store restarts at version 0."""
        self._heads.clear()
        self._ledger.reset()

    def close(self) -> None:
        """Release all history held by the store."""
        log.debug(
            "Closing store: %d keys, %d versions", len(self._heads), len(self._ledger)
        )
        self.clear()

    def __enter__(self) -> Versioned:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -- Internal --

    def _lookup(self, key: Hashable, version: int | None) -> DiffNode | None:
        head = self._heads.get(key)
        if not self._ledger.sealed(version):
            return head
        return diff.as_of(head, version)

    def _store_head(self, key: Hashable, head: DiffNode) -> None:
        self._heads[key] = diff.compact(head)

    def _missing(self) -> Any:
        if self._default_factory is not None:
            return self._default_factory()
        return self._default
