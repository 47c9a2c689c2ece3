"""Per-key diff chains: backward-linked records of a key's state."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator

log = logging.getLogger(__name__)


@dataclass
class DiffNode:
    """State of one key as of the version in which it last changed.

    A chain is reached through its head (the newest node) and walked
    backward through ``prev``. Versions strictly decrease along the
    walk. Each node belongs to exactly one chain.

    Attributes:
        value: The value written at ``version``. ``None`` for tombstones.
        deleted: True when the key was erased as of ``version``.
        version: The version in which this diff was recorded.
        prev: The previous (older) diff for the same key, if any.
    """

    value: Any
    deleted: bool
    version: int
    prev: DiffNode | None = None

    @property
    def live(self) -> bool:
        return not self.deleted

    def same_state(self, other: DiffNode) -> bool:
        """True when both nodes carry the same ``(value, deleted)`` pair."""
        return self.deleted == other.deleted and self.value == other.value


def write(
    head: DiffNode | None, value: Any, *, deleted: bool, version: int
) -> DiffNode:
    """Record a new state for a key in the open ``version``.

    Pushes a new head when ``head`` belongs to an older version, or
    rewrites ``head`` in place when it was already created in
    ``version``. Returns the (possibly new) head, before compaction.
    """
    if deleted:
        value = None
    if head is None or head.version < version:
        return DiffNode(value=value, deleted=deleted, version=version, prev=head)
    head.value = value
    head.deleted = deleted
    return head


def compact(head: DiffNode) -> DiffNode:
    """Restore the compaction invariant at the head of a chain.

    Only the head can duplicate its predecessor, since mutations only
    ever touch the head. A duplicate head is dropped and its
    predecessor becomes the head.
    """
    prev = head.prev
    if prev is not None and head.same_state(prev):
        log.debug("Dropping duplicate diff at version %d", head.version)
        head.prev = None
        return prev
    return head


def as_of(head: DiffNode | None, version: int) -> DiffNode | None:
    """Find the latest diff recorded at or before ``version``.

    Returns None when the chain is empty or starts after ``version``.
    """
    node = head
    while node is not None and node.version > version:
        node = node.prev
    return node


def walk(head: DiffNode | None) -> Iterator[DiffNode]:
    """Yield the nodes of a chain from newest to oldest."""
    node = head
    while node is not None:
        yield node
        node = node.prev
