"""Store protocol and factory function."""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Hashable,
    Iterable,
    Protocol,
    runtime_checkable,
)

if TYPE_CHECKING:
    from .snapshot import Snapshot
    from .versioned import ErasePolicy


@runtime_checkable
class Store(Protocol):
    """Protocol for versioned key-value stores.

    Implementations: ``Versioned``, ``Locked``.
    """

    def set(self, key: Hashable, value: Any) -> None: ...
    def erase(self, key: Hashable) -> None: ...
    def save(self) -> int: ...
    def get(self, key: Hashable, version: int | None = None) -> Any: ...
    def exists(self, key: Hashable, version: int | None = None) -> bool: ...
    def lookup(self, key: Hashable, version: int | None = None) -> tuple[bool, Any]: ...
    def size(self, version: int | None = None) -> int: ...
    def max_version(self) -> int: ...
    def keys(self, version: int | None = None) -> Iterable[Hashable]: ...
    def __contains__(self, key: Hashable) -> bool: ...
    def __len__(self) -> int: ...
    def checkout(self, version: int) -> Snapshot: ...
    def history(self, key: Hashable) -> Iterable[tuple[int, Any, bool]]: ...
    def chain_length(self, key: Hashable) -> int: ...
    def clear(self) -> None: ...
    def close(self) -> None: ...


def store(
    *,
    default: Any = None,
    default_factory: Callable[[], Any] | None = None,
    erase_policy: ErasePolicy = "guarded",
    thread_safe: bool = False,
) -> Store:
    """Create a Store with sensible defaults.

    Args:
        default: Value returned when a key is absent (default ``None``).
        default_factory: Callable producing the value for absent keys,
            e.g. ``str`` or ``list``. Exclusive with ``default``.
        erase_policy: ``"guarded"`` (default) counts an erase against
            ``size()`` only when the key was live. ``"unguarded"``
            decrements on every erase, matching older behaviour.
        thread_safe: Wrap the store in ``Locked`` so it can be shared
            between threads.

    Returns:
        A ``Versioned`` store, or a ``Locked`` one when ``thread_safe``.
    """
    from .versioned import Versioned

    versioned = Versioned(
        default=default,
        default_factory=default_factory,
        erase_policy=erase_policy,
    )
    if thread_safe:
        from .locked import Locked

        return Locked(versioned)
    return versioned
