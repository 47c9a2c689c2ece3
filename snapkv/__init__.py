"""snapkv: Key-value store with numbered point-in-time versions."""

from .diff import DiffNode
from .errors import InvalidVersion
from .ledger import Ledger
from .locked import Locked
from .snapshot import Snapshot
from .store import Store, store
from .versioned import ErasePolicy, Versioned

__all__ = [
    "DiffNode",
    "ErasePolicy",
    "InvalidVersion",
    "Ledger",
    "Locked",
    "Snapshot",
    "Store",
    "Versioned",
    "store",
]
