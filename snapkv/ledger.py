"""Version ledger: live-key counts per version."""

import logging

from .errors import InvalidVersion

log = logging.getLogger(__name__)


def check_version(version: object) -> int:
    """Return ``version`` if it is an integer version number.

    Out-of-range numbers, negative or past the open version, are not
    rejected here; reads treat them as the current state.

    Raises:
        InvalidVersion: For non-integers (including bools).
    """
    if isinstance(version, bool) or not isinstance(version, int):
        raise InvalidVersion(version)
    return version


class Ledger:
    """Append-only list of live-key counts, indexed by version.

    The last entry belongs to the open version and is the only one
    that changes. Every earlier entry was fixed when ``save()`` sealed
    its version, so historical sizes never need a chain scan.
    """

    def __init__(self) -> None:
        self._sizes: list[int] = [0]

    def __len__(self) -> int:
        return len(self._sizes)

    def max_version(self) -> int:
        """The open version (highest version id in use)."""
        return len(self._sizes) - 1

    def save(self) -> int:
        """Seal the open version and open the next one.

        Returns:
            The id of the version just sealed.
        """
        sealed = self.max_version()
        self._sizes.append(self._sizes[-1])
        log.debug("Sealed version %d with %d live keys", sealed, self._sizes[sealed])
        return sealed

    def sealed(self, version: int | None) -> bool:
        """Whether ``version`` names a sealed version.

        False for ``None``, the open version, and out-of-range numbers,
        all of which read as the current state.
        """
        if version is None:
            return False
        return 0 <= check_version(version) < self.max_version()

    def size(self, version: int | None = None) -> int:
        """Live keys in ``version``; the open version when omitted or out of range."""
        if not self.sealed(version):
            return self._sizes[-1]
        return self._sizes[version]

    def adjust(self, delta: int) -> None:
        """Add ``delta`` to the open version's count."""
        self._sizes[-1] += delta

    def reset(self) -> None:
        self._sizes = [0]
