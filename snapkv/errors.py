"""snapkv error types."""


class InvalidVersion(ValueError):
    """Raised when a version argument is not a non-negative integer.

    Versions beyond ``max_version()`` are not errors; reads fall back
    to the current state for those.

    Attributes:
        version: The rejected value.
    """

    def __init__(self, version: object) -> None:
        self.version = version
        super().__init__(f"Invalid version: {version!r}")
