"""Custom exceptions for spell-range."""


class SpellRangeError(Exception):
    """Base exception for spell-range operations."""

    pass


class HostSnapshotError(SpellRangeError):
    """Raised when a host snapshot cannot be applied."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        if field:
            message = f"{field}: {message}"
        super().__init__(message)
