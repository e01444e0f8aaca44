class PhonebookError(Exception):
    """Base class for phone book failures."""


class InvalidFieldError(PhonebookError, ValueError):
    def __init__(self, field: str):
        super().__init__(f"Field '{field}' cannot be edited.")
        self.field = field


class SnapshotError(PhonebookError):
    """Snapshot file could not be read or decoded."""


class EndOfInput(PhonebookError):
    """Input source has no more lines."""
