class DraftError(Exception):
    """Base error for draft persistence."""


class DraftStorageError(DraftError):
    """Raised when the draft store cannot read, write or remove an entry."""


class DraftCorruptedError(DraftError):
    """Raised when a stored draft cannot be decoded into a form snapshot."""
