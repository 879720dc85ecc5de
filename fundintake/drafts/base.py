from abc import ABC, abstractmethod

from fundintake.drafts.models import DraftRecord
from fundintake.drafts.serializer import deserialize


class BaseDraftStore(ABC):
    """Durable string key-value store for form drafts.

    Single writer per key; ``set`` overwrites. No multi-key atomicity.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored payload, or None when absent.

        Raises:
            DraftStorageError: if the backend cannot be read.
        """

    @abstractmethod
    def set(self, key: str, payload: str) -> None:
        """Store ``payload`` under ``key``, replacing any previous value.

        Raises:
            DraftStorageError: if the write fails (quota, I/O, database).
        """

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key``. Removing a missing key is not an error."""

    def load(self, key: str) -> DraftRecord | None:
        """Read and decode a draft.

        Raises:
            DraftStorageError: if the backend cannot be read.
            DraftCorruptedError: if the stored payload cannot be decoded.
        """
        payload = self.get(key)
        if payload is None:
            return None
        return DraftRecord(form_key=key, data=deserialize(payload))
