from fundintake.drafts.base import BaseDraftStore
from fundintake.drafts.exceptions import DraftStorageError


class MemoryDraftStore(BaseDraftStore):
    """Process-local store with a total byte quota, like browser local storage."""

    def __init__(self, quota_bytes: int = 5 * 1024 * 1024) -> None:
        self._quota_bytes = quota_bytes
        self._entries: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._entries.get(key)

    def set(self, key: str, payload: str) -> None:
        used = self.used_bytes() - self._entry_size(key, self._entries.get(key))
        needed = self._entry_size(key, payload)
        if used + needed > self._quota_bytes:
            raise DraftStorageError(
                f"Draft storage quota exceeded: {used + needed} > {self._quota_bytes} bytes"
            )
        self._entries[key] = payload

    def remove(self, key: str) -> None:
        self._entries.pop(key, None)

    def used_bytes(self) -> int:
        return sum(self._entry_size(key, value) for key, value in self._entries.items())

    @staticmethod
    def _entry_size(key: str, payload: str | None) -> int:
        if payload is None:
            return 0
        return len(key.encode("utf-8")) + len(payload.encode("utf-8"))
