import os
import re
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from fundintake.drafts.base import BaseDraftStore
from fundintake.drafts.exceptions import DraftStorageError
from fundintake.drafts.models import DraftRecord
from fundintake.drafts.serializer import deserialize

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.\-]")


class FileDraftStore(BaseDraftStore):
    """One JSON file per form key inside ``directory``.

    Writes go to a temporary file first and are moved into place, so a
    crash mid-write leaves the previous draft intact.
    """

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    def path_for(self, key: str) -> Path:
        name = _UNSAFE_KEY_CHARS.sub("_", key).strip(".") or "_"
        return self._directory / f"{name}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise DraftStorageError(f"Cannot read draft {path}: {exc}") from exc

    def set(self, key: str, payload: str) -> None:
        path = self.path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, path)
            except OSError:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise DraftStorageError(f"Cannot write draft {path}: {exc}") from exc

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise DraftStorageError(f"Cannot remove draft {path}: {exc}") from exc

    def load(self, key: str) -> DraftRecord | None:
        payload = self.get(key)
        if payload is None:
            return None
        try:
            modified = self.path_for(key).stat().st_mtime
        except OSError:
            saved_at = None
        else:
            saved_at = datetime.fromtimestamp(modified, tz=timezone.utc)
        return DraftRecord(form_key=key, data=deserialize(payload), saved_at=saved_at)
