from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ControllerState(str, Enum):
    IDLE = "idle"
    RESTORING = "restoring"
    WATCHING = "watching"
    SAVING = "saving"
    CLEARED = "cleared"


@dataclass(frozen=True)
class DraftRecord:
    """A stored form snapshot. One record per form key; writes overwrite."""

    form_key: str
    data: dict[str, Any] = field(default_factory=dict)
    saved_at: datetime | None = None
