"""Draft snapshot encoding.

Snapshots are stored as canonical JSON (sorted keys) so that two equal
form states always produce the same string and can be compared cheaply.
"""

import json
import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any

from fundintake.drafts.exceptions import DraftCorruptedError, DraftStorageError


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def clean_for_storage(value: Any) -> Any:
    """Drop None and NaN values from a snapshot, recursively."""
    if isinstance(value, Mapping):
        return {
            str(key): clean_for_storage(item)
            for key, item in value.items()
            if not _is_blank(item)
        }
    if isinstance(value, (list, tuple)):
        return [clean_for_storage(item) for item in value if not _is_blank(item)]
    return value


def _encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize(snapshot: Mapping[str, Any]) -> str:
    """Encode a cleaned snapshot.

    Raises:
        DraftStorageError: if the snapshot holds values JSON cannot represent.
    """
    try:
        return json.dumps(
            clean_for_storage(snapshot),
            sort_keys=True,
            allow_nan=False,
            separators=(",", ":"),
            default=_encode,
        )
    except (TypeError, ValueError) as exc:
        raise DraftStorageError(f"Draft is not serializable: {exc}") from exc


def deserialize(payload: str) -> dict[str, Any]:
    """Decode a stored snapshot.

    Raises:
        DraftCorruptedError: if the payload is not a JSON object.
    """
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as exc:
        raise DraftCorruptedError(f"Stored draft is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise DraftCorruptedError(
            f"Stored draft must be a JSON object, got {type(data).__name__}"
        )
    return data


def _is_actual(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    if _is_blank(value) or value == "":
        return False
    if isinstance(value, (int, float)) and value == 0:
        return False
    if isinstance(value, (list, tuple, dict)) and not value:
        return False
    return True


def has_actual_data(snapshot: Mapping[str, Any], default_fields: Iterable[str]) -> bool:
    """True when any field outside ``default_fields`` holds a real value.

    Empty strings, zero, None, NaN and empty collections do not count.
    """
    defaults = frozenset(default_fields)
    return any(
        _is_actual(value) for key, value in snapshot.items() if key not in defaults
    )
