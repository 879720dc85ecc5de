"""Composable matchers: pure ``(text) -> value | None`` functions.

Each form field owns an ordered tuple of matchers (a ``FieldRule``); the
first matcher returning a value wins. Within one matcher every occurrence
of its label is tried in document order until the coercer accepts one.
"""

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from fundintake.extraction.models import FieldName
from fundintake.extraction.text import find_block, iter_labeled

Matcher = Callable[[str], Any]
Coercer = Callable[[str], Any]
Condition = Callable[[Mapping[FieldName, Any]], bool]


@dataclass(frozen=True)
class FieldRule:
    """Priority-ordered matchers for one field.

    ``condition`` receives the values parsed so far; when it returns False
    the field is not attempted and appears in neither result set.
    """

    field: FieldName
    matchers: tuple[Matcher, ...]
    condition: Condition | None = None

    def applies(self, parsed: Mapping[FieldName, Any]) -> bool:
        return self.condition is None or self.condition(parsed)


def _keep(value: str) -> str:
    return value


def labeled(
    labels: Iterable[str],
    coerce: Coercer = _keep,
    value: str = r"([^\n]+)",
) -> Matcher:
    """Value after a label (``Label: value`` or ``Label\\nvalue``)."""
    label_list = tuple(labels)

    def match(text: str) -> Any:
        for raw in iter_labeled(text, label_list, value):
            coerced = coerce(raw)
            if coerced is not None:
                return coerced
        return None

    match.__name__ = f"labeled({label_list[0]!r})"
    return match


def block(
    labels: Iterable[str],
    coerce: Coercer = _keep,
    stop: Iterable[str] = (),
) -> Matcher:
    """Multi-line value after a label, up to a blank line or a stop label."""
    label_list = tuple(labels)
    stop_list = tuple(stop)

    def match(text: str) -> Any:
        raw = find_block(text, label_list, stop_list)
        return None if raw is None else coerce(raw)

    match.__name__ = f"block({label_list[0]!r})"
    return match


def regex(pattern: str, coerce: Coercer = _keep, flags: int = re.IGNORECASE) -> Matcher:
    """First capture group of ``pattern`` that the coercer accepts."""
    compiled = re.compile(pattern, flags)

    def match(text: str) -> Any:
        for found in compiled.finditer(text):
            captured = found.group(1).strip()
            if not captured:
                continue
            coerced = coerce(captured)
            if coerced is not None:
                return coerced
        return None

    match.__name__ = f"regex({pattern[:24]!r})"
    return match


def when_field_in(field: FieldName, allowed: Iterable[Any]) -> Condition:
    allowed_values = frozenset(allowed)

    def condition(parsed: Mapping[FieldName, Any]) -> bool:
        return parsed.get(field) in allowed_values

    return condition


def non_empty(coerce: Coercer = _keep) -> Coercer:
    """Wrap a coercer so empty or whitespace-only output counts as a miss."""

    def wrapped(raw: str) -> Any:
        value = coerce(raw)
        if isinstance(value, str) and not value.strip():
            return None
        return value

    return wrapped
