import copy
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FormChange:
    """A change notification. ``name`` is None when a whole snapshot was applied."""

    name: str | None
    value: Any
    user_edit: bool


Listener = Callable[[FormChange], None]


class FormModel:
    """In-memory form state: current values, a dirty flag and change listeners.

    ``is_dirty`` compares current values with the baseline set by the last
    ``reset`` or ``mark_clean``, so editing a field back to its original
    value makes the form clean again.
    """

    def __init__(self, defaults: Mapping[str, Any] | None = None) -> None:
        self._defaults = dict(defaults or {})
        self._values = copy.deepcopy(self._defaults)
        self._baseline = copy.deepcopy(self._defaults)
        self._listeners: list[Listener] = []

    @property
    def defaults(self) -> dict[str, Any]:
        return copy.deepcopy(self._defaults)

    @property
    def is_dirty(self) -> bool:
        return self._values != self._baseline

    def get(self, name: str, default: Any = None) -> Any:
        return copy.deepcopy(self._values.get(name, default))

    def get_values(self) -> dict[str, Any]:
        return copy.deepcopy(self._values)

    def set_value(self, name: str, value: Any, *, user_edit: bool = True) -> None:
        self._values[name] = copy.deepcopy(value)
        self._emit(FormChange(name=name, value=value, user_edit=user_edit))

    def reset(self, snapshot: Mapping[str, Any] | None = None) -> None:
        """Replace every value with defaults overlaid by ``snapshot``; the result is clean."""
        values = copy.deepcopy(self._defaults)
        values.update(copy.deepcopy(dict(snapshot or {})))
        self._values = values
        self._baseline = copy.deepcopy(values)
        self._emit(FormChange(name=None, value=self.get_values(), user_edit=False))

    def mark_clean(self) -> None:
        self._baseline = copy.deepcopy(self._values)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; call the returned function to unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, change: FormChange) -> None:
        for listener in list(self._listeners):
            listener(change)
