import time
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

Clock = Callable[[], float]


class Debouncer(Generic[T]):
    """Coalesces bursts of pushes into one item released after a quiet period.

    Each ``push`` replaces the pending item and restarts the countdown.
    The owner polls ``pop_due`` from its event loop.
    """

    def __init__(self, delay_seconds: float, clock: Clock = time.monotonic) -> None:
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        self._delay = delay_seconds
        self._clock = clock
        self._pending: T | None = None
        self._has_pending = False
        self._due_at = 0.0

    @property
    def has_pending(self) -> bool:
        return self._has_pending

    @property
    def due_at(self) -> float | None:
        return self._due_at if self._has_pending else None

    def push(self, item: T) -> None:
        self._pending = item
        self._has_pending = True
        self._due_at = self._clock() + self._delay

    def pop_due(self) -> tuple[bool, T | None]:
        """Return ``(True, item)`` once the quiet period has elapsed."""
        if not self._has_pending or self._clock() < self._due_at:
            return False, None
        item = self._pending
        self.cancel()
        return True, item

    def cancel(self) -> None:
        self._pending = None
        self._has_pending = False
