import time
from collections.abc import Iterator
from contextlib import contextmanager

from fundintake.drafts.debounce import Clock
from fundintake.logging.logger import Log


class PasteCoordinator:
    """Shared state between the quick-paste flow and draft persistence.

    Holds the "paste in progress" lock and the "user has interacted" flag.
    After a successful paste the lock is held for ``release_delay_seconds``
    more so that follow-up formatting settles before the next save.
    """

    def __init__(self, release_delay_seconds: float = 1.0, clock: Clock = time.monotonic) -> None:
        self._release_delay = release_delay_seconds
        self._clock = clock
        self._pasting = False
        self._release_at: float | None = None
        self._user_has_interacted = False

    @property
    def is_paste_in_progress(self) -> bool:
        if self._pasting and self._release_at is not None and self._clock() >= self._release_at:
            self._pasting = False
            self._release_at = None
            Log.debug("Paste lock released")
        return self._pasting

    @property
    def user_has_interacted(self) -> bool:
        return self._user_has_interacted

    def mark_user_interaction(self) -> None:
        self._user_has_interacted = True

    def begin_paste(self) -> None:
        self._pasting = True
        self._release_at = None

    def end_paste(self, *, succeeded: bool = True) -> None:
        """Schedule the lock release; a failed paste releases it at once."""
        if not succeeded:
            self._pasting = False
            self._release_at = None
            return
        self._user_has_interacted = True
        self._release_at = self._clock() + self._release_delay

    def reset(self) -> None:
        self._pasting = False
        self._release_at = None
        self._user_has_interacted = False

    @contextmanager
    def pasting(self) -> Iterator[None]:
        self.begin_paste()
        try:
            yield
        except BaseException:
            self.end_paste(succeeded=False)
            raise
        self.end_paste()
