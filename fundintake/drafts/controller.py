"""Draft persistence for long multi-step forms.

The controller restores a stored snapshot on ``mount``, then watches the
form and writes a debounced snapshot whenever the user has really changed
something. The host drives time by calling ``tick`` from its event loop.

A settled change is written only when all of these hold:

* the user has interacted (direct edit, quick paste, or restored user data),
* the form is dirty or restored user data is present,
* no quick paste is in flight,
* the snapshot differs from the last one written.

Storage problems never escape the controller; they become toasts.
"""

import time
from collections.abc import Callable, Iterable

from fundintake.drafts.base import BaseDraftStore
from fundintake.drafts.coordinator import PasteCoordinator
from fundintake.drafts.debounce import Clock, Debouncer
from fundintake.drafts.exceptions import DraftCorruptedError, DraftStorageError
from fundintake.drafts.models import ControllerState
from fundintake.drafts.serializer import has_actual_data, serialize
from fundintake.forms.model import FormChange, FormModel
from fundintake.logging.logger import Log
from fundintake.notifications.base import BaseNotifier

DEFAULT_DRAFT_FIELDS = frozenset(
    {
        "has_pro_rata_rights",
        "fund",
        "stage_at_investment",
        "instrument",
        "status",
        "founder_role",
    }
)


class DraftPersistController:
    def __init__(
        self,
        *,
        form: FormModel,
        store: BaseDraftStore,
        form_key: str,
        coordinator: PasteCoordinator,
        notifier: BaseNotifier,
        default_fields: Iterable[str] = DEFAULT_DRAFT_FIELDS,
        debounce_seconds: float = 0.7,
        clock: Clock = time.monotonic,
    ) -> None:
        self._form = form
        self._store = store
        self._form_key = form_key
        self._coordinator = coordinator
        self._notifier = notifier
        self._default_fields = frozenset(default_fields)
        self._debouncer: Debouncer[None] = Debouncer(debounce_seconds, clock)
        self._state = ControllerState.IDLE
        self._last_written: str | None = None
        self._restored_actual_data = False
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def form_key(self) -> str:
        return self._form_key

    @property
    def restored_actual_data(self) -> bool:
        return self._restored_actual_data

    @property
    def has_pending_save(self) -> bool:
        return self._debouncer.has_pending

    def mount(self) -> None:
        """Restore the stored draft into the form and start watching changes."""
        if self._state is not ControllerState.IDLE:
            raise RuntimeError(f"Cannot mount a controller in state {self._state.value}")
        self._state = ControllerState.RESTORING
        self._restore()
        self._unsubscribe = self._form.subscribe(self._on_change)
        self._state = ControllerState.WATCHING

    def unmount(self) -> None:
        """Stop watching. A pending debounced save is dropped."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._debouncer.cancel()
        self._state = ControllerState.IDLE

    def tick(self) -> bool:
        """Run a due save, if any. Returns True when a draft was written."""
        if self._state is not ControllerState.WATCHING:
            return False
        due, _ = self._debouncer.pop_due()
        if not due:
            return False
        return self._save_if_needed()

    def clear(self) -> None:
        """Remove the stored draft and reset interaction and dirty tracking."""
        self._debouncer.cancel()
        try:
            self._store.remove(self._form_key)
        except DraftStorageError as exc:
            Log.error("Failed to clear draft", form_key=self._form_key, error=str(exc))
            self._notifier.warning("Failed to clear draft", str(exc))
        else:
            self._notifier.success("Draft cleared")
        self._last_written = None
        self._restored_actual_data = False
        self._coordinator.reset()
        self._form.mark_clean()
        self._state = ControllerState.CLEARED

    def _restore(self) -> None:
        try:
            record = self._store.load(self._form_key)
        except DraftCorruptedError as exc:
            Log.error("Discarding corrupted draft", form_key=self._form_key, error=str(exc))
            self._discard_corrupted()
            return
        except DraftStorageError as exc:
            Log.error("Failed to read draft", form_key=self._form_key, error=str(exc))
            self._notifier.warning("Failed to load draft", str(exc))
            return
        if record is None:
            return

        self._form.reset(record.data)
        self._restored_actual_data = has_actual_data(record.data, self._default_fields)
        try:
            self._last_written = serialize(record.data)
        except DraftStorageError:
            self._last_written = None
        if self._restored_actual_data:
            self._coordinator.mark_user_interaction()
            self._notifier.success("Draft data restored")
        Log.info(
            "Draft restored",
            form_key=self._form_key,
            actual_data=self._restored_actual_data,
        )

    def _discard_corrupted(self) -> None:
        try:
            self._store.remove(self._form_key)
        except DraftStorageError as exc:
            Log.error("Failed to remove corrupted draft", form_key=self._form_key, error=str(exc))
        self._notifier.warning("Saved draft was unreadable and has been discarded")

    def _on_change(self, change: FormChange) -> None:
        if self._state is ControllerState.CLEARED:
            if not change.user_edit:
                return
            self._state = ControllerState.WATCHING
        if change.user_edit:
            self._coordinator.mark_user_interaction()
        self._debouncer.push(None)

    def _save_if_needed(self) -> bool:
        if self._coordinator.is_paste_in_progress:
            Log.debug("Paste in progress, postponing draft save", form_key=self._form_key)
            self._debouncer.push(None)
            return False
        if not self._coordinator.user_has_interacted:
            return False
        if not (self._form.is_dirty or self._restored_actual_data):
            return False

        self._state = ControllerState.SAVING
        try:
            payload = serialize(self._form.get_values())
            if payload == self._last_written:
                return False
            self._store.set(self._form_key, payload)
        except DraftStorageError as exc:
            Log.error("Failed to save draft", form_key=self._form_key, error=str(exc))
            self._notifier.warning("Failed to save draft", str(exc))
            return False
        finally:
            self._state = ControllerState.WATCHING

        self._last_written = payload
        Log.debug("Draft saved", form_key=self._form_key, size=len(payload))
        self._notifier.success("Draft saved")
        return True
