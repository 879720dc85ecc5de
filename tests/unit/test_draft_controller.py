from unittest.mock import patch

import pytest

from fundintake.drafts.base import BaseDraftStore
from fundintake.drafts.controller import DraftPersistController
from fundintake.drafts.coordinator import PasteCoordinator
from fundintake.drafts.exceptions import DraftStorageError
from fundintake.drafts.memory_store import MemoryDraftStore
from fundintake.drafts.models import ControllerState
from fundintake.drafts.serializer import deserialize, serialize
from fundintake.forms.model import FormModel

KEY = "investment-wizard-draft"
DEFAULTS = {"fund": "fund_i", "instrument": "safe_post", "has_pro_rata_rights": False}


class _UnreadableStore(MemoryDraftStore):
    def get(self, key: str) -> str | None:
        raise DraftStorageError("disk on fire")


class _Harness:
    def __init__(self, clock, notifier, store: BaseDraftStore | None = None) -> None:
        self.clock = clock
        self.store = store if store is not None else MemoryDraftStore()
        self.form = FormModel(DEFAULTS)
        self.coordinator = PasteCoordinator(1.0, clock)
        self.notifier = notifier
        self.controller = DraftPersistController(
            form=self.form,
            store=self.store,
            form_key=KEY,
            coordinator=self.coordinator,
            notifier=self.notifier,
            default_fields=DEFAULTS,
            debounce_seconds=0.7,
            clock=clock,
        )

    def settle(self) -> bool:
        self.clock.advance(0.7)
        return self.controller.tick()


def _make_harness(clock, make_notifier, store: BaseDraftStore | None = None) -> _Harness:
    harness = _Harness(clock, make_notifier(), store)
    harness.controller.mount()
    return harness


class TestMountAndRestore:
    def test_empty_store_leaves_defaults(self, clock, make_notifier) -> None:
        h = _make_harness(clock, make_notifier)

        assert h.controller.state is ControllerState.WATCHING
        assert h.form.get_values() == DEFAULTS
        assert h.notifier.toasts == []

    def test_round_trip(self, clock, make_notifier) -> None:
        h = _make_harness(clock, make_notifier)
        h.form.set_value("name", "Acme Robotics")
        assert h.settle() is True

        restored = _make_harness(clock, make_notifier, h.store)

        assert restored.form.get("name") == "Acme Robotics"
        assert restored.form.get("fund") == "fund_i"
        assert restored.form.is_dirty is False
        assert restored.controller.restored_actual_data is True
        assert restored.coordinator.user_has_interacted is True
        assert restored.notifier.titles() == ["Draft data restored"]

    def test_defaults_only_draft_is_silent(self, clock, make_notifier) -> None:
        store = MemoryDraftStore()
        store.set(KEY, serialize({**DEFAULTS, "has_pro_rata_rights": True}))
        h = _make_harness(clock, make_notifier, store)

        assert h.form.get("has_pro_rata_rights") is True
        assert h.controller.restored_actual_data is False
        assert h.coordinator.user_has_interacted is False
        assert h.notifier.toasts == []

    def test_corrupted_draft_is_discarded(self, clock, make_notifier) -> None:
        store = MemoryDraftStore()
        store.set(KEY, "{not json")
        h = _make_harness(clock, make_notifier, store)

        assert store.get(KEY) is None
        assert h.form.get_values() == DEFAULTS
        assert h.controller.state is ControllerState.WATCHING
        assert h.notifier.titles() == ["Saved draft was unreadable and has been discarded"]

    def test_unreadable_store_warns(self, clock, make_notifier) -> None:
        h = _make_harness(clock, make_notifier, _UnreadableStore())

        assert h.notifier.titles() == ["Failed to load draft"]
        assert h.controller.state is ControllerState.WATCHING

    def test_mount_twice_raises(self, clock, make_notifier) -> None:
        h = _make_harness(clock, make_notifier)
        with pytest.raises(RuntimeError, match="watching"):
            h.controller.mount()


class TestSaving:
    def test_saves_after_debounce(self, clock, make_notifier) -> None:
        h = _make_harness(clock, make_notifier)
        h.form.set_value("name", "Acme")

        clock.advance(0.4)
        assert h.controller.tick() is False
        assert h.store.get(KEY) is None
        clock.advance(0.4)
        assert h.controller.tick() is True
        assert deserialize(h.store.get(KEY))["name"] == "Acme"
        assert h.notifier.titles() == ["Draft saved"]

    def test_burst_of_edits_writes_once(self, clock, make_notifier) -> None:
        h = _make_harness(clock, make_notifier)
        with patch.object(h.store, "set", wraps=h.store.set) as spy:
            for value in ("A", "Ac", "Acm", "Acme"):
                h.form.set_value("name", value)
                clock.advance(0.25)
            h.settle()

        spy.assert_called_once()
        assert deserialize(spy.call_args.args[1])["name"] == "Acme"

    def test_unchanged_snapshot_is_not_rewritten(self, clock, make_notifier) -> None:
        h = _make_harness(clock, make_notifier)
        h.form.set_value("name", "Acme")
        h.settle()

        with patch.object(h.store, "set", wraps=h.store.set) as spy:
            h.form.set_value("name", "Acme")
            assert h.settle() is False

        spy.assert_not_called()

    def test_programmatic_changes_alone_never_save(self, clock, make_notifier) -> None:
        h = _make_harness(clock, make_notifier)
        h.form.set_value("name", "Acme", user_edit=False)

        assert h.settle() is False
        assert h.store.get(KEY) is None

    def test_edit_back_to_baseline_is_not_saved(self, clock, make_notifier) -> None:
        h = _make_harness(clock, make_notifier)
        h.form.set_value("fund", "fund_ii")
        h.form.set_value("fund", "fund_i")

        assert h.settle() is False

    def test_quota_failure_becomes_toast(self, clock, make_notifier) -> None:
        h = _make_harness(clock, make_notifier, MemoryDraftStore(quota_bytes=16))
        h.form.set_value("description_raw", "x" * 100)

        assert h.settle() is False
        assert h.notifier.titles() == ["Failed to save draft"]
        assert h.controller.state is ControllerState.WATCHING

    def test_unmount_drops_pending_save(self, clock, make_notifier) -> None:
        h = _make_harness(clock, make_notifier)
        h.form.set_value("name", "Acme")
        h.controller.unmount()

        assert h.settle() is False
        assert h.controller.state is ControllerState.IDLE
        assert h.store.get(KEY) is None


class TestPasteExclusion:
    def test_no_save_while_paste_in_progress(self, clock, make_notifier) -> None:
        h = _make_harness(clock, make_notifier)
        h.coordinator.begin_paste()
        h.form.set_value("name", "Acme")
        clock.advance(1.0)

        assert h.controller.tick() is False
        assert h.controller.has_pending_save is True

        h.coordinator.end_paste()
        clock.advance(1.5)
        assert h.controller.tick() is True

    def test_save_waits_for_lock_release(self, clock, make_notifier) -> None:
        h = _make_harness(clock, make_notifier)
        with h.coordinator.pasting():
            h.form.set_value("name", "Acme")

        clock.advance(0.7)
        assert h.controller.tick() is False
        clock.advance(0.8)
        assert h.controller.tick() is True


class TestClear:
    def test_clear_removes_draft_and_resets(self, clock, make_notifier) -> None:
        h = _make_harness(clock, make_notifier)
        h.form.set_value("name", "Acme")
        h.settle()

        h.controller.clear()

        assert h.store.get(KEY) is None
        assert h.controller.state is ControllerState.CLEARED
        assert h.form.is_dirty is False
        assert h.coordinator.user_has_interacted is False
        assert h.notifier.titles()[-1] == "Draft cleared"

    def test_programmatic_change_after_clear_is_ignored(self, clock, make_notifier) -> None:
        h = _make_harness(clock, make_notifier)
        h.controller.clear()
        h.form.set_value("name", "Acme", user_edit=False)

        assert h.controller.state is ControllerState.CLEARED
        assert h.controller.has_pending_save is False
        assert h.settle() is False

    def test_user_edit_after_clear_resumes_watching(self, clock, make_notifier) -> None:
        h = _make_harness(clock, make_notifier)
        h.form.set_value("name", "Acme")
        h.settle()
        h.controller.clear()

        h.form.set_value("name", "Acme Robotics")

        assert h.controller.state is ControllerState.WATCHING
        assert h.settle() is True
        assert deserialize(h.store.get(KEY))["name"] == "Acme Robotics"

    def test_clear_failure_becomes_toast(self, clock, make_notifier) -> None:
        h = _make_harness(clock, make_notifier)
        with patch.object(h.store, "remove", side_effect=DraftStorageError("locked")):
            h.controller.clear()

        assert h.notifier.titles() == ["Failed to clear draft"]
        assert h.controller.state is ControllerState.CLEARED
