import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fundintake.address.factory import AddressNormalizerFactory
from fundintake.config.settings import Settings
from fundintake.drafts.base import BaseDraftStore
from fundintake.drafts.controller import DraftPersistController
from fundintake.drafts.coordinator import PasteCoordinator
from fundintake.drafts.debounce import Clock
from fundintake.drafts.factory import DraftStoreFactory
from fundintake.extraction.diligence_parser import FounderDiligenceParser
from fundintake.extraction.memo_parser import InvestmentMemoParser
from fundintake.forms.model import FormModel
from fundintake.forms.quick_paste import QuickPasteService
from fundintake.notifications.base import BaseNotifier

INVESTMENT_WIZARD_KEY = "investment-wizard-draft"

INVESTMENT_FORM_DEFAULTS: dict[str, Any] = {
    "fund": "fund_i",
    "status": "active",
    "instrument": "safe_post",
    "stage_at_investment": "seed",
    "has_pro_rata_rights": False,
    "founder_role": "founder",
    "founders": [],
}


@dataclass
class IntakeSession:
    """One open wizard: its form, draft controller and quick-paste service."""

    form: FormModel
    coordinator: PasteCoordinator
    drafts: DraftPersistController
    quick_paste: QuickPasteService

    async def aclose(self) -> None:
        """Stop watching the form and release the geocoder connection."""
        self.drafts.unmount()
        await self.quick_paste.aclose()


def build_intake_session(
    settings: Settings,
    *,
    notifier: BaseNotifier,
    form_key: str = INVESTMENT_WIZARD_KEY,
    defaults: Mapping[str, Any] = INVESTMENT_FORM_DEFAULTS,
    store: BaseDraftStore | None = None,
    clock: Clock = time.monotonic,
) -> IntakeSession:
    """Wire a session from settings and mount its draft controller."""
    form = FormModel(defaults)
    coordinator = PasteCoordinator(settings.paste_release_seconds, clock)
    drafts = DraftPersistController(
        form=form,
        store=store if store is not None else DraftStoreFactory.create(settings),
        form_key=form_key,
        coordinator=coordinator,
        notifier=notifier,
        default_fields=settings.default_field_names,
        debounce_seconds=settings.draft_debounce_seconds,
        clock=clock,
    )
    quick_paste = QuickPasteService(
        memo_parser=InvestmentMemoParser(),
        diligence_parser=FounderDiligenceParser(AddressNormalizerFactory.create(settings)),
        coordinator=coordinator,
        notifier=notifier,
    )
    drafts.mount()
    return IntakeSession(form=form, coordinator=coordinator, drafts=drafts, quick_paste=quick_paste)
