"""Applies quick-paste parse results to a form.

Fields are written as user edits while the paste lock is held, so the
draft controller neither saves a half-applied paste nor treats the pasted
values as untouched defaults.
"""

from fundintake.address.models import AddressNormalizationResult, NormalizationMethod
from fundintake.drafts.coordinator import PasteCoordinator
from fundintake.extraction.diligence_parser import FounderDiligenceParser
from fundintake.extraction.memo_parser import InvestmentMemoParser
from fundintake.extraction.models import ExtractionResult
from fundintake.forms.model import FormModel
from fundintake.logging.logger import Log
from fundintake.notifications.base import BaseNotifier


class QuickPasteService:
    def __init__(
        self,
        *,
        memo_parser: InvestmentMemoParser,
        diligence_parser: FounderDiligenceParser,
        coordinator: PasteCoordinator,
        notifier: BaseNotifier,
    ) -> None:
        self._memo_parser = memo_parser
        self._diligence_parser = diligence_parser
        self._coordinator = coordinator
        self._notifier = notifier

    def paste_memo(self, form: FormModel, text: str) -> ExtractionResult:
        with self._coordinator.pasting():
            result = self._memo_parser.parse(text)
            self._apply(form, result)
        self._report(result)
        return result

    async def paste_diligence(self, form: FormModel, text: str) -> ExtractionResult:
        with self._coordinator.pasting():
            result = await self._diligence_parser.parse(text)
            self._apply(form, result)
        self._report(result)
        if result.address_normalization is not None:
            self._report_address(result.address_normalization)
        return result

    async def aclose(self) -> None:
        await self._diligence_parser.aclose()

    @staticmethod
    def _apply(form: FormModel, result: ExtractionResult) -> None:
        for name, value in result.form_values().items():
            form.set_value(name, value, user_edit=True)
        Log.info(
            "Quick paste applied",
            parsed=len(result.successfully_parsed),
            failed=len(result.failed_to_parse),
        )

    def _report(self, result: ExtractionResult) -> None:
        parsed = len(result.successfully_parsed)
        failed = len(result.failed_to_parse)
        if parsed == 0:
            self._notifier.warning(
                "Could not parse any fields",
                "Check the pasted text or fill in the form manually.",
            )
        elif failed:
            self._notifier.success(
                f"Parsed {parsed} fields",
                f"{failed} fields need manual entry.",
            )
        else:
            self._notifier.success(f"Parsed {parsed} fields")

    def _report_address(self, address: AddressNormalizationResult) -> None:
        if address.method is NormalizationMethod.GEOCODER:
            if address.needs_review:
                self._notifier.warning(
                    "Address matched with low confidence",
                    "Please review the headquarters address.",
                )
            else:
                self._notifier.success("Address verified")
        elif address.method is NormalizationMethod.REGEX:
            self._notifier.warning(
                "Address parsed without verification",
                "Please review the headquarters address.",
            )
        else:
            self._notifier.error(
                "Could not parse address",
                "Please enter the headquarters address manually.",
            )
