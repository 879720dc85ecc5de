import asyncio

from fundintake.address.example_client_adapter import ExampleGeocoderClient
from fundintake.address.models import GeocodeMatch
from fundintake.address.normalizer import AddressNormalizer
from fundintake.address.sources import GeocoderSource, RegexSource
from fundintake.drafts.coordinator import PasteCoordinator
from fundintake.extraction.diligence_parser import FounderDiligenceParser
from fundintake.extraction.memo_parser import InvestmentMemoParser
from fundintake.forms.model import FormChange, FormModel
from fundintake.forms.quick_paste import QuickPasteService
from fundintake.notifications.models import Severity


def _make_service(clock, notifier, geocoder: ExampleGeocoderClient | None = None):
    coordinator = PasteCoordinator(1.0, clock)
    service = QuickPasteService(
        memo_parser=InvestmentMemoParser(),
        diligence_parser=FounderDiligenceParser(
            AddressNormalizer([GeocoderSource(geocoder), RegexSource()])
        ),
        coordinator=coordinator,
        notifier=notifier,
    )
    return service, coordinator, notifier


class TestPasteMemo:
    def test_applies_fields_as_user_edits(self, clock, make_notifier, memo_text: str) -> None:
        service, coordinator, notifier = _make_service(clock, make_notifier())
        form = FormModel({"instrument": "equity"})
        changes: list[FormChange] = []
        form.subscribe(changes.append)

        service.paste_memo(form, memo_text)

        assert form.get("investment_amount") == 50000
        assert form.get("instrument") == "safe_post"
        assert form.get("investment_date") == "2025-01-05"
        assert changes and all(change.user_edit for change in changes)
        assert coordinator.user_has_interacted is True
        assert coordinator.is_paste_in_progress is True

    def test_reports_partial_parse(self, clock, make_notifier, memo_text: str) -> None:
        service, _, notifier = _make_service(clock, make_notifier())
        service.paste_memo(FormModel(), memo_text)

        (toast,) = notifier.toasts
        assert toast.severity is Severity.SUCCESS
        assert toast.title == "Parsed 3 fields"
        assert toast.description.endswith("fields need manual entry.")

    def test_reports_nothing_parsed(self, clock, make_notifier) -> None:
        service, coordinator, notifier = _make_service(clock, make_notifier())
        form = FormModel()

        service.paste_memo(form, "hello there")

        assert notifier.titles() == ["Could not parse any fields"]
        assert notifier.toasts[0].severity is Severity.WARNING
        assert form.get_values() == {}


class TestPasteDiligence:
    def test_verified_address(self, clock, make_notifier, diligence_text: str) -> None:
        service, _, notifier = _make_service(clock, make_notifier(), ExampleGeocoderClient())
        form = FormModel()

        asyncio.run(service.paste_diligence(form, diligence_text))

        assert form.get("legal_name") == "Acme Robotics, Inc."
        assert form.get("hq_latitude") is not None
        assert [f["first_name"] for f in form.get("founders")] == ["Jane", "Omar"]
        assert notifier.titles()[-1] == "Address verified"

    def test_low_confidence_geocode(self, clock, make_notifier, diligence_text: str) -> None:
        weak = GeocodeMatch(
            line1="500 Market Street",
            city="San Francisco",
            state="CA",
            postal_code="94105",
            country="US",
            latitude=37.7896,
            longitude=-122.4002,
            relevance=0.4,
        )
        geocoder = ExampleGeocoderClient(
            {"500 Market Street, San Francisco, CA 94105": weak}
        )
        service, _, notifier = _make_service(clock, make_notifier(), geocoder)

        asyncio.run(service.paste_diligence(FormModel(), diligence_text))

        assert notifier.titles()[-1] == "Address matched with low confidence"

    def test_unverified_address(self, clock, make_notifier, diligence_text: str) -> None:
        service, _, notifier = _make_service(clock, make_notifier())
        form = FormModel()

        asyncio.run(service.paste_diligence(form, diligence_text))

        assert form.get("hq_city") == "San Francisco"
        assert form.get("hq_latitude") is None
        assert notifier.toasts[-1].severity is Severity.WARNING
        assert notifier.titles()[-1] == "Address parsed without verification"

    def test_unparsed_address(self, clock, make_notifier) -> None:
        service, _, notifier = _make_service(clock, make_notifier())

        asyncio.run(
            service.paste_diligence(FormModel(), "HQ Address: the old mill by the river\n")
        )

        assert notifier.toasts[-1].severity is Severity.ERROR
        assert notifier.titles()[-1] == "Could not parse address"
