import asyncio

import pytest

from fundintake.address.example_client_adapter import ExampleGeocoderClient
from fundintake.address.exceptions import AddressSourceError
from fundintake.address.geocoder_client_base import BaseGeocoderClient
from fundintake.address.models import (
    AddressFields,
    AddressNormalizationResult,
    GeocodeMatch,
    NormalizationMethod,
)
from fundintake.address.sources import (
    CONFIDENCE_FALLBACK,
    FallbackSource,
    GeocoderSource,
    RegexSource,
)


def _make_match(relevance: float = 0.95, city: str = "San Francisco") -> GeocodeMatch:
    return GeocodeMatch(
        line1="500 Market Street",
        city=city,
        state="CA",
        postal_code="94105",
        country="US",
        latitude=37.79,
        longitude=-122.4,
        relevance=relevance,
    )


class _BrokenClient(BaseGeocoderClient):
    async def geocode(self, query: str) -> GeocodeMatch | None:
        raise KeyError("features")


class TestGeocoderSource:
    def test_confident_match_needs_no_review(self) -> None:
        client = ExampleGeocoderClient({"500 Market Street": _make_match()})
        result = asyncio.run(GeocoderSource(client).try_normalize("500  market street"))

        assert result.method is NormalizationMethod.GEOCODER
        assert result.needs_review is False
        assert result.confidence == pytest.approx(0.95)
        assert result.fields.has_coordinates

    def test_weak_match_is_flagged(self) -> None:
        client = ExampleGeocoderClient({"500 Market Street": _make_match(relevance=0.5)})
        result = asyncio.run(GeocoderSource(client, 0.8).try_normalize("500 Market Street"))

        assert result.needs_review is True
        assert result.fields.latitude == pytest.approx(37.79)

    def test_match_at_threshold_is_flagged(self) -> None:
        client = ExampleGeocoderClient({"500 Market Street": _make_match(relevance=0.8)})
        result = asyncio.run(GeocoderSource(client, 0.8).try_normalize("500 Market Street"))

        assert result.needs_review is True

    def test_incomplete_match_is_flagged(self) -> None:
        client = ExampleGeocoderClient({"500 Market Street": _make_match(city="")})
        result = asyncio.run(GeocoderSource(client).try_normalize("500 Market Street"))

        assert result.needs_review is True

    def test_no_match_raises(self) -> None:
        source = GeocoderSource(ExampleGeocoderClient({}))
        with pytest.raises(AddressSourceError, match="no match"):
            asyncio.run(source.try_normalize("nowhere"))

    def test_unconfigured_raises(self) -> None:
        with pytest.raises(AddressSourceError, match="not configured"):
            asyncio.run(GeocoderSource(None).try_normalize("500 Market Street"))

    def test_malformed_response_raises(self) -> None:
        with pytest.raises(AddressSourceError, match="Unexpected geocoder response"):
            asyncio.run(GeocoderSource(_BrokenClient()).try_normalize("x"))


class TestRegexSource:
    def test_always_needs_review(self) -> None:
        result = asyncio.run(
            RegexSource().try_normalize("500 Market Street, San Francisco, CA 94105")
        )

        assert result.method is NormalizationMethod.REGEX
        assert result.needs_review is True
        assert result.fields.has_coordinates is False

    def test_unparseable_raises(self) -> None:
        with pytest.raises(AddressSourceError):
            asyncio.run(RegexSource().try_normalize("the old mill"))


class TestFallbackSource:
    def test_keeps_raw_text(self) -> None:
        result = asyncio.run(FallbackSource().try_normalize("  the old\nmill  "))

        assert result.method is NormalizationMethod.FALLBACK
        assert result.needs_review is True
        assert result.fields.line1 == "the old mill"
        assert result.confidence == CONFIDENCE_FALLBACK


class TestAddressNormalizationResult:
    def test_regex_result_cannot_carry_coordinates(self) -> None:
        with pytest.raises(ValueError, match="coordinates"):
            AddressNormalizationResult(
                method=NormalizationMethod.REGEX,
                needs_review=True,
                fields=AddressFields(line1="x", latitude=1.0, longitude=2.0),
            )

    def test_fallback_result_must_need_review(self) -> None:
        with pytest.raises(ValueError, match="need review"):
            AddressNormalizationResult(
                method=NormalizationMethod.FALLBACK,
                needs_review=False,
                fields=AddressFields(line1="x"),
            )
