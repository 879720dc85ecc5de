from fundintake.address.base import AddressSource
from fundintake.address.exceptions import AddressSourceError
from fundintake.address.geocoder_client_base import BaseGeocoderClient
from fundintake.address.models import (
    AddressFields,
    AddressNormalizationResult,
    NormalizationMethod,
)
from fundintake.address.regex_grammar import parse_address
from fundintake.extraction.text import collapse_whitespace

CONFIDENCE_FALLBACK = 0.2


class GeocoderSource(AddressSource):
    """First tier: external geocoding service.

    Matches scoring above ``confidence_threshold`` are trusted; the rest
    are still accepted but flagged for review.
    """

    def __init__(
        self,
        client: BaseGeocoderClient | None,
        confidence_threshold: float = 0.8,
    ) -> None:
        self._client = client
        self._confidence_threshold = confidence_threshold

    async def try_normalize(self, text: str) -> AddressNormalizationResult:
        if self._client is None:
            raise AddressSourceError("Geocoder is not configured")
        try:
            match = await self._client.geocode(text)
        except (KeyError, TypeError, ValueError) as exc:
            raise AddressSourceError(f"Unexpected geocoder response: {exc!r}") from exc
        if match is None:
            raise AddressSourceError("Geocoder returned no match")

        fields = AddressFields(
            line1=match.line1,
            city=match.city,
            state=match.state,
            zip=match.postal_code,
            country=match.country,
            latitude=match.latitude,
            longitude=match.longitude,
        )
        complete = bool(fields.line1 and fields.city)
        return AddressNormalizationResult(
            method=NormalizationMethod.GEOCODER,
            needs_review=match.relevance <= self._confidence_threshold or not complete,
            fields=fields,
            confidence=match.relevance,
        )

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()


class RegexSource(AddressSource):
    """Second tier: offline street-address grammar. Results always need review."""

    async def try_normalize(self, text: str) -> AddressNormalizationResult:
        parsed = parse_address(text)
        if parsed is None:
            raise AddressSourceError("Address does not match the street-address grammar")
        return AddressNormalizationResult(
            method=NormalizationMethod.REGEX,
            needs_review=True,
            fields=AddressFields(
                line1=parsed.line1,
                city=parsed.city,
                state=parsed.state,
                zip=parsed.zip,
                country=parsed.country,
            ),
            confidence=parsed.confidence,
        )


class FallbackSource(AddressSource):
    """Last tier: keeps the unclassified text in ``line1``. Never fails."""

    async def try_normalize(self, text: str) -> AddressNormalizationResult:
        return AddressNormalizationResult(
            method=NormalizationMethod.FALLBACK,
            needs_review=True,
            fields=AddressFields(line1=collapse_whitespace(text)),
            confidence=CONFIDENCE_FALLBACK,
        )
