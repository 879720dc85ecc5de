"""Example geocoder client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseGeocoderClient and register the provider in AddressNormalizerFactory.
"""

from typing import ClassVar

from fundintake.address.geocoder_client_base import BaseGeocoderClient
from fundintake.address.models import GeocodeMatch


class ExampleGeocoderClient(BaseGeocoderClient):
    """Offline adapter answering from a fixed lookup table.

    No network calls. Unknown queries return no match, which makes the
    normalizer degrade to the regex tier exactly as it would on a real miss.
    """

    KNOWN_ADDRESSES: ClassVar[dict[str, GeocodeMatch]] = {
        "500 market street, san francisco, ca 94105": GeocodeMatch(
            line1="500 Market Street",
            city="San Francisco",
            state="CA",
            postal_code="94105",
            country="US",
            latitude=37.7896,
            longitude=-122.4002,
            relevance=0.98,
        ),
    }

    def __init__(self, matches: dict[str, GeocodeMatch] | None = None) -> None:
        source = self.KNOWN_ADDRESSES if matches is None else matches
        self._matches = {self._key(query): match for query, match in source.items()}

    async def geocode(self, query: str) -> GeocodeMatch | None:
        return self._matches.get(self._key(query))

    @staticmethod
    def _key(query: str) -> str:
        return " ".join(query.lower().split())
