from abc import ABC, abstractmethod

from fundintake.address.models import GeocodeMatch


class BaseGeocoderClient(ABC):
    """Contract for provider-specific geocoding clients."""

    @abstractmethod
    async def geocode(self, query: str) -> GeocodeMatch | None:
        """Return the best match for ``query``, or None when nothing matched.

        Raises:
            GeocoderNetworkError: on transport or provider API failure.
        """

    async def aclose(self) -> None:
        """Release network resources held by the client."""
