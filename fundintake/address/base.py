from abc import ABC, abstractmethod

from fundintake.address.models import AddressNormalizationResult


class AddressSource(ABC):
    """One tier of the address normalization chain."""

    @abstractmethod
    async def try_normalize(self, text: str) -> AddressNormalizationResult:
        """Normalize a free-text address.

        Raises:
            AddressSourceError: when this tier cannot produce a result and the
                chain should move on to the next one.
        """

    async def aclose(self) -> None:
        """Release resources held by this tier."""
