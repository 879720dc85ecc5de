"""Three-tier address normalization: geocoder > regex grammar > fallback."""

from collections.abc import Sequence

from fundintake.address.base import AddressSource
from fundintake.address.exceptions import AddressSourceError
from fundintake.address.models import AddressNormalizationResult
from fundintake.address.sources import FallbackSource
from fundintake.logging.logger import Log


class AddressNormalizer:
    """Tries each source in order and degrades to the next one on failure.

    The fallback tier always runs last, so ``normalize`` always returns.
    """

    def __init__(self, sources: Sequence[AddressSource]) -> None:
        self._sources = tuple(s for s in sources if not isinstance(s, FallbackSource))
        self._fallback = FallbackSource()

    async def normalize(self, raw: str) -> AddressNormalizationResult:
        for source in self._sources:
            name = type(source).__name__
            try:
                result = await source.try_normalize(raw)
            except AddressSourceError as exc:
                Log.warning(f"Address tier {name} failed, degrading: {exc}")
                continue
            Log.info(
                f"Address normalized by {result.method.value}",
                needs_review=result.needs_review,
                confidence=result.confidence,
            )
            return result

        Log.warning("No address tier could segment the text, using fallback")
        return await self._fallback.try_normalize(raw)

    async def aclose(self) -> None:
        for source in self._sources:
            await source.aclose()
