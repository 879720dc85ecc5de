from dataclasses import dataclass
from enum import Enum


class NormalizationMethod(str, Enum):
    """Which tier produced an address, in order of preference."""

    GEOCODER = "geocoder"
    REGEX = "regex"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class AddressFields:
    line1: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""
    latitude: float | None = None
    longitude: float | None = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True)
class AddressNormalizationResult:
    """Output of the address chain.

    Only the geocoder tier may carry coordinates; regex and fallback results
    always need review.
    """

    method: NormalizationMethod
    needs_review: bool
    fields: AddressFields
    confidence: float = 0.0

    def __post_init__(self) -> None:
        if self.method is not NormalizationMethod.GEOCODER:
            if self.fields.latitude is not None or self.fields.longitude is not None:
                raise ValueError(f"{self.method.value} results cannot carry coordinates")
            if not self.needs_review:
                raise ValueError(f"{self.method.value} results always need review")


@dataclass(frozen=True)
class GeocodeMatch:
    """Best match returned by a geocoding provider."""

    line1: str
    city: str
    state: str
    postal_code: str
    country: str
    latitude: float
    longitude: float
    relevance: float
