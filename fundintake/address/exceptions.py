class AddressError(Exception):
    """Base exception for address normalization."""


class AddressSourceError(AddressError):
    """Raised when one tier of the address chain cannot produce a result."""


class GeocoderNetworkError(AddressSourceError):
    """Raised when the geocoding provider call fails due to network/infrastructure issues."""
