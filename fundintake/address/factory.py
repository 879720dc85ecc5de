from fundintake.address.example_client_adapter import ExampleGeocoderClient
from fundintake.address.geocoder_client_base import BaseGeocoderClient
from fundintake.address.mapbox_client_adapter import MapboxClientAdapter
from fundintake.address.normalizer import AddressNormalizer
from fundintake.address.sources import GeocoderSource, RegexSource
from fundintake.config.settings import Settings
from fundintake.logging.logger import Log


class AddressNormalizerFactory:
    """Creates the address normalization chain from settings."""

    SUPPORTED_PROVIDERS = ("example", "mapbox", "none")

    @classmethod
    def create(cls, settings: Settings) -> AddressNormalizer:
        client = cls._create_client(settings)
        return AddressNormalizer(
            [
                GeocoderSource(client, settings.geocoder_confidence_threshold),
                RegexSource(),
            ]
        )

    @classmethod
    def _create_client(cls, settings: Settings) -> BaseGeocoderClient | None:
        provider = settings.geocoder_provider.lower()
        if provider == "none":
            return None
        if provider == "example":
            return ExampleGeocoderClient()
        if provider == "mapbox":
            token = settings.mapbox_access_token.strip()
            if not token:
                Log.warning("mapbox_access_token is empty, geocoding disabled")
                return None
            return MapboxClientAdapter(
                access_token=token,
                timeout_seconds=settings.geocoder_timeout_seconds,
                base_url=settings.mapbox_base_url,
            )
        raise ValueError(
            f"Unknown geocoder provider '{provider}'. "
            f"Choose from: {list(cls.SUPPORTED_PROVIDERS)}"
        )
