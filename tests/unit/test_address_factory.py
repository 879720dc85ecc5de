import asyncio

import pytest

from fundintake.address.factory import AddressNormalizerFactory
from fundintake.address.models import NormalizationMethod
from fundintake.config.settings import Settings

ADDRESS = "500 Market Street, San Francisco, CA 94105"


def _make_settings(**overrides: object) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestAddressNormalizerFactory:
    def test_example_provider_geocodes(self) -> None:
        normalizer = AddressNormalizerFactory.create(_make_settings(geocoder_provider="example"))
        result = asyncio.run(normalizer.normalize(ADDRESS))

        assert result.method is NormalizationMethod.GEOCODER

    def test_none_provider_uses_grammar(self) -> None:
        normalizer = AddressNormalizerFactory.create(_make_settings(geocoder_provider="none"))
        result = asyncio.run(normalizer.normalize(ADDRESS))

        assert result.method is NormalizationMethod.REGEX

    def test_mapbox_without_token_disables_geocoding(self) -> None:
        settings = _make_settings(geocoder_provider="mapbox", mapbox_access_token="  ")
        result = asyncio.run(AddressNormalizerFactory.create(settings).normalize(ADDRESS))

        assert result.method is NormalizationMethod.REGEX

    def test_mapbox_with_token(self) -> None:
        settings = _make_settings(geocoder_provider="mapbox", mapbox_access_token="pk.test")
        assert AddressNormalizerFactory.create(settings) is not None

    def test_unknown_provider(self) -> None:
        with pytest.raises(ValueError, match="Unknown geocoder provider 'here'"):
            AddressNormalizerFactory.create(_make_settings(geocoder_provider="here"))
