from typing import Any
from urllib.parse import quote

import httpx

from fundintake.address.exceptions import GeocoderNetworkError
from fundintake.address.geocoder_client_base import BaseGeocoderClient
from fundintake.address.models import GeocodeMatch
from fundintake.extraction.vocabulary import country_code, state_code


class MapboxClientAdapter(BaseGeocoderClient):
    """Geocoding client for the Mapbox Places API (v5)."""

    def __init__(
        self,
        *,
        access_token: str,
        timeout_seconds: int,
        base_url: str = "https://api.mapbox.com",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._access_token = access_token
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
        )

    async def geocode(self, query: str) -> GeocodeMatch | None:
        path = f"/geocoding/v5/mapbox.places/{quote(query, safe='')}.json"
        try:
            response = await self._client.get(
                path,
                params={
                    "access_token": self._access_token,
                    "limit": "1",
                    "types": "address",
                },
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise GeocoderNetworkError(
                f"Geocoder API error: HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise GeocoderNetworkError(f"Geocoder network error: {exc}") from exc
        except ValueError as exc:
            raise GeocoderNetworkError(f"Geocoder returned invalid JSON: {exc}") from exc

        features = payload.get("features") if isinstance(payload, dict) else None
        if not features:
            return None
        return self._to_match(features[0])

    async def aclose(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _to_match(feature: dict[str, Any]) -> GeocodeMatch | None:
        center = feature.get("center") or []
        if len(center) != 2:
            return None
        context: dict[str, dict[str, Any]] = {}
        for item in feature.get("context") or []:
            kind = str(item.get("id", "")).split(".")[0]
            context[kind] = item

        place_name = str(feature.get("place_name") or "")
        line1 = place_name.split(",")[0].strip()
        if not line1:
            line1 = " ".join(
                part for part in (feature.get("address"), feature.get("text")) if part
            )

        region = context.get("region", {})
        region_code = str(region.get("short_code") or "")
        state = region_code.split("-")[-1].upper() if region_code else ""
        if not state:
            state = state_code(str(region.get("text") or "")) or str(region.get("text") or "")

        return GeocodeMatch(
            line1=line1,
            city=str(context.get("place", {}).get("text") or ""),
            state=state,
            postal_code=str(context.get("postcode", {}).get("text") or ""),
            country=MapboxClientAdapter._country(feature, context),
            latitude=float(center[1]),
            longitude=float(center[0]),
            relevance=float(feature.get("relevance") or 0.0),
        )

    @staticmethod
    def _country(feature: dict[str, Any], context: dict[str, dict[str, Any]]) -> str:
        properties = feature.get("properties") or {}
        country = context.get("country", {})
        for candidate in (
            properties.get("short_code"),
            country.get("short_code"),
        ):
            if candidate:
                return str(candidate).upper()[:2]
        return country_code(str(country.get("text") or "")) or ""
