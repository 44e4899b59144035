"""Free-text place resolution through Nominatim."""

from __future__ import annotations

import time

import httpx

from ...config import settings
from ...models.domain import GeoPoint
from ..http import build_client, request_json
from ..providers import GeocodeResult, Geocoder


class GeocodingError(ValueError):
    """Raised when a place name cannot be resolved to coordinates."""


class NominatimGeocoder:
    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.Client | None = None,
        max_results: int | None = None,
        min_interval_seconds: float | None = None,
    ) -> None:
        self.base_url = base_url or settings.geocoder_url
        if not self.base_url:
            raise ValueError("Geocoder URL is not configured.")
        # Nominatim's usage policy requires an identifying user agent.
        self._client = client or build_client(headers={"User-Agent": settings.geocoder_user_agent})
        self.max_results = max_results or settings.geocoder_max_results
        self.min_interval_seconds = (
            min_interval_seconds if min_interval_seconds is not None else settings.geocoder_min_interval_seconds
        )
        self._last_request_at: float | None = None

    def close(self) -> None:
        self._client.close()

    def _wait_for_slot(self) -> None:
        if self._last_request_at is not None:
            remaining = self.min_interval_seconds - (time.monotonic() - self._last_request_at)
            if remaining > 0:
                time.sleep(remaining)
        self._last_request_at = time.monotonic()

    def resolve(self, query: str) -> list[GeocodeResult]:
        params = {"q": query, "format": "json", "limit": self.max_results}
        self._wait_for_slot()
        data = request_json(self._client, "GET", self.base_url, params=params, service="geocoder")
        if not isinstance(data, list):
            raise ValueError("Geocoder returned an unexpected payload.")
        results: list[GeocodeResult] = []
        for item in data:
            try:
                results.append(
                    GeocodeResult(
                        latitude=float(item["lat"]),
                        longitude=float(item["lon"]),
                        display_name=str(item.get("display_name") or query),
                    )
                )
            except (KeyError, TypeError, ValueError):
                continue
        return results


def resolve_place(geocoder: Geocoder, query: str, role: str = "Location") -> tuple[GeoPoint, str]:
    """Resolve a place to its best match, raising ``GeocodingError`` when nothing matches."""
    text = query.strip()
    if not text:
        raise GeocodingError(f"{role} is empty.")
    try:
        results = geocoder.resolve(text)
    except (ConnectionError, httpx.HTTPError) as e:
        raise GeocodingError(f"{role} '{text}' could not be geocoded: {e}") from e
    if not results:
        raise GeocodingError(f"{role} location not found: '{text}'")
    best = results[0]
    return GeoPoint(latitude=best.latitude, longitude=best.longitude), best.display_name
