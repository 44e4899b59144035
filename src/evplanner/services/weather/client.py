"""Current-conditions lookup backed by Open-Meteo."""

from __future__ import annotations

import logging

import httpx

from ...config import settings
from ...models.domain import WeatherSample
from ..http import build_client, request_json
from ..providers import WeatherProvider

logger = logging.getLogger(__name__)


def describe_weather_code(code: int | None) -> str:
    """Map a WMO weather interpretation code onto a short condition label."""
    if code is None:
        return "unknown"
    if code == 0:
        return "clear"
    if code in (1, 2, 3):
        return "cloudy"
    if code in (45, 48):
        return "fog"
    if 51 <= code <= 57:
        return "drizzle"
    if 61 <= code <= 67 or 80 <= code <= 82:
        return "rain"
    if 71 <= code <= 77 or code in (85, 86):
        return "snow"
    if code >= 95:
        return "thunderstorm"
    return "unknown"


def default_weather() -> WeatherSample:
    return WeatherSample(
        temperature_c=settings.default_temperature_c,
        wind_speed_kmh=settings.default_wind_speed_kmh,
        condition=settings.default_weather_condition,
    )


class OpenMeteoClient:
    def __init__(self, base_url: str | None = None, client: httpx.Client | None = None) -> None:
        self.base_url = base_url or settings.weather_api_url
        if not self.base_url:
            raise ValueError("Weather API URL is not configured.")
        self._client = client or build_client()

    def close(self) -> None:
        self._client.close()

    def fetch_current(self, latitude: float, longitude: float) -> WeatherSample:
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current_weather": "true",
            "windspeed_unit": "kmh",
            "timezone": "UTC",
        }
        data = request_json(self._client, "GET", self.base_url, params=params, service="weather")
        current = data.get("current_weather") if isinstance(data, dict) else None
        if not isinstance(current, dict) or current.get("temperature") is None:
            raise ValueError("Weather response missing current_weather temperature.")
        code = current.get("weathercode")
        return WeatherSample(
            temperature_c=float(current["temperature"]),
            wind_speed_kmh=max(0.0, float(current.get("windspeed") or 0.0)),
            condition=describe_weather_code(int(code) if code is not None else None),
        )


def fetch_weather_or_default(provider: WeatherProvider | None, latitude: float, longitude: float) -> tuple[WeatherSample, str]:
    """Return current weather and its source, falling back to the configured default."""
    if provider is None:
        return default_weather(), "default"
    try:
        return provider.fetch_current(latitude, longitude), "live"
    except (ConnectionError, httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        logger.warning(f"Weather lookup failed, using default conditions: {e}")
        return default_weather(), "default"
