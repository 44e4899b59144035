import httpx
import pytest

from src.evplanner.models.domain import WeatherSample
from src.evplanner.services.geocoding.client import GeocodingError, NominatimGeocoder, resolve_place
from src.evplanner.services.http import request_json
from src.evplanner.services.providers import GeocodeResult
from src.evplanner.services.weather.client import (
    OpenMeteoClient,
    describe_weather_code,
    fetch_weather_or_default,
)


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_request_json_retries_server_errors():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] == 1:
            return httpx.Response(503)
        return httpx.Response(200, json={"ok": True})

    assert request_json(_client(handler), "GET", "http://provider.test/", max_retries=2) == {"ok": True}
    assert calls["count"] == 2


def test_request_json_does_not_retry_client_errors():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(404)

    with pytest.raises(httpx.HTTPStatusError):
        request_json(_client(handler), "GET", "http://provider.test/", max_retries=2)
    assert calls["count"] == 1


def test_request_json_converts_network_failures():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ConnectionError):
        request_json(_client(handler), "GET", "http://provider.test/", max_retries=1)


def test_request_json_converts_timeouts():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    with pytest.raises(ConnectionError):
        request_json(_client(handler), "GET", "http://provider.test/", max_retries=0)


def test_open_meteo_current_weather():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["current_weather"] == "true"
        assert request.url.params["windspeed_unit"] == "kmh"
        return httpx.Response(
            200, json={"current_weather": {"temperature": -5.0, "windspeed": 12.5, "weathercode": 61}}
        )

    sample = OpenMeteoClient(base_url="http://weather.test/forecast", client=_client(handler)).fetch_current(25.2, 55.3)
    assert sample == WeatherSample(temperature_c=-5.0, wind_speed_kmh=12.5, condition="rain")


@pytest.mark.parametrize(
    "code, label",
    [(0, "clear"), (2, "cloudy"), (45, "fog"), (53, "drizzle"), (81, "rain"), (73, "snow"), (95, "thunderstorm"), (None, "unknown")],
)
def test_weather_codes(code, label):
    assert describe_weather_code(code) == label


def test_weather_falls_back_to_defaults():
    class BrokenWeather:
        def fetch_current(self, latitude, longitude):
            raise ConnectionError("weather down")

    sample, source = fetch_weather_or_default(BrokenWeather(), 25.0, 55.0)
    assert source == "default"
    assert sample == WeatherSample(temperature_c=25.0, wind_speed_kmh=0.0, condition="clear")

    sample, source = fetch_weather_or_default(None, 25.0, 55.0)
    assert source == "default"


def test_nominatim_skips_malformed_results():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["q"] == "Dubai Mall"
        return httpx.Response(
            200,
            json=[
                {"lat": "25.1972", "lon": "55.2744", "display_name": "The Dubai Mall, Dubai"},
                {"display_name": "missing coordinates"},
            ],
        )

    geocoder = NominatimGeocoder(base_url="http://geocoder.test/search", client=_client(handler))
    assert geocoder.resolve("Dubai Mall") == [GeocodeResult(25.1972, 55.2744, "The Dubai Mall, Dubai")]


def test_resolve_place_picks_best_match():
    class FakeGeocoder:
        def resolve(self, query):
            return [GeocodeResult(24.4539, 54.3773, "Abu Dhabi"), GeocodeResult(0.0, 0.0, "Elsewhere")]

    point, name = resolve_place(FakeGeocoder(), "  Abu Dhabi ", role="Destination")
    assert (point.latitude, point.longitude) == (24.4539, 54.3773)
    assert name == "Abu Dhabi"


def test_resolve_place_errors_are_value_errors():
    class EmptyGeocoder:
        def resolve(self, query):
            return []

    class OfflineGeocoder:
        def resolve(self, query):
            raise ConnectionError("offline")

    with pytest.raises(GeocodingError, match="Origin location not found"):
        resolve_place(EmptyGeocoder(), "Atlantis", role="Origin")
    with pytest.raises(GeocodingError):
        resolve_place(OfflineGeocoder(), "Dubai")
    with pytest.raises(ValueError):
        resolve_place(EmptyGeocoder(), "   ")


def test_malformed_current_weather_falls_back_to_defaults():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"current_weather": [{"temperature": 30.0}]})

    client = OpenMeteoClient(base_url="http://weather.test/forecast", client=_client(handler))
    with pytest.raises(ValueError):
        client.fetch_current(25.0, 55.0)

    sample, source = fetch_weather_or_default(client, 25.0, 55.0)
    assert source == "default"
    assert sample == WeatherSample(25.0, 0.0, "clear")


def test_nominatim_spaces_out_requests(monkeypatch: pytest.MonkeyPatch):
    from src.evplanner.services.geocoding import client as geocoding_client

    sleeps = []
    monkeypatch.setattr(geocoding_client.time, "sleep", sleeps.append)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"lat": "25.2", "lon": "55.3", "display_name": "Dubai"}])

    geocoder = NominatimGeocoder(base_url="http://geocoder.test/search", client=_client(handler), min_interval_seconds=1.0)
    geocoder.resolve("Dubai")
    assert sleeps == []
    geocoder.resolve("Dubai")

    assert len(sleeps) == 1
    assert 0 < sleeps[0] <= 1.0


def test_provider_close_releases_http_client():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={})

    weather_http, geocoder_http = _client(handler), _client(handler)
    OpenMeteoClient(base_url="http://weather.test/forecast", client=weather_http).close()
    NominatimGeocoder(base_url="http://geocoder.test/search", client=geocoder_http).close()

    assert weather_http.is_closed
    assert geocoder_http.is_closed
