from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.evplanner.main import create_app
from src.evplanner.models.domain import WeatherSample
from src.evplanner.config import settings
from src.evplanner.services.charging.directory import OpenChargeMapDirectory, StationSearchResult
from src.evplanner.services.providers import ElevationSample


class FlatElevation:
    def fetch_profile(self, points):
        return [ElevationSample(elevation_m=5.0, distance_from_start_km=float(i)) for i in range(len(points))]


class MildWeather:
    def fetch_current(self, latitude, longitude):
        return WeatherSample(temperature_c=25.0, wind_speed_kmh=10.0, condition="clear")


class EmptyGeocoder:
    def resolve(self, query):
        return []


@pytest.fixture
def api_client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    app = create_app()
    client = TestClient(app)

    from src.evplanner.services.planning import service as planning_service
    from src.evplanner.services.charging import service as charging_service
    from src.evplanner.persistence.filesystem import FileStorage

    monkeypatch.setattr(planning_service, "FileStorage", lambda: FileStorage(root=tmp_path))
    monkeypatch.setattr(planning_service, "OpenElevationClient", FlatElevation)
    monkeypatch.setattr(planning_service, "OpenMeteoClient", MildWeather)
    monkeypatch.setattr(planning_service, "NominatimGeocoder", EmptyGeocoder)
    # an empty URL keeps the directory on its built-in station list
    monkeypatch.setattr(planning_service, "OpenChargeMapDirectory", lambda: OpenChargeMapDirectory(base_url=""))
    monkeypatch.setattr(charging_service, "OpenChargeMapDirectory", lambda: OpenChargeMapDirectory(base_url=""))

    return client


def _plan_body(**overrides) -> dict:
    body = {
        "origin": {"latitude": 25.2048, "longitude": 55.2708},
        "destination": {"latitude": 24.4539, "longitude": 54.3773},
        "vehicle_id": "tesla-model-3-lr",
        "initial_soc": 75,
    }
    body.update(overrides)
    return body


def test_health_endpoints(api_client: TestClient):
    assert api_client.get("/api/health").json() == {"status": "ok"}
    providers = api_client.get("/api/health/providers").json()
    assert set(providers) == {"geocoder", "elevation", "weather", "charging_directory"}


def test_vehicle_catalogue(api_client: TestClient):
    response = api_client.get("/api/vehicles")

    assert response.status_code == 200
    vehicles = {item["vehicle_id"]: item for item in response.json()}
    assert "tesla-model-3-lr" in vehicles
    assert vehicles["nissan-leaf-e-plus"]["connector_types"] == ["CHAdeMO", "Type2"]


def test_plan_endpoint_returns_plan(api_client: TestClient):
    response = api_client.post("/api/plans", json=_plan_body())

    assert response.status_code == 200
    payload = response.json()
    assert payload["plan"]["charging_stops"] == []
    assert payload["plan"]["final_soc"] == 47.0
    assert payload["plan"]["feasible"] is True
    assert len(payload["plan"]["segments"]) == 1
    assert payload["metadata"]["status"] == "complete"


def test_plan_endpoint_inserts_stop_from_fallback(api_client: TestClient, tmp_path: Path):
    response = api_client.post("/api/plans", json=_plan_body(initial_soc=30, persist=True))

    assert response.status_code == 200
    stops = response.json()["plan"]["charging_stops"]
    assert len(stops) == 1
    assert stops[0]["station"]["station_id"] == "tesla-jbr"
    assert stops[0]["departure_soc"] == 80.0
    assert "output_dir" in response.json()["metadata"]
    assert len(list((tmp_path / "outputs").iterdir())) == 1


def test_plan_endpoint_with_waypoint(api_client: TestClient):
    body = _plan_body(waypoints=[{"latitude": 24.9, "longitude": 55.0, "query": "Jebel Ali"}])
    response = api_client.post("/api/plans", json=body)

    assert response.status_code == 200
    payload = response.json()
    assert len(payload["plan"]["segments"]) == 2
    assert payload["metadata"]["waypoint_addresses"] == ["Jebel Ali"]


def test_plan_endpoint_rejects_unknown_place(api_client: TestClient):
    response = api_client.post("/api/plans", json=_plan_body(origin={"query": "Nowhere Special"}))

    assert response.status_code == 400
    assert "not found" in response.json()["detail"]


def test_plan_endpoint_rejects_unknown_vehicle(api_client: TestClient):
    response = api_client.post("/api/plans", json=_plan_body(vehicle_id="flux-capacitor"))
    assert response.status_code == 400


def test_plan_endpoint_validates_schema(api_client: TestClient):
    assert api_client.post("/api/plans", json=_plan_body(initial_soc=140)).status_code == 422
    body = _plan_body()
    body.pop("vehicle_id")
    assert api_client.post("/api/plans", json=body).status_code == 422
    assert api_client.post("/api/plans", json=_plan_body(origin={})).status_code == 422


def test_energy_estimate_endpoint(api_client: TestClient):
    response = api_client.post(
        "/api/plans/energy-estimate",
        json={
            "distance_km": 100,
            "vehicle_id": "tesla-model-3-lr",
            "weather": {"temperature_c": -5, "wind_speed_kmh": 0},
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["weather_multiplier"] == 1.3
    assert payload["weather_impact"] == -30.0
    assert payload["duration_min"] == 86.0
    assert payload["energy_kwh"] > 15.0 * 1.3


def test_nearby_stations_endpoint(api_client: TestClient):
    response = api_client.get(
        "/api/stations/nearby",
        params={"lat": 25.2048, "lng": 55.2708, "radius_km": 50, "connector": "Tesla"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["source"] == "fallback"
    assert payload["count"] == 1
    assert payload["stations"][0]["station_id"] == "tesla-jbr"


def test_nearby_stations_defaults_to_configured_radius(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from src.evplanner.services.charging import service as charging_service

    directories = []

    class RecordingDirectory:
        def __init__(self):
            self.radius_km = None
            self.closed = False
            directories.append(self)

        def search(self, latitude, longitude, radius_km, connector_types=None):
            self.radius_km = radius_km
            return StationSearchResult([], "fallback")

        def close(self):
            self.closed = True

    monkeypatch.setattr(charging_service, "OpenChargeMapDirectory", RecordingDirectory)
    monkeypatch.setattr(settings, "station_search_radius_km", 35.0)

    response = api_client.get("/api/stations/nearby", params={"lat": 25.2048, "lng": 55.2708})

    assert response.status_code == 200
    assert response.json()["count"] == 0
    assert directories[0].radius_km == 35.0
    assert directories[0].closed is True
