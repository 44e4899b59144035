from pathlib import Path

from src.evplanner.models.domain import ChargingStop, ConnectorType, GeoPoint, RoutePlan, Vehicle
from src.evplanner.persistence.filesystem import FileStorage, slugify_label
from src.evplanner.services.charging.fallback import FALLBACK_STATIONS
from src.evplanner.services.outputs.plan_formatter import plan_to_json, stops_to_csv


def test_file_storage_creates_run_directory(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="plan_test")

    assert run_dir.exists()
    assert run_dir.is_dir()
    assert run_dir.parent == tmp_path / "outputs"
    assert run_dir.name.startswith("plan_test_")


def test_file_storage_writes_json_and_csv(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="plan_test")

    summary_path = run_dir / "summary.json"
    stops_path = run_dir / "stops.csv"

    storage.write_json(summary_path, {"hello": "world"})
    storage.write_csv(stops_path, "a,b\n1,2\n")

    assert summary_path.read_text(encoding="utf-8") == '{\n  "hello": "world"\n}'
    assert stops_path.read_text(encoding="utf-8") == "a,b\n1,2\n"


def test_slugify_label() -> None:
    assert slugify_label("Weekend trip: Dubai/Muscat") == "weekend-trip-dubai-muscat"
    assert slugify_label(None) == "run"
    assert slugify_label("  ***  ") == "run"


def _plan() -> RoutePlan:
    vehicle = Vehicle(
        battery_capacity_kwh=60.0,
        efficiency_wh_per_km=160.0,
        mass_kg=1700.0,
        drag_coefficient=0.28,
        frontal_area_m2=2.4,
        max_charging_speed_kw=100.0,
        connector_types=frozenset({ConnectorType.TYPE2, ConnectorType.CCS2}),
        name="Test EV",
    )
    stop = ChargingStop(
        station=FALLBACK_STATIONS[0],
        arrival_soc=25.0,
        departure_soc=80.0,
        charging_time_min=20.0,
        energy_added_kwh=33.0,
        estimated_cost=9.57,
    )
    return RoutePlan(
        origin=GeoPoint(25.2, 55.27),
        destination=GeoPoint(24.45, 54.38),
        vehicle=vehicle,
        initial_soc=60.0,
        segments=(),
        charging_stops=(stop,),
        total_distance_km=0.0,
        total_duration_min=20.0,
        total_energy_used_kwh=0.0,
        final_soc=80.0,
        weather_impact=0.0,
    )


def test_plan_json_is_serialisable_and_ordered() -> None:
    data = plan_to_json(_plan())

    assert data["vehicle"]["connector_types"] == ["CCS2", "Type2"]
    assert data["charging_stops"][0]["station"]["network"] == "DEWA"
    assert data["charging_stops"][0]["station"]["connector_types"] == ["CCS2", "CHAdeMO"]
    assert data["warnings"] == []


def test_stops_csv_has_one_row_per_stop() -> None:
    lines = stops_to_csv(_plan()).strip().splitlines()

    assert lines[0].startswith("sequence,station_id,station_name")
    assert len(lines) == 2
    assert lines[1].startswith("1,dewa-mall-emirates,")
