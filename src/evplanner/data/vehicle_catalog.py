"""Built-in catalogue of common EV models offered by the vehicle picker."""

from __future__ import annotations

from ..models.domain import ConnectorType, Vehicle

CCS2 = ConnectorType.CCS2
CHADEMO = ConnectorType.CHADEMO
TYPE2 = ConnectorType.TYPE2
TESLA = ConnectorType.TESLA

VEHICLE_CATALOG: dict[str, Vehicle] = {
    "tesla-model-3-lr": Vehicle(
        name="Tesla Model 3 Long Range",
        battery_capacity_kwh=75.0,
        efficiency_wh_per_km=150.0,
        mass_kg=1850.0,
        drag_coefficient=0.23,
        frontal_area_m2=2.22,
        max_charging_speed_kw=250.0,
        connector_types=frozenset({TESLA, CCS2, TYPE2}),
    ),
    "tesla-model-y-lr": Vehicle(
        name="Tesla Model Y Long Range",
        battery_capacity_kwh=75.0,
        efficiency_wh_per_km=165.0,
        mass_kg=1980.0,
        drag_coefficient=0.23,
        frontal_area_m2=2.56,
        max_charging_speed_kw=250.0,
        connector_types=frozenset({TESLA, CCS2, TYPE2}),
    ),
    "hyundai-ioniq-5": Vehicle(
        name="Hyundai Ioniq 5",
        battery_capacity_kwh=77.4,
        efficiency_wh_per_km=180.0,
        mass_kg=2100.0,
        drag_coefficient=0.288,
        frontal_area_m2=2.6,
        max_charging_speed_kw=235.0,
        connector_types=frozenset({CCS2, TYPE2}),
    ),
    "kia-ev6": Vehicle(
        name="Kia EV6",
        battery_capacity_kwh=77.4,
        efficiency_wh_per_km=175.0,
        mass_kg=2055.0,
        drag_coefficient=0.28,
        frontal_area_m2=2.5,
        max_charging_speed_kw=233.0,
        connector_types=frozenset({CCS2, TYPE2}),
    ),
    "bmw-i4-edrive40": Vehicle(
        name="BMW i4 eDrive40",
        battery_capacity_kwh=81.0,
        efficiency_wh_per_km=165.0,
        mass_kg=2125.0,
        drag_coefficient=0.24,
        frontal_area_m2=2.3,
        max_charging_speed_kw=205.0,
        connector_types=frozenset({CCS2, TYPE2}),
    ),
    "nissan-leaf-e-plus": Vehicle(
        name="Nissan Leaf e+",
        battery_capacity_kwh=59.0,
        efficiency_wh_per_km=170.0,
        mass_kg=1750.0,
        drag_coefficient=0.28,
        frontal_area_m2=2.3,
        max_charging_speed_kw=100.0,
        connector_types=frozenset({CHADEMO, TYPE2}),
    ),
    "byd-atto-3": Vehicle(
        name="BYD Atto 3",
        battery_capacity_kwh=60.5,
        efficiency_wh_per_km=160.0,
        mass_kg=1750.0,
        drag_coefficient=0.29,
        frontal_area_m2=2.55,
        max_charging_speed_kw=88.0,
        connector_types=frozenset({CCS2, TYPE2}),
    ),
}


def list_vehicles() -> list[tuple[str, Vehicle]]:
    return sorted(VEHICLE_CATALOG.items())


def get_vehicle(vehicle_id: str) -> Vehicle:
    key = vehicle_id.strip().lower()
    vehicle = VEHICLE_CATALOG.get(key)
    if vehicle is None:
        raise ValueError(f"Unknown vehicle_id '{vehicle_id}'. Available: {', '.join(sorted(VEHICLE_CATALOG))}")
    return vehicle
