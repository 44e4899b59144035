"""Segment energy and travel-time model."""

from __future__ import annotations

from ...models.domain import Vehicle, WeatherSample

AIR_DENSITY_KG_M3 = 1.225
CRUISE_SPEED_KMH = 80.0
AIR_RESISTANCE_LOSS_FACTOR = 0.1
# Extra kWh per 100 m of climb per tonne of vehicle mass.
CLIMB_KWH_PER_100M_PER_TONNE = 0.1
MIN_AVERAGE_SPEED_KMH = 30.0


def weather_multiplier(weather: WeatherSample) -> float:
    """Consumption multiplier for temperature and wind. Bands stack additively."""

    multiplier = 1.0
    if weather.temperature_c < 0:
        multiplier += 0.30
    elif weather.temperature_c < 10:
        multiplier += 0.15
    elif weather.temperature_c > 35:
        multiplier += 0.10
    # Wind is treated as a headwind.
    multiplier += min(0.20, weather.wind_speed_kmh / 100)
    return multiplier


def air_resistance_kwh(distance_km: float, vehicle: Vehicle) -> float:
    speed_ms = CRUISE_SPEED_KMH / 3.6
    drag_force = 0.5 * AIR_DENSITY_KG_M3 * vehicle.drag_coefficient * vehicle.frontal_area_m2 * speed_ms**2
    power_kw = drag_force * speed_ms / 1000
    hours = distance_km / CRUISE_SPEED_KMH
    return power_kw * hours * AIR_RESISTANCE_LOSS_FACTOR


def climb_kwh(elevation_gain_m: float, vehicle: Vehicle) -> float:
    return (elevation_gain_m / 100) * (vehicle.mass_kg / 1000) * CLIMB_KWH_PER_100M_PER_TONNE


def estimate_average_speed(distance_km: float, weather: WeatherSample) -> float:
    if distance_km < 50:
        speed = 60.0
    elif distance_km < 200:
        speed = 70.0
    else:
        speed = 80.0

    condition = weather.condition.lower()
    if "rain" in condition or "storm" in condition:
        speed *= 0.8
    if weather.wind_speed_kmh > 50:
        speed *= 0.9
    return max(MIN_AVERAGE_SPEED_KMH, speed)


def compute_segment_energy(
    distance_km: float,
    elevation_gain_m: float,
    vehicle: Vehicle,
    weather: WeatherSample,
) -> tuple[float, float]:
    """Return ``(energy_kwh, duration_min)`` for one driving leg.

    Callers must pass finite, non-negative distance and elevation gain.
    """

    base = distance_km * vehicle.efficiency_wh_per_km / 1000
    consumption = base + climb_kwh(elevation_gain_m, vehicle) + air_resistance_kwh(distance_km, vehicle)
    energy_kwh = max(0.0, consumption * weather_multiplier(weather))

    duration_min = distance_km / estimate_average_speed(distance_km, weather) * 60
    return energy_kwh, duration_min


def weather_impact(weather: WeatherSample) -> float:
    """Bounded efficiency delta (percent) shown alongside a plan."""

    impact = 0.0
    if weather.temperature_c < 0:
        impact -= 30
    elif weather.temperature_c < 10:
        impact -= 15
    elif weather.temperature_c > 35:
        impact -= 10
    if weather.wind_speed_kmh > 30:
        impact -= 5
    return max(-40.0, min(10.0, impact))


def estimate_range_km(vehicle: Vehicle, soc: float) -> float:
    """Flat-road range at nominal efficiency for the given state of charge."""

    return vehicle.battery_capacity_kwh * 1000 * (soc / 100) / vehicle.efficiency_wh_per_km
