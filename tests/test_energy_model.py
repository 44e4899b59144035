import pytest

from src.evplanner.models.domain import ConnectorType, Vehicle, WeatherSample
from src.evplanner.services.energy.model import (
    compute_segment_energy,
    estimate_average_speed,
    estimate_range_km,
    weather_impact,
    weather_multiplier,
)


def _vehicle(**overrides) -> Vehicle:
    params = dict(
        battery_capacity_kwh=75.0,
        efficiency_wh_per_km=150.0,
        mass_kg=1800.0,
        drag_coefficient=0.23,
        frontal_area_m2=2.22,
        max_charging_speed_kw=150.0,
        connector_types=frozenset({ConnectorType.CCS2}),
    )
    params.update(overrides)
    return Vehicle(**params)


MILD = WeatherSample(temperature_c=25.0, wind_speed_kmh=0.0, condition="clear")


def test_energy_grows_with_distance_and_climb():
    vehicle = _vehicle()
    short, _ = compute_segment_energy(100.0, 0.0, vehicle, MILD)
    long, _ = compute_segment_energy(200.0, 0.0, vehicle, MILD)
    hilly, _ = compute_segment_energy(100.0, 500.0, vehicle, MILD)

    assert long > short
    assert hilly > short
    # 500 m of climb for a 1.8 t vehicle: 5 x 1.8 x 0.1 kWh
    assert hilly - short == pytest.approx(0.9)


def test_zero_distance_costs_nothing():
    energy, duration = compute_segment_energy(0.0, 0.0, _vehicle(), MILD)
    assert energy == 0.0
    assert duration == 0.0


def test_cold_weather_raises_energy_by_multiplier():
    vehicle = _vehicle()
    cold = WeatherSample(temperature_c=-5.0, wind_speed_kmh=0.0, condition="clear")

    warm_energy, _ = compute_segment_energy(120.0, 0.0, vehicle, MILD)
    cold_energy, _ = compute_segment_energy(120.0, 0.0, vehicle, cold)

    assert cold_energy > warm_energy
    assert cold_energy / warm_energy == pytest.approx(1.3)


@pytest.mark.parametrize(
    "temperature, wind, expected",
    [
        (25.0, 0.0, 1.0),
        (5.0, 0.0, 1.15),
        (40.0, 0.0, 1.10),
        (25.0, 10.0, 1.10),
        (25.0, 80.0, 1.20),
        (-10.0, 50.0, 1.50),
    ],
)
def test_weather_multiplier_bands(temperature, wind, expected):
    weather = WeatherSample(temperature_c=temperature, wind_speed_kmh=wind, condition="clear")
    assert weather_multiplier(weather) == pytest.approx(expected)


def test_weather_impact_is_bounded():
    assert weather_impact(MILD) == 0.0
    assert weather_impact(WeatherSample(-5.0, 40.0, "snow")) == -35.0
    assert weather_impact(WeatherSample(40.0, 0.0, "clear")) == -10.0


def test_average_speed_depends_on_distance_and_conditions():
    assert estimate_average_speed(30.0, MILD) == 60.0
    assert estimate_average_speed(120.0, MILD) == 70.0
    assert estimate_average_speed(300.0, MILD) == 80.0
    rainy = WeatherSample(temperature_c=20.0, wind_speed_kmh=60.0, condition="Heavy rain")
    assert estimate_average_speed(300.0, rainy) == pytest.approx(80.0 * 0.8 * 0.9)


def test_duration_uses_average_speed():
    _, duration = compute_segment_energy(140.0, 0.0, _vehicle(), MILD)
    assert duration == pytest.approx(120.0)


def test_range_from_state_of_charge():
    assert estimate_range_km(_vehicle(), 75.0) == pytest.approx(375.0)


@pytest.mark.parametrize("field", ["battery_capacity_kwh", "mass_kg", "max_charging_speed_kw"])
def test_vehicle_rejects_non_positive_parameters(field):
    with pytest.raises(ValueError):
        _vehicle(**{field: 0})


def test_vehicle_normalises_connector_names():
    vehicle = _vehicle(connector_types=["CHAdeMO", "Type2"])
    assert vehicle.connector_types == frozenset({ConnectorType.CHADEMO, ConnectorType.TYPE2})

    with pytest.raises(ValueError):
        _vehicle(connector_types=frozenset())
