"""Domain models for vehicles, route segments and charging stops."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ConnectorType(str, Enum):
    CCS2 = "CCS2"
    CHADEMO = "CHAdeMO"
    TYPE2 = "Type2"
    TESLA = "Tesla"
    GBT = "GBT"


class Network(str, Enum):
    TESLA = "Tesla"
    DEWA = "DEWA"
    ADDC = "ADDC"
    SEWA = "SEWA"
    OTHER = "Other"


@dataclass(frozen=True, slots=True)
class GeoPoint:
    latitude: float
    longitude: float
    elevation: Optional[float] = None


@dataclass(frozen=True, slots=True)
class Vehicle:
    """Electric vehicle parameters supplied with every planning request."""

    battery_capacity_kwh: float
    efficiency_wh_per_km: float
    mass_kg: float
    drag_coefficient: float
    frontal_area_m2: float
    max_charging_speed_kw: float
    connector_types: frozenset[ConnectorType]
    name: Optional[str] = None

    def __post_init__(self) -> None:
        positive = {
            "battery_capacity_kwh": self.battery_capacity_kwh,
            "efficiency_wh_per_km": self.efficiency_wh_per_km,
            "mass_kg": self.mass_kg,
            "drag_coefficient": self.drag_coefficient,
            "frontal_area_m2": self.frontal_area_m2,
            "max_charging_speed_kw": self.max_charging_speed_kw,
        }
        invalid = [name for name, value in positive.items() if not value > 0]
        if invalid:
            raise ValueError(f"Vehicle parameters must be positive: {', '.join(invalid)}")
        if not self.connector_types:
            raise ValueError("Vehicle must support at least one connector type.")
        # Normalise plain iterables of strings into the closed connector set.
        object.__setattr__(
            self,
            "connector_types",
            frozenset(ConnectorType(connector) for connector in self.connector_types),
        )


@dataclass(frozen=True, slots=True)
class WeatherSample:
    temperature_c: float
    wind_speed_kmh: float
    condition: str


@dataclass(frozen=True, slots=True)
class RouteSegment:
    start: GeoPoint
    end: GeoPoint
    distance_km: float
    duration_min: float
    elevation_gain_m: float
    energy_required_kwh: float


@dataclass(frozen=True, slots=True)
class ChargingStation:
    """Read-only station record returned by a charging station directory."""

    station_id: str
    name: str
    location: GeoPoint
    network: Network
    connector_types: frozenset[ConnectorType]
    max_power_kw: float
    is_available: bool
    number_of_ports: int
    cost_per_kwh: Optional[float] = None
    amenities: tuple[str, ...] = ()
    address: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ChargingStop:
    station: ChargingStation
    arrival_soc: float
    departure_soc: float
    charging_time_min: float
    energy_added_kwh: float
    estimated_cost: Optional[float] = None


@dataclass(frozen=True, slots=True)
class RoutePlan:
    """The single output artifact of a planning request."""

    origin: GeoPoint
    destination: GeoPoint
    vehicle: Vehicle
    initial_soc: float
    segments: tuple[RouteSegment, ...]
    charging_stops: tuple[ChargingStop, ...]
    total_distance_km: float
    total_duration_min: float
    total_energy_used_kwh: float
    final_soc: float
    weather_impact: float
    driving_duration_min: float = 0.0
    charging_duration_min: float = 0.0
    total_elevation_gain_m: float = 0.0
    average_consumption_kwh_per_100km: float = 0.0
    total_charging_cost: Optional[float] = None
    soc_trajectory: tuple[float, ...] = ()
    feasible: bool = True
    warnings: tuple[str, ...] = field(default_factory=tuple)
