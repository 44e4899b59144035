"""Contracts for the external collaborators consulted while planning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence

from ..models.domain import ChargingStation, ConnectorType, GeoPoint, WeatherSample


@dataclass(frozen=True, slots=True)
class ElevationSample:
    elevation_m: float
    distance_from_start_km: float


@dataclass(frozen=True, slots=True)
class GeocodeResult:
    latitude: float
    longitude: float
    display_name: str


class ElevationProvider(Protocol):
    def fetch_profile(self, points: Sequence[GeoPoint]) -> list[ElevationSample]:
        ...


class WeatherProvider(Protocol):
    def fetch_current(self, latitude: float, longitude: float) -> WeatherSample:
        ...


class ChargingStationDirectory(Protocol):
    def find_nearby(
        self,
        latitude: float,
        longitude: float,
        radius_km: float,
        connector_types: Iterable[ConnectorType] | None = None,
    ) -> list[ChargingStation]:
        ...


class Geocoder(Protocol):
    def resolve(self, query: str) -> list[GeocodeResult]:
        ...
