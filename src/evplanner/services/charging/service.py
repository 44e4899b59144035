"""Charging station lookup service."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import ConnectorType
from ...schemas.planning import StationModel
from ...schemas.stations import NearbyStationsResponse
from ..outputs.plan_formatter import station_to_json
from .directory import OpenChargeMapDirectory


def find_nearby_stations(
    latitude: float,
    longitude: float,
    radius_km: float,
    connector_types: Sequence[ConnectorType] | None = None,
) -> NearbyStationsResponse:
    directory = OpenChargeMapDirectory()
    try:
        result = directory.search(latitude, longitude, radius_km, connector_types)
    finally:
        directory.close()
    stations = [StationModel.model_validate(station_to_json(station)) for station in result.stations]
    return NearbyStationsResponse(source=result.source, count=len(stations), stations=stations)
