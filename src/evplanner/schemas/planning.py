"""Route planning request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from ..models.domain import ConnectorType, Network


class VehicleModel(BaseModel):
    name: Optional[str] = None
    battery_capacity_kwh: float = Field(..., gt=0)
    efficiency_wh_per_km: float = Field(..., gt=0, description="Nominal flat-road consumption.")
    mass_kg: float = Field(..., gt=0)
    drag_coefficient: float = Field(..., gt=0)
    frontal_area_m2: float = Field(..., gt=0)
    max_charging_speed_kw: float = Field(..., gt=0)
    connector_types: List[ConnectorType] = Field(..., min_length=1)


class CatalogVehicleModel(VehicleModel):
    vehicle_id: str


class PlaceInput(BaseModel):
    """A trip endpoint given either as free text or as coordinates."""

    query: Optional[str] = Field(default=None, description="Free-text place name to geocode.")
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    @model_validator(mode="after")
    def _require_query_or_coordinates(self) -> "PlaceInput":
        has_coordinates = self.latitude is not None and self.longitude is not None
        if not has_coordinates and not (self.query and self.query.strip()):
            raise ValueError("Provide either a place name or both latitude and longitude.")
        return self


class WeatherInput(BaseModel):
    temperature_c: float = Field(..., ge=-60, le=60)
    wind_speed_kmh: float = Field(default=0.0, ge=0)
    condition: str = "clear"


class VehicleSelection(BaseModel):
    vehicle: Optional[VehicleModel] = Field(default=None, description="Inline vehicle parameters.")
    vehicle_id: Optional[str] = Field(default=None, description="Identifier from the built-in vehicle catalogue.")

    @model_validator(mode="after")
    def _require_one_vehicle(self) -> "VehicleSelection":
        if (self.vehicle is None) == (self.vehicle_id is None):
            raise ValueError("Provide exactly one of 'vehicle' or 'vehicle_id'.")
        return self


class RoutePlanRequest(VehicleSelection):
    origin: PlaceInput
    destination: PlaceInput
    waypoints: Optional[List[PlaceInput]] = Field(default=None, description="Intermediate stops in driving order.")
    initial_soc: float = Field(..., ge=0, le=100)
    weather: Optional[WeatherInput] = Field(
        default=None, description="Override the live weather lookup with fixed conditions."
    )
    persist: bool = False
    run_label: Optional[str] = Field(default=None, description="Friendly name for persisted outputs.")


class EnergyEstimateRequest(VehicleSelection):
    distance_km: float = Field(..., ge=0)
    elevation_gain_m: float = Field(default=0.0, ge=0)
    weather: Optional[WeatherInput] = None


class EnergyEstimateResponse(BaseModel):
    energy_kwh: float
    duration_min: float
    soc_used: float
    weather_multiplier: float
    weather_impact: float


class GeoPointModel(BaseModel):
    latitude: float
    longitude: float
    elevation: Optional[float] = None


class StationModel(BaseModel):
    station_id: str
    name: str
    address: Optional[str] = None
    location: GeoPointModel
    network: Network
    connector_types: List[ConnectorType]
    max_power_kw: float
    is_available: bool
    number_of_ports: int
    cost_per_kwh: Optional[float] = None
    amenities: List[str]


class RouteSegmentModel(BaseModel):
    start: GeoPointModel
    end: GeoPointModel
    distance_km: float
    duration_min: float
    elevation_gain_m: float
    energy_required_kwh: float


class ChargingStopModel(BaseModel):
    station: StationModel
    arrival_soc: float
    departure_soc: float
    charging_time_min: float
    energy_added_kwh: float
    estimated_cost: Optional[float] = None


class RoutePlanModel(BaseModel):
    origin: GeoPointModel
    destination: GeoPointModel
    vehicle: VehicleModel
    initial_soc: float
    segments: List[RouteSegmentModel]
    charging_stops: List[ChargingStopModel]
    total_distance_km: float
    total_duration_min: float
    total_energy_used_kwh: float
    final_soc: float
    weather_impact: float
    driving_duration_min: float
    charging_duration_min: float
    total_elevation_gain_m: float
    average_consumption_kwh_per_100km: float
    total_charging_cost: Optional[float] = None
    soc_trajectory: List[float]
    feasible: bool
    warnings: List[str]


class RoutePlanResponse(BaseModel):
    metadata: dict
    plan: RoutePlanModel
