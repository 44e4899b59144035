"""Route planning orchestration service."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Sequence, TypeVar

from ...data.vehicle_catalog import get_vehicle
from ...models.domain import GeoPoint, RoutePlan, Vehicle, WeatherSample
from ...persistence.filesystem import FileStorage, slugify_label
from ...schemas.planning import (
    EnergyEstimateRequest,
    EnergyEstimateResponse,
    PlaceInput,
    RoutePlanModel,
    RoutePlanRequest,
    RoutePlanResponse,
    VehicleSelection,
    WeatherInput,
)
from ..charging.directory import OpenChargeMapDirectory
from ..elevation.client import OpenElevationClient
from ..elevation.profile import ElevationProfileBuilder
from ..energy import compute_segment_energy, estimate_range_km, weather_impact, weather_multiplier
from ..geocoding.client import GeocodingError, NominatimGeocoder, resolve_place
from ..geospatial import midpoint
from ..outputs.plan_formatter import plan_to_json, stops_to_csv
from ..providers import ChargingStationDirectory, ElevationProvider, Geocoder, WeatherProvider
from ..weather.client import OpenMeteoClient, default_weather, fetch_weather_or_default
from .assembler import RoutePlanAssembler
from .planner import ChargingStopPlanner
from .segmenter import RouteSegmenter

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PlanningResult:
    plan: RoutePlan
    weather: WeatherSample
    weather_source: str


class RoutePlanningService:
    """Runs one planning pass: elevation and weather lookups, segmentation, stop planning, assembly."""

    def __init__(
        self,
        *,
        elevation_provider: ElevationProvider | None,
        weather_provider: WeatherProvider | None,
        directory: ChargingStationDirectory,
    ) -> None:
        self.elevation_provider = elevation_provider
        self.weather_provider = weather_provider
        self.directory = directory
        self.segmenter = RouteSegmenter(ElevationProfileBuilder(elevation_provider))
        self.planner = ChargingStopPlanner(directory)
        self.assembler = RoutePlanAssembler()

    def plan(
        self,
        waypoints: Sequence[GeoPoint],
        vehicle: Vehicle,
        initial_soc: float,
        weather: WeatherSample | None = None,
    ) -> PlanningResult:
        if not 0 <= initial_soc <= 100:
            raise ValueError(f"Initial SOC must be between 0 and 100, got {initial_soc}.")
        self.segmenter.legs(waypoints)  # rejects fewer than two waypoints
        origin, destination = waypoints[0], waypoints[-1]

        # Elevation and weather are independent lookups, run side by side.
        with ThreadPoolExecutor(max_workers=2) as executor:
            gains_future = executor.submit(self.segmenter.leg_elevation_gains, waypoints)
            if weather is None:
                centre = midpoint(origin, destination)
                weather_future = executor.submit(
                    fetch_weather_or_default, self.weather_provider, centre.latitude, centre.longitude
                )
                weather, weather_source = weather_future.result()
            else:
                weather_source = "override"
            gains = gains_future.result()

        segments = self.segmenter.build_segments(waypoints, vehicle, weather, gains)
        outcome = self.planner.plan(segments, vehicle, initial_soc)
        plan = self.assembler.assemble(
            origin=origin,
            destination=destination,
            vehicle=vehicle,
            initial_soc=initial_soc,
            segments=segments,
            outcome=outcome,
            weather=weather,
        )
        logger.info(
            f"Planned {plan.total_distance_km:.0f} km over {len(segments)} segment(s) with "
            f"{len(plan.charging_stops)} charging stop(s), final SOC {plan.final_soc:.0f}%"
        )
        return PlanningResult(plan=plan, weather=weather, weather_source=weather_source)

    def close(self) -> None:
        """Release the HTTP clients held by the providers."""
        for provider in (self.elevation_provider, self.weather_provider, self.directory):
            _close_provider(provider)


def _close_provider(provider: object) -> None:
    close = getattr(provider, "close", None)
    if callable(close):
        close()


def _optional_provider(factory: Callable[[], T], label: str) -> T | None:
    try:
        return factory()
    except ValueError as e:
        logger.warning(f"{label} provider disabled: {e}")
        return None


def build_planning_service() -> RoutePlanningService:
    return RoutePlanningService(
        elevation_provider=_optional_provider(OpenElevationClient, "Elevation"),
        weather_provider=_optional_provider(OpenMeteoClient, "Weather"),
        directory=OpenChargeMapDirectory(),
    )


def resolve_vehicle(selection: VehicleSelection) -> Vehicle:
    if selection.vehicle_id is not None:
        return get_vehicle(selection.vehicle_id)
    return Vehicle(**selection.vehicle.model_dump())


def _to_weather_sample(weather: WeatherInput | None) -> WeatherSample | None:
    if weather is None:
        return None
    return WeatherSample(
        temperature_c=weather.temperature_c,
        wind_speed_kmh=weather.wind_speed_kmh,
        condition=weather.condition,
    )


def _resolve_places(places: Sequence[tuple[PlaceInput, str]]) -> list[tuple[GeoPoint, str]]:
    """Turn request endpoints into points, geocoding text-only endpoints one at a time.

    Public Nominatim allows a single request per second, so lookups are never parallel.
    """
    needs_geocoding = any(place.latitude is None or place.longitude is None for place, _ in places)
    geocoder: Geocoder | None = None
    if needs_geocoding:
        geocoder = _optional_provider(NominatimGeocoder, "Geocoding")
        if geocoder is None:
            raise GeocodingError("Geocoding is not configured; provide coordinates instead of place names.")

    def resolve(item: tuple[PlaceInput, str]) -> tuple[GeoPoint, str]:
        place, role = item
        if place.latitude is not None and place.longitude is not None:
            label = place.query or f"{place.latitude:.4f}, {place.longitude:.4f}"
            return GeoPoint(latitude=place.latitude, longitude=place.longitude), label
        return resolve_place(geocoder, place.query or "", role=role)

    try:
        return [resolve(item) for item in places]
    finally:
        _close_provider(geocoder)


def plan_route(payload: RoutePlanRequest) -> RoutePlanResponse:
    vehicle = resolve_vehicle(payload)

    places: list[tuple[PlaceInput, str]] = [(payload.origin, "Origin")]
    places += [(waypoint, f"Waypoint {index}") for index, waypoint in enumerate(payload.waypoints or [], start=1)]
    places.append((payload.destination, "Destination"))
    resolved = _resolve_places(places)
    waypoints = [point for point, _ in resolved]
    addresses = [address for _, address in resolved]

    service = build_planning_service()
    try:
        result = service.plan(waypoints, vehicle, payload.initial_soc, weather=_to_weather_sample(payload.weather))
    finally:
        service.close()
    plan = result.plan

    metadata: dict = {
        "status": "complete" if plan.feasible else "infeasible",
        "origin_address": addresses[0],
        "destination_address": addresses[-1],
        "waypoint_addresses": addresses[1:-1],
        "weather": {
            "temperature_c": result.weather.temperature_c,
            "wind_speed_kmh": result.weather.wind_speed_kmh,
            "condition": result.weather.condition,
        },
        "weather_source": result.weather_source,
        "initial_range_km": float(round(estimate_range_km(vehicle, payload.initial_soc))),
    }
    if vehicle.name:
        metadata["vehicle_name"] = vehicle.name
    if payload.run_label:
        metadata["run_label"] = payload.run_label

    plan_json = plan_to_json(plan)
    if payload.persist:
        storage = FileStorage()
        run_dir = storage.make_run_directory(prefix=f"plan_{slugify_label(payload.run_label)}")
        storage.write_json(run_dir / "summary.json", {"metadata": metadata, "plan": plan_json})
        storage.write_csv(run_dir / "stops.csv", stops_to_csv(plan))
        metadata["output_dir"] = str(run_dir)
        logger.info(f"Persisted route plan to {run_dir}")

    return RoutePlanResponse(metadata=metadata, plan=RoutePlanModel.model_validate(plan_json))


def estimate_energy(payload: EnergyEstimateRequest) -> EnergyEstimateResponse:
    vehicle = resolve_vehicle(payload)
    weather = _to_weather_sample(payload.weather) or default_weather()
    energy_kwh, duration_min = compute_segment_energy(payload.distance_km, payload.elevation_gain_m, vehicle, weather)
    return EnergyEstimateResponse(
        energy_kwh=round(energy_kwh, 1),
        duration_min=float(round(duration_min)),
        soc_used=round(energy_kwh / vehicle.battery_capacity_kwh * 100, 1),
        weather_multiplier=round(weather_multiplier(weather), 2),
        weather_impact=weather_impact(weather),
    )
