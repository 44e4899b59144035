"""Aggregate segments and stops into the final route plan."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import ChargingStop, GeoPoint, RoutePlan, RouteSegment, Vehicle, WeatherSample
from ..energy.model import weather_impact
from .planner import PlannerOutcome

LOW_FINAL_SOC_THRESHOLD = 20.0
LONG_TRIP_THRESHOLD_KM = 300.0


def clamp_soc(value: float) -> float:
    return max(0.0, min(100.0, value))


def compute_final_soc(
    initial_soc: float,
    segments: Sequence[RouteSegment],
    stops: Sequence[ChargingStop],
    vehicle: Vehicle,
) -> float:
    used = sum(segment.energy_required_kwh for segment in segments)
    added = sum(stop.energy_added_kwh for stop in stops)
    capacity = vehicle.battery_capacity_kwh
    return clamp_soc(initial_soc - used / capacity * 100 + added / capacity * 100)


class RoutePlanAssembler:
    def assemble(
        self,
        *,
        origin: GeoPoint,
        destination: GeoPoint,
        vehicle: Vehicle,
        initial_soc: float,
        segments: Sequence[RouteSegment],
        outcome: PlannerOutcome,
        weather: WeatherSample,
    ) -> RoutePlan:
        stops = outcome.stops
        total_distance = sum(segment.distance_km for segment in segments)
        driving_time = sum(segment.duration_min for segment in segments)
        charging_time = sum(stop.charging_time_min for stop in stops)
        total_energy = sum(segment.energy_required_kwh for segment in segments)
        final_soc = compute_final_soc(initial_soc, segments, stops, vehicle)

        priced = [stop.estimated_cost for stop in stops if stop.estimated_cost is not None]
        consumption = total_energy / total_distance * 100 if total_distance > 0 else 0.0
        rounded_final_soc = float(round(final_soc))
        feasible = not outcome.unresolved_segments and all(soc >= 0 for soc in outcome.soc_trajectory)

        warnings: list[str] = []
        if outcome.unresolved_segments:
            legs = ", ".join(str(index + 1) for index in outcome.unresolved_segments)
            warnings.append(f"No compatible charging station found before leg {legs}; the trip may not be completed.")
        elif not feasible:
            warnings.append("Battery is projected to run out before the destination.")
        if outcome.above_target_segments:
            legs = ", ".join(str(index + 1) for index in outcome.above_target_segments)
            warnings.append(
                f"Battery was above the charge target before leg {legs}, so no charging stop was added there."
            )
        if rounded_final_soc < LOW_FINAL_SOC_THRESHOLD:
            warnings.append("Low final battery level. Consider adding a charging stop near the destination.")
        if total_distance > LONG_TRIP_THRESHOLD_KM:
            warnings.append("Long trip detected. Plan rest breaks alongside charging stops.")

        return RoutePlan(
            origin=origin,
            destination=destination,
            vehicle=vehicle,
            initial_soc=initial_soc,
            segments=tuple(segments),
            charging_stops=tuple(stops),
            total_distance_km=float(round(total_distance)),
            total_duration_min=float(round(driving_time + charging_time)),
            total_energy_used_kwh=round(total_energy, 1),
            final_soc=rounded_final_soc,
            weather_impact=weather_impact(weather),
            driving_duration_min=float(round(driving_time)),
            charging_duration_min=float(round(charging_time)),
            total_elevation_gain_m=float(round(sum(segment.elevation_gain_m for segment in segments))),
            average_consumption_kwh_per_100km=round(consumption, 1),
            total_charging_cost=round(sum(priced), 2) if priced else None,
            soc_trajectory=tuple(round(soc, 1) for soc in outcome.soc_trajectory),
            feasible=feasible,
            warnings=tuple(warnings),
        )
