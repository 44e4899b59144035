"""Greedy charging-stop insertion over an ordered list of route segments."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from ...config import settings
from ...models.domain import ChargingStation, ChargingStop, RouteSegment, Vehicle
from ..charging.scoring import select_best_station
from ..providers import ChargingStationDirectory

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PlannerOutcome:
    stops: list[ChargingStop] = field(default_factory=list)
    # SOC after each segment, unclamped so stranding shows up as negative values.
    soc_trajectory: list[float] = field(default_factory=list)
    # Indexes of segments that needed a stop the planner could not place.
    unresolved_segments: list[int] = field(default_factory=list)
    # Indexes of segments that breached the buffer while SOC was still above the charge target.
    above_target_segments: list[int] = field(default_factory=list)


class ChargingStopPlanner:
    """Single forward pass that charges whenever the next segment would breach the safety buffer.

    The pass is greedy with one segment of look-ahead: it reacts at the first point
    a breach is detected and never revisits earlier placements. When no eligible
    station is found the segment is driven anyway and reported as unresolved.
    """

    def __init__(
        self,
        directory: ChargingStationDirectory,
        *,
        safety_buffer_soc: float | None = None,
        target_soc: float | None = None,
        search_radius_km: float | None = None,
    ) -> None:
        self.directory = directory
        self.safety_buffer_soc = safety_buffer_soc if safety_buffer_soc is not None else settings.safety_buffer_soc
        self.target_soc = target_soc if target_soc is not None else settings.charge_target_soc
        self.search_radius_km = search_radius_km if search_radius_km is not None else settings.station_search_radius_km

    def _find_station(self, latitude: float, longitude: float, vehicle: Vehicle) -> ChargingStation | None:
        try:
            candidates = self.directory.find_nearby(
                latitude, longitude, self.search_radius_km, sorted(vehicle.connector_types, key=lambda c: c.value)
            )
        except ConnectionError as e:
            logger.warning(f"Charging station lookup failed at ({latitude:.4f}, {longitude:.4f}): {e}")
            return None
        return select_best_station(candidates, vehicle)

    def _charge(self, station: ChargingStation, current_soc: float, vehicle: Vehicle) -> ChargingStop:
        # Unclamped SOC: the energy added must equal what the trajectory credits.
        energy_to_add = vehicle.battery_capacity_kwh * (self.target_soc - current_soc) / 100
        arrival_soc = min(100.0, max(0.0, current_soc))
        charging_power = min(station.max_power_kw, vehicle.max_charging_speed_kw)
        charging_time = energy_to_add / charging_power * 60
        energy_added = round(energy_to_add, 1)
        cost = round(energy_added * station.cost_per_kwh, 2) if station.cost_per_kwh is not None else None
        return ChargingStop(
            station=station,
            arrival_soc=float(round(arrival_soc)),
            departure_soc=self.target_soc,
            charging_time_min=float(round(charging_time)),
            energy_added_kwh=energy_added,
            estimated_cost=cost,
        )

    def plan(self, segments: Sequence[RouteSegment], vehicle: Vehicle, initial_soc: float) -> PlannerOutcome:
        outcome = PlannerOutcome()
        if not segments:
            return outcome

        current_soc = float(initial_soc)
        position = segments[0].start

        for index, segment in enumerate(segments):
            soc_needed = segment.energy_required_kwh / vehicle.battery_capacity_kwh * 100

            if current_soc - soc_needed < self.safety_buffer_soc:
                station = self._find_station(position.latitude, position.longitude, vehicle)
                if station is None:
                    logger.warning(
                        f"No compatible charging station within {self.search_radius_km:.0f} km of "
                        f"({position.latitude:.4f}, {position.longitude:.4f}) before segment {index}"
                    )
                    outcome.unresolved_segments.append(index)
                elif current_soc > self.target_soc:
                    # Already above the charge target; a stop here would remove energy.
                    outcome.above_target_segments.append(index)
                    logger.info(f"SOC {current_soc:.0f}% is above the charge target before segment {index}; no stop inserted")
                else:
                    stop = self._charge(station, current_soc, vehicle)
                    outcome.stops.append(stop)
                    logger.info(
                        f"Charging stop at {station.name}: {stop.arrival_soc:.0f}% -> {stop.departure_soc:.0f}% "
                        f"in {stop.charging_time_min:.0f} min"
                    )
                    current_soc = self.target_soc

            position = segment.end
            current_soc -= soc_needed
            outcome.soc_trajectory.append(current_soc)

        return outcome
