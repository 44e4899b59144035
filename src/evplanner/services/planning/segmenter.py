"""Split a trip into driving segments with their energy and time cost."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import GeoPoint, RouteSegment, Vehicle, WeatherSample
from ..elevation.profile import ElevationProfileBuilder
from ..energy.model import compute_segment_energy
from ..geospatial import distance_between


class RouteSegmenter:
    """One segment per consecutive pair of waypoints, concatenated in order."""

    def __init__(self, profile_builder: ElevationProfileBuilder) -> None:
        self.profile_builder = profile_builder

    @staticmethod
    def legs(waypoints: Sequence[GeoPoint]) -> list[tuple[GeoPoint, GeoPoint]]:
        if len(waypoints) < 2:
            raise ValueError("At least an origin and a destination are required.")
        return list(zip(waypoints[:-1], waypoints[1:]))

    def leg_elevation_gains(self, waypoints: Sequence[GeoPoint]) -> list[float]:
        return [self.profile_builder.elevation_gain(start, end) for start, end in self.legs(waypoints)]

    def build_segments(
        self,
        waypoints: Sequence[GeoPoint],
        vehicle: Vehicle,
        weather: WeatherSample,
        elevation_gains: Sequence[float] | None = None,
    ) -> list[RouteSegment]:
        legs = self.legs(waypoints)
        gains = list(elevation_gains) if elevation_gains is not None else self.leg_elevation_gains(waypoints)
        if len(gains) != len(legs):
            raise ValueError(f"Expected {len(legs)} elevation gains, got {len(gains)}.")

        segments: list[RouteSegment] = []
        for (start, end), gain in zip(legs, gains):
            distance_km = distance_between(start, end)
            energy_kwh, duration_min = compute_segment_energy(distance_km, gain, vehicle, weather)
            segments.append(
                RouteSegment(
                    start=start,
                    end=end,
                    distance_km=distance_km,
                    duration_min=float(round(duration_min)),
                    elevation_gain_m=gain,
                    energy_required_kwh=round(energy_kwh, 1),
                )
            )
        return segments
