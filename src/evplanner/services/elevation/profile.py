"""Reduce elevation samples along a leg to a single climb figure."""

from __future__ import annotations

import logging
from typing import Sequence

import httpx

from ...config import settings
from ...models.domain import GeoPoint
from ..geospatial import distance_between, interpolate_points
from ..providers import ElevationProvider, ElevationSample

logger = logging.getLogger(__name__)

FLAT_PROFILE_ELEVATION_M = 50.0


def flat_profile(start: GeoPoint, end: GeoPoint) -> list[ElevationSample]:
    return [
        ElevationSample(elevation_m=FLAT_PROFILE_ELEVATION_M, distance_from_start_km=0.0),
        ElevationSample(elevation_m=FLAT_PROFILE_ELEVATION_M, distance_from_start_km=distance_between(start, end)),
    ]


def elevation_gain(profile: Sequence[ElevationSample]) -> float:
    """Sum of ascending deltas between consecutive samples; descents are not credited."""
    total = 0.0
    for previous, current in zip(profile, profile[1:]):
        delta = current.elevation_m - previous.elevation_m
        if delta > 0:
            total += delta
    return float(round(total))


class ElevationProfileBuilder:
    def __init__(self, provider: ElevationProvider | None, samples: int | None = None) -> None:
        self.provider = provider
        self.samples = samples or settings.elevation_samples

    def build_profile(self, start: GeoPoint, end: GeoPoint) -> list[ElevationSample]:
        if self.provider is None:
            return flat_profile(start, end)
        points = interpolate_points(start, end, self.samples)
        try:
            profile = self.provider.fetch_profile(points)
        except (ConnectionError, httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Using flat elevation profile due to elevation lookup failure: {e}")
            return flat_profile(start, end)
        if len(profile) < 2:
            logger.warning(f"Elevation lookup returned {len(profile)} samples, using flat profile")
            return flat_profile(start, end)
        return profile

    def elevation_gain(self, start: GeoPoint, end: GeoPoint) -> float:
        return elevation_gain(self.build_profile(start, end))
