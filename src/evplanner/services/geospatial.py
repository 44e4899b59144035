"""Geospatial helper functions."""

from __future__ import annotations

import math

from shapely.geometry import LineString

from ..models.domain import GeoPoint

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_between(start: GeoPoint, end: GeoPoint) -> float:
    return haversine_km(start.latitude, start.longitude, end.latitude, end.longitude)


def midpoint(start: GeoPoint, end: GeoPoint) -> GeoPoint:
    """Arithmetic midpoint in degrees, good enough for regional weather lookups."""

    return GeoPoint(
        latitude=(start.latitude + end.latitude) / 2,
        longitude=(start.longitude + end.longitude) / 2,
    )


def interpolate_points(start: GeoPoint, end: GeoPoint, intervals: int) -> list[GeoPoint]:
    """Return ``intervals + 1`` evenly spaced points on the straight line from start to end.

    Interpolation is linear in latitude/longitude, both endpoints included.
    """

    if intervals < 1:
        raise ValueError("At least one interval is required for interpolation.")
    if (start.latitude, start.longitude) == (end.latitude, end.longitude):
        return [GeoPoint(start.latitude, start.longitude) for _ in range(intervals + 1)]

    line = LineString([(start.longitude, start.latitude), (end.longitude, end.latitude)])
    points: list[GeoPoint] = []
    for index in range(intervals + 1):
        position = line.interpolate(index / intervals, normalized=True)
        points.append(GeoPoint(latitude=position.y, longitude=position.x))
    return points
