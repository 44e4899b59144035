"""HTTP client for Open-Elevation compatible lookup services."""

from __future__ import annotations

import logging
from typing import Sequence

import httpx

from ...config import settings
from ...models.domain import GeoPoint
from ..geospatial import distance_between
from ..http import build_client, request_json
from ..providers import ElevationSample

logger = logging.getLogger(__name__)


class OpenElevationClient:
    """Fetch elevations for a list of points via ``POST /api/v1/lookup``."""

    def __init__(self, base_url: str | None = None, client: httpx.Client | None = None) -> None:
        self.base_url = base_url or settings.elevation_api_url
        if not self.base_url:
            raise ValueError("Elevation API URL is not configured.")
        self._client = client or build_client()

    def close(self) -> None:
        self._client.close()

    def fetch_profile(self, points: Sequence[GeoPoint]) -> list[ElevationSample]:
        if not points:
            return []
        body = {"locations": [{"latitude": p.latitude, "longitude": p.longitude} for p in points]}
        data = request_json(self._client, "POST", self.base_url, json_body=body, service="elevation")

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list) or len(results) != len(points):
            raise ValueError(
                f"Elevation service returned {len(results) if isinstance(results, list) else 'no'} "
                f"results for {len(points)} points."
            )

        origin = points[0]
        samples: list[ElevationSample] = []
        for point, result in zip(points, results):
            samples.append(
                ElevationSample(
                    elevation_m=float(result.get("elevation") or 0.0),
                    distance_from_start_km=distance_between(origin, point),
                )
            )
        logger.debug(f"Fetched {len(samples)} elevation samples")
        return samples
