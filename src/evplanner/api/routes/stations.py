"""Charging station endpoints."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from ...config import settings
from ...models.domain import ConnectorType
from ...schemas.stations import NearbyStationsResponse
from ...services.charging.service import find_nearby_stations

router = APIRouter(prefix="/stations", tags=["stations"])


@router.get("/nearby", response_model=NearbyStationsResponse, status_code=status.HTTP_200_OK)
def nearby_stations(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    radius_km: Optional[float] = Query(default=None, gt=0, le=500),
    connector_types: Optional[List[ConnectorType]] = Query(default=None, alias="connector"),
) -> NearbyStationsResponse:
    """Stations around a point, from the live directory or the built-in fallback list."""
    try:
        radius = radius_km if radius_km is not None else settings.station_search_radius_km
        return find_nearby_stations(lat, lng, radius, connector_types)
    except Exception as exc:
        logging.exception(f"Error looking up charging stations: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to look up charging stations: {str(exc)}",
        ) from exc
