"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/providers", status_code=status.HTTP_200_OK)
def health_providers() -> dict:
    """Report which external providers are configured. Unconfigured ones fall back to defaults."""
    return {
        "geocoder": {"configured": bool(settings.geocoder_url), "url": settings.geocoder_url},
        "elevation": {"configured": bool(settings.elevation_api_url), "url": settings.elevation_api_url},
        "weather": {"configured": bool(settings.weather_api_url), "url": settings.weather_api_url},
        "charging_directory": {
            "configured": bool(settings.charging_directory_url),
            "url": settings.charging_directory_url,
            "api_key_set": bool(settings.charging_directory_api_key),
        },
    }
