"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="EVP_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "EV Route Planner API"
    api_prefix: str = "/api"
    log_level: str = "INFO"
    data_root: Path = Field(default=Path("data"), description="Root directory for persisted plan outputs.")

    elevation_api_url: Optional[str] = Field(
        default="https://api.open-elevation.com/api/v1/lookup",
        description="Open-Elevation compatible lookup endpoint.",
    )
    weather_api_url: Optional[str] = Field(
        default="https://api.open-meteo.com/v1/forecast",
        description="Open-Meteo forecast endpoint used for current conditions.",
    )
    geocoder_url: Optional[str] = Field(
        default="https://nominatim.openstreetmap.org/search",
        description="Nominatim search endpoint for free-text place resolution.",
    )
    geocoder_user_agent: str = Field(default="ev-route-planner/0.1")
    geocoder_max_results: int = Field(default=5, ge=1)
    geocoder_min_interval_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Minimum gap between geocoder requests (public Nominatim allows one per second).",
    )
    charging_directory_url: Optional[str] = Field(
        default="https://api.openchargemap.io/v3/poi",
        description="OpenChargeMap POI endpoint. Leave empty to always use the built-in station list.",
    )
    charging_directory_api_key: Optional[str] = Field(default=None)
    charging_directory_country_codes: tuple[str, ...] = Field(
        default=("AE", "SA", "OM", "QA", "BH", "KW", "IR"),
    )
    charging_directory_max_results: int = Field(default=100, ge=1)

    http_timeout_seconds: float = Field(default=10.0, gt=0.0)
    http_connect_timeout_seconds: float = Field(default=5.0, gt=0.0)
    http_max_retries: int = Field(default=2, ge=0)
    http_backoff_seconds: float = Field(default=0.5, ge=0.0)

    elevation_samples: int = Field(default=10, ge=1)
    safety_buffer_soc: float = Field(default=20.0, ge=0.0, le=100.0)
    charge_target_soc: float = Field(default=80.0, gt=0.0, le=100.0)
    station_search_radius_km: float = Field(default=50.0, gt=0.0)

    default_temperature_c: float = 25.0
    default_wind_speed_kmh: float = Field(default=0.0, ge=0.0)
    default_weather_condition: str = "clear"

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", "charging_directory_country_codes", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
