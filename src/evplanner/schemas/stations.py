"""Charging station lookup schemas."""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel

from .planning import StationModel


class NearbyStationsResponse(BaseModel):
    source: Literal["live", "fallback"]
    count: int
    stations: List[StationModel]
