"""Vehicle catalogue endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, status

from ...data.vehicle_catalog import list_vehicles
from ...schemas.planning import CatalogVehicleModel
from ...services.outputs.plan_formatter import vehicle_to_json

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


@router.get("", response_model=List[CatalogVehicleModel], status_code=status.HTTP_200_OK)
def get_vehicles() -> List[CatalogVehicleModel]:
    return [
        CatalogVehicleModel(vehicle_id=vehicle_id, **vehicle_to_json(vehicle))
        for vehicle_id, vehicle in list_vehicles()
    ]
