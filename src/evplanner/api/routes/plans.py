"""Route planning endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.planning import EnergyEstimateRequest, EnergyEstimateResponse, RoutePlanRequest, RoutePlanResponse
from ...services.planning.service import estimate_energy, plan_route

router = APIRouter(prefix="/plans", tags=["plans"])


@router.post("", response_model=RoutePlanResponse, status_code=status.HTTP_200_OK)
def create_plan(payload: RoutePlanRequest) -> RoutePlanResponse:
    try:
        return plan_route(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error planning route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to plan route: {str(exc)}",
        ) from exc


@router.post("/energy-estimate", response_model=EnergyEstimateResponse, status_code=status.HTTP_200_OK)
def energy_estimate(payload: EnergyEstimateRequest) -> EnergyEstimateResponse:
    """Energy and drive time for a single leg, without charging stops."""
    try:
        return estimate_energy(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
