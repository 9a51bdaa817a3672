"""
Vehicle endpoints
=================

GET    /api/v1/vehicles                                   -- list (filterable)
POST   /api/v1/vehicles                                   -- register a vehicle
GET    /api/v1/vehicles/{vehicle_id}                      -- vehicle details
PUT    /api/v1/vehicles/{vehicle_id}                      -- edit a vehicle
DELETE /api/v1/vehicles/{vehicle_id}                      -- remove a vehicle
POST   /api/v1/vehicles/{vehicle_id}/applicants           -- apply for a seat
POST   /api/v1/vehicles/{vehicle_id}/applicants/{i}/approve
POST   /api/v1/vehicles/{vehicle_id}/applicants/{i}/decline
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from carpool.api.dependencies import get_carpool_service
from carpool.api.schemas import (
    ApplicationRequest,
    ErrorResponse,
    VehicleRequest,
    VehicleResponse,
)
from carpool.services.carpool_service import CarpoolService

router = APIRouter(prefix="/vehicles", tags=["vehicles"])

_NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get(
    "",
    response_model=list[VehicleResponse],
    summary="List vehicles, most recently registered first",
)
async def list_vehicles(
    destination: str = "",
    q: str = "",
    service: CarpoolService = Depends(get_carpool_service),
):
    vehicles = await service.list_vehicles(destination=destination, query=q)
    return [VehicleResponse.model_validate(v) for v in vehicles]


@router.post(
    "",
    status_code=201,
    response_model=VehicleResponse,
    summary="Register a vehicle",
)
async def register_vehicle(
    body: VehicleRequest,
    service: CarpoolService = Depends(get_carpool_service),
):
    vehicle = await service.register_vehicle(body.to_details())
    return VehicleResponse.model_validate(vehicle)


@router.get(
    "/{vehicle_id}",
    response_model=VehicleResponse,
    responses=_NOT_FOUND,
    summary="Get a vehicle with its applicants and passengers",
)
async def get_vehicle(
    vehicle_id: str,
    service: CarpoolService = Depends(get_carpool_service),
):
    return VehicleResponse.model_validate(await service.get_vehicle(vehicle_id))


@router.put(
    "/{vehicle_id}",
    response_model=VehicleResponse,
    responses=_NOT_FOUND,
    summary="Edit a vehicle",
    description=(
        "Replaces the owner details, descriptive fields and seat count. "
        "Pending applicants and approved passengers are kept."
    ),
)
async def edit_vehicle(
    vehicle_id: str,
    body: VehicleRequest,
    service: CarpoolService = Depends(get_carpool_service),
):
    vehicle = await service.edit_vehicle(vehicle_id, body.to_details())
    return VehicleResponse.model_validate(vehicle)


@router.delete(
    "/{vehicle_id}",
    status_code=204,
    summary="Remove a vehicle",
    description="Idempotent: removing an unknown vehicle also returns 204.",
)
async def remove_vehicle(
    vehicle_id: str,
    service: CarpoolService = Depends(get_carpool_service),
):
    await service.remove_vehicle(vehicle_id)
    return Response(status_code=204)


@router.post(
    "/{vehicle_id}/applicants",
    status_code=201,
    response_model=VehicleResponse,
    responses=_NOT_FOUND,
    summary="Apply for a seat",
    description=(
        "Re-submitting a pending application (same name and flat) "
        "is accepted and leaves the queue unchanged."
    ),
)
async def apply_for_seat(
    vehicle_id: str,
    body: ApplicationRequest,
    service: CarpoolService = Depends(get_carpool_service),
):
    vehicle = await service.apply_for_seat(
        vehicle_id, body.name, body.flat, applied_at=body.applied_at
    )
    return VehicleResponse.model_validate(vehicle)


@router.post(
    "/{vehicle_id}/applicants/{index}/approve",
    response_model=VehicleResponse,
    responses={**_NOT_FOUND, 409: {"model": ErrorResponse}},
    summary="Approve the applicant at a queue position",
)
async def approve_applicant(
    vehicle_id: str,
    index: int,
    service: CarpoolService = Depends(get_carpool_service),
):
    vehicle = await service.approve_applicant(vehicle_id, index)
    return VehicleResponse.model_validate(vehicle)


@router.post(
    "/{vehicle_id}/applicants/{index}/decline",
    response_model=VehicleResponse,
    responses=_NOT_FOUND,
    summary="Decline the applicant at a queue position",
)
async def decline_applicant(
    vehicle_id: str,
    index: int,
    service: CarpoolService = Depends(get_carpool_service),
):
    vehicle = await service.decline_applicant(vehicle_id, index)
    return VehicleResponse.model_validate(vehicle)
