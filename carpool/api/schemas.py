"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, Field, StringConstraints

from carpool.domain.entities import VehicleDetails

Required = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


# ── Requests ──────────────────────────────────────────────────────────


class VehicleRequest(BaseModel):
    """Body for both registration and edit."""

    owner_name: Required = Field(..., max_length=120)
    owner_flat: Required = Field(..., max_length=32)
    make: str = Field("", max_length=64)
    model: str = Field("", max_length=64)
    destination: str = Field("", max_length=255)
    notes: str = Field("", max_length=1000)
    seats: int = Field(3, ge=0, description="Currently unassigned seats.")
    owner_id: Optional[str] = Field(None, max_length=64)

    def to_details(self) -> VehicleDetails:
        return VehicleDetails(**self.model_dump())


class ApplicationRequest(BaseModel):
    name: Required = Field(..., max_length=120)
    flat: Required = Field(..., max_length=32)
    applied_at: Optional[datetime] = Field(
        None, description="Defaults to the time the request is received."
    )


# ── Responses ─────────────────────────────────────────────────────────


class ApplicantResponse(BaseModel):
    name: str
    flat: str
    applied_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class VehicleResponse(BaseModel):
    id: str
    owner_id: str
    owner_name: str
    owner_flat: str
    make: str
    model: str
    destination: str
    notes: str
    seats: int
    applicants: list[ApplicantResponse] = []
    passengers: list[ApplicantResponse] = []

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
