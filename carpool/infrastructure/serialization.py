"""
Persisted collection format.

The whole collection lives in one key-value slot as a JSON array of
vehicle objects with camelCase keys::

    [{"id": "...", "ownerId": "...", "ownerName": "...", "ownerFlat": "...",
      "make": "...", "model": "...", "destination": "...", "notes": "...",
      "seats": 2,
      "applicants": [{"name": "...", "flat": "...", "appliedAt": "<ISO-8601>"}],
      "passengers": [...]}]

Older records may omit ``applicants`` / ``passengers`` / ``ownerId``;
they load with empty queues and an ``owner-<id>`` owner id.  Anything
that does not validate loads as an empty collection.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    RootModel,
    ValidationError,
    model_validator,
)
from pydantic.alias_generators import to_camel

from carpool.domain.allocation import Fleet
from carpool.domain.entities import Applicant, Vehicle

logger = logging.getLogger(__name__)


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApplicantRecord(_Record):
    name: str
    flat: str
    applied_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, applicant: Applicant) -> ApplicantRecord:
        return cls(
            name=applicant.name,
            flat=applicant.flat,
            applied_at=applicant.applied_at,
        )

    def to_entity(self) -> Applicant:
        return Applicant(name=self.name, flat=self.flat, applied_at=self.applied_at)


class VehicleRecord(_Record):
    id: str
    owner_id: Optional[str] = None
    owner_name: str = ""
    owner_flat: str = ""
    make: str = ""
    model: str = ""
    destination: str = ""
    notes: str = ""
    seats: int = Field(0, ge=0)
    applicants: list[ApplicantRecord] = []
    passengers: list[ApplicantRecord] = []

    @classmethod
    def from_entity(cls, vehicle: Vehicle) -> VehicleRecord:
        return cls(
            id=vehicle.id,
            owner_id=vehicle.owner_id,
            owner_name=vehicle.owner_name,
            owner_flat=vehicle.owner_flat,
            make=vehicle.make,
            model=vehicle.model,
            destination=vehicle.destination,
            notes=vehicle.notes,
            seats=vehicle.seats,
            applicants=[ApplicantRecord.from_entity(a) for a in vehicle.applicants],
            passengers=[ApplicantRecord.from_entity(p) for p in vehicle.passengers],
        )

    def to_entity(self) -> Vehicle:
        return Vehicle(
            id=self.id,
            owner_id=self.owner_id or f"owner-{self.id}",
            owner_name=self.owner_name,
            owner_flat=self.owner_flat,
            make=self.make,
            model=self.model,
            destination=self.destination,
            notes=self.notes,
            seats=self.seats,
            applicants=tuple(a.to_entity() for a in self.applicants),
            passengers=tuple(p.to_entity() for p in self.passengers),
        )


class VehicleCollection(RootModel[list[VehicleRecord]]):
    @model_validator(mode="after")
    def _unique_ids(self) -> VehicleCollection:
        ids = [record.id for record in self.root]
        if len(ids) != len(set(ids)):
            raise ValueError("duplicate vehicle ids")
        return self


def dump_vehicles(vehicles: Iterable[Vehicle]) -> str:
    collection = VehicleCollection([VehicleRecord.from_entity(v) for v in vehicles])
    return collection.model_dump_json(by_alias=True)


def load_vehicles(raw: str | bytes | None) -> Fleet:
    """Parse a stored slot value; absent or invalid data yields ``()``."""
    if not raw:
        return ()
    try:
        collection = VehicleCollection.model_validate_json(raw)
    except ValidationError as exc:
        logger.warning(
            "Stored vehicle data is unreadable (%d errors), starting empty",
            exc.error_count(),
        )
        return ()
    return tuple(record.to_entity() for record in collection.root)
