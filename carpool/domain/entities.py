"""
Domain entities with business logic.

Patterns used
-------------
- **Immutable values**: ``Vehicle`` and ``Applicant`` are frozen
  dataclasses and every change returns a new instance, so a collection
  handed to the allocation engine is never modified in place.
- ``Vehicle.can_seat`` encapsulates the non-negative seats invariant.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Applicant:
    name: str
    flat: str
    applied_at: Optional[datetime] = None

    @property
    def key(self) -> tuple[str, str]:
        """Natural key of an applicant within one vehicle."""
        return (self.name, self.flat)


@dataclass(frozen=True)
class VehicleDetails:
    """Owner-controlled fields supplied on registration and edit."""

    owner_name: str
    owner_flat: str
    make: str = ""
    model: str = ""
    destination: str = ""
    notes: str = ""
    seats: int = 3
    owner_id: Optional[str] = None


# ── Entities ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Vehicle:
    id: str
    owner_id: str = ""
    owner_name: str = ""
    owner_flat: str = ""
    make: str = ""
    model: str = ""
    destination: str = ""
    notes: str = ""
    seats: int = 0  # currently unassigned seats
    applicants: tuple[Applicant, ...] = ()
    passengers: tuple[Applicant, ...] = ()

    @classmethod
    def from_details(cls, vehicle_id: str, details: VehicleDetails) -> Vehicle:
        return cls(
            id=vehicle_id,
            owner_id=details.owner_id or f"owner-{vehicle_id}",
            owner_name=details.owner_name,
            owner_flat=details.owner_flat,
            make=details.make,
            model=details.model,
            destination=details.destination,
            notes=details.notes,
            seats=details.seats,
        )

    def with_details(self, details: VehicleDetails) -> Vehicle:
        """Replace owner-editable fields; applicants and passengers stay."""
        return replace(
            self,
            owner_id=details.owner_id or self.owner_id,
            owner_name=details.owner_name,
            owner_flat=details.owner_flat,
            make=details.make,
            model=details.model,
            destination=details.destination,
            notes=details.notes,
            seats=details.seats,
        )

    def is_pending(self, applicant: Applicant) -> bool:
        return any(a.key == applicant.key for a in self.applicants)

    def is_passenger(self, applicant: Applicant) -> bool:
        return any(p.key == applicant.key for p in self.passengers)

    def can_seat(self) -> bool:
        return self.seats - 1 >= 0

    def add_applicant(self, applicant: Applicant) -> Vehicle:
        return replace(self, applicants=self.applicants + (applicant,))

    def remove_applicant(self, index: int) -> tuple[Vehicle, Applicant]:
        """Drop the applicant at *index*; later entries shift down."""
        removed = self.applicants[index]
        remaining = self.applicants[:index] + self.applicants[index + 1:]
        return replace(self, applicants=remaining), removed

    def seat_applicant(self, index: int) -> Vehicle:
        """Move the applicant at *index* to the end of ``passengers``."""
        vehicle, applicant = self.remove_applicant(index)
        return replace(
            vehicle,
            seats=self.seats - 1,
            passengers=self.passengers + (applicant,),
        )
