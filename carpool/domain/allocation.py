"""
Seat Allocation Engine
======================

Pure transitions over a collection of vehicles.  Every operation takes
the current collection and returns the next one; nothing is modified in
place, so a failed or rejected operation leaves the caller's collection
exactly as it was.

Operations
----------
* ``register`` -- new vehicle, prepended (most-recent-first).
* ``edit``     -- replace owner-editable fields, keep the queues.
* ``apply``    -- append to the applicant queue; duplicates are dropped.
* ``approve``  -- move an applicant to ``passengers`` and take a seat.
* ``decline``  -- drop an applicant.
* ``delete``   -- remove a vehicle; unknown ids are a no-op.

Invariants
----------
1. ``seats >= 0`` -- enforced by ``approve`` (sole decrement) and by
   rejecting negative counts on register / edit.
2. ``applicants`` holds at most one entry per ``(name, flat)``.
3. An applicant is never in ``applicants`` and ``passengers`` at once.
4. ``passengers`` only grows.
5. Vehicle ids are unique within the collection.

Complexity: O(V + A) per operation, V = vehicles, A = applicants of the
target vehicle.
"""

from __future__ import annotations

import uuid
from typing import Callable, Iterable

from .entities import Applicant, Vehicle, VehicleDetails
from .exceptions import (
    ApplicantIndexError,
    InvalidSeatCount,
    SeatsExhausted,
    VehicleNotFound,
)

Fleet = tuple[Vehicle, ...]


def new_vehicle_id() -> str:
    return uuid.uuid4().hex


# ── Lookups ───────────────────────────────────────────────────────────


def _position(vehicles: Fleet, vehicle_id: str) -> int:
    for pos, vehicle in enumerate(vehicles):
        if vehicle.id == vehicle_id:
            return pos
    raise VehicleNotFound(vehicle_id)


def find_vehicle(vehicles: Iterable[Vehicle], vehicle_id: str) -> Vehicle:
    fleet = tuple(vehicles)
    return fleet[_position(fleet, vehicle_id)]


def _replace_at(vehicles: Fleet, pos: int, vehicle: Vehicle) -> Fleet:
    return vehicles[:pos] + (vehicle,) + vehicles[pos + 1:]


def _check_index(vehicle: Vehicle, index: int) -> None:
    # Negative indexes must not wrap around to the end of the queue.
    if not 0 <= index < len(vehicle.applicants):
        raise ApplicantIndexError(vehicle.id, index, len(vehicle.applicants))


def _check_seats(seats: int) -> None:
    if seats < 0:
        raise InvalidSeatCount(seats)


# ── Operations ────────────────────────────────────────────────────────


def register(
    vehicles: Iterable[Vehicle],
    details: VehicleDetails,
    id_factory: Callable[[], str] = new_vehicle_id,
) -> Fleet:
    """Create a vehicle with empty queues and prepend it."""
    fleet = tuple(vehicles)
    _check_seats(details.seats)

    taken = {v.id for v in fleet}
    vehicle_id = id_factory()
    while vehicle_id in taken:
        vehicle_id = id_factory()

    return (Vehicle.from_details(vehicle_id, details),) + fleet


def edit(
    vehicles: Iterable[Vehicle], vehicle_id: str, details: VehicleDetails
) -> Fleet:
    """
    Replace the owner-editable fields of a vehicle.

    ``seats`` is taken as the new count of unassigned seats; approved
    passengers are not reconciled against it.
    """
    fleet = tuple(vehicles)
    pos = _position(fleet, vehicle_id)
    _check_seats(details.seats)
    return _replace_at(fleet, pos, fleet[pos].with_details(details))


def apply(
    vehicles: Iterable[Vehicle], vehicle_id: str, applicant: Applicant
) -> Fleet:
    """
    Queue *applicant* on the vehicle.

    A pending application with the same ``(name, flat)`` makes this a
    no-op, as does one from someone already seated.  A declined applicant
    may apply again.  Seat exhaustion is not checked: the queue doubles
    as a waiting list and only ``approve`` guards capacity.
    """
    fleet = tuple(vehicles)
    pos = _position(fleet, vehicle_id)
    vehicle = fleet[pos]
    if vehicle.is_pending(applicant) or vehicle.is_passenger(applicant):
        return fleet
    return _replace_at(fleet, pos, vehicle.add_applicant(applicant))


def approve(vehicles: Iterable[Vehicle], vehicle_id: str, index: int) -> Fleet:
    """Seat the applicant at queue position *index*."""
    fleet = tuple(vehicles)
    pos = _position(fleet, vehicle_id)
    vehicle = fleet[pos]
    _check_index(vehicle, index)
    if not vehicle.can_seat():
        raise SeatsExhausted(vehicle_id)
    return _replace_at(fleet, pos, vehicle.seat_applicant(index))


def decline(vehicles: Iterable[Vehicle], vehicle_id: str, index: int) -> Fleet:
    """Drop the applicant at queue position *index*."""
    fleet = tuple(vehicles)
    pos = _position(fleet, vehicle_id)
    vehicle = fleet[pos]
    _check_index(vehicle, index)
    updated, _ = vehicle.remove_applicant(index)
    return _replace_at(fleet, pos, updated)


def delete(vehicles: Iterable[Vehicle], vehicle_id: str) -> Fleet:
    """Remove a vehicle with its queues.  Unknown ids are ignored."""
    return tuple(v for v in vehicles if v.id != vehicle_id)
