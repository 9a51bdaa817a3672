"""
Display filters for the vehicle list.

Both filters are case-insensitive substring matches and combine with AND.
They only select what to show; the stored collection is never touched.
"""

from __future__ import annotations

from typing import Iterable

from .entities import Vehicle


def matches_destination(vehicle: Vehicle, destination: str) -> bool:
    if not destination:
        return True
    return destination.lower() in vehicle.destination.lower()


def matches_query(vehicle: Vehicle, query: str) -> bool:
    """Free-text match over make, model, destination and owner name."""
    if not query:
        return True
    q = query.lower()
    return any(
        q in text.lower()
        for text in (
            vehicle.make,
            vehicle.model,
            vehicle.destination,
            vehicle.owner_name,
        )
    )


def filter_vehicles(
    vehicles: Iterable[Vehicle], destination: str = "", query: str = ""
) -> list[Vehicle]:
    return [
        v
        for v in vehicles
        if matches_destination(v, destination) and matches_query(v, query)
    ]
