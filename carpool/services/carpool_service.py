"""
Carpool service
===============

Glue between the allocation engine and a ``VehicleStore``.  Each
transition runs as one load -> transition -> save cycle:

* the collection is loaded from the store,
* the pure engine computes the next collection (or raises),
* the result is saved only when the engine succeeded.

An ``asyncio.Lock`` serializes the cycles so that one transition always
completes before the next one reads the collection.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from carpool.domain import allocation
from carpool.domain.allocation import Fleet, find_vehicle, new_vehicle_id
from carpool.domain.entities import Applicant, Vehicle, VehicleDetails
from carpool.domain.exceptions import SeatsExhausted
from carpool.domain.search import filter_vehicles
from carpool.infrastructure.repositories import VehicleStore

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CarpoolService:
    def __init__(
        self,
        store: VehicleStore,
        id_factory: Callable[[], str] = new_vehicle_id,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.id_factory = id_factory
        self.clock = clock
        self._lock = asyncio.Lock()

    # ── Reads ─────────────────────────────────────────────────────────

    async def list_vehicles(
        self, destination: str = "", query: str = ""
    ) -> list[Vehicle]:
        vehicles = await self.store.load()
        return filter_vehicles(vehicles, destination=destination, query=query)

    async def get_vehicle(self, vehicle_id: str) -> Vehicle:
        return find_vehicle(await self.store.load(), vehicle_id)

    # ── Transitions ───────────────────────────────────────────────────

    async def _transition(
        self, operation: Callable[..., Fleet], *args
    ) -> tuple[Fleet, Fleet]:
        """Run *operation* on the stored collection and persist the result."""
        async with self._lock:
            before = await self.store.load()
            after = operation(before, *args)
            await self.store.save(after)
        return before, after

    async def register_vehicle(self, details: VehicleDetails) -> Vehicle:
        _, after = await self._transition(
            allocation.register, details, self.id_factory
        )
        vehicle = after[0]
        logger.info(
            "Registered vehicle %s (%s %s -> %s, %d seats)",
            vehicle.id,
            vehicle.make,
            vehicle.model,
            vehicle.destination,
            vehicle.seats,
        )
        return vehicle

    async def edit_vehicle(
        self, vehicle_id: str, details: VehicleDetails
    ) -> Vehicle:
        _, after = await self._transition(allocation.edit, vehicle_id, details)
        logger.info("Edited vehicle %s", vehicle_id)
        return find_vehicle(after, vehicle_id)

    async def apply_for_seat(
        self,
        vehicle_id: str,
        name: str,
        flat: str,
        applied_at: Optional[datetime] = None,
    ) -> Vehicle:
        applicant = Applicant(
            name=name, flat=flat, applied_at=applied_at or self.clock()
        )
        before, after = await self._transition(
            allocation.apply, vehicle_id, applicant
        )
        if after == before:
            logger.debug(
                "Duplicate application from %s (flat %s) on %s ignored",
                name,
                flat,
                vehicle_id,
            )
        else:
            logger.info("%s (flat %s) applied to %s", name, flat, vehicle_id)
        return find_vehicle(after, vehicle_id)

    async def approve_applicant(self, vehicle_id: str, index: int) -> Vehicle:
        try:
            _, after = await self._transition(allocation.approve, vehicle_id, index)
        except SeatsExhausted:
            logger.info("Approval on %s rejected: no seats left", vehicle_id)
            raise
        vehicle = find_vehicle(after, vehicle_id)
        logger.info(
            "Approved %s on %s (%d seats left)",
            vehicle.passengers[-1].name,
            vehicle_id,
            vehicle.seats,
        )
        return vehicle

    async def decline_applicant(self, vehicle_id: str, index: int) -> Vehicle:
        _, after = await self._transition(allocation.decline, vehicle_id, index)
        logger.info("Declined applicant #%d on %s", index, vehicle_id)
        return find_vehicle(after, vehicle_id)

    async def remove_vehicle(self, vehicle_id: str) -> None:
        before, after = await self._transition(allocation.delete, vehicle_id)
        if len(after) < len(before):
            logger.info("Removed vehicle %s", vehicle_id)
