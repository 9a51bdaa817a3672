"""
Repository Pattern -- abstracts the key-value slot so the service stays
storage-agnostic.

The whole collection is read and written as one value under a fixed key.
Two backends:

* ``SqlVehicleStore``   -- a row in ``kv_slots`` (local SQLite by default).
* ``RedisVehicleStore`` -- a plain Redis string key.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

import redis.asyncio as aioredis
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .models import KeyValueSlotModel
from .serialization import dump_vehicles, load_vehicles
from carpool.domain.allocation import Fleet
from carpool.domain.entities import Vehicle

DEFAULT_KEY = "carpool_vehicles"


class VehicleStore(ABC):
    @abstractmethod
    async def load(self) -> Fleet: ...

    @abstractmethod
    async def save(self, vehicles: Iterable[Vehicle]) -> None: ...


class SqlVehicleStore(VehicleStore):
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        key: str = DEFAULT_KEY,
    ):
        self.session_factory = session_factory
        self.key = key

    async def load(self) -> Fleet:
        async with self.session_factory() as session:
            slot = await session.get(KeyValueSlotModel, self.key)
            raw = slot.value if slot else None
        return load_vehicles(raw)

    async def save(self, vehicles: Iterable[Vehicle]) -> None:
        payload = dump_vehicles(vehicles)
        async with self.session_factory() as session:
            try:
                slot = await session.get(KeyValueSlotModel, self.key)
                if slot is None:
                    session.add(KeyValueSlotModel(key=self.key, value=payload))
                else:
                    slot.value = payload
                await session.commit()
            except Exception:
                await session.rollback()
                raise


class RedisVehicleStore(VehicleStore):
    def __init__(self, client: aioredis.Redis, key: str = DEFAULT_KEY):
        self.redis = client
        self.key = key

    async def load(self) -> Fleet:
        return load_vehicles(await self.redis.get(self.key))

    async def save(self, vehicles: Iterable[Vehicle]) -> None:
        await self.redis.set(self.key, dump_vehicles(vehicles))
