"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / Redis.  The service gets a deterministic id factory and clock so
responses can be asserted exactly.
"""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from carpool.api.app import create_app
from carpool.domain.entities import Applicant, Vehicle
from carpool.infrastructure.database import init_db
from carpool.infrastructure.repositories import SqlVehicleStore
from carpool.services.carpool_service import CarpoolService

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"
FIXED_TIME = datetime(2024, 3, 1, 7, 30, tzinfo=timezone.utc)


def sequential_ids(prefix: str = "v"):
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


def make_vehicle(vehicle_id: str = "v1", seats: int = 2, **kwargs) -> Vehicle:
    defaults = dict(
        owner_id=f"owner-{vehicle_id}",
        owner_name="Priya Patel",
        owner_flat="B-204",
        make="Honda",
        model="City",
        destination="MRT Downtown",
    )
    defaults.update(kwargs)
    return Vehicle(id=vehicle_id, seats=seats, **defaults)


def applicant(name: str, flat: str) -> Applicant:
    return Applicant(name=name, flat=flat, applied_at=FIXED_TIME)


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create tables on a fresh in-memory database, dispose afterwards."""
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    await init_db(engine)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def store(session_factory) -> SqlVehicleStore:
    return SqlVehicleStore(session_factory)


@pytest.fixture
def service(store) -> CarpoolService:
    return CarpoolService(store, id_factory=sequential_ids(), clock=lambda: FIXED_TIME)


@pytest_asyncio.fixture
async def client(service) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient against an app wired to the in-memory store."""
    app = create_app(service=service)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
