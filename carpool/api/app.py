"""
FastAPI application factory.

* Registers the vehicle and admin routes.
* Builds the vehicle store and carpool service via lifespan events.
* Maps seat-allocation errors to JSON error responses.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI

from carpool.api.errors import register_exception_handlers
from carpool.api.routes import admin, vehicles
from carpool.config import settings
from carpool.infrastructure.repositories import (
    RedisVehicleStore,
    SqlVehicleStore,
    VehicleStore,
)
from carpool.services.carpool_service import CarpoolService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def build_store() -> VehicleStore:
    """Create the store selected by ``settings.store_backend``."""
    if settings.store_backend == "redis":
        from carpool.infrastructure.redis_client import get_redis

        return RedisVehicleStore(get_redis(), settings.store_key)

    from carpool.infrastructure.database import async_session_factory, init_db

    await init_db()
    return SqlVehicleStore(async_session_factory, settings.store_key)


def create_app(service: Optional[CarpoolService] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Attach a carpool service on startup unless one was injected."""
        if service is None:
            store = await build_store()
            app.state.carpool = CarpoolService(store)
            logger.info("Vehicle store ready (%s backend)", settings.store_backend)
        yield

    app = FastAPI(
        title="Community Carpool API",
        description=(
            "Residents publish trips with a fixed seat count, apply for "
            "seats, and owners approve or decline applicants.  Intended "
            "for a single local user."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    if service is not None:
        app.state.carpool = service

    register_exception_handlers(app)

    # Routers
    app.include_router(vehicles.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
