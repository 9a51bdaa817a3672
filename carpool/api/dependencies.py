"""FastAPI dependency injection helpers."""

from fastapi import Request

from carpool.services.carpool_service import CarpoolService


def get_carpool_service(request: Request) -> CarpoolService:
    """Return the service built by the application lifespan."""
    return request.app.state.carpool
