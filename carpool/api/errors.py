"""Translate seat-allocation errors into JSON error responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from carpool.domain.exceptions import (
    ApplicantIndexError,
    CarpoolError,
    InvalidSeatCount,
    SeatsExhausted,
    VehicleNotFound,
)

logger = logging.getLogger(__name__)

STATUS_CODES: dict[type[CarpoolError], int] = {
    VehicleNotFound: status.HTTP_404_NOT_FOUND,
    ApplicantIndexError: status.HTTP_404_NOT_FOUND,
    SeatsExhausted: status.HTTP_409_CONFLICT,
    InvalidSeatCount: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


async def carpool_error_handler(request: Request, exc: CarpoolError) -> JSONResponse:
    status_code = STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
    if status_code == status.HTTP_404_NOT_FOUND:
        # Usually a stale view on the client side.
        logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CarpoolError, carpool_error_handler)
