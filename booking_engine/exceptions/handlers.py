import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import (
    BookingConflictError,
    BookingNotFoundError,
    InvalidRangeError,
    InvalidRateError,
    InvalidStatusTransitionError,
)

logger = logging.getLogger(__name__)


async def invalid_range_error_handler(_request: Request, exc: InvalidRangeError) -> JSONResponse:
    logger.info("Invalid stay dates: %s", exc.message)
    return JSONResponse(status_code=400, content={"detail": exc.message})


async def invalid_rate_error_handler(_request: Request, exc: InvalidRateError) -> JSONResponse:
    logger.info("Invalid nightly rate: %s", exc.message)
    return JSONResponse(status_code=400, content={"detail": exc.message})


async def booking_conflict_error_handler(_request: Request, exc: BookingConflictError) -> JSONResponse:
    logger.warning("Booking conflict on property %s", exc.property_id)
    return JSONResponse(status_code=409, content={"detail": exc.message})


async def booking_not_found_error_handler(_request: Request, exc: BookingNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": exc.message})


async def invalid_status_transition_error_handler(
    _request: Request, exc: InvalidStatusTransitionError,
) -> JSONResponse:
    logger.warning("Rejected status change %s -> %s", exc.current, exc.requested)
    return JSONResponse(status_code=409, content={"detail": exc.message})
