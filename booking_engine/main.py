import logging
import sys
from contextlib import asynccontextmanager
from fastapi import FastAPI

from . import models
from .config import settings
from .database import engine
from .exceptions.custom import (
    BookingConflictError,
    BookingNotFoundError,
    InvalidRangeError,
    InvalidRateError,
    InvalidStatusTransitionError,
)
from .exceptions.handlers import (
    booking_conflict_error_handler,
    booking_not_found_error_handler,
    invalid_range_error_handler,
    invalid_rate_error_handler,
    invalid_status_transition_error_handler,
)
from .routers import availability_router, booking_router

# Setup logger
logger = logging.getLogger("booking_engine")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown events.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )

    # Creates the 'bookings' table if it doesn't exist
    models.Base.metadata.create_all(bind=engine)
    logger.info("Booking engine started.")

    yield  # The application is now running

    logger.info("Booking engine shutting down.")


app = FastAPI(
    title="Booking Engine API",
    description="Availability, pricing and cancellation rules for property bookings.",
    version="1.0.0",
    lifespan=lifespan
)

app.add_exception_handler(InvalidRangeError, invalid_range_error_handler)
app.add_exception_handler(InvalidRateError, invalid_rate_error_handler)
app.add_exception_handler(BookingConflictError, booking_conflict_error_handler)
app.add_exception_handler(BookingNotFoundError, booking_not_found_error_handler)
app.add_exception_handler(InvalidStatusTransitionError, invalid_status_transition_error_handler)

app.include_router(availability_router.router)
app.include_router(booking_router.router)


@app.get("/")
def read_root():
    return {"message": "Welcome to the Booking Engine"}
