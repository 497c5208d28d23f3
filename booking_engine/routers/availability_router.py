import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import schemas, crud
from ..availability import blocked_dates, is_range_available
from ..config import settings
from ..database import get_db
from ..domain import BookingRange
from ..pricing import calculate_price

router = APIRouter(tags=["Availability"])


@router.post("/quotes", response_model=schemas.PriceQuoteRead)
def create_quote(request: schemas.QuoteRequest):
    """
    Price breakdown for a stay at the given nightly rate.
    """
    quote = calculate_price(request.price_per_night, request.check_in, request.check_out)
    return schemas.PriceQuoteRead.model_validate(quote)


@router.post("/properties/{property_id}/availability", response_model=schemas.AvailabilityRead)
def check_availability(
        property_id: str,
        stay: schemas.StayDates,
        db: Session = Depends(get_db),
):
    """
    Whether the dates can still be booked. Taken dates are a normal answer, not an error.
    """
    requested = BookingRange(property_id=property_id, check_in=stay.check_in, check_out=stay.check_out)
    existing = crud.get_property_bookings(db, property_id)
    return schemas.AvailabilityRead(
        property_id=property_id,
        check_in=requested.check_in,
        check_out=requested.check_out,
        available=is_range_available(requested, existing),
    )


@router.get("/properties/{property_id}/blocked-dates", response_model=schemas.BlockedDatesRead)
def read_blocked_dates(property_id: str, db: Session = Depends(get_db)):
    """
    Nights from today onwards that are held by pending or confirmed bookings.
    """
    today = datetime.date.today()
    horizon = today + datetime.timedelta(days=settings.BLOCKED_DATES_HORIZON_DAYS)
    existing = crud.get_property_bookings(db, property_id, ending_after=today)
    dates = sorted(d for d in blocked_dates(existing) if today <= d < horizon)
    return schemas.BlockedDatesRead(property_id=property_id, dates=dates)
