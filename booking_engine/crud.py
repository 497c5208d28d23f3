import datetime
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models, schemas
from .availability import conflicting_bookings
from .cancellation import evaluate_cancellation
from .domain import BLOCKING_STATUSES, BookingRange, BookingStatus, ExistingBooking, RefundDecision
from .exceptions.custom import BookingConflictError, BookingNotFoundError, InvalidStatusTransitionError
from .pricing import calculate_price, require_whole_cents, to_rate

logger = logging.getLogger("booking_engine.crud")

BLOCKING_STATUS_VALUES = sorted(status.value for status in BLOCKING_STATUSES)

ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.REJECTED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.CANCELLED, BookingStatus.COMPLETED},
}


def _blocking_bookings_query(db: Session, property_id: str):
    return db.query(models.Booking).filter(
        models.Booking.property_id == property_id,
        models.Booking.status.in_(BLOCKING_STATUS_VALUES),
    )


def get_property_bookings(
        db: Session,
        property_id: str,
        blocking_only: bool = True,
        ending_after: Optional[datetime.date] = None,
) -> list[ExistingBooking]:
    """
    Fetches a property's bookings as engine inputs.

    `ending_after` drops stays that were over by that date.
    """
    if blocking_only:
        query = _blocking_bookings_query(db, property_id)
    else:
        query = db.query(models.Booking).filter(models.Booking.property_id == property_id)
    if ending_after is not None:
        query = query.filter(models.Booking.check_out_date > ending_after)
    return [b.to_existing() for b in query.order_by(models.Booking.check_in_date).all()]


def check_booking_conflict(db: Session, property_id: str, check_in, check_out) -> bool:
    """
    Checks if a new booking for a given property and date range conflicts
    with any existing bookings.

    Returns True if a conflict exists, False otherwise.
    """
    requested = BookingRange(property_id=property_id, check_in=check_in, check_out=check_out)
    existing = get_property_bookings(db, property_id)
    return bool(conflicting_bookings(requested, existing))


def create_booking(db: Session, booking: schemas.BookingCreate, today: datetime.date) -> models.Booking:
    """
    Creates a pending booking if its dates are still free.

    The property's blocking rows are locked and the overlap check runs in the
    same transaction as the insert. Raises BookingConflictError otherwise.
    """
    requested = BookingRange.for_request(
        property_id=booking.property_id,
        check_in=booking.check_in,
        check_out=booking.check_out,
        today=today,
    )
    # The stored rate must be the exact one the quote was built from
    rate = require_whole_cents(to_rate(booking.price_per_night))
    quote = calculate_price(rate, requested.check_in, requested.check_out)

    locked = _blocking_bookings_query(db, requested.property_id).with_for_update().all()
    conflicts = conflicting_bookings(requested, [b.to_existing() for b in locked])
    if conflicts:
        # Nothing written; the locks go when the session closes.
        logger.info(
            f"Booking request for property {requested.property_id} "
            f"({requested.check_in} to {requested.check_out}) conflicts with "
            f"bookings {[c.booking_id for c in conflicts]}"
        )
        raise BookingConflictError(requested.property_id)

    db_booking = models.Booking(
        property_id=requested.property_id,
        guest_id=booking.guest_id,
        check_in_date=requested.check_in,
        check_out_date=requested.check_out,
        status=BookingStatus.PENDING.value,
        **quote.as_dict(),
    )
    db.add(db_booking)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    db.refresh(db_booking)
    logger.info(
        f"Created booking {db_booking.id} for property {db_booking.property_id}: "
        f"{quote.number_of_nights} nights, total {quote.total_price}"
    )
    return db_booking


def get_booking(db: Session, booking_id: int) -> models.Booking:
    db_booking = db.query(models.Booking).filter(models.Booking.id == booking_id).first()
    if db_booking is None:
        raise BookingNotFoundError(booking_id)
    return db_booking


def get_bookings_by_guest(db: Session, guest_id: str, skip: int = 0, limit: int = 100):
    return (
        db.query(models.Booking)
        .filter(models.Booking.guest_id == guest_id)
        .order_by(models.Booking.check_in_date)
        .offset(skip)
        .limit(limit)
        .all()
    )


def _ensure_transition(db_booking: models.Booking, requested: BookingStatus) -> None:
    current = BookingStatus(db_booking.status)
    if requested not in ALLOWED_TRANSITIONS.get(current, set()):
        raise InvalidStatusTransitionError(current.value, requested.value)


def update_booking_status(
        db: Session,
        booking_id: int,
        status: BookingStatus,
        reason: Optional[str] = None,
) -> models.Booking:
    """Moves a booking along its lifecycle. Cancellations go through cancel_booking."""
    status = BookingStatus(status)
    if status is BookingStatus.CANCELLED:
        return cancel_booking(db, booking_id, cancelled_by="host", now=datetime.datetime.now())

    db_booking = get_booking(db, booking_id)
    _ensure_transition(db_booking, status)

    previous = db_booking.status
    db_booking.status = status.value
    if status is BookingStatus.REJECTED:
        db_booking.rejection_reason = reason
    db.commit()
    db.refresh(db_booking)
    logger.info(f"Booking {booking_id} status changed from {previous} to {status.value}")
    return db_booking


def preview_cancellation(db: Session, booking_id: int, now: datetime.datetime) -> RefundDecision:
    db_booking = get_booking(db, booking_id)
    return evaluate_cancellation(db_booking.to_quote(), db_booking.check_in_date, now)


def cancel_booking(db: Session, booking_id: int, cancelled_by: str, now: datetime.datetime) -> models.Booking:
    """
    Cancels a pending or confirmed booking and records the refund it earns.
    """
    db_booking = get_booking(db, booking_id)
    _ensure_transition(db_booking, BookingStatus.CANCELLED)

    decision = evaluate_cancellation(db_booking.to_quote(), db_booking.check_in_date, now)

    db_booking.status = BookingStatus.CANCELLED.value
    db_booking.cancelled_by = cancelled_by
    db_booking.refund_tier = decision.tier.value
    db_booking.refund_amount = decision.refund_amount
    db.commit()
    db.refresh(db_booking)
    logger.info(
        f"Booking {booking_id} cancelled by {cancelled_by} "
        f"{decision.days_until_check_in} days before check-in: "
        f"{decision.tier.value}, refund {decision.refund_amount}"
    )
    return db_booking
