import datetime
from typing import Iterable, List, Set

from .dates import iter_nights
from .domain import BLOCKING_STATUSES, BookingRange, BookingStatus, ExistingBooking, validate_range


def is_blocking(status) -> bool:
    """True for pending and confirmed bookings; unknown statuses never block."""
    try:
        return BookingStatus(status) in BLOCKING_STATUSES
    except ValueError:
        return False


def _occupies_nights(booking: ExistingBooking) -> bool:
    # Malformed records (check-out on or before check-in) hold no night.
    return is_blocking(booking.status) and booking.check_out > booking.check_in


def conflicting_bookings(requested: BookingRange, existing: Iterable[ExistingBooking]) -> List[ExistingBooking]:
    """
    Returns the blocking bookings that overlap the requested range.

    The logic for an overlap of two half-open ranges is:
    (Requested Start < Existing End) AND (Existing Start < Requested End)
    so a check-out and a check-in on the same day never conflict.
    """
    validate_range(requested.check_in, requested.check_out)
    return [
        other for other in existing
        if _occupies_nights(other)
        and requested.check_in < other.check_out
        and other.check_in < requested.check_out
    ]


def is_range_available(requested: BookingRange, existing: Iterable[ExistingBooking]) -> bool:
    """
    Checks if the requested range can be booked against the existing bookings.

    Returns False if any pending or confirmed booking overlaps it. Raises
    InvalidRangeError when the requested check-out is not after check-in.
    """
    return not conflicting_bookings(requested, existing)


def blocked_dates(existing: Iterable[ExistingBooking]) -> Set[datetime.date]:
    """Every night occupied by a blocking booking. Check-out days are not included."""
    blocked = set()
    for booking in existing:
        if _occupies_nights(booking):
            blocked.update(iter_nights(booking.check_in, booking.check_out))
    return blocked
