import datetime
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Mapping, Optional, Union

from .dates import parse_calendar_date
from .exceptions.custom import InvalidRangeError


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


# Only these occupy calendar nights.
BLOCKING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})


class RefundTier(str, Enum):
    FULL_REFUND = "full_refund"
    HALF_REFUND = "half_refund"
    NO_REFUND = "no_refund"


def validate_range(check_in: datetime.date, check_out: datetime.date) -> None:
    if check_out <= check_in:
        raise InvalidRangeError(
            f"Check-out ({check_out}) must be after check-in ({check_in})."
        )


@dataclass(frozen=True)
class BookingRange:
    """
    A requested stay: [check_in, check_out).

    The guest leaves on check_out, so that night is not occupied.
    """
    property_id: str
    check_in: datetime.date
    check_out: datetime.date

    def __post_init__(self):
        object.__setattr__(self, "check_in", parse_calendar_date(self.check_in))
        object.__setattr__(self, "check_out", parse_calendar_date(self.check_out))
        validate_range(self.check_in, self.check_out)

    @classmethod
    def for_request(cls, property_id: str, check_in, check_out, today: datetime.date) -> "BookingRange":
        """
        Builds a range for a new booking request.

        Past-dated stays are refused relative to `today`, which the caller
        passes in so the check stays deterministic.
        """
        requested = cls(property_id=property_id, check_in=check_in, check_out=check_out)
        if requested.check_in < today:
            raise InvalidRangeError(f"Check-in ({requested.check_in}) cannot be in the past.")
        return requested

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days


def _status_or_raw(value) -> Union[BookingStatus, str]:
    try:
        return BookingStatus(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class ExistingBooking:
    check_in: datetime.date
    check_out: datetime.date
    # Unrecognised statuses are kept as the raw string and never block
    status: Union[BookingStatus, str]
    booking_id: Optional[int] = None

    @classmethod
    def from_record(cls, record: Mapping) -> "ExistingBooking":
        """Builds from a stored record using its wire keys (checkInDate, checkOutDate, status)."""
        return cls(
            check_in=parse_calendar_date(record["checkInDate"]),
            check_out=parse_calendar_date(record["checkOutDate"]),
            status=_status_or_raw(record["status"]),
            booking_id=record.get("id"),
        )


@dataclass(frozen=True)
class PriceQuote:
    number_of_nights: int
    price_per_night: Decimal
    subtotal: Decimal
    service_fee: Decimal
    total_price: Decimal

    def as_dict(self) -> dict:
        return {
            "number_of_nights": self.number_of_nights,
            "price_per_night": self.price_per_night,
            "subtotal": self.subtotal,
            "service_fee": self.service_fee,
            "total_price": self.total_price,
        }


@dataclass(frozen=True)
class RefundDecision:
    tier: RefundTier
    days_until_check_in: int
    refund_amount: Decimal
