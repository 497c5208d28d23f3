from pydantic import BaseModel, ConfigDict
from decimal import Decimal
from typing import Optional
import datetime

from .domain import BookingStatus, RefundTier


class StayDates(BaseModel):
    # Plain strings so malformed dates reach parse_calendar_date
    check_in: str
    check_out: str


class QuoteRequest(StayDates):
    price_per_night: Decimal


class PriceQuoteRead(BaseModel):
    number_of_nights: int
    price_per_night: Decimal
    subtotal: Decimal
    service_fee: Decimal
    total_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class AvailabilityRead(BaseModel):
    property_id: str
    check_in: datetime.date
    check_out: datetime.date
    available: bool


class BlockedDatesRead(BaseModel):
    property_id: str
    dates: list[datetime.date]


class BookingCreate(StayDates):
    property_id: str
    # No auth layer here; the caller identifies the guest
    guest_id: str
    price_per_night: Decimal


class BookingStatusUpdate(BaseModel):
    status: BookingStatus
    reason: Optional[str] = None


class CancellationRequest(BaseModel):
    cancelled_by: str = "guest"


class RefundDecisionRead(BaseModel):
    tier: RefundTier
    days_until_check_in: int
    refund_amount: Decimal
    message: str


class BookingRead(BaseModel):
    id: int
    property_id: str
    guest_id: str
    check_in_date: datetime.date
    check_out_date: datetime.date
    status: BookingStatus
    rejection_reason: Optional[str] = None
    price_per_night: Decimal
    number_of_nights: int
    subtotal: Decimal
    service_fee: Decimal
    total_price: Decimal
    cancelled_by: Optional[str] = None
    refund_tier: Optional[RefundTier] = None
    refund_amount: Optional[Decimal] = None
    created_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)
