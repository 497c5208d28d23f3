from sqlalchemy import Column, Integer, Date, TIMESTAMP, String, Numeric, Index
from .database import Base
from .domain import BookingStatus, ExistingBooking, PriceQuote
import datetime


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)

    # Opaque ids owned by other services; no foreign keys.
    property_id = Column(String(64), nullable=False)
    guest_id = Column(String(64), index=True, nullable=False)

    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)

    status = Column(String(20), default=BookingStatus.PENDING.value, nullable=False)
    rejection_reason = Column(String(500), nullable=True)

    # Quote captured at booking time
    price_per_night = Column(Numeric(12, 2), nullable=False)
    number_of_nights = Column(Integer, nullable=False)
    subtotal = Column(Numeric(12, 2), nullable=False)
    service_fee = Column(Numeric(12, 2), nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False)

    # Set on cancellation
    cancelled_by = Column(String(20), nullable=True)
    refund_tier = Column(String(20), nullable=True)
    refund_amount = Column(Numeric(12, 2), nullable=True)

    created_at = Column(TIMESTAMP, default=datetime.datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    # Availability checks always filter on property + status
    __table_args__ = (
        Index('ix_bookings_property_status', 'property_id', 'status'),
    )

    def to_existing(self) -> ExistingBooking:
        return ExistingBooking(
            check_in=self.check_in_date,
            check_out=self.check_out_date,
            status=BookingStatus(self.status),
            booking_id=self.id,
        )

    def to_quote(self) -> PriceQuote:
        return PriceQuote(
            number_of_nights=self.number_of_nights,
            price_per_night=self.price_per_night,
            subtotal=self.subtotal,
            service_fee=self.service_fee,
            total_price=self.total_price,
        )
