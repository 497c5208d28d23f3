class BookingEngineError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidRangeError(BookingEngineError):
    """Check-out is not after check-in, or a date could not be parsed."""


class InvalidRateError(BookingEngineError):
    """Nightly rate is negative, non-finite or not a number."""


class BookingConflictError(BookingEngineError):
    def __init__(self, property_id: str, message: str = "The selected dates are no longer available."):
        self.property_id = property_id
        super().__init__(message)


class BookingNotFoundError(BookingEngineError):
    def __init__(self, booking_id: int):
        self.booking_id = booking_id
        super().__init__(f"Booking {booking_id} not found")


class InvalidStatusTransitionError(BookingEngineError):
    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change booking status from '{current}' to '{requested}'")
