"""Price quotes for a stay.

Pure and deterministic: no clock, no I/O. Amounts are Decimal throughout.
"""

import math
from decimal import ROUND_HALF_UP, Decimal

from .dates import parse_calendar_date, span_in_days
from .domain import PriceQuote
from .exceptions.custom import InvalidRangeError, InvalidRateError

SERVICE_FEE_RATE = Decimal("0.10")
CENT = Decimal("0.01")


def round_currency(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_rate(price_per_night) -> Decimal:
    """Validates a nightly rate and returns it as a Decimal."""
    # bool is an int subclass; a rate of True is a caller bug.
    if isinstance(price_per_night, bool) or not isinstance(price_per_night, (int, float, Decimal)):
        raise InvalidRateError(f"Price per night must be a number, got {type(price_per_night).__name__}")
    if isinstance(price_per_night, float):
        if not math.isfinite(price_per_night):
            raise InvalidRateError(f"Price per night must be finite, got {price_per_night}")
        rate = Decimal(str(price_per_night))
    else:
        rate = Decimal(price_per_night)
    if not rate.is_finite():
        raise InvalidRateError(f"Price per night must be finite, got {price_per_night}")
    if rate < 0:
        raise InvalidRateError(f"Price per night cannot be negative, got {price_per_night}")
    return rate


def require_whole_cents(rate: Decimal) -> Decimal:
    """Rejects rates that cannot be stored to the cent without changing them."""
    if rate != round_currency(rate):
        raise InvalidRateError(f"Price per night must be in whole cents, got {rate}")
    return rate


def _coerce_endpoint(value):
    # datetimes keep their time of day so the ceiling can absorb it
    if isinstance(value, str):
        return parse_calendar_date(value)
    return value


def calculate_price(price_per_night, check_in, check_out) -> PriceQuote:
    """
    Computes the price breakdown for a stay.

    Each monetary field is rounded once, half-up to the cent, from unrounded
    inputs: subtotal from nights x rate, service fee from the unrounded
    subtotal, total from the unrounded subtotal + fee.
    """
    start = _coerce_endpoint(check_in)
    end = _coerce_endpoint(check_out)
    try:
        nights = span_in_days(start, end)
    except (TypeError, AttributeError):
        raise InvalidRangeError(f"Invalid stay dates: {check_in!r} to {check_out!r}")
    if nights < 1:
        raise InvalidRangeError(f"Check-out ({check_out}) must be after check-in ({check_in}).")

    rate = to_rate(price_per_night)

    subtotal = rate * nights
    service_fee = subtotal * SERVICE_FEE_RATE
    total_price = subtotal + service_fee

    return PriceQuote(
        number_of_nights=nights,
        price_per_night=rate,
        subtotal=round_currency(subtotal),
        service_fee=round_currency(service_fee),
        total_price=round_currency(total_price),
    )
