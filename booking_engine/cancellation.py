import datetime
from decimal import Decimal

from .dates import parse_calendar_date, span_in_days
from .domain import PriceQuote, RefundDecision, RefundTier
from .pricing import round_currency

FULL_REFUND_MIN_DAYS = 7
HALF_REFUND_MIN_DAYS = 3

HALF_REFUND_SHARE = Decimal("0.5")

REFUND_MESSAGES = {
    RefundTier.FULL_REFUND: "You will receive a full refund (excluding service fee).",
    RefundTier.HALF_REFUND: "You will receive a 50% refund.",
    RefundTier.NO_REFUND: "No refund will be issued as per the cancellation policy.",
}


def days_until_check_in(check_in, now) -> int:
    # datetimes pass through untouched so their time of day still counts
    if not isinstance(check_in, datetime.date):
        check_in = parse_calendar_date(check_in)
    if not isinstance(now, datetime.date):
        now = parse_calendar_date(now)
    return span_in_days(now, check_in)


def classify_cancellation(check_in, now) -> RefundTier:
    """
    Classifies a cancellation made at `now` for a stay starting on `check_in`.

    7 days or more before check-in is a full refund, 3 to 6 days is half,
    anything later is no refund. Each boundary belongs to the upper tier.
    """
    days = days_until_check_in(check_in, now)
    if days >= FULL_REFUND_MIN_DAYS:
        return RefundTier.FULL_REFUND
    if days >= HALF_REFUND_MIN_DAYS:
        return RefundTier.HALF_REFUND
    return RefundTier.NO_REFUND


def evaluate_cancellation(quote: PriceQuote, check_in, now) -> RefundDecision:
    """Applies the refund tier to a quote. The service fee is never refunded."""
    days = days_until_check_in(check_in, now)
    tier = classify_cancellation(check_in, now)

    if tier is RefundTier.FULL_REFUND:
        amount = quote.subtotal
    elif tier is RefundTier.HALF_REFUND:
        amount = quote.subtotal * HALF_REFUND_SHARE
    else:
        amount = Decimal("0")

    return RefundDecision(tier=tier, days_until_check_in=days, refund_amount=round_currency(amount))


def refund_message(tier: RefundTier) -> str:
    return REFUND_MESSAGES[RefundTier(tier)]
