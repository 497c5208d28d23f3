from datetime import date, datetime, timezone

import pytest

from booking_engine.dates import iter_nights, parse_calendar_date, span_in_days
from booking_engine.domain import BookingRange, BookingStatus, ExistingBooking
from booking_engine.exceptions.custom import InvalidRangeError


@pytest.mark.parametrize("value,expected", [
    ("2024-01-05", date(2024, 1, 5)),
    (" 2024-01-05 ", date(2024, 1, 5)),
    ("2024-01-05T23:30:00.000Z", date(2024, 1, 5)),
    ("2024-01-05T23:30:00-08:00", date(2024, 1, 5)),
    (date(2024, 1, 5), date(2024, 1, 5)),
    (datetime(2024, 1, 5, 22, 0), date(2024, 1, 5)),
])
def test_parse_calendar_date(value, expected):
    assert parse_calendar_date(value) == expected


@pytest.mark.parametrize("value", ["2024-02-30", "20240105", "2024-1-5", "", "tomorrow", None, 20240105])
def test_parse_calendar_date_rejects(value):
    with pytest.raises(InvalidRangeError):
        parse_calendar_date(value)


def test_span_in_days_for_dates_is_exact():
    assert span_in_days(date(2024, 2, 27), date(2024, 3, 2)) == 4


def test_span_in_days_rounds_up_datetimes():
    assert span_in_days(datetime(2024, 1, 1, 23, 0), date(2024, 1, 3)) == 2
    assert span_in_days(datetime(2024, 1, 1, 0, 0, 1), datetime(2024, 1, 1, 0, 0, 2)) == 1


def test_span_in_days_ignores_zone_offsets():
    start = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert span_in_days(start, date(2024, 1, 2)) == 1


def test_iter_nights():
    assert list(iter_nights(date(2024, 2, 28), date(2024, 3, 1))) == [date(2024, 2, 28), date(2024, 2, 29)]
    assert list(iter_nights(date(2024, 3, 1), date(2024, 3, 1))) == []


# --- Value objects ---

def test_booking_range_parses_strings():
    stay = BookingRange(property_id="prop-1", check_in="2024-01-01", check_out="2024-01-05")
    assert stay.check_in == date(2024, 1, 1)
    assert stay.nights == 4


def test_booking_range_requires_checkout_after_checkin():
    with pytest.raises(InvalidRangeError, match="must be after check-in"):
        BookingRange(property_id="prop-1", check_in="2024-01-05", check_out="2024-01-05")


def test_booking_request_cannot_start_in_the_past():
    with pytest.raises(InvalidRangeError, match="past"):
        BookingRange.for_request("prop-1", "2024-01-01", "2024-01-05", today=date(2024, 1, 2))


def test_booking_request_may_start_today():
    stay = BookingRange.for_request("prop-1", "2024-01-02", "2024-01-05", today=date(2024, 1, 2))
    assert stay.check_in == date(2024, 1, 2)


def test_existing_booking_from_record():
    booking = ExistingBooking.from_record({
        "id": 7,
        "checkInDate": "2024-01-01T00:00:00.000+00:00",
        "checkOutDate": "2024-01-04",
        "status": "pending",
    })
    assert booking == ExistingBooking(date(2024, 1, 1), date(2024, 1, 4), BookingStatus.PENDING, booking_id=7)


def test_existing_booking_from_record_with_bad_date():
    with pytest.raises(InvalidRangeError):
        ExistingBooking.from_record({"checkInDate": "soon", "checkOutDate": "2024-01-04", "status": "pending"})


def test_existing_booking_from_record_keeps_unknown_status():
    booking = ExistingBooking.from_record({
        "checkInDate": "2024-01-01",
        "checkOutDate": "2024-01-04",
        "status": "archived",
    })
    assert booking.status == "archived"
