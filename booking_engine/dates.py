"""Calendar-day helpers.

Dates are timezone-naive calendar days, never instants.
"""

import datetime
import math
import re

from .exceptions.custom import InvalidRangeError

SECONDS_PER_DAY = 24 * 60 * 60

# "2024-01-05" or "2024-01-05T00:00:00.000Z"; the time part is dropped as-is
_ISO_DATE_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:T.*)?$")


def parse_calendar_date(value) -> datetime.date:
    """
    Converts a date, datetime or ISO 8601 string to a calendar date.

    Raises InvalidRangeError for anything that is not a real calendar day.
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if not isinstance(value, str):
        raise InvalidRangeError(f"Expected a calendar date, got {type(value).__name__}")

    match = _ISO_DATE_RE.match(value.strip())
    if match is None:
        raise InvalidRangeError(f"Invalid date '{value}', expected YYYY-MM-DD")
    try:
        return datetime.date.fromisoformat(match.group(1))
    except ValueError:
        raise InvalidRangeError(f"Invalid date '{value}', expected YYYY-MM-DD")


def _as_naive_datetime(value) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        # Wall-clock time only; no zone conversion.
        return value.replace(tzinfo=None)
    return datetime.datetime.combine(value, datetime.time.min)


def span_in_days(start, end) -> int:
    """
    Whole days from start to end, rounded up.

    Exact for two calendar dates. For datetimes the ceiling absorbs any
    time-of-day noise.
    """
    if type(start) is datetime.date and type(end) is datetime.date:
        return (end - start).days
    delta = _as_naive_datetime(end) - _as_naive_datetime(start)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def iter_nights(check_in: datetime.date, check_out: datetime.date):
    """Yields every occupied night: check_in up to but excluding check_out."""
    current = check_in
    while current < check_out:
        yield current
        current += datetime.timedelta(days=1)
