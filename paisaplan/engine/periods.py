"""Date and period helpers.

All comparisons happen in UTC. Naive datetimes are assumed to already be
UTC, which is how expense dates entered as YYYY-MM-DD are stored.
"""

from datetime import date, datetime, timedelta, timezone

DAY = timedelta(days=1)
WEEK = timedelta(days=7)


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def days_elapsed(start: datetime, now: datetime) -> int:
    """Whole days from start to now, floored and never negative."""
    return max(0, (as_utc(now) - as_utc(start)) // DAY)


def get_week_window(now: datetime) -> tuple[datetime, datetime]:
    """Rolling 7-day window ending at now (inclusive on both ends).

    This is not a calendar week.
    """
    end = as_utc(now)
    return end - WEEK, end


def in_week_window(value: datetime, now: datetime) -> bool:
    start, end = get_week_window(now)
    return start <= as_utc(value) <= end


def month_key(value: datetime) -> tuple[int, int]:
    """(year, month) of a timestamp, used for grouping."""
    utc = as_utc(value)
    return utc.year, utc.month


def in_same_month(value: datetime, now: datetime) -> bool:
    """True if value falls in the calendar month and year of now."""
    return month_key(value) == month_key(now)


def format_month(year: int, month: int) -> str:
    """Format a month key for display, e.g. 'Jan 2024'."""
    return date(year, month, 1).strftime("%b %Y")


def parse_date(value: str) -> datetime:
    """Parse an ISO-8601 date or timestamp.

    A bare date (YYYY-MM-DD) becomes midnight UTC of that day.

    Raises:
        ValueError: If the value is not ISO-8601.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        raise ValueError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from None
    return as_utc(parsed)
