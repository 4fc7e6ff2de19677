"""Time and datetime utilities."""

from datetime import date, datetime, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    """Get current UTC datetime.

    Returns:
        Current datetime in UTC timezone
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime.

    Naive values are taken to already be UTC (SQLite drops tzinfo on
    round-trip; everything is stored in UTC).
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@lru_cache
def get_zone(name: str) -> ZoneInfo:
    """Cached ``ZoneInfo`` lookup."""
    return ZoneInfo(name)


def to_zone(dt: datetime, zone_name: str) -> datetime:
    """Convert ``dt`` into the named timezone."""
    return ensure_utc(dt).astimezone(get_zone(zone_name))


def parse_datetime(dt_str: str) -> datetime:
    """Parse an ISO 8601 instant.

    Accepts a trailing ``Z``. Values without an offset are taken as UTC.

    Args:
        dt_str: ISO format datetime string

    Returns:
        Parsed datetime object in UTC

    Raises:
        ValueError: If the string is not a valid ISO 8601 datetime
    """
    value = dt_str.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(value))


def parse_date(date_str: str) -> date:
    """Parse a calendar date.

    Accepts ``YYYY-MM-DD`` or a full ISO instant, in which case the UTC
    calendar date of the instant is used.

    Raises:
        ValueError: If the string is neither a date nor a datetime
    """
    value = date_str.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        return parse_datetime(value).date()


def format_hour_slot(dt: datetime, zone_name: str) -> str:
    """Format the start hour of ``dt`` as ``HH:00`` in the named timezone."""
    return f"{to_zone(dt, zone_name).hour:02d}:00"
