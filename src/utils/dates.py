"""Date label utilities for chart buckets."""

from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo


def resolve_timezone(name: str | None) -> tzinfo:
    """Resolve an IANA timezone name, defaulting to UTC."""
    if not name or name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def to_datetime(timestamp: float, tz: tzinfo = timezone.utc) -> datetime:
    """Convert seconds since epoch to an aware datetime."""
    return datetime.fromtimestamp(timestamp, tz=tz)


def day_label(timestamp: float, tz: tzinfo = timezone.utc) -> tuple[date, str]:
    """
    Get the calendar day of a timestamp and its display label.

    Returns:
        Tuple of (calendar date, label such as "Mar 07")
    """
    moment = to_datetime(timestamp, tz)
    return moment.date(), moment.strftime("%b %d")


def hour_label(timestamp: float, tz: tzinfo = timezone.utc) -> str:
    """Get the hour-of-day label ("00:00".."23:00") of a timestamp."""
    return to_datetime(timestamp, tz).strftime("%H:00")
