"""
Centralized DateTime Utilities
==============================

Provides consistent datetime handling across the entire application.
All datetime operations use the timezone configured in app.core.config.

Functions:
- now(): Returns timezone-aware datetime object
- to_iso(): Convert datetime object to ISO 8601 string

MongoDB stores datetimes in UTC, so naive values read back from the
driver are treated as UTC rather than as the application timezone.
"""
import logging
import zoneinfo
from datetime import datetime, timezone as dt_timezone, tzinfo
from typing import Optional

from app.core.config import get_settings

logger = logging.getLogger(__name__)


def _get_app_timezone() -> tzinfo:
    """
    Get the application timezone from config.
    Returns timezone object (defaults to UTC if invalid).
    """
    tz_str = get_settings().timezone

    if tz_str.upper() == "UTC":
        return dt_timezone.utc

    try:
        return zoneinfo.ZoneInfo(tz_str)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.warning("Invalid timezone '%s', falling back to UTC", tz_str)
        return dt_timezone.utc


def now() -> datetime:
    """
    Get current datetime with application-configured timezone.

    Returns:
        timezone-aware datetime object
    """
    return datetime.now(_get_app_timezone())


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime object to ISO 8601 string in the application timezone.

    Args:
        dt: datetime object (timezone-aware, or naive UTC as returned by MongoDB)

    Returns:
        ISO 8601 formatted string with millisecond precision, or None if dt is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=dt_timezone.utc)
    dt = dt.astimezone(_get_app_timezone())

    # Format with timezone offset, or 'Z' if UTC
    iso = dt.isoformat(timespec="milliseconds")
    if dt.utcoffset() == dt_timezone.utc.utcoffset(None):
        return iso.replace("+00:00", "Z")
    return iso
