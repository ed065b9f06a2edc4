"""
Date utilities for FuelTrack.

Refueling records carry calendar dates only, so everything here works on
datetime.date values:
- Local "today" (window filtering uses the local calendar day)
- Lenient parsing of date strings from payloads and query parameters
- Day arithmetic helpers
"""

import logging
from datetime import date, datetime
from typing import Any, Optional

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)


def local_today() -> date:
    """
    Get the current local calendar day.

    Returns:
        date: Today in the server's local timezone, time of day stripped
    """
    return datetime.now().date()


def parse_date(value: Any, default: Optional[date] = None) -> Optional[date]:
    """
    Parse a calendar date from a string, date or datetime.

    Supports:
    - ISO dates: "2024-01-15"
    - ISO datetimes: "2024-01-15T14:30:00Z" (time part dropped)
    - Other formats understood by dateutil: "01/15/2024", "Jan 15 2024"

    Args:
        value: The value to parse
        default: Value to return if parsing fails (default: None)

    Returns:
        date object or default value if parsing fails

    Example:
        >>> parse_date("2024-01-15")
        datetime.date(2024, 1, 15)
        >>> parse_date("invalid") is None
        True
    """
    if value is None:
        return default

    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return default

    value = value.strip()
    if not value:
        return default

    try:
        return date.fromisoformat(value)
    except ValueError:
        pass

    try:
        return date_parser.parse(value).date()
    except (ValueError, OverflowError):
        pass

    logger.warning(f"Failed to parse date string: {value}")
    return default


def days_between(start: date, end: date) -> int:
    """
    Whole calendar days from start to end (negative if end is earlier).

    Example:
        >>> days_between(date(2024, 1, 1), date(2024, 2, 15))
        45
    """
    return (end - start).days


def month_start(day: date) -> date:
    """Return the first day of the month containing day."""
    return day.replace(day=1)


def format_date_iso(day: Optional[date]) -> Optional[str]:
    """Format a date as YYYY-MM-DD, passing None through."""
    if day is None:
        return None
    return day.isoformat()
