"""Utility functions for Project Manager."""

from datetime import date, datetime
from typing import Final

#: Display format for creation times.
DATETIME_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
#: Display format for due dates.
DATE_FORMAT: Final[str] = "%Y-%m-%d"


def format_datetime(dt: datetime | None) -> str:
    """
    Format a creation time for display.

    Args:
        dt: Datetime to format, or None

    Returns:
        Formatted string, or an empty string for None

    """
    if dt is None:
        return ""
    return dt.strftime(DATETIME_FORMAT)


def format_date(d: date | None) -> str:
    """
    Format a due date for display.

    Args:
        d: Date to format, or None

    Returns:
        Formatted string, or an empty string for None

    """
    if d is None:
        return ""
    return d.strftime(DATE_FORMAT)
