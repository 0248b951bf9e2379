"""
Datetime utility functions.
"""

from datetime import datetime
import pytz

from team_roster.utils.constants import SPRING_MONTHS


def utcnow() -> datetime:
    """
    Get current UTC datetime using pytz.UTC.

    Returns:
        Current UTC datetime with pytz timezone information
    """
    return datetime.now(pytz.UTC)


def ensure_utc(value: datetime) -> datetime:
    """
    Attach UTC to naive datetimes; aware datetimes are returned unchanged.

    Match dates are compared against ``utcnow()``, so every stored date has
    to carry timezone information.
    """
    if value.tzinfo is None:
        return pytz.UTC.localize(value)
    return value


def season_for_month(month: int) -> str:
    """
    Return the season name ("Spring" or "Fall") for a calendar month (1-12).
    """
    if month < 1 or month > 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return "Spring" if month in SPRING_MONTHS else "Fall"
