"""
Swedish date labels for map popups and the CLI summary.
"""

from datetime import date, datetime

from .night_stops import get_timezone

WEEKDAYS = ["mån", "tis", "ons", "tors", "fre", "lör", "sön"]
MONTHS = [
    "jan",
    "feb",
    "mars",
    "apr",
    "maj",
    "juni",
    "juli",
    "aug",
    "sep",
    "okt",
    "nov",
    "dec",
]


def format_date(day: date) -> str:
    """Format a date as e.g. ``sön 15 dec``."""
    return f"{WEEKDAYS[day.weekday()]} {day.day} {MONTHS[day.month - 1]}"


def format_timestamp(timestamp: datetime, home_timezone: str) -> str:
    """
    Format an instant in the home timezone as e.g. ``sön 15 dec, kl 01:00``.

    Args:
        timestamp: Aware datetime
        home_timezone: IANA timezone name

    Returns:
        Swedish short date and 24-hour time
    """
    local = timestamp.astimezone(get_timezone(home_timezone))
    return f"{format_date(local.date())}, kl {local:%H:%M}"
