#!/usr/bin/env python3
"""
Night-stop classification.

A night runs from the evening of day N to the morning of day N+1 in the
home timezone. Every position belongs to exactly one night, and per night
the position recorded closest to the configured night-stop hour is taken as
the place the travellers slept.
"""

from collections import defaultdict
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

from .position import Position

logger = logging.getLogger(__name__)

DEFAULT_NIGHT_STOP_HOUR = 2
MINUTES_PER_DAY = 24 * 60
MORNING_CUTOFF_HOUR = 12


class PositionKind(Enum):
    """Classification of a position on the map."""

    NIGHT_STOP = "night_stop"
    DAILY = "daily"

    def __str__(self) -> str:
        return self.value


def get_timezone(home_timezone: str) -> ZoneInfo:
    """
    Resolve an IANA timezone name.

    Raises:
        ValueError: If the name is not known to the timezone database
    """
    try:
        return ZoneInfo(home_timezone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {home_timezone!r}") from e


def to_local(position: Position, tz: ZoneInfo) -> datetime:
    """Return the position's timestamp converted to the home timezone."""
    return position.recorded_at.astimezone(tz)


def local_time_of_day(local: datetime) -> float:
    """Minutes since local midnight, fractional seconds included."""
    return (
        local.hour * 60
        + local.minute
        + (local.second + local.microsecond / 1_000_000) / 60
    )


def night_key(local: datetime) -> date:
    """
    Return the calendar date identifying the night a local time belongs to.

    Mornings (before noon) belong to the night that ended that morning,
    i.e. the previous date. Noon and later belong to the night starting
    that evening.
    """
    if local.hour < MORNING_CUTOFF_HOUR:
        return local.date() - timedelta(days=1)
    return local.date()


def circular_distance(minutes_a: float, minutes_b: float) -> float:
    """Distance in minutes between two times of day on a 24-hour clock."""
    diff = abs(minutes_a - minutes_b) % MINUTES_PER_DAY
    return min(diff, MINUTES_PER_DAY - diff)


def _validate_hour(night_stop_hour: int) -> None:
    if not 0 <= night_stop_hour <= 23:
        raise ValueError(
            f"night_stop_hour must be between 0 and 23, got {night_stop_hour}"
        )


def assign_nights(
    positions: Iterable[Position], home_timezone: str
) -> Dict[date, List[Position]]:
    """
    Group positions by the night they belong to.

    Args:
        positions: Positions in any order
        home_timezone: IANA timezone name used for local dates

    Returns:
        Dictionary mapping night key to the positions of that night, each
        list in input order

    Raises:
        ValueError: If the timezone is unknown
        InvalidTimestampError: If a timestamp cannot be parsed
    """
    tz = get_timezone(home_timezone)
    nights: Dict[date, List[Position]] = defaultdict(list)
    for position in positions:
        nights[night_key(to_local(position, tz))].append(position)
    return dict(nights)


def select_night_stop(
    candidates: List[Position], tz: ZoneInfo, target_minutes: float
) -> Optional[Position]:
    """Pick the candidate closest to the target time of day; first wins ties."""
    best: Optional[Position] = None
    best_distance = float("inf")
    for position in candidates:
        distance = circular_distance(
            local_time_of_day(to_local(position, tz)), target_minutes
        )
        if distance < best_distance:
            best = position
            best_distance = distance
    return best


def classify_night_stops(
    positions: Iterable[Position],
    home_timezone: str,
    night_stop_hour: int = DEFAULT_NIGHT_STOP_HOUR,
) -> Set[str]:
    """
    Find the ids of the positions that represent night stops.

    Args:
        positions: Positions in any order
        home_timezone: IANA timezone name, e.g. "Europe/Stockholm"
        night_stop_hour: Local hour (0-23) the travellers are assumed asleep

    Returns:
        Set with exactly one position id per night that has positions

    Raises:
        ValueError: If the timezone is unknown or the hour is out of range
        InvalidTimestampError: If a timestamp cannot be parsed
    """
    _validate_hour(night_stop_hour)
    tz = get_timezone(home_timezone)
    target_minutes = night_stop_hour * 60

    night_stops: Set[str] = set()
    for key, candidates in assign_nights(positions, home_timezone).items():
        winner = select_night_stop(candidates, tz, target_minutes)
        if winner is None:
            continue
        night_stops.add(winner.id)
        logger.debug(
            f"Night of {key.isoformat()}: {winner.id} chosen from {len(candidates)} positions"
        )

    return night_stops


def classify_positions(
    positions: Iterable[Position],
    home_timezone: str,
    night_stop_hour: int = DEFAULT_NIGHT_STOP_HOUR,
) -> Dict[str, PositionKind]:
    """Map every position id to NIGHT_STOP or DAILY."""
    position_list = list(positions)
    night_stops = classify_night_stops(position_list, home_timezone, night_stop_hour)
    return {
        position.id: (
            PositionKind.NIGHT_STOP if position.id in night_stops else PositionKind.DAILY
        )
        for position in position_list
    }
