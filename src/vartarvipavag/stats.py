"""
Module for collecting and logging travel statistics.
"""

import logging
import math
from typing import NamedTuple, Optional, Set

from .journey import Journey
from .position import Position

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


class TravelStats(NamedTuple):
    """Container for travel statistics."""

    total_distance_km: float
    duration_days: int
    position_count: int
    night_count: int
    countries: int
    cities: int
    current_position: Optional[Position]


def journey_duration_days(journey: Journey) -> int:
    """Days between first and last position, rounded up; 0 below two positions."""
    if len(journey) < 2:
        return 0
    elapsed = abs(
        (journey[-1].recorded_at - journey[0].recorded_at).total_seconds()
    )
    return math.ceil(elapsed / SECONDS_PER_DAY)


def collect_stats(journey: Journey, night_stops: Set[str]) -> TravelStats:
    """
    Collect statistics for a journey.

    Args:
        journey: Journey with positions in chronological order
        night_stops: Ids of positions classified as night stops

    Returns:
        TravelStats for the journey
    """
    countries = {p.country for p in journey if p.country}
    cities = {p.city for p in journey if p.city}

    return TravelStats(
        total_distance_km=journey.length_km,
        duration_days=journey_duration_days(journey),
        position_count=len(journey),
        night_count=sum(1 for p in journey if p.id in night_stops),
        countries=len(countries),
        cities=len(cities),
        current_position=journey[-1] if len(journey) else None,
    )


def log_stats(stats: TravelStats, enabled: bool) -> None:
    """
    Log structured statistics when metrics output is enabled.

    Args:
        stats: Collected TravelStats
        enabled: Whether the metrics flag is set
    """
    if not enabled:
        return

    logger.debug("=== VARTARVIPAVAG_METRICS ===")
    logger.debug(f"total_distance_km={stats.total_distance_km:.1f}")
    logger.debug(f"duration_days={stats.duration_days}")
    logger.debug(f"position_count={stats.position_count}")
    logger.debug(f"night_count={stats.night_count}")
    logger.debug(f"daily_count={stats.position_count - stats.night_count}")
    logger.debug(f"countries={stats.countries}")
    logger.debug(f"cities={stats.cities}")
    if stats.current_position is not None:
        logger.debug(f"current_position_id={stats.current_position.id}")
    logger.debug("=== END_VARTARVIPAVAG_METRICS ===")
