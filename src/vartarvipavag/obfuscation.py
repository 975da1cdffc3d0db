#!/usr/bin/env python3
"""
Deterministic coordinate jitter for publicly shown positions.

Every position is moved a fixed distance in a pseudo-random direction. The
generator is created per call from a fixed seed, so the same positions in
the same order always land on the same jittered coordinates.
"""

from typing import Iterable, List, Union
import logging
import math
import random

from .geometry import METERS_PER_DEGREE_LATITUDE, wrap_longitude
from .position import Position

logger = logging.getLogger(__name__)

DEFAULT_SEED = "42"
DEFAULT_DISPLACEMENT_M = 50.0
# cos(lat) vanishes at the poles
MAX_SCALING_LATITUDE = 89.9

Seed = Union[str, int]


def offset_position(position: Position, angle: float, distance_m: float) -> Position:
    """
    Move a position a given distance in a given direction.

    Args:
        position: Position to move
        angle: Direction in radians, 0 is north and pi/2 is east
        distance_m: Distance in metres

    Returns:
        New Position with shifted coordinates and all other fields unchanged
    """
    d_lat = distance_m * math.cos(angle) / METERS_PER_DEGREE_LATITUDE
    # Scale longitude at the midpoint of the move so the great-circle
    # distance matches distance_m for any direction
    scaling_lat = max(
        -MAX_SCALING_LATITUDE,
        min(MAX_SCALING_LATITUDE, position.latitude + d_lat / 2),
    )
    d_lon = (distance_m * math.sin(angle)) / (
        METERS_PER_DEGREE_LATITUDE * math.cos(math.radians(scaling_lat))
    )

    latitude = max(-90.0, min(90.0, position.latitude + d_lat))
    longitude = wrap_longitude(position.longitude + d_lon)
    return position.with_coordinates(latitude, longitude)


def obfuscate_positions(
    positions: Iterable[Position],
    seed: Seed = DEFAULT_SEED,
    distance_m: float = DEFAULT_DISPLACEMENT_M,
) -> List[Position]:
    """
    Jitter every position by a constant distance in a seeded random direction.

    Args:
        positions: Positions in the order they should consume random draws
        seed: Fixed seed; the same seed and order give the same output
        distance_m: Displacement in metres

    Returns:
        New list of positions with the same length and order as the input
    """
    rng = random.Random(seed)
    obfuscated = [
        offset_position(position, rng.random() * 2 * math.pi, distance_m)
        for position in positions
    ]
    logger.debug(
        f"Obfuscated {len(obfuscated)} positions by {distance_m:.1f} m"
    )
    return obfuscated
