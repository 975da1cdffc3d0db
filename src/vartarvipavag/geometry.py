#!/usr/bin/env python3
"""
Distance and coordinate helpers on the WGS-84 sphere approximation.
"""

from typing import Iterable, Tuple
import math

from .position import Position

EARTH_RADIUS_KM = 6371.0
METERS_PER_DEGREE_LATITUDE = EARTH_RADIUS_KM * 1000 * math.pi / 180


def haversine_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great-circle distance between two points.

    Args:
        lat1: Latitude of the first point in degrees
        lon1: Longitude of the first point in degrees
        lat2: Latitude of the second point in degrees
        lon2: Longitude of the second point in degrees

    Returns:
        Distance in kilometres
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_between(a: Position, b: Position) -> float:
    """Great-circle distance between two positions in kilometres."""
    return haversine_distance_km(a.latitude, a.longitude, b.latitude, b.longitude)


def path_length_km(positions: Iterable[Position]) -> float:
    """Sum of distances between consecutive positions."""
    total = 0.0
    previous = None
    for position in positions:
        if previous is not None:
            total += distance_between(previous, position)
        previous = position
    return total


def wrap_longitude(longitude: float) -> float:
    """Wrap a longitude into [-180, 180)."""
    return ((longitude + 180.0) % 360.0) - 180.0


def buffered_bbox(
    positions: Iterable[Position], buffer_m: float = 0.0
) -> Tuple[float, float, float, float]:
    """
    Bounding box of positions with an optional buffer in metres.

    Returns:
        Tuple of (south, west, north, east) in decimal degrees

    Raises:
        ValueError: If there are no positions
    """
    latitudes = []
    longitudes = []
    for position in positions:
        latitudes.append(position.latitude)
        longitudes.append(position.longitude)
    if not latitudes:
        raise ValueError("Cannot compute a bounding box without positions")

    min_lat, max_lat = min(latitudes), max(latitudes)
    min_lon, max_lon = min(longitudes), max(longitudes)

    if buffer_m == 0.0:
        return (min_lat, min_lon, max_lat, max_lon)

    # longitude degrees shrink with latitude, use the centre of the box
    avg_lat = (min_lat + max_lat) / 2
    lat_buffer = buffer_m / METERS_PER_DEGREE_LATITUDE
    cos_lat = max(abs(math.cos(math.radians(avg_lat))), 1e-6)
    lon_buffer = buffer_m / (METERS_PER_DEGREE_LATITUDE * cos_lat)

    return (
        max(-90.0, min_lat - lat_buffer),
        max(-180.0, min_lon - lon_buffer),
        min(90.0, max_lat + lat_buffer),
        min(180.0, max_lon + lon_buffer),
    )
