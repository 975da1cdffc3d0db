#!/usr/bin/env python3
"""
Journey data model: the recorded positions in chronological order.
"""

from typing import Any, Iterable, List, Optional, Set, TextIO, Tuple
import json
import logging
import os

import gpxpy
import gpxpy.gpx

from .geometry import buffered_bbox, path_length_km
from .position import Position, PositionSource

logger = logging.getLogger(__name__)


class Journey:
    """Represents the positions of a trip, ordered by timestamp."""

    def __init__(self, positions: Iterable[Position]):
        """Initializes a Journey object.

        Args:
            positions: Positions in any order. They are sorted by timestamp;
                positions with equal timestamps keep their input order.

        Raises:
            InvalidTimestampError: If a timestamp cannot be parsed.
        """
        self.positions: List[Position] = sorted(
            positions, key=lambda position: position.recorded_at
        )

    def get_bbox(self, buffer: float = 0.0) -> Tuple[float, float, float, float]:
        """
        Get bounding box for this journey, optionally with a buffer.

        Args:
            buffer: Buffer distance in meters (default: 0.0)

        Returns:
            Tuple of (south, west, north, east) in decimal degrees

        Raises:
            ValueError: If the journey has no positions
        """
        bbox = buffered_bbox(self.positions, buffer)
        logger.debug(
            f"Journey bounding box: ({bbox[0]:.4f}, {bbox[1]:.4f}, {bbox[2]:.4f}, {bbox[3]:.4f}) with {buffer}m buffer"
        )
        return bbox

    @property
    def length_km(self) -> float:
        return path_length_km(self.positions)

    @classmethod
    def from_records(cls, records: Any) -> "Journey":
        """
        Build a journey from decoded backend JSON.

        Args:
            records: Either a list of position objects or the backend
                envelope ``{"success": true, "data": [...]}``

        Returns:
            Journey object

        Raises:
            ValueError: If the envelope reports failure or the payload is malformed
        """
        if isinstance(records, dict):
            if not records.get("success", True):
                raise ValueError(
                    f"Position export reports failure: {records.get('error', 'unknown error')}"
                )
            records = records.get("data") or []
        if not isinstance(records, list):
            raise ValueError("Position export must be a list of positions")

        positions = [Position.from_dict(record) for record in records]
        logger.debug(f"Parsed {len(positions)} positions from JSON")
        return cls(positions)

    @classmethod
    def from_json(cls, file_input: TextIO) -> "Journey":
        """
        Parse a JSON export of positions.

        Raises:
            json.JSONDecodeError: If the file is not valid JSON.
            ValueError: If the payload is not a position export.
        """
        return cls.from_records(json.load(file_input))

    @classmethod
    def from_gpx(cls, file_input: TextIO) -> "Journey":
        """
        Parse a GPX file; every timed track point and waypoint becomes a position.

        Args:
            file_input: File-like object containing GPX data

        Returns:
            Journey object

        Raises:
            gpxpy.gpx.GPXException: If GPX file is malformed.
        """
        gpx_data = gpxpy.parse(file_input)

        points = []
        for track in gpx_data.tracks:
            for segment in track.segments:
                points.extend(segment.points)
        points.extend(gpx_data.waypoints)

        positions = []
        skipped = 0
        for point in points:
            if point.time is None:
                skipped += 1
                continue
            positions.append(
                Position(
                    id=f"gpx-{len(positions) + 1}",
                    timestamp=point.time.isoformat(),
                    latitude=point.latitude,
                    longitude=point.longitude,
                    source=PositionSource.MANUAL,
                )
            )

        if skipped:
            logger.warning(f"Skipped {skipped} GPX points without a timestamp")
        logger.debug(f"Parsed {len(positions)} positions from GPX file")
        return cls(positions)

    @classmethod
    def from_file(cls, filename: str) -> "Journey":
        """
        Load positions from a GPX file or a JSON export.

        Raises:
            FileNotFoundError: If file doesn't exist.
            PermissionError: If file can't be read.
            gpxpy.gpx.GPXException: If GPX file is malformed.
            ValueError: If JSON file is malformed.
        """
        logger.debug(f"Reading positions file: {filename}")
        with open(filename, "r", encoding="utf-8") as f:
            if os.path.splitext(filename)[1].lower() == ".gpx":
                return cls.from_gpx(f)
            return cls.from_json(f)

    def to_gpx(self, night_stops: Optional[Set[str]] = None) -> str:
        """
        Export the journey as GPX 1.1 XML.

        Args:
            night_stops: Position ids to additionally export as waypoints

        Returns:
            GPX document as a string
        """
        gpx_data = gpxpy.gpx.GPX()
        track = gpxpy.gpx.GPXTrack(name="Journey")
        segment = gpxpy.gpx.GPXTrackSegment()
        track.segments.append(segment)
        gpx_data.tracks.append(track)

        for position in self.positions:
            segment.points.append(
                gpxpy.gpx.GPXTrackPoint(
                    latitude=position.latitude,
                    longitude=position.longitude,
                    time=position.recorded_at,
                    name=position.id,
                )
            )
            if night_stops and position.id in night_stops:
                gpx_data.waypoints.append(
                    gpxpy.gpx.GPXWaypoint(
                        latitude=position.latitude,
                        longitude=position.longitude,
                        time=position.recorded_at,
                        name=position.city or position.id,
                        type="night_stop",
                    )
                )

        return gpx_data.to_xml(version="1.1")

    def __len__(self) -> int:
        """Return number of positions in the journey."""
        return len(self.positions)

    def __getitem__(self, index):
        """Allow indexing into positions."""
        return self.positions[index]

    def __iter__(self):
        """Allow iteration over positions."""
        return iter(self.positions)
