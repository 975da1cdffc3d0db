#!/usr/bin/env python3
"""
Data structures for recorded positions and their notes.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class PositionSource(Enum):
    """Where a position or note was recorded from."""

    HOME_ASSISTANT = "home_assistant"
    TELEGRAM = "telegram"
    MANUAL = "manual"

    def __str__(self) -> str:
        return self.value


class InvalidTimestampError(ValueError):
    """Raised when a position carries a timestamp that cannot be parsed."""

    def __init__(self, position_id: str, timestamp: Any):
        self.position_id = position_id
        self.timestamp = timestamp
        super().__init__(
            f"Position {position_id!r} has an invalid timestamp: {timestamp!r}"
        )


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    A trailing ``Z`` is accepted, and timestamps without an offset are
    treated as UTC.

    Args:
        value: ISO-8601 string such as ``2024-07-02T22:00:00Z``

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If the string is not a valid ISO-8601 timestamp
    """
    if not isinstance(value, str):
        raise ValueError(f"Timestamp must be a string, got {type(value).__name__}")
    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Note:
    """A free-text note attached to a position."""

    id: str
    text: str
    timestamp: str
    source: PositionSource = PositionSource.MANUAL
    telegram_user: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Note":
        if not isinstance(data, dict):
            raise ValueError(f"Note must be an object, got {type(data).__name__}")
        try:
            note_id = str(data["id"])
        except KeyError as e:
            raise ValueError(f"Note is missing required field {e}") from e
        return cls(
            id=note_id,
            text=str(data.get("text", "")),
            timestamp=str(data.get("timestamp", "")),
            source=PositionSource(data.get("source") or "manual"),
            telegram_user=data.get("telegram_user"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "timestamp": self.timestamp,
            "source": self.source.value,
        }
        if self.telegram_user is not None:
            data["telegram_user"] = self.telegram_user
        return data


@dataclass(frozen=True)
class Position:
    """A single recorded GPS fix."""

    id: str
    timestamp: str  # ISO-8601, UTC unless explicitly zoned
    latitude: float
    longitude: float
    city: Optional[str] = None
    country: Optional[str] = None
    source: PositionSource = PositionSource.HOME_ASSISTANT
    notes: List[Note] = field(default_factory=list, compare=False)

    @property
    def recorded_at(self) -> datetime:
        """
        The timestamp as an aware datetime.

        Raises:
            InvalidTimestampError: If the timestamp cannot be parsed
        """
        try:
            return parse_timestamp(self.timestamp)
        except ValueError as e:
            raise InvalidTimestampError(self.id, self.timestamp) from e

    def with_coordinates(self, latitude: float, longitude: float) -> "Position":
        """Return a copy of this position moved to new coordinates."""
        return replace(self, latitude=latitude, longitude=longitude)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Position":
        """
        Build a Position from a backend JSON object.

        Legacy exports store ``notes`` as a single string; it becomes one
        manual Note stamped with the position's timestamp.

        Args:
            data: Dictionary as returned by ``GET /api/positions``

        Returns:
            Position instance

        Raises:
            ValueError: If the entry is not an object, a required field is
                missing or coordinates are out of range
        """
        if not isinstance(data, dict):
            raise ValueError(f"Position must be an object, got {type(data).__name__}")

        try:
            position_id = str(data["id"])
            timestamp = data["timestamp"]
            latitude = float(data["latitude"])
            longitude = float(data["longitude"])
        except KeyError as e:
            raise ValueError(f"Position is missing required field {e}") from e
        except (TypeError, ValueError) as e:
            raise ValueError(
                f"Position {data.get('id')!r} has non-numeric coordinates"
            ) from e

        if not -90.0 <= latitude <= 90.0:
            raise ValueError(
                f"Position {position_id!r} latitude {latitude} is outside [-90, 90]"
            )
        if not -180.0 <= longitude <= 180.0:
            raise ValueError(
                f"Position {position_id!r} longitude {longitude} is outside [-180, 180]"
            )

        raw_notes = data.get("notes")
        notes: List[Note] = []
        if isinstance(raw_notes, str):
            if raw_notes:
                notes.append(
                    Note(
                        id=f"{position_id}-note",
                        text=raw_notes,
                        timestamp=str(timestamp),
                    )
                )
        elif isinstance(raw_notes, list):
            notes = [Note.from_dict(note) for note in raw_notes]
        elif raw_notes:
            raise ValueError(f"Position {position_id!r} has malformed notes")

        return cls(
            id=position_id,
            timestamp=str(timestamp),
            latitude=latitude,
            longitude=longitude,
            city=data.get("city") or None,
            country=data.get("country") or None,
            source=PositionSource(data.get("source") or "home_assistant"),
            notes=notes,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "timestamp": self.timestamp,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "source": self.source.value,
            "notes": [note.to_dict() for note in self.notes],
        }
        if self.city is not None:
            data["city"] = self.city
        if self.country is not None:
            data["country"] = self.country
        return data
