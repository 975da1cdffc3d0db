from datetime import datetime, timedelta, timezone

import pytest

from vartarvipavag.position import (
    InvalidTimestampError,
    Note,
    Position,
    PositionSource,
    parse_timestamp,
)


class TestParseTimestamp:
    def test_zulu(self):
        assert parse_timestamp("2024-07-02T22:00:00Z") == datetime(
            2024, 7, 2, 22, 0, tzinfo=timezone.utc
        )

    def test_naive_is_utc(self):
        assert parse_timestamp("2024-07-02T22:00:00").tzinfo == timezone.utc

    def test_fractional_seconds_and_offset(self):
        parsed = parse_timestamp("2024-07-02T22:00:00.250+02:00")
        assert parsed.utcoffset() == timedelta(hours=2)
        assert parsed.microsecond == 250_000

    @pytest.mark.parametrize("value", ["", "not a date", "2024-13-40T00:00:00Z", None])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_timestamp(value)


def test_recorded_at_raises_invalid_timestamp_error():
    position = Position(id="p1", timestamp="garbage", latitude=1.0, longitude=2.0)
    with pytest.raises(InvalidTimestampError) as excinfo:
        position.recorded_at
    assert excinfo.value.position_id == "p1"
    assert isinstance(excinfo.value, ValueError)


class TestFromDict:
    def test_full_record(self):
        position = Position.from_dict(
            {
                "id": "abc",
                "timestamp": "2024-07-02T22:00:00.000Z",
                "latitude": 48.8566,
                "longitude": 2.3522,
                "city": "Paris",
                "country": "France",
                "source": "telegram",
                "notes": [
                    {
                        "id": "n1",
                        "text": "Croissanter!",
                        "timestamp": "2024-07-02T22:05:00.000Z",
                        "source": "telegram",
                        "telegram_user": "sara",
                    }
                ],
            }
        )
        assert position.id == "abc"
        assert position.city == "Paris"
        assert position.source == PositionSource.TELEGRAM
        assert position.notes == [
            Note(
                id="n1",
                text="Croissanter!",
                timestamp="2024-07-02T22:05:00.000Z",
                source=PositionSource.TELEGRAM,
                telegram_user="sara",
            )
        ]

    def test_defaults(self):
        position = Position.from_dict(
            {"id": 7, "timestamp": "2024-07-02T22:00:00Z", "latitude": "1.5", "longitude": 2}
        )
        assert position.id == "7"
        assert position.latitude == 1.5
        assert position.city is None
        assert position.source == PositionSource.HOME_ASSISTANT
        assert position.notes == []

    def test_legacy_string_notes(self):
        position = Position.from_dict(
            {
                "id": "p1",
                "timestamp": "2024-07-02T22:00:00Z",
                "latitude": 1.0,
                "longitude": 2.0,
                "notes": "Tåget var sent",
            }
        )
        assert len(position.notes) == 1
        assert position.notes[0].text == "Tåget var sent"
        assert position.notes[0].source == PositionSource.MANUAL
        assert position.notes[0].timestamp == "2024-07-02T22:00:00Z"

    def test_missing_field(self):
        with pytest.raises(ValueError, match="latitude"):
            Position.from_dict({"id": "p1", "timestamp": "2024-07-02T22:00:00Z", "longitude": 2.0})

    @pytest.mark.parametrize("data", ["oops", None, 42, ["p1"]])
    def test_not_an_object(self, data):
        with pytest.raises(ValueError, match="must be an object"):
            Position.from_dict(data)

    def test_note_without_id(self):
        with pytest.raises(ValueError, match="id"):
            Position.from_dict(
                {
                    "id": "p1",
                    "timestamp": "2024-07-02T22:00:00Z",
                    "latitude": 48.85,
                    "longitude": 2.35,
                    "notes": [{"text": "Framme!"}],
                }
            )

    @pytest.mark.parametrize("notes", [[None], ["Framme!"], 5])
    def test_malformed_notes(self, notes):
        with pytest.raises(ValueError):
            Position.from_dict(
                {
                    "id": "p1",
                    "timestamp": "2024-07-02T22:00:00Z",
                    "latitude": 48.85,
                    "longitude": 2.35,
                    "notes": notes,
                }
            )

    @pytest.mark.parametrize(
        "latitude,longitude", [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.5), (0.0, -181.0)]
    )
    def test_out_of_range(self, latitude, longitude):
        with pytest.raises(ValueError):
            Position.from_dict(
                {
                    "id": "p1",
                    "timestamp": "2024-07-02T22:00:00Z",
                    "latitude": latitude,
                    "longitude": longitude,
                }
            )

    def test_round_trip_through_dict(self):
        original = Position.from_dict(
            {
                "id": "p1",
                "timestamp": "2024-07-02T22:00:00Z",
                "latitude": 1.0,
                "longitude": 2.0,
                "city": "Malmö",
                "source": "manual",
                "notes": [{"id": "n", "text": "hej", "timestamp": "2024-07-02T22:00:00Z"}],
            }
        )
        restored = Position.from_dict(original.to_dict())
        assert restored == original
        assert restored.notes == original.notes


def test_with_coordinates_returns_copy():
    position = Position(id="p1", timestamp="2024-07-02T22:00:00Z", latitude=1.0, longitude=2.0)
    moved = position.with_coordinates(3.0, 4.0)
    assert (moved.latitude, moved.longitude) == (3.0, 4.0)
    assert (position.latitude, position.longitude) == (1.0, 2.0)
    assert moved.id == position.id
