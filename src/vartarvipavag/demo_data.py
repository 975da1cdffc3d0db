"""
Sample interrail journey, Stockholm to Paris, used when no backend is configured.
"""

from typing import List

from .position import Position, PositionSource

# id, timestamp, latitude, longitude, city, country
_DEMO_ROWS = [
    ("1", "2024-12-15T00:00:00Z", 59.3293, 18.0686, "Stockholm", "Sweden"),
    ("2", "2024-12-15T08:00:00Z", 59.3300, 18.0590, "Stockholm", "Sweden"),
    ("3", "2024-12-15T09:00:00Z", 59.2741, 18.0652, "Stockholm", "Sweden"),
    ("4", "2024-12-15T10:00:00Z", 58.9700, 17.6400, "Södertälje", "Sweden"),
    ("5", "2024-12-15T11:00:00Z", 58.5800, 16.1800, "Katrineholm", "Sweden"),
    ("6", "2024-12-15T12:00:00Z", 58.4108, 15.6214, "Linköping", "Sweden"),
    ("7", "2024-12-15T13:00:00Z", 57.7826, 14.1618, "Växjö", "Sweden"),
    ("8", "2024-12-15T14:00:00Z", 56.8777, 14.8091, "Alvesta", "Sweden"),
    ("9", "2024-12-15T15:00:00Z", 56.0465, 12.6945, "Helsingborg", "Sweden"),
    ("10", "2024-12-15T16:00:00Z", 55.6761, 12.5683, "Copenhagen", "Denmark"),
    ("11", "2024-12-16T00:00:00Z", 55.6761, 12.5683, "Copenhagen", "Denmark"),
    ("12", "2024-12-16T09:00:00Z", 55.6730, 12.5640, "Copenhagen", "Denmark"),
    ("13", "2024-12-16T10:00:00Z", 55.6794, 12.5950, "Copenhagen", "Denmark"),
    ("14", "2024-12-16T11:00:00Z", 55.6867, 12.5700, "Copenhagen", "Denmark"),
    ("15", "2024-12-16T12:00:00Z", 55.6760, 12.5680, "Copenhagen", "Denmark"),
    ("16", "2024-12-16T13:00:00Z", 55.6740, 12.5650, "Copenhagen", "Denmark"),
    ("17", "2024-12-16T14:00:00Z", 55.4038, 12.5150, "Roskilde", "Denmark"),
    ("18", "2024-12-16T15:00:00Z", 55.0500, 12.0800, None, "Denmark"),
    ("19", "2024-12-16T16:00:00Z", 54.9100, 11.4000, "Fehmarn", "Germany"),
    ("20", "2024-12-16T17:00:00Z", 54.3233, 10.1394, "Kiel", "Germany"),
    ("21", "2024-12-16T18:00:00Z", 53.8667, 10.6833, "Lübeck", "Germany"),
    ("22", "2024-12-16T19:00:00Z", 53.5511, 9.9937, "Hamburg", "Germany"),
    ("23", "2024-12-16T20:00:00Z", 53.0759, 8.8072, "Bremen", "Germany"),
    ("24", "2024-12-16T21:00:00Z", 52.3759, 9.7320, "Hannover", "Germany"),
    ("25", "2024-12-16T22:00:00Z", 52.5200, 13.4050, "Berlin", "Germany"),
    ("26", "2024-12-17T00:00:00Z", 52.5200, 13.4050, "Berlin", "Germany"),
    ("27", "2024-12-17T09:00:00Z", 52.5163, 13.3777, "Berlin", "Germany"),
    ("28", "2024-12-17T10:00:00Z", 52.5200, 13.4050, "Berlin", "Germany"),
    ("29", "2024-12-17T11:00:00Z", 52.5070, 13.4026, "Berlin", "Germany"),
    ("30", "2024-12-17T12:00:00Z", 52.5014, 13.4133, "Berlin", "Germany"),
    ("31", "2024-12-17T13:00:00Z", 52.5200, 13.4050, "Berlin", "Germany"),
    ("32", "2024-12-17T14:00:00Z", 52.5244, 13.4105, "Berlin", "Germany"),
    ("33", "2024-12-17T15:00:00Z", 52.1315, 11.6399, "Magdeburg", "Germany"),
    ("34", "2024-12-17T16:00:00Z", 51.9606, 7.6261, "Münster", "Germany"),
    ("35", "2024-12-17T17:00:00Z", 51.2277, 6.7735, "Düsseldorf", "Germany"),
    ("36", "2024-12-17T18:00:00Z", 50.9375, 6.9603, "Cologne", "Germany"),
    ("37", "2024-12-17T19:00:00Z", 50.7753, 6.0839, "Aachen", "Germany"),
    ("38", "2024-12-17T20:00:00Z", 50.8503, 4.3517, "Brussels", "Belgium"),
    ("39", "2024-12-17T21:00:00Z", 50.6292, 3.0573, "Lille", "France"),
    ("40", "2024-12-17T22:00:00Z", 48.8566, 2.3522, "Paris", "France"),
    ("41", "2024-12-18T00:00:00Z", 48.8566, 2.3522, "Paris", "France"),
]


def demo_positions() -> List[Position]:
    """Return a fresh list of the sample journey's positions."""
    return [
        Position(
            id=position_id,
            timestamp=timestamp,
            latitude=latitude,
            longitude=longitude,
            city=city,
            country=country,
            source=PositionSource.MANUAL,
        )
        for position_id, timestamp, latitude, longitude, city, country in _DEMO_ROWS
    ]
