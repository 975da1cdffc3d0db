#!/usr/bin/env python3
"""
vartarvipavag - journey maps for a personal travel tracker.

This package classifies recorded GPS positions into night stops and daily
positions, jitters coordinates for public viewing and draws the journey on
an interactive map.
"""
import importlib.metadata

__version__ = importlib.metadata.version("vartarvipavag")

# Import main classes for public API
from .position import InvalidTimestampError, Note, Position, PositionSource
from .night_stops import PositionKind, assign_nights, classify_night_stops, classify_positions
from .obfuscation import obfuscate_positions
from .journey import Journey

__all__ = [
    "InvalidTimestampError",
    "Note",
    "Position",
    "PositionSource",
    "PositionKind",
    "assign_nights",
    "classify_night_stops",
    "classify_positions",
    "obfuscate_positions",
    "Journey",
]
