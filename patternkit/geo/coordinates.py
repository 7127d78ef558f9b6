"""
Coordinate value type and the parser for raw "<lat>, <lng>" strings.
"""

from __future__ import annotations

import math
import re
from typing import NamedTuple

from patternkit.errors.errors import CoordinateParseError

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)

# ASCII digits only: no underscores, no non-Latin digits, no nan/inf spellings
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _format_degrees(value: float) -> str:
    text = repr(value)
    return text[:-2] if text.endswith(".0") else text


class Coordinates(NamedTuple):
    """Immutable (latitude, longitude) pair in decimal degrees."""

    latitude: float
    longitude: float

    def format(self) -> str:
        """
        Render as "Lat: <lat>, Lng: <lng>" using the shortest round-trip repr,
        with whole degrees printed without a trailing ".0" (10.0 -> "10").
        """
        return f"Lat: {_format_degrees(self.latitude)}, Lng: {_format_degrees(self.longitude)}"


def _parse_degrees(raw: str, text: str, name: str, bounds: tuple[float, float]) -> float:
    if not text:
        raise CoordinateParseError(raw, f"{name} is empty")
    if _DECIMAL_RE.fullmatch(text) is None:
        raise CoordinateParseError(raw, f"{name} {text!r} is not a decimal number")
    # '.' is always the decimal separator, whatever the process locale
    value = float(text)
    if not math.isfinite(value):
        raise CoordinateParseError(raw, f"{name} must be finite")
    low, high = bounds
    if not low <= value <= high:
        raise CoordinateParseError(raw, f"{name} {value!r} outside [{low:g}, {high:g}]")
    return value


def parse_coordinates(raw: str) -> Coordinates:
    """
    Parse a comma-separated "<lat>, <lng>" string.

    Exactly two fields are required; surrounding whitespace is ignored. Anything else
    raises CoordinateParseError rather than falling back to a default pair.
    """
    if not isinstance(raw, str):
        raise CoordinateParseError(repr(raw), "raw location must be a string")

    fields = raw.split(",")
    if len(fields) != 2:
        raise CoordinateParseError(raw, f"expected 2 comma-separated fields, got {len(fields)}")

    latitude = _parse_degrees(raw, fields[0].strip(), "latitude", LATITUDE_RANGE)
    longitude = _parse_degrees(raw, fields[1].strip(), "longitude", LONGITUDE_RANGE)
    return Coordinates(latitude, longitude)
