"""
Geo adapter: turns "<lat>, <lng>" strings from a location provider into Coordinates.
"""

from patternkit.geo.adapter import DEFAULT_RAW_LOCATION, FixedLocationProvider, GeoAdapter
from patternkit.geo.coordinates import Coordinates, parse_coordinates

__all__ = [
    "DEFAULT_RAW_LOCATION",
    "Coordinates",
    "FixedLocationProvider",
    "GeoAdapter",
    "parse_coordinates",
]
