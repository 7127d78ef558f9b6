"""
Adapts a raw-string location source to callers that expect structured coordinates.
"""

from __future__ import annotations

import logging

from patternkit.geo.coordinates import Coordinates, parse_coordinates
from patternkit.ports.location_provider import LocationProvider

logger = logging.getLogger(__name__)

DEFAULT_RAW_LOCATION = "37.7749, -122.4194"


class FixedLocationProvider:
    """LocationProvider that always reports the same raw string."""

    def __init__(self, raw: str = DEFAULT_RAW_LOCATION) -> None:
        self._raw = raw

    def provide_raw_location(self) -> str:
        return self._raw


class GeoAdapter:
    def __init__(self, provider: LocationProvider) -> None:
        self._provider = provider

    def fetch_coordinates(self) -> Coordinates:
        raw = self._provider.provide_raw_location()
        coords = parse_coordinates(raw)
        logger.debug(f"Parsed {raw!r} into {coords}")
        return coords
