"""LocationProvider Port Interface.

Contract: Return the current location as a raw "<lat>, <lng>" string.
"""

from __future__ import annotations

from typing import Protocol


class LocationProvider(Protocol):
    def provide_raw_location(self) -> str: ...
