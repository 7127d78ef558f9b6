"""SettingsStore Port Interface.

Contract: Durable key-value settings. Every update is persisted before it returns;
retrieving an unknown parameter is not an error.
"""

from __future__ import annotations

from typing import Protocol


class SettingsStore(Protocol):
    def update(self, parameter: str, value: str) -> None: ...

    def retrieve(self, parameter: str) -> str: ...

    """
    `update` inserts or overwrites one entry and writes the full mapping through to
    the backing storage. `retrieve` returns the stored value, or the
    "Not available" sentinel when the parameter was never written.
    """
