"""Telemetry Port Interface.

Contract: Log structured events as log(event, **fields).
"""
from __future__ import annotations
from typing import Protocol, Any

class Telemetry(Protocol):
    def log(self, event: str, **fields: Any) -> None: ...
