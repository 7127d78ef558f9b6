"""
Exceptions raised by patternkit.

Exception hierarchy:
- PatternkitError (base)
  - SettingsFileError: backing settings file unreadable, malformed or unwritable
  - ConfigurationError: invalid application configuration
  - UnknownShapeError: no constructor registered for a shape kind
  - CoordinateParseError: raw location text cannot be parsed
  - TelemetryError: event sink cannot be written
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional


class PatternkitError(Exception):
    """Base exception for all patternkit errors."""

    def __init__(
        self,
        message: str,
        *,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.component = component
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.component:
            parts.append(f"[component={self.component}]")
        if self.details:
            parts.append(f"[details={self.details}]")
        return " ".join(parts)


# --- Settings ---


class SettingsFileError(PatternkitError):
    """Raised when the backing settings file cannot be loaded or persisted."""

    def __init__(
        self,
        message: str,
        *,
        path: Optional[Path] = None,
        component: Optional[str] = "settings",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.path = path
        details = details or {}
        if path is not None:
            details["path"] = str(path)
        super().__init__(message, component=component, details=details)


# --- Config ---


class ConfigurationError(PatternkitError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        component: Optional[str] = "config",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.field = field
        self.value = value
        details = details or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, component=component, details=details)


# --- Shapes ---


class UnknownShapeError(PatternkitError, ValueError):
    """Raised when a shape kind has no registered constructor."""

    def __init__(self, kind: Any) -> None:
        self.kind = kind
        super().__init__(f"Unknown shape kind: {kind!r}", component="shapes")


# --- Geo ---


class CoordinateParseError(PatternkitError, ValueError):
    """Raised when a raw location string is not a valid '<lat>, <lng>' pair."""

    def __init__(self, raw: str, reason: str) -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(
            f"Cannot parse coordinates from {raw!r}: {reason}",
            component="geo",
        )


# --- Telemetry ---


class TelemetryError(PatternkitError):
    """Raised when an event cannot be written to the telemetry sink."""

    def __init__(self, message: str, *, sink_path: Optional[Path] = None) -> None:
        self.sink_path = sink_path
        details = {"sink_path": str(sink_path)} if sink_path is not None else None
        super().__init__(message, component="telemetry", details=details)
