"""JSON Lines Telemetry adapter.

Implements the Telemetry port by appending one JSON object per event to a file.
Values under secret-looking keys are redacted before they reach disk.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

import orjson

from patternkit.errors.errors import TelemetryError
from patternkit.ports.clock import Clock


class SystemClock:
    """Clock adapter that returns the current UTC time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class JsonlTelemetry:
    _REDACTION_TOKEN = "***REDACTED***"
    _DEFAULT_SECRET_KEYS = frozenset(
        {
            "api_key",
            "api_secret",
            "secret",
            "password",
            "token",
            "auth_token",
        }
    )

    def __init__(
        self,
        run_id: str,
        sink_path: Path,
        secret_keys: Iterable[str] = _DEFAULT_SECRET_KEYS,
        clock: Optional[Clock] = None,
    ) -> None:
        self._run_id = str(run_id)
        self._sink_path = sink_path if isinstance(sink_path, Path) else Path(sink_path)
        self._secret_keys = frozenset(secret_keys)
        self._clock = clock or SystemClock()

    @property
    def sink_path(self) -> Path:
        return self._sink_path

    def log(self, event: str, **fields: Any) -> None:
        if not event:
            raise ValueError("Telemetry event name must be a non-empty string")

        sanitized_fields, redacted = self._sanitize_fields(fields)

        record: dict[str, Any] = {
            "event": event,
            "ts_utc": self._clock.now().isoformat(),
            "run_id": self._run_id,
            **sanitized_fields,
        }
        if redacted:
            record["redacted_fields"] = sorted(redacted)

        self._write_record(record)

    def _sanitize_fields(self, fields: Mapping[str, Any]) -> tuple[dict[str, Any], set[str]]:
        sanitized: dict[str, Any] = {}
        redacted: set[str] = set()
        for key, value in fields.items():
            if key.lower() in self._secret_keys:
                sanitized[key] = self._REDACTION_TOKEN
                redacted.add(key)
            else:
                sanitized[key] = value

        return sanitized, redacted

    def _write_record(self, record: Mapping[str, Any]) -> None:
        # default=str covers Paths and Enums in event fields
        line = orjson.dumps(record, default=str, option=orjson.OPT_SORT_KEYS)
        try:
            self._sink_path.parent.mkdir(parents=True, exist_ok=True)
            with self._sink_path.open("ab") as handle:
                handle.write(line + b"\n")
        except OSError as exc:
            raise TelemetryError(
                f"Cannot write telemetry event: {exc}", sink_path=self._sink_path
            ) from exc


class NullTelemetry:
    """Telemetry sink that drops every event."""

    def log(self, event: str, **fields: Any) -> None:
        return None
