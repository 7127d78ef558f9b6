import json
from datetime import datetime, timezone

import pytest

from patternkit.adapters.jsonl_telemetry import JsonlTelemetry, NullTelemetry
from patternkit.errors.errors import TelemetryError


class FrozenClock:
    def now(self) -> datetime:
        return datetime(2025, 1, 2, tzinfo=timezone.utc)


def _read_records(path):
    content = path.read_text(encoding="utf-8").strip()
    assert content, "expected telemetry sink to contain at least one record"
    return [json.loads(line) for line in content.splitlines()]


def test_log_writes_one_record_per_event(tmp_path):
    sink = tmp_path / "events.log.jsonl"
    telemetry = JsonlTelemetry(run_id="run_2", sink_path=sink, clock=FrozenClock())

    telemetry.log("section_started", title="Shape Factory Demo", index=1)
    telemetry.log("section_completed", title="Shape Factory Demo", index=1)

    records = _read_records(sink)
    assert [r["event"] for r in records] == ["section_started", "section_completed"]
    assert records[0]["run_id"] == "run_2"
    assert records[0]["ts_utc"] == "2025-01-02T00:00:00+00:00"
    assert records[0]["title"] == "Shape Factory Demo"
    assert records[0]["index"] == 1
    assert "redacted_fields" not in records[0]


def test_secret_fields_are_redacted(tmp_path):
    sink = tmp_path / "events.log.jsonl"
    telemetry = JsonlTelemetry(run_id="run-123", sink_path=sink, clock=FrozenClock())

    telemetry.log("setting_updated", parameter="ApiToken", api_key="super-secret", Password="pw")

    (record,) = _read_records(sink)
    assert record["api_key"] == "***REDACTED***"
    assert record["Password"] == "***REDACTED***"
    assert record["parameter"] == "ApiToken"
    assert record["redacted_fields"] == ["Password", "api_key"]


def test_custom_secret_keys(tmp_path):
    sink = tmp_path / "events.log.jsonl"
    telemetry = JsonlTelemetry(run_id="r", sink_path=sink, secret_keys=["pin"], clock=FrozenClock())

    telemetry.log("login", pin="1234", api_key="visible")

    (record,) = _read_records(sink)
    assert record["pin"] == "***REDACTED***"
    assert record["api_key"] == "visible"


def test_non_json_values_are_stringified(tmp_path):
    sink = tmp_path / "events.log.jsonl"
    telemetry = JsonlTelemetry(run_id="r", sink_path=sink, clock=FrozenClock())

    telemetry.log("setting_updated", path=tmp_path / "settings.json")

    (record,) = _read_records(sink)
    assert record["path"] == str(tmp_path / "settings.json")


def test_sink_directory_created(tmp_path):
    sink = tmp_path / "run" / "events.log.jsonl"
    JsonlTelemetry(run_id="r", sink_path=str(sink), clock=FrozenClock()).log("cli_invocation")

    assert sink.exists()


def test_unwritable_sink_raises_telemetry_error(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")
    sink = blocker / "events.log.jsonl"
    telemetry = JsonlTelemetry(run_id="r", sink_path=sink, clock=FrozenClock())

    with pytest.raises(TelemetryError) as exc_info:
        telemetry.log("cli_invocation")

    assert exc_info.value.sink_path == sink
    assert isinstance(exc_info.value.__cause__, OSError)


def test_log_rejects_blank_event(tmp_path):
    telemetry = JsonlTelemetry(run_id="r", sink_path=tmp_path / "e.jsonl", clock=FrozenClock())

    with pytest.raises(ValueError):
        telemetry.log("")


def test_null_telemetry_accepts_anything():
    assert NullTelemetry().log("anything", a=1) is None
