from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from patternkit.adapters.json_settings_store import DEFAULT_SETTINGS_PATH
from patternkit.geo.adapter import DEFAULT_RAW_LOCATION

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    settings_path: Path = Field(
        default=DEFAULT_SETTINGS_PATH, description="Backing JSON file of the settings store"
    )
    log_level: LogLevel = Field(default="WARNING", description="Root logger level")
    events_path: Optional[Path] = Field(
        default=None, description="JSONL event log; no events are written when unset"
    )
    raw_location: str = Field(
        default=DEFAULT_RAW_LOCATION, description="Raw '<lat>, <lng>' string for the geo demo"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value
