"""JSON file SettingsStore adapter.

Keeps a flat string-to-string mapping in memory and writes the whole mapping back to
a pretty-printed JSON file after every update.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Union

from pydantic import TypeAdapter, ValidationError

from patternkit.errors.errors import SettingsFileError

_LOGGER = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path("settings.json")
NOT_AVAILABLE = "Not available"

_MAPPING_ADAPTER: TypeAdapter[dict[str, str]] = TypeAdapter(dict[str, str])

_INSTANCES: dict[Path, "JsonSettingsStore"] = {}


class JsonSettingsStore:
    """
    Write-through settings store backed by a single JSON object file.

    The file is read once, at construction. A missing file means an empty mapping;
    a file that exists but does not hold a JSON object of strings is fatal.
    """

    def __init__(self, path: Union[str, Path] = DEFAULT_SETTINGS_PATH) -> None:
        self._path = Path(path)
        self._data: dict[str, str] = self._load()

    # --- Properties ---

    @property
    def path(self) -> Path:
        return self._path

    def __contains__(self, parameter: object) -> bool:
        return parameter in self._data

    def __len__(self) -> int:
        return len(self._data)

    # --- SettingsStore ---

    def update(self, parameter: str, value: str) -> None:
        if not isinstance(parameter, str) or not isinstance(value, str):
            raise TypeError("Settings parameters and values must be strings")

        self._data[parameter] = value
        self._persist()
        _LOGGER.debug(
            "setting_updated",
            extra={"event": "setting_updated", "parameter": parameter, "path": str(self._path)},
        )

    def retrieve(self, parameter: str) -> str:
        return self._data.get(parameter, NOT_AVAILABLE)

    def snapshot(self) -> dict[str, str]:
        """Return a copy of the current mapping."""
        return dict(self._data)

    # --- File I/O ---

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            _LOGGER.debug(
                "settings_file_missing",
                extra={"event": "settings_file_missing", "path": str(self._path)},
            )
            return {}

        try:
            raw_text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SettingsFileError(f"Cannot read settings file: {exc}", path=self._path) from exc

        try:
            payload = json.loads(raw_text)
        except json.JSONDecodeError as exc:
            raise SettingsFileError(
                f"Settings file is not valid JSON: {exc.msg} (line {exc.lineno})",
                path=self._path,
            ) from exc

        try:
            data = _MAPPING_ADAPTER.validate_python(payload, strict=True)
        except ValidationError as exc:
            raise SettingsFileError(
                "Settings file must contain a JSON object mapping strings to strings",
                path=self._path,
                details={"errors": exc.error_count()},
            ) from exc

        _LOGGER.debug(
            "settings_loaded",
            extra={"event": "settings_loaded", "path": str(self._path), "keys_total": len(data)},
        )
        return data

    def _persist(self) -> None:
        """Rewrite the whole file through a temporary sibling and os.replace."""
        payload = json.dumps(self._data, ensure_ascii=False, indent=2)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload + "\n", encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError:
                _LOGGER.warning(f"Could not remove temporary settings file {tmp_path}")
            _LOGGER.error(
                "settings_persist_failed",
                extra={"event": "settings_persist_failed", "path": str(self._path)},
            )
            raise SettingsFileError(f"Cannot write settings file: {exc}", path=self._path) from exc


def get_or_create_instance(path: Union[str, Path] = DEFAULT_SETTINGS_PATH) -> JsonSettingsStore:
    """
    Return the shared store for `path`, loading the backing file on first access only.
    """
    key = Path(path).absolute()
    store = _INSTANCES.get(key)
    if store is None:
        store = JsonSettingsStore(path)
        _INSTANCES[key] = store
    return store


def reset_instances() -> None:
    """Forget every shared store so the next access reloads from disk."""
    _INSTANCES.clear()
