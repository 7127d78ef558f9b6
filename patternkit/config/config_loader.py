"""
Purpose:
    - Merge configuration layers (defaults < TOML file < environment < CLI overrides)
    - Validate the merged result into an AppConfig
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from patternkit.config.configs import AppConfig
from patternkit.core.utility import deep_merge, validation_error_parser
from patternkit.errors.errors import ConfigurationError

_LOGGER = logging.getLogger(__name__)

ENV_PREFIX = "PK_"
ALLOWED_KEYS: set[str] = set(AppConfig.model_fields.keys())


class ConfigLoader:
    """
    Config-loader; resolves an AppConfig from a TOML file, the environment and
    KEY=VALUE overrides.
    """

    def __init__(self, base_dir: str = ".", env_prefix: str = ENV_PREFIX) -> None:
        if not env_prefix:
            raise ValueError("Environment prefix must be a non-empty string")
        self._base_dir = base_dir
        self._env_prefix = env_prefix

    def load_file(self, file_name: str | Path) -> dict[str, Any]:
        path = Path(file_name)
        if not path.is_absolute():
            path = Path(self._base_dir) / path

        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}", field="config", value=path)

        try:
            with path.open("rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(
                f"Config file is not valid TOML: {exc}", field="config", value=path
            ) from exc

    def env_layer(self, environ: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
        """Collect PK_<FIELD> variables for known fields (e.g. PK_SETTINGS_PATH)."""
        environ = os.environ if environ is None else environ
        layer: dict[str, Any] = {}
        for key in ALLOWED_KEYS:
            env_var = f"{self._env_prefix}{key.upper()}"
            if env_var in environ:
                layer[key] = environ[env_var]
        return layer

    def resolve(
        self,
        file_name: Optional[str | Path] = None,
        environ: Optional[Mapping[str, str]] = None,
        cli_overrides: Optional[Mapping[str, Any]] = None,
    ) -> AppConfig:
        merged: Mapping[str, Any] = AppConfig().model_dump()
        layers = [
            ("file", self.load_file(file_name) if file_name else {}),
            ("env", self.env_layer(environ)),
            ("cli", dict(cli_overrides or {})),
        ]
        for layer_name, layer in layers:
            unexpected = set(layer) - ALLOWED_KEYS
            if unexpected:
                raise ConfigurationError(
                    f"Unexpected config key(s) in {layer_name} layer: {', '.join(sorted(unexpected))}",
                    field=sorted(unexpected)[0],
                )
            merged = deep_merge(merged, layer)

        try:
            config = AppConfig(**merged)
        except ValidationError as e:
            parsed_error = validation_error_parser(e)
            first = parsed_error[0]
            raise ConfigurationError(
                "; ".join(f"{err['path']}: {err['message']}" for err in parsed_error),
                field=first["path"],
                details={"errors": parsed_error},
            ) from e

        _LOGGER.debug(
            "config_resolved",
            extra={
                "event": "config_resolved",
                "layers": [name for name, layer in layers if layer],
                "settings_path": str(config.settings_path),
            },
        )
        return config
