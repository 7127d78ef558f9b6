"""pk CLI entrypoint.

Subcommands: demo, config (get/set/list), shape, geo.

`pk demo` runs the three demos and prints a labelled section for each. Structured
events go to a JSONL file when --events (or PK_EVENTS_PATH) is given.

Exit codes: 0 on success, 2 when a patternkit error stops the command.
"""

from __future__ import annotations

import argparse
import logging
import sys
import uuid
from pathlib import Path
from typing import Any, Mapping, Optional, TextIO

from patternkit.adapters.json_settings_store import JsonSettingsStore
from patternkit.adapters.jsonl_telemetry import JsonlTelemetry, NullTelemetry
from patternkit.cli.demo import build_sections, run_sections
from patternkit.config.config_loader import ConfigLoader
from patternkit.config.configs import AppConfig
from patternkit.core.utility import insert_path
from patternkit.errors.errors import PatternkitError, TelemetryError
from patternkit.geo.adapter import FixedLocationProvider, GeoAdapter
from patternkit.ports.telemetry import Telemetry
from patternkit.shapes.shapes import creator_for

APP_VERSION = "0.1.0"
EXIT_OK = 0
EXIT_ERROR = 2
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """
    Return the top-level CLI argument parser.
    """
    p = argparse.ArgumentParser(prog="pk", description="Design pattern demos")
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    sub = p.add_subparsers(dest="command", required=True)

    def add_common(sp: argparse.ArgumentParser) -> None:
        """Add arguments shared across all subcommands."""
        sp.add_argument("--settings", type=Path, help="Backing JSON file of the settings store")
        sp.add_argument("--config", type=Path, help="Path to a TOML config file")
        sp.add_argument(
            "--set",
            dest="config_overrides",
            action="append",
            default=[],
            metavar="KEY=VALUE",
            help="Override a config entry (may be repeated)",
        )
        sp.add_argument("--log-level", dest="log_level", help="Logging level (e.g. DEBUG)")
        sp.add_argument("--events", type=Path, help="Append structured events to this JSONL file")

    demo = sub.add_parser("demo", help="Run all demos")
    add_common(demo)

    config = sub.add_parser("config", help="Read or write persisted settings")
    add_common(config)
    config_sub = config.add_subparsers(dest="config_command", required=True)
    get = config_sub.add_parser("get", help="Print one setting")
    get.add_argument("key")
    set_ = config_sub.add_parser("set", help="Write one setting")
    set_.add_argument("key")
    set_.add_argument("value")
    config_sub.add_parser("list", help="Print every setting")

    shape = sub.add_parser("shape", help="Render one shape")
    add_common(shape)
    shape.add_argument("kind", help="Shape kind: oval or box")

    geo = sub.add_parser("geo", help="Parse and print coordinates")
    add_common(geo)
    geo.add_argument("--raw", help="Raw '<lat>, <lng>' string (defaults to the configured one)")
    return p


def _parse_cli_overrides(pairs: list[str]) -> Mapping[str, Any]:
    overrides: dict[str, Any] = {}

    for item in pairs:
        key, sep, value = item.partition("=")
        if sep == "":
            raise ValueError(f"--set requires KEY=VALUE format (got {item!r})")

        insert_path(overrides, key.strip(), value)
    return overrides


def resolve_config(
    args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None
) -> AppConfig:
    """Dedicated flags win over --set, which wins over environment and file."""
    overrides = dict(_parse_cli_overrides(args.config_overrides))
    if args.settings is not None:
        overrides["settings_path"] = args.settings
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if args.events is not None:
        overrides["events_path"] = args.events
    return ConfigLoader().resolve(args.config, environ=environ, cli_overrides=overrides)


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("patternkit").setLevel(level)


def build_telemetry(config: AppConfig) -> Telemetry:
    if config.events_path is None:
        return NullTelemetry()
    return JsonlTelemetry(run_id=str(uuid.uuid4()), sink_path=config.events_path)


# --- Commands ---


def cmd_demo(config: AppConfig, telemetry: Telemetry, out: TextIO) -> int:
    # Composition root: the store is built here and handed to the demo that needs it.
    store = JsonSettingsStore(config.settings_path)
    provider = FixedLocationProvider(config.raw_location)
    run_sections(build_sections(store, provider), telemetry, out)
    return EXIT_OK


def cmd_config(
    args: argparse.Namespace, config: AppConfig, telemetry: Telemetry, out: TextIO
) -> int:
    store = JsonSettingsStore(config.settings_path)
    if args.config_command == "get":
        print(store.retrieve(args.key), file=out)
    elif args.config_command == "set":
        store.update(args.key, args.value)
        telemetry.log("setting_updated", parameter=args.key, path=str(store.path))
        print(f"[Config] {args.key} => {store.retrieve(args.key)}", file=out)
    else:
        for key, value in store.snapshot().items():
            print(f"{key} => {value}", file=out)
    return EXIT_OK


def cmd_shape(args: argparse.Namespace, telemetry: Telemetry, out: TextIO) -> int:
    shape = creator_for(args.kind).create()
    shape.render(out)
    telemetry.log("shape_rendered", kind=shape.kind.value)
    return EXIT_OK


def cmd_geo(args: argparse.Namespace, config: AppConfig, telemetry: Telemetry, out: TextIO) -> int:
    raw = args.raw if args.raw is not None else config.raw_location
    coords = GeoAdapter(FixedLocationProvider(raw)).fetch_coordinates()
    print(f"Geo Location -> {coords.format()}", file=out)
    telemetry.log("coordinates_fetched", latitude=coords.latitude, longitude=coords.longitude)
    return EXIT_OK


def main(
    argv: list[str] | None = None,
    *,
    out: Optional[TextIO] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """CLI entrypoint wrapper compatible with setuptools scripts."""
    parser = build_parser()
    args = parser.parse_args(argv)
    out = out or sys.stdout

    try:
        config = resolve_config(args, environ)
    except (PatternkitError, ValueError) as exc:
        print(f"pk: {exc}", file=sys.stderr)
        return EXIT_ERROR

    configure_logging(config.log_level)
    telemetry = build_telemetry(config)

    try:
        telemetry.log("cli_invocation", command=args.command, version=APP_VERSION)
        if args.command == "demo":
            return cmd_demo(config, telemetry, out)
        if args.command == "config":
            return cmd_config(args, config, telemetry, out)
        if args.command == "shape":
            return cmd_shape(args, telemetry, out)
        return cmd_geo(args, config, telemetry, out)
    except PatternkitError as exc:
        logger.error(f"{args.command} failed: {exc}")
        if not isinstance(exc, TelemetryError):
            telemetry.log("command_failed", command=args.command, error=exc.__class__.__name__)
        print(f"pk: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
