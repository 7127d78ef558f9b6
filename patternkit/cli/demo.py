"""
Demo orchestrator: runs the settings, shape and geo demos in order and prints a
labelled section for each.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, TextIO

from patternkit.geo.adapter import GeoAdapter
from patternkit.ports.location_provider import LocationProvider
from patternkit.ports.settings_store import SettingsStore
from patternkit.ports.shape_creator import ShapeCreator
from patternkit.ports.telemetry import Telemetry
from patternkit.shapes.shapes import BoxCreator, OvalCreator

DEMO_SETTINGS: tuple[tuple[str, str], ...] = (("Theme", "DarkMode"), ("Locale", "en-US"))


@dataclass(frozen=True)
class Section:
    title: str
    action: Callable[[TextIO], None]


def settings_demo(store: SettingsStore, out: TextIO) -> None:
    for parameter, value in DEMO_SETTINGS:
        store.update(parameter, value)
    for parameter, _ in DEMO_SETTINGS:
        print(f"[Config] {parameter} => {store.retrieve(parameter)}", file=out)
    print(file=out)


def shapes_demo(creators: Sequence[ShapeCreator], out: TextIO) -> None:
    for creator in creators:
        creator.create().render(out)
    print(file=out)


def geo_demo(provider: LocationProvider, out: TextIO) -> None:
    coords = GeoAdapter(provider).fetch_coordinates()
    print(f"Geo Location -> {coords.format()}", file=out)


def build_sections(store: SettingsStore, provider: LocationProvider) -> list[Section]:
    creators: list[ShapeCreator] = [OvalCreator(), BoxCreator()]
    return [
        Section("Singleton Config Test", lambda out: settings_demo(store, out)),
        Section("Shape Factory Demo", lambda out: shapes_demo(creators, out)),
        Section("Geo Adapter Check", lambda out: geo_demo(provider, out)),
    ]


def run_sections(
    sections: Sequence[Section],
    telemetry: Telemetry,
    out: Optional[TextIO] = None,
) -> None:
    """Print `=== <title> ===` then run each section; the first failure propagates."""
    out = out or sys.stdout
    for index, section in enumerate(sections):
        telemetry.log("section_started", title=section.title, index=index)
        print(f"=== {section.title} ===", file=out)
        section.action(out)
        telemetry.log("section_completed", title=section.title, index=index)
