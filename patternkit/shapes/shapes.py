"""
Shape variants and their creators.

The set of shapes is closed: `ShapeKind` names every variant and `SHAPE_CONSTRUCTORS`
maps each kind to the callable that builds it.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Optional, TextIO, Union

from patternkit.errors.errors import UnknownShapeError
from patternkit.ports.shape_creator import ShapeCreator


class ShapeKind(str, Enum):
    """Supported shape variants."""

    OVAL = "oval"
    BOX = "box"


# --- Variants ---


@dataclass(frozen=True)
class Oval:
    kind: ShapeKind = ShapeKind.OVAL

    def render(self, out: Optional[TextIO] = None) -> None:
        print("Rendering an oval shape", file=out or sys.stdout)


@dataclass(frozen=True)
class Box:
    kind: ShapeKind = ShapeKind.BOX

    def render(self, out: Optional[TextIO] = None) -> None:
        print("Rendering a rectangular shape", file=out or sys.stdout)


Shape = Union[Oval, Box]


# --- Creators ---


@dataclass(frozen=True)
class OvalCreator:
    def create(self) -> Oval:
        return Oval()


@dataclass(frozen=True)
class BoxCreator:
    def create(self) -> Box:
        return Box()


SHAPE_CONSTRUCTORS: Mapping[ShapeKind, Callable[[], Shape]] = MappingProxyType(
    {
        ShapeKind.OVAL: Oval,
        ShapeKind.BOX: Box,
    }
)

_CREATORS: Mapping[ShapeKind, ShapeCreator] = MappingProxyType(
    {
        ShapeKind.OVAL: OvalCreator(),
        ShapeKind.BOX: BoxCreator(),
    }
)


def parse_kind(kind: Union[ShapeKind, str]) -> ShapeKind:
    """Accept a ShapeKind or its value in any case."""
    if isinstance(kind, ShapeKind):
        return kind
    if isinstance(kind, str):
        try:
            return ShapeKind(kind.strip().lower())
        except ValueError:
            pass
    raise UnknownShapeError(kind)


def create_shape(kind: Union[ShapeKind, str]) -> Shape:
    return SHAPE_CONSTRUCTORS[parse_kind(kind)]()


def creator_for(kind: Union[ShapeKind, str]) -> ShapeCreator:
    return _CREATORS[parse_kind(kind)]
