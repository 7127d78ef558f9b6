"""
Shape factory: a closed set of renderable shapes and the creators that build them.
"""

from patternkit.shapes.shapes import (
    SHAPE_CONSTRUCTORS,
    Box,
    BoxCreator,
    Oval,
    OvalCreator,
    Shape,
    ShapeKind,
    create_shape,
    creator_for,
    parse_kind,
)

__all__ = [
    "SHAPE_CONSTRUCTORS",
    "Box",
    "BoxCreator",
    "Oval",
    "OvalCreator",
    "Shape",
    "ShapeKind",
    "create_shape",
    "creator_for",
    "parse_kind",
]
