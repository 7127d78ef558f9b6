"""ShapeCreator Port Interface.

Contract: Produce a fresh renderable shape. Callers depend on this capability only,
never on the concrete variant behind it.
"""

from __future__ import annotations

from typing import Optional, Protocol, TextIO


class Shape(Protocol):
    def render(self, out: Optional[TextIO] = None) -> None: ...


class ShapeCreator(Protocol):
    def create(self) -> Shape: ...
