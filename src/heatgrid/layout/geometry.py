"""Geometric primitives shared by the layout planner and the surfaces."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in pixel space (origin top-left)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class Margins:
    """Space reserved for axis labels to the left of and above the canvas."""

    left: float = 0.0
    top: float = 0.0

    def to_dict(self) -> dict:
        return {"left": self.left, "top": self.top}
