"""Axis-aligned rectangles in scene units.

Scene y grows upward from the ground baseline (y = 0).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle. Width and height are never negative."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Rect size must be non-negative, got {self.width}x{self.height}")

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height


def overlaps(a: Rect, b: Rect) -> bool:
    """Check whether two rectangles interpenetrate.

    Intervals are half-open, so rectangles that only share an edge do
    not overlap, and a zero-width or zero-height rectangle never
    overlaps anything.
    """
    if a.width <= 0 or a.height <= 0 or b.width <= 0 or b.height <= 0:
        return False
    in_horizontal_bounds = a.x < b.x + b.width and a.x + a.width > b.x
    in_vertical_bounds = a.y < b.y + b.height and a.y + a.height > b.y
    return in_horizontal_bounds and in_vertical_bounds
