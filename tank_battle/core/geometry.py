"""Axis-aligned rectangles, overlap tests and movement directions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Direction(Enum):
    """Facing of a tank or travel direction of a bullet."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTAS[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


@dataclass(frozen=True)
class Rect:
    """Immutable axis-aligned rectangle in playfield pixels."""

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
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    def moved(self, dx: float, dy: float) -> Rect:
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def within(self, width: float, height: float) -> bool:
        """True when the rectangle lies entirely inside ``[0,width]×[0,height]``."""

        return self.x >= 0 and self.y >= 0 and self.right <= width and self.bottom <= height

    def overlaps(self, other: Rect) -> bool:
        return overlaps(self, other)


def overlaps(a: Rect, b: Rect) -> bool:
    """Strict interval intersection; rectangles sharing only an edge do not overlap."""

    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


__all__ = ["Direction", "Rect", "overlaps"]
