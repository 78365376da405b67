"""Per-tick record of the controls the player is holding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tank_battle.core.geometry import Direction


@dataclass(frozen=True)
class InputSnapshot:
    """Held state of every gameplay control, sampled once per tick."""

    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    fire: bool = False

    def merge(self, other: InputSnapshot) -> InputSnapshot:
        return InputSnapshot(
            up=self.up or other.up,
            down=self.down or other.down,
            left=self.left or other.left,
            right=self.right or other.right,
            fire=self.fire or other.fire,
        )

    def vertical(self) -> Optional[Direction]:
        if self.up:
            return Direction.UP
        if self.down:
            return Direction.DOWN
        return None

    def horizontal(self) -> Optional[Direction]:
        if self.left:
            return Direction.LEFT
        if self.right:
            return Direction.RIGHT
        return None

    @property
    def any_held(self) -> bool:
        return self.up or self.down or self.left or self.right or self.fire


IDLE = InputSnapshot()


__all__ = ["IDLE", "InputSnapshot"]
