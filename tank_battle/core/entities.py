"""Bullets and explosions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tank_battle.core.geometry import Direction, Rect
from tank_battle.core.world import GameRules


class Owner(Enum):
    """Which side a tank or bullet belongs to."""

    PLAYER = "player"
    ENEMY = "enemy"


@dataclass
class Bullet:
    """A straight-flying projectile."""

    x: float
    y: float
    direction: Direction
    owner: Owner
    size: int = 8
    active: bool = True

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.size, self.size)

    def advance(self, rules: GameRules) -> None:
        if not self.active:
            return
        dx, dy = self.direction.delta
        self.x += dx * rules.bullet_speed
        self.y += dy * rules.bullet_speed
        if not self.rect.within(rules.width, rules.height):
            self.active = False

    def destroy(self) -> None:
        self.active = False


@dataclass
class Explosion:
    """Cosmetic blast that grows for a fixed number of frames."""

    x: float
    y: float
    size: int = 40
    max_frames: int = 8
    frame: int = 0
    active: bool = True

    @classmethod
    def centered_on(cls, rect: Rect, rules: GameRules) -> Explosion:
        cx, cy = rect.center
        half = rules.explosion_size / 2
        return cls(
            cx - half,
            cy - half,
            size=rules.explosion_size,
            max_frames=rules.explosion_frames,
        )

    @property
    def radius(self) -> float:
        return self.frame * 5

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.size / 2, self.y + self.size / 2

    def advance(self) -> None:
        if not self.active:
            return
        self.frame += 1
        if self.frame >= self.max_frames:
            self.active = False


__all__ = ["Bullet", "Explosion", "Owner"]
