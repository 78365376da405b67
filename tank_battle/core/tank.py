"""Tank entity definitions and actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from tank_battle.core.entities import Bullet, Owner
from tank_battle.core.geometry import Direction, Rect
from tank_battle.core.world import GameRules, World


@dataclass
class Tank:
    """A player or enemy tank."""

    x: float
    y: float
    owner: Owner
    direction: Direction = Direction.UP
    speed: int = 2
    size: int = 32
    cooldown: int = 0
    alive: bool = True

    @classmethod
    def spawn(cls, x: float, y: float, owner: Owner, rules: GameRules) -> Tank:
        return cls(x, y, owner, speed=rules.tank_speed, size=rules.tank_size)

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.size, self.size)

    @property
    def is_player(self) -> bool:
        return self.owner is Owner.PLAYER

    @property
    def can_shoot(self) -> bool:
        return self.alive and self.cooldown == 0

    def tick(self) -> None:
        if self.alive and self.cooldown > 0:
            self.cooldown -= 1

    def move(self, direction: Direction, world: World, tanks: Iterable[Tank]) -> bool:
        if not self.alive:
            return False
        # Facing follows the requested direction even when the move is blocked.
        self.direction = direction
        dx, dy = direction.delta
        target = self.rect.moved(dx * self.speed, dy * self.speed)
        if not world.in_bounds(target):
            return False
        if world.blocks_tank(target):
            return False
        for other in tanks:
            if other is self or not other.alive:
                continue
            if other.rect.overlaps(target):
                return False
        self.x = target.x
        self.y = target.y
        return True

    def shoot(self, rules: GameRules) -> Optional[Bullet]:
        if not self.can_shoot:
            return None
        self.cooldown = rules.fire_cooldown
        size = rules.bullet_size
        cx, cy = self.rect.center
        # Offset by half the tank plus half the bullet so the two only share an edge.
        reach = self.size / 2 + size / 2
        dx, dy = self.direction.delta
        return Bullet(
            cx - size / 2 + dx * reach,
            cy - size / 2 + dy * reach,
            self.direction,
            self.owner,
            size=size,
        )

    def destroy(self) -> None:
        self.alive = False


__all__ = ["Tank"]
