"""Level construction: walls, enemy roster and player spawn."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from tank_battle.core.entities import Owner
from tank_battle.core.tank import Tank
from tank_battle.core.world import GameRules, World, layout_for_level


@dataclass
class Level:
    """Everything a freshly loaded level starts with."""

    number: int
    world: World
    enemies: List[Tank] = field(default_factory=list)
    player_spawn: Tuple[float, float] = (0.0, 0.0)


def build_level(number: int, rules: Optional[GameRules] = None) -> Level:
    if number < 1:
        raise ValueError(f"level numbers start at 1, got {number}")
    rules = rules or GameRules()
    world = World.from_layout(layout_for_level(number), rules)

    tile = rules.tile_size
    enemy_x = rules.width - tile * 2
    enemies = [
        Tank.spawn(enemy_x, tile * (index + 1), Owner.ENEMY, rules)
        for index in range(rules.enemy_count(number))
    ]
    player_spawn = (float(tile), float(rules.height - tile * 2))
    return Level(number=number, world=world, enemies=enemies, player_spawn=player_spawn)


__all__ = ["Level", "build_level"]
