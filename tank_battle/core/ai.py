"""Random-walk behaviour for enemy tanks."""

from __future__ import annotations

import random
from typing import Iterable, Optional

from tank_battle.core.entities import Bullet
from tank_battle.core.geometry import Direction
from tank_battle.core.tank import Tank
from tank_battle.core.world import GameRules, World

_DIRECTIONS = list(Direction)


class RandomWalkAI:
    """Occasionally nudge a tank in a random direction and occasionally fire.

    The behaviour knows nothing about the player: each frame it moves with
    probability ``enemy_move_chance`` and fires with probability
    ``enemy_fire_chance``, both drawn from the injected random generator.
    """

    def __init__(self, rules: GameRules, rng: Optional[random.Random] = None) -> None:
        self.rules = rules
        self.rng = rng or random.Random(rules.seed)

    def act(self, tank: Tank, world: World, tanks: Iterable[Tank]) -> Optional[Bullet]:
        if not tank.alive:
            return None
        if self.rng.random() < self.rules.enemy_move_chance:
            tank.move(self.rng.choice(_DIRECTIONS), world, tanks)
        if self.rng.random() < self.rules.enemy_fire_chance:
            return tank.shoot(self.rules)
        return None


__all__ = ["RandomWalkAI"]
