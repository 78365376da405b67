"""Playfield rules, wall materials and the authored maze layouts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from tank_battle.core.arena import Arena
from tank_battle.core.geometry import Rect


@dataclass
class GameRules:
    """Configuration options for the simulation."""

    width: int = 800
    height: int = 600
    tile_size: int = 40
    tank_size: int = 32
    bullet_size: int = 8
    tank_speed: int = 2
    bullet_speed: int = 5
    max_player_bullets: int = 3
    fire_cooldown: int = 30  # frames
    explosion_frames: int = 8
    explosion_size: int = 40
    enemy_move_chance: float = 0.02
    enemy_fire_chance: float = 0.01
    base_enemy_count: int = 3
    max_enemy_count: int = 8
    max_level: int = 5
    starting_lives: int = 3
    score_per_kill: int = 100
    destructible_bricks: bool = True
    seed: Optional[int] = None

    def enemy_count(self, level_number: int) -> int:
        return min(self.base_enemy_count + level_number, self.max_enemy_count)


class LayoutError(ValueError):
    """Raised when an authored tile grid cannot be turned into walls."""


class WallMaterial(Enum):
    """Tile codes used by the authored layouts."""

    BRICK = 1
    STEEL = 2
    GRASS = 3
    WATER = 4

    @property
    def blocks_tanks(self) -> bool:
        return self is not WallMaterial.GRASS

    @property
    def blocks_bullets(self) -> bool:
        return self in (WallMaterial.BRICK, WallMaterial.STEEL)

    @property
    def destroyable(self) -> bool:
        return self is WallMaterial.BRICK


@dataclass(frozen=True)
class Wall:
    """A single placed tile."""

    x: float
    y: float
    material: WallMaterial
    size: int = 40

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.size, self.size)


# 0 = empty, otherwise a WallMaterial code.
LEVEL_ONE: Tuple[Tuple[int, ...], ...] = (
    (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
    (1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1),
    (1, 0, 1, 1, 0, 1, 1, 0, 1, 1, 1, 1, 0, 1, 1, 0, 1, 1, 0, 1),
    (1, 0, 3, 3, 0, 3, 3, 0, 3, 3, 3, 3, 0, 3, 3, 0, 3, 3, 0, 1),
    (1, 0, 1, 1, 0, 1, 1, 0, 1, 1, 1, 1, 0, 1, 1, 0, 1, 1, 0, 1),
    (1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1),
    (1, 0, 1, 1, 0, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 0, 1, 1, 0, 1),
    (1, 0, 3, 3, 0, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 0, 3, 3, 0, 1),
    (1, 0, 1, 1, 0, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 0, 1, 1, 0, 1),
    (1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1),
    (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
    (1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1),
    (1, 0, 1, 1, 0, 1, 1, 0, 1, 1, 1, 1, 0, 1, 1, 0, 1, 1, 0, 1),
    (1, 0, 3, 3, 0, 3, 3, 0, 3, 3, 3, 3, 0, 3, 3, 0, 3, 3, 0, 1),
    (1, 0, 1, 1, 0, 1, 1, 0, 1, 1, 1, 1, 0, 1, 1, 0, 1, 1, 0, 1),
    (1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1),
    (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
)

LEVEL_LAYOUTS: Tuple[Tuple[Tuple[int, ...], ...], ...] = (LEVEL_ONE,)


def layout_for_level(level_number: int) -> Tuple[Tuple[int, ...], ...]:
    """Return the authored grid for a level, falling back to the first one."""

    if 1 <= level_number <= len(LEVEL_LAYOUTS):
        return LEVEL_LAYOUTS[level_number - 1]
    return LEVEL_LAYOUTS[0]


_GLYPHS = {
    WallMaterial.BRICK: "#",
    WallMaterial.STEEL: "=",
    WallMaterial.GRASS: '"',
    WallMaterial.WATER: "~",
}


class World:
    """The walls of one level plus playfield bounds queries."""

    def __init__(self, rules: Optional[GameRules] = None) -> None:
        self.rules = rules or GameRules()
        self.width = self.rules.width
        self.height = self.rules.height
        self.walls: Arena[Wall] = Arena()

    @classmethod
    def from_layout(
        cls, grid: Sequence[Sequence[int]], rules: Optional[GameRules] = None
    ) -> World:
        world = cls(rules)
        tile = world.rules.tile_size
        if not grid:
            raise LayoutError("layout has no rows")
        columns = len(grid[0])
        for row_idx, row in enumerate(grid):
            if len(row) != columns:
                raise LayoutError(
                    f"row {row_idx} has {len(row)} tiles, expected {columns}"
                )
            for col_idx, code in enumerate(row):
                if code == 0:
                    continue
                try:
                    material = WallMaterial(code)
                except ValueError:
                    raise LayoutError(
                        f"unknown tile code {code!r} at row {row_idx}, column {col_idx}"
                    ) from None
                world.walls.add(Wall(col_idx * tile, row_idx * tile, material, tile))
        return world

    # ------------------------------------------------------------------
    # Queries
    def in_bounds(self, rect: Rect) -> bool:
        return rect.within(self.width, self.height)

    def blocks_tank(self, rect: Rect) -> bool:
        for wall in self.walls:
            if wall.material.blocks_tanks and wall.rect.overlaps(rect):
                return True
        return False

    def bullet_hits(self, rect: Rect) -> List[Tuple[int, Wall]]:
        return [
            (wall_id, wall)
            for wall_id, wall in self.walls.items()
            if wall.material.blocks_bullets and wall.rect.overlaps(rect)
        ]

    def remove_wall(self, wall_id: int) -> bool:
        return self.walls.discard(wall_id)

    def count(self, material: WallMaterial) -> int:
        return sum(1 for wall in self.walls if wall.material is material)

    # ------------------------------------------------------------------
    # Utilities
    def iter_rows(self) -> Iterable[str]:
        tile = self.rules.tile_size
        columns = self.width // tile
        rows = self.height // tile
        grid = [[" " for _ in range(columns)] for _ in range(rows)]
        for wall in self.walls:
            col = int(wall.x // tile)
            row = int(wall.y // tile)
            if 0 <= row < rows and 0 <= col < columns:
                grid[row][col] = _GLYPHS[wall.material]
        for row_chars in grid:
            yield "".join(row_chars)


__all__ = [
    "GameRules",
    "LEVEL_LAYOUTS",
    "LayoutError",
    "Wall",
    "WallMaterial",
    "World",
    "layout_for_level",
]
