"""Per-frame simulation of walls, tanks, bullets and explosions."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional

from tank_battle.core.ai import RandomWalkAI
from tank_battle.core.arena import Arena
from tank_battle.core.entities import Bullet, Explosion, Owner
from tank_battle.core.input import InputSnapshot
from tank_battle.core.level import Level, build_level
from tank_battle.core.tank import Tank
from tank_battle.core.world import GameRules, World


@dataclass
class FrameReport:
    """What happened during one simulated frame."""

    shots_fired: int = 0
    enemies_destroyed: int = 0
    player_destroyed: bool = False
    walls_destroyed: int = 0
    enemies_remaining: int = 0


class Game:
    """Owns one level's entities and advances them a frame at a time."""

    def __init__(
        self,
        level_number: int = 1,
        rules: Optional[GameRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.rules = rules or GameRules()
        self.rng = rng or random.Random(self.rules.seed)
        self.ai = RandomWalkAI(self.rules, self.rng)
        self.load_level(level_number)

    def load_level(self, number: int) -> Level:
        level = build_level(number, self.rules)
        self.level = level
        self.level_number = number
        self.world: World = level.world
        self.enemies: Arena[Tank] = Arena()
        for enemy in level.enemies:
            self.enemies.add(enemy)
        self.bullets: Arena[Bullet] = Arena()
        self.explosions: Arena[Explosion] = Arena()
        self.player = self._spawn_player()
        self.respawn_pending = False
        self.enemies_remaining = len(self.enemies)
        return level

    def _spawn_player(self) -> Tank:
        x, y = self.level.player_spawn
        return Tank.spawn(x, y, Owner.PLAYER, self.rules)

    def respawn_player(self) -> Optional[Tank]:
        """Place a fresh player tank at the spawn, or wait until the spawn is clear."""
        candidate = self._spawn_player()
        for enemy in self.enemies:
            if enemy.alive and enemy.rect.overlaps(candidate.rect):
                self.respawn_pending = True
                return None
        self.respawn_pending = False
        self.player = candidate
        return self.player

    def tanks(self) -> List[Tank]:
        return [*self.enemies, self.player]

    def active_player_bullets(self) -> int:
        return sum(1 for bullet in self.bullets if bullet.active and bullet.owner is Owner.PLAYER)

    # Simulation ----------------------------------------------------------------
    def step(self, controls: InputSnapshot) -> FrameReport:
        report = FrameReport()
        if self.respawn_pending:
            self.respawn_player()
        tanks = self.tanks()

        self._apply_input(controls, tanks, report)
        self.player.tick()

        for enemy in self.enemies:
            enemy.tick()
            bullet = self.ai.act(enemy, self.world, tanks)
            if bullet is not None:
                self.bullets.add(bullet)
                report.shots_fired += 1

        for bullet in self.bullets:
            bullet.advance(self.rules)
        for explosion in self.explosions:
            explosion.advance()

        self.bullets.retain(lambda b: b.active)
        self.explosions.retain(lambda e: e.active)
        self.enemies.retain(lambda t: t.alive)

        self._resolve_collisions(report)

        self.enemies_remaining = sum(1 for enemy in self.enemies if enemy.alive)
        report.enemies_remaining = self.enemies_remaining
        return report

    def _apply_input(
        self, controls: InputSnapshot, tanks: List[Tank], report: FrameReport
    ) -> None:
        player = self.player
        vertical = controls.vertical()
        if vertical is not None:
            player.move(vertical, self.world, tanks)
        horizontal = controls.horizontal()
        if horizontal is not None:
            player.move(horizontal, self.world, tanks)

        if controls.fire and self.active_player_bullets() < self.rules.max_player_bullets:
            bullet = player.shoot(self.rules)
            if bullet is not None:
                self.bullets.add(bullet)
                report.shots_fired += 1

    def _resolve_collisions(self, report: FrameReport) -> None:
        for bullet in self.bullets:
            if not bullet.active:
                continue
            wall_hits = self.world.bullet_hits(bullet.rect)
            if wall_hits:
                bullet.destroy()
                if self.rules.destructible_bricks:
                    for wall_id, wall in wall_hits:
                        if wall.material.destroyable and self.world.remove_wall(wall_id):
                            report.walls_destroyed += 1
                continue

            if bullet.owner is Owner.PLAYER:
                for enemy in self.enemies:
                    if enemy.alive and bullet.rect.overlaps(enemy.rect):
                        self._destroy_tank(enemy, bullet)
                        report.enemies_destroyed += 1
                        break
            elif self.player.alive and bullet.rect.overlaps(self.player.rect):
                self._destroy_tank(self.player, bullet)
                report.player_destroyed = True

    def _destroy_tank(self, tank: Tank, bullet: Bullet) -> None:
        bullet.destroy()
        tank.destroy()
        self.explosions.add(Explosion.centered_on(tank.rect, self.rules))

    # Rendering -----------------------------------------------------------------
    def render(self) -> str:
        """ASCII snapshot of the playfield, one character per tile."""

        tile = self.rules.tile_size
        grid = [list(row) for row in self.world.iter_rows()]

        def mark(x: float, y: float, glyph: str) -> None:
            col = int(x // tile)
            row = int(y // tile)
            if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
                grid[row][col] = glyph

        for enemy in self.enemies:
            if enemy.alive:
                mark(*enemy.rect.center, "E")
        if self.player.alive:
            mark(*self.player.rect.center, "P")
        for bullet in self.bullets:
            if bullet.active:
                mark(*bullet.rect.center, "*")
        return "\n".join("".join(row) for row in grid)


__all__ = ["FrameReport", "Game"]
