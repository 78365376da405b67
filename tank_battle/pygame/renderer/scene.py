"""Rendering helpers for the Tank Battle pygame client."""

from __future__ import annotations

from typing import Dict, Optional

import pygame

from tank_battle.core.entities import Owner
from tank_battle.core.game import Game
from tank_battle.core.geometry import Direction
from tank_battle.core.tank import Tank
from tank_battle.core.world import WallMaterial

WALL_COLORS: Dict[WallMaterial, pygame.Color] = {
    WallMaterial.BRICK: pygame.Color("#8B4513"),
    WallMaterial.STEEL: pygame.Color("#A9A9A9"),
    WallMaterial.GRASS: pygame.Color("#006400"),
    WallMaterial.WATER: pygame.Color("#1E90FF"),
}

TANK_COLORS: Dict[Owner, pygame.Color] = {
    Owner.PLAYER: pygame.Color("#00FF00"),
    Owner.ENEMY: pygame.Color("#FF0000"),
}

BARREL_COLOR = pygame.Color("#FFD700")

# Degrees to rotate an upward-facing sprite so it faces each direction.
_ROTATION = {
    Direction.UP: 0,
    Direction.LEFT: 90,
    Direction.DOWN: 180,
    Direction.RIGHT: 270,
}


def _scale_color(color: pygame.Color, factor: float) -> pygame.Color:
    return pygame.Color(
        max(0, min(255, int(color.r * factor))),
        max(0, min(255, int(color.g * factor))),
        max(0, min(255, int(color.b * factor))),
    )


def explosion_color(frame: int) -> pygame.Color:
    """Hue cycles ten degrees per frame at full saturation and half lightness."""
    color = pygame.Color(0, 0, 0)
    color.hsla = ((frame * 10) % 360, 100, 50, 100)
    return color


def _current_game(app) -> Optional[Game]:
    return app.session.game


def draw_background(app) -> None:
    surface = app.screen
    playfield = pygame.Rect(0, 0, app.rules.width, app.rules.height)
    surface.fill(pygame.Color("black"))
    pygame.draw.rect(surface, app.playfield_color, playfield)


def draw_walls(app) -> None:
    game = _current_game(app)
    if game is None:
        return
    surface = app.screen
    for wall in game.world.walls:
        color = WALL_COLORS[wall.material]
        rect = pygame.Rect(int(wall.x), int(wall.y), wall.size, wall.size)
        pygame.draw.rect(surface, color, rect)
        if wall.material is WallMaterial.BRICK:
            # Mortar lines so adjacent bricks read as separate blocks.
            mortar = _scale_color(color, 0.6)
            pygame.draw.line(surface, mortar, (rect.left, rect.centery), (rect.right - 1, rect.centery))
            pygame.draw.rect(surface, mortar, rect, width=1)
        elif wall.material is WallMaterial.STEEL:
            pygame.draw.rect(surface, _scale_color(color, 1.3), rect.inflate(-12, -12))


def _tank_sprite(tank: Tank) -> pygame.Surface:
    size = tank.size
    sprite = pygame.Surface((size, size), pygame.SRCALPHA)
    body = TANK_COLORS[tank.owner]
    pygame.draw.rect(sprite, body, pygame.Rect(0, 0, size, size))

    track = _scale_color(body, 0.55)
    track_width = max(2, size // 6)
    pygame.draw.rect(sprite, track, pygame.Rect(0, 0, track_width, size))
    pygame.draw.rect(sprite, track, pygame.Rect(size - track_width, 0, track_width, size))

    barrel_width = max(2, size // 5)
    barrel = pygame.Rect(0, 0, barrel_width, size // 2)
    barrel.midbottom = (size // 2, size // 2)
    pygame.draw.rect(sprite, BARREL_COLOR, barrel)
    pygame.draw.circle(sprite, _scale_color(body, 0.8), (size // 2, size // 2), size // 5)
    return sprite


def draw_tanks(app) -> None:
    game = _current_game(app)
    if game is None:
        return
    surface = app.screen
    for tank in game.tanks():
        if not tank.alive:
            continue
        sprite = pygame.transform.rotate(_tank_sprite(tank), _ROTATION[tank.direction])
        surface.blit(sprite, (int(tank.x), int(tank.y)))


def draw_bullets(app) -> None:
    game = _current_game(app)
    if game is None:
        return
    surface = app.screen
    for bullet in game.bullets:
        if not bullet.active:
            continue
        rect = pygame.Rect(int(bullet.x), int(bullet.y), bullet.size, bullet.size)
        pygame.draw.rect(surface, TANK_COLORS[bullet.owner], rect)


def draw_explosions(app) -> None:
    game = _current_game(app)
    if game is None:
        return
    surface = app.screen
    for explosion in game.explosions:
        if not explosion.active or explosion.radius <= 0:
            continue
        cx, cy = explosion.center
        pygame.draw.circle(
            surface,
            explosion_color(explosion.frame),
            (int(cx), int(cy)),
            int(explosion.radius),
        )


def draw_world(app) -> None:
    """Draw one complete playfield frame in back-to-front order."""
    draw_background(app)
    draw_walls(app)
    draw_tanks(app)
    draw_bullets(app)
    draw_explosions(app)


__all__ = [
    "WALL_COLORS",
    "TANK_COLORS",
    "draw_background",
    "draw_bullets",
    "draw_explosions",
    "draw_tanks",
    "draw_walls",
    "draw_world",
    "explosion_color",
]
