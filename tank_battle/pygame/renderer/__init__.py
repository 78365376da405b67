"""Rendering helpers for the pygame front-end."""

from tank_battle.pygame.renderer.scene import (
    TANK_COLORS,
    WALL_COLORS,
    draw_background,
    draw_bullets,
    draw_explosions,
    draw_tanks,
    draw_walls,
    draw_world,
    explosion_color,
)

__all__ = [
    "TANK_COLORS",
    "WALL_COLORS",
    "draw_background",
    "draw_bullets",
    "draw_explosions",
    "draw_tanks",
    "draw_walls",
    "draw_world",
    "explosion_color",
]
