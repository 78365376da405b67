"""Pygame front-end for Tank Battle."""

from tank_battle.pygame.app import PygameTankBattle, run_pygame

__all__ = ["PygameTankBattle", "run_pygame"]
