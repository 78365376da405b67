"""Core game logic for Tank Battle, independent of rendering."""

from tank_battle.core.clock import FixedStepClock, run_frames
from tank_battle.core.entities import Bullet, Explosion, Owner
from tank_battle.core.game import FrameReport, Game
from tank_battle.core.geometry import Direction, Rect, overlaps
from tank_battle.core.input import IDLE, InputSnapshot
from tank_battle.core.level import Level, build_level
from tank_battle.core.savegame import SaveData, load_save_data, store_save_data
from tank_battle.core.session import GameSession, Phase, SoundCue
from tank_battle.core.tank import Tank
from tank_battle.core.world import (
    GameRules,
    LayoutError,
    Wall,
    WallMaterial,
    World,
)

__all__ = [
    "Bullet",
    "Direction",
    "Explosion",
    "FixedStepClock",
    "FrameReport",
    "Game",
    "GameRules",
    "GameSession",
    "IDLE",
    "InputSnapshot",
    "LayoutError",
    "Level",
    "Owner",
    "Phase",
    "Rect",
    "SaveData",
    "SoundCue",
    "Tank",
    "Wall",
    "WallMaterial",
    "World",
    "build_level",
    "load_save_data",
    "overlaps",
    "run_frames",
    "store_save_data",
]
