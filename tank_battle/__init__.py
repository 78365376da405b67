"""Top-level package for the Tank Battle maze shooter."""

__version__ = "1.0.0"

from tank_battle.core import (
    Game,
    GameRules,
    GameSession,
    InputSnapshot,
    Phase,
    Tank,
    World,
)

__all__ = [
    "Game",
    "GameRules",
    "GameSession",
    "InputSnapshot",
    "Phase",
    "Tank",
    "World",
]

__all__.append("__version__")
