"""Persisted progress blob: level, score, lives and the sound toggle."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

_SAVE_PATH = Path(__file__).resolve().parent.parent / "savegame.json"


@dataclass
class SaveData:
    """Progress fields that survive between program runs."""

    current_level: int = 1
    score: int = 0
    lives: int = 3
    sound_enabled: bool = True

    @classmethod
    def from_dict(cls, data: Any) -> SaveData:
        """Build from a decoded blob, replacing unusable fields with defaults."""

        defaults = cls()
        if not isinstance(data, dict):
            return defaults
        return cls(
            current_level=_int_field(data, "currentLevel", defaults.current_level, minimum=1),
            score=_int_field(data, "score", defaults.score, minimum=0),
            lives=_int_field(data, "lives", defaults.lives, minimum=0),
            sound_enabled=data.get("soundEnabled") is not False,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentLevel": int(self.current_level),
            "score": int(self.score),
            "lives": int(self.lives),
            "soundEnabled": bool(self.sound_enabled),
        }


def _int_field(data: Dict[str, Any], key: str, default: int, *, minimum: int) -> int:
    value = data.get(key)
    # bool is an int subclass but never a valid counter
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    if value < minimum:
        return default
    return value


def load_save_data() -> SaveData:
    """Load the save blob, falling back to defaults when absent or corrupt."""
    try:
        with _SAVE_PATH.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
    except FileNotFoundError:
        logger.debug("No save data at %s; using defaults", _SAVE_PATH)
        return SaveData()
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable save data at %s: %s", _SAVE_PATH, exc)
        return SaveData()
    return SaveData.from_dict(raw)


def store_save_data(data: SaveData) -> None:
    """Persist the save blob, ignoring filesystem errors."""
    try:
        _SAVE_PATH.parent.mkdir(parents=True, exist_ok=True)
        with _SAVE_PATH.open("w", encoding="utf-8") as handle:
            json.dump(data.to_dict(), handle, indent=2, sort_keys=True)
    except OSError as exc:
        logger.warning("Could not write save data to %s: %s", _SAVE_PATH, exc)


__all__ = ["SaveData", "load_save_data", "store_save_data"]
