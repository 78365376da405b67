"""Persistent configuration helpers for the pygame client."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

_SETTINGS_PATH = Path(__file__).resolve().parent / "user_settings.json"


@dataclass
class UserSettings:
    """Front-end preferences that are not part of the game progress blob."""

    scale: float = 1.0
    show_touch_controls: bool = True
    keybindings: Dict[str, int] = field(default_factory=dict)
    volume: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> UserSettings:
        settings = cls()
        scale = data.get("scale")
        if isinstance(scale, (int, float)) and not isinstance(scale, bool) and 0.5 <= scale <= 3.0:
            settings.scale = float(scale)
        touch = data.get("show_touch_controls")
        if isinstance(touch, bool):
            settings.show_touch_controls = touch
        bindings = data.get("keybindings")
        if isinstance(bindings, dict):
            settings.keybindings = {
                str(name): int(key)
                for name, key in bindings.items()
                if isinstance(key, int) and not isinstance(key, bool)
            }
        volume = data.get("volume")
        if isinstance(volume, dict):
            settings.volume = {
                str(category): max(0.0, min(1.0, float(value)))
                for category, value in volume.items()
                if isinstance(value, (int, float)) and not isinstance(value, bool)
            }
        return settings

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scale": float(self.scale),
            "show_touch_controls": bool(self.show_touch_controls),
            "keybindings": dict(self.keybindings),
            "volume": dict(self.volume),
        }


def load_user_settings() -> UserSettings:
    """Load persisted user settings from disk."""
    try:
        with _SETTINGS_PATH.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError:
        return UserSettings()
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable settings at %s: %s", _SETTINGS_PATH, exc)
        return UserSettings()
    if not isinstance(data, dict):
        return UserSettings()
    return UserSettings.from_dict(data)


def save_user_settings(settings: UserSettings) -> None:
    """Persist user settings to disk, ignoring filesystem errors."""
    try:
        _SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
        with _SETTINGS_PATH.open("w", encoding="utf-8") as handle:
            json.dump(settings.to_dict(), handle, indent=2, sort_keys=True)
    except OSError as exc:
        logger.warning("Could not write settings to %s: %s", _SETTINGS_PATH, exc)


__all__ = ["UserSettings", "load_user_settings", "save_user_settings"]
