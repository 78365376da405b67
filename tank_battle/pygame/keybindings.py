"""Keybinding management for the Tank Battle pygame client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

import pygame


@dataclass
class KeyBindings:
    up: int
    down: int
    left: int
    right: int
    fire: int
    pause: int


class KeybindingManager:
    """Track the rebindable primary keys plus a fixed alternative layout."""

    def __init__(self) -> None:
        self.binding_fields: List[Tuple[str, str]] = [
            ("Move Up", "up"),
            ("Move Down", "down"),
            ("Move Left", "left"),
            ("Move Right", "right"),
            ("Fire", "fire"),
            ("Pause", "pause"),
        ]
        self.default_bindings = KeyBindings(
            up=pygame.K_UP,
            down=pygame.K_DOWN,
            left=pygame.K_LEFT,
            right=pygame.K_RIGHT,
            fire=pygame.K_SPACE,
            pause=pygame.K_ESCAPE,
        )
        # Always active in addition to the primary set; not rebindable.
        self.alternate_bindings = KeyBindings(
            up=pygame.K_w,
            down=pygame.K_s,
            left=pygame.K_a,
            right=pygame.K_d,
            fire=pygame.K_j,
            pause=pygame.K_p,
        )
        self.bindings = KeyBindings(**vars(self.default_bindings))
        self.rebinding_target: Optional[str] = None

    # ------------------------------------------------------------------
    def keys_for(self, field: str) -> Tuple[int, ...]:
        primary = getattr(self.bindings, field)
        alternate = getattr(self.alternate_bindings, field)
        if primary == alternate:
            return (primary,)
        return (primary, alternate)

    def to_config(self) -> Dict[str, int]:
        """Return a serialisable snapshot of the current bindings."""
        return {field: int(getattr(self.bindings, field)) for _, field in self.binding_fields}

    def load_from_config(self, data: Dict[str, int]) -> None:
        """Restore bindings from a persisted configuration."""
        if not isinstance(data, dict):
            return
        values = {}
        for _, field in self.binding_fields:
            raw = data.get(field, getattr(self.default_bindings, field))
            try:
                values[field] = int(raw)
            except (TypeError, ValueError):
                values[field] = getattr(self.default_bindings, field)
        candidate = KeyBindings(**values)
        for field, key in values.items():
            if self._conflicting_action(key, field, candidate) is not None:
                return
        self.bindings = candidate

    # ------------------------------------------------------------------
    def format_key(self, key: int) -> str:
        name = pygame.key.name(key)
        return name.upper()

    def start_rebinding(self, field: str) -> str:
        self.rebinding_target = field
        return f"Press a key for {self._field_label(field)} (Esc to cancel)"

    def finish_rebinding(self, key: int) -> str:
        if self.rebinding_target is None:
            return "Select an action to rebind."
        field = self.rebinding_target
        label = self._field_label(field)
        if key == getattr(self.bindings, field):
            self.rebinding_target = None
            return f"{label} remains bound to {self.format_key(key)}"
        other_label = self._conflicting_action(key, field, self.bindings)
        if other_label is not None:
            return (
                f"{self.format_key(key)} already bound to {other_label}. "
                "Choose another key or press Esc to cancel."
            )
        setattr(self.bindings, field, key)
        self.rebinding_target = None
        return f"{label} bound to {self.format_key(key)}"

    def cancel_rebinding(self) -> str:
        self.rebinding_target = None
        return "Rebinding cancelled."

    def reset_to_defaults(self) -> str:
        self.bindings = KeyBindings(**vars(self.default_bindings))
        self.rebinding_target = None
        return "Key bindings reset to defaults."

    def build_menu_options(
        self,
        select_field: Callable[[str], None],
        reset_callback: Callable[[], None],
        back_callback: Callable[[], None],
    ) -> List[Tuple[str, Callable[[], None]]]:
        options: List[Tuple[str, Callable[[], None]]] = []
        for label, field in self.binding_fields:
            key_code = getattr(self.bindings, field)
            options.append(
                (
                    f"{label}: {self.format_key(key_code)}",
                    lambda f=field: select_field(f),
                )
            )
        options.append(("Reset to Defaults", reset_callback))
        options.append(("Back to Settings", back_callback))
        return options

    def menu_message(self) -> str:
        if self.rebinding_target is None:
            return "Select an action to rebind. WASD, J and P always work too."
        return f"Press a key for {self._field_label(self.rebinding_target)} (Esc to cancel)"

    # ------------------------------------------------------------------
    def _field_label(self, field: str) -> str:
        for label, attr in self.binding_fields:
            if attr == field:
                return label
        return field

    def _conflicting_action(
        self, key: int, field: str, bindings: KeyBindings
    ) -> Optional[str]:
        """Label of another action already triggered by ``key``, if any."""
        for label, other_field in self.binding_fields:
            if other_field == field:
                continue
            if key in (
                getattr(bindings, other_field),
                getattr(self.alternate_bindings, other_field),
            ):
                return label
        return None


__all__ = ["KeyBindings", "KeybindingManager"]
