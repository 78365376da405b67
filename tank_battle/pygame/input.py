"""Input handling for the pygame client."""

from __future__ import annotations

from typing import Dict, Hashable, Optional, Tuple

import pygame

from tank_battle.core.input import IDLE, InputSnapshot
from tank_battle.core.session import Phase
from tank_battle.pygame.keybindings import KeyBindings

MENU_STATES = {
    "start_menu",
    "level_select",
    "settings_menu",
    "keybind_menu",
    "pause_menu",
    "game_over_menu",
}


class TouchControls:
    """On-screen direction pad and fire button laid out inside the HUD panel."""

    BUTTON_NAMES = ("up", "down", "left", "right", "fire")

    def __init__(self, hud_rect: pygame.Rect, *, button_size: int = 24) -> None:
        self.hud_rect = pygame.Rect(hud_rect)
        self.button_size = button_size
        self.buttons: Dict[str, pygame.Rect] = self._layout()
        self.held: Dict[str, bool] = {name: False for name in self.BUTTON_NAMES}
        self._pointers: Dict[Hashable, str] = {}

    def _layout(self) -> Dict[str, pygame.Rect]:
        size = self.button_size
        gap = 2
        left = self.hud_rect.left + 16
        top = self.hud_rect.top + max(2, (self.hud_rect.height - size * 3 - gap * 2) // 2)
        pad = {
            "up": pygame.Rect(left + size + gap, top, size, size),
            "left": pygame.Rect(left, top + size + gap, size, size),
            "right": pygame.Rect(left + (size + gap) * 2, top + size + gap, size, size),
            "down": pygame.Rect(left + size + gap, top + (size + gap) * 2, size, size),
        }
        fire_width = size * 3
        fire_height = size * 2
        fire = pygame.Rect(0, 0, fire_width, fire_height)
        fire.right = self.hud_rect.right - 16
        fire.centery = self.hud_rect.centery
        pad["fire"] = fire
        return pad

    # ------------------------------------------------------------------
    def button_at(self, pos: Tuple[int, int]) -> Optional[str]:
        for name, rect in self.buttons.items():
            if rect.collidepoint(pos):
                return name
        return None

    def pointer_down(self, pointer: Hashable, pos: Tuple[int, int]) -> bool:
        name = self.button_at(pos)
        if name is None:
            return False
        self._pointers[pointer] = name
        self.held[name] = True
        return True

    def pointer_up(self, pointer: Hashable) -> None:
        name = self._pointers.pop(pointer, None)
        if name is None:
            return
        if name not in self._pointers.values():
            self.held[name] = False

    def release_all(self) -> None:
        self._pointers.clear()
        for name in self.held:
            self.held[name] = False

    def snapshot(self) -> InputSnapshot:
        return InputSnapshot(
            up=self.held["up"],
            down=self.held["down"],
            left=self.held["left"],
            right=self.held["right"],
            fire=self.held["fire"],
        )


class InputHandler:
    """Translate pygame events into held controls and application actions."""

    def __init__(self, app) -> None:
        self.app = app
        self._held_keys: set[int] = set()
        self.touch = TouchControls(app.display.hud_rect)

    # ------------------------------------------------------------------
    # Event entry point
    def process_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            self._held_keys.add(event.key)
            self._handle_key(event.key)
        elif event.type == pygame.KEYUP:
            self._held_keys.discard(event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._pointer_down("mouse", self.app.display.to_logical(event.pos))
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.touch.pointer_up("mouse")
        elif event.type == pygame.FINGERDOWN:
            pos = self.app.display.finger_to_logical(event.x, event.y)
            self._pointer_down(("finger", event.finger_id), pos)
        elif event.type == pygame.FINGERUP:
            self.touch.pointer_up(("finger", event.finger_id))
        elif event.type == pygame.WINDOWFOCUSLOST:
            self.release_all()

    def snapshot(self) -> InputSnapshot:
        """Return the controls currently held on keyboard and touch pad."""
        if self.app.session.phase is not Phase.PLAYING:
            return IDLE
        bindings = self.app.keybindings
        keyboard = InputSnapshot(
            up=self._held(bindings.keys_for("up")),
            down=self._held(bindings.keys_for("down")),
            left=self._held(bindings.keys_for("left")),
            right=self._held(bindings.keys_for("right")),
            fire=self._held(bindings.keys_for("fire")),
        )
        return keyboard.merge(self.touch.snapshot())

    def release_all(self) -> None:
        self._held_keys.clear()
        self.touch.release_all()

    # ------------------------------------------------------------------
    # Internal helpers
    def _held(self, keys) -> bool:
        return any(key in self._held_keys for key in keys)

    def _pointer_down(self, pointer, pos: Tuple[int, int]) -> None:
        app = self.app
        if app.session.phase is not Phase.PLAYING or not app.show_touch_controls:
            return
        self.touch.pointer_down(pointer, pos)

    def _handle_key(self, key: int) -> None:
        app = self.app
        if app.state == "keybind_menu" and app.keybindings.rebinding_target is not None:
            if key == pygame.K_ESCAPE:
                app._cancel_binding()
            else:
                app._finish_binding(key)
            return

        if app.session.phase in {Phase.PLAYING, Phase.PAUSED}:
            if key in app.keybindings.keys_for("pause"):
                app._action_toggle_pause()
                return

        if app.state in MENU_STATES:
            self._handle_menu_key(key)

    def _handle_menu_key(self, key: int) -> None:
        app = self.app
        if key == pygame.K_ESCAPE:
            app._menu_back()
            return

        if app.state == "settings_menu" and key in {pygame.K_LEFT, pygame.K_RIGHT}:
            delta = -1 if key == pygame.K_LEFT else 1
            if app.menu.selection == app.settings_scale_option_index:
                app._change_scale(delta)
                return
            if app.menu.selection == app.settings_sound_option_index:
                app._action_toggle_sound()
                return

        if not app.menu.options:
            return

        if key in {pygame.K_UP, pygame.K_w}:
            previous = app.menu.selection
            app.menu.change_selection(-1)
            if app.menu.selection != previous:
                app._play_ui_sound("menu_move")
            return
        if key in {pygame.K_DOWN, pygame.K_s}:
            previous = app.menu.selection
            app.menu.change_selection(1)
            if app.menu.selection != previous:
                app._play_ui_sound("menu_move")
            return
        if key in {pygame.K_RETURN, pygame.K_SPACE, pygame.K_KP_ENTER}:
            if app.menu.execute_current():
                app._play_ui_sound("menu_select")


__all__ = ["InputHandler", "KeyBindings", "MENU_STATES", "TouchControls"]
