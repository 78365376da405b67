"""Pygame-powered presentation layer for Tank Battle."""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import List, Optional

import pygame

from tank_battle.core.clock import FixedStepClock
from tank_battle.core.savegame import SaveData, load_save_data, store_save_data
from tank_battle.core.session import GameSession, Phase
from tank_battle.core.world import GameRules
from tank_battle.pygame.config import UserSettings, load_user_settings, save_user_settings
from tank_battle.pygame.display import DisplayManager
from tank_battle.pygame.input import InputHandler
from tank_battle.pygame.keybindings import KeybindingManager
from tank_battle.pygame.menu_controller import MenuController, MenuDefinition, MenuOption
from tank_battle.pygame.menus import draw_hud, draw_menu_overlay
from tank_battle.pygame.renderer import draw_world
from tank_battle.pygame.soundscape import Soundscape

logger = logging.getLogger(__name__)

HUD_HEIGHT = 80

# Menu shown for each non-playing phase.
PHASE_MENUS = {
    Phase.START: "start_menu",
    Phase.LEVEL_SELECT: "level_select",
    Phase.SETTINGS: "settings_menu",
    Phase.PAUSED: "pause_menu",
    Phase.GAME_OVER: "game_over_menu",
}


class PygameTankBattle:
    """Graphical Tank Battle client built on top of the core session."""

    def __init__(
        self,
        rules: Optional[GameRules] = None,
        seed: Optional[int] = None,
        save_data: Optional[SaveData] = None,
        start_in_menu: bool = True,
        debug: bool = False,
    ) -> None:
        pygame.init()
        pygame.font.init()

        self.debug = debug
        self.rules = rules or GameRules(seed=seed)

        self._user_settings: UserSettings = load_user_settings()
        self.show_touch_controls = self._user_settings.show_touch_controls

        self.display = DisplayManager(
            playfield_size=(self.rules.width, self.rules.height),
            hud_height=HUD_HEIGHT,
            caption="Tank Battle",
            scale=self._user_settings.scale,
        )

        self.font_small = pygame.font.SysFont("consolas", 16)
        self.font_regular = pygame.font.SysFont("consolas", 20)
        self.font_large = pygame.font.SysFont(None, 56)
        self.playfield_color = pygame.Color(0, 0, 0)

        self.clock = pygame.time.Clock()
        self.tick_clock = FixedStepClock(1 / 60)
        self.running = True
        self.message: Optional[str] = None

        rng = random.Random(seed if seed is not None else self.rules.seed)
        self.session = GameSession(
            self.rules,
            save_data if save_data is not None else load_save_data(),
            rng=rng,
            persist=self._persist_progress,
        )
        self._pending_sound = self.session.sound_enabled

        self.keybindings = KeybindingManager()
        self.keybindings.load_from_config(self._user_settings.keybindings)

        self._audio_path = Path(__file__).resolve().parent / "assets" / "audio"
        self.soundscape = Soundscape(self._audio_path, enabled=self.session.sound_enabled)
        for category, value in self._user_settings.volume.items():
            self.soundscape.set_volume(category, value)
        self._register_audio_banks()
        self.message = self.soundscape.status_message

        self.input = InputHandler(self)
        self.menu = MenuController(title="Tank Battle")
        self.settings_sound_option_index = 0
        self.settings_scale_option_index = 1
        self._register_menus()
        self._menu_phase: Optional[Phase] = None

        if not start_in_menu:
            self.session.start_game()
            self._debug_level_summary()
        self._sync_menu()
        self._save_user_settings()

    # ------------------------------------------------------------------
    @property
    def screen(self) -> pygame.Surface:
        return self.display.screen

    @property
    def state(self) -> str:
        """Name of the active menu, or ``"playing"`` while the game runs."""
        return self.menu.state or "playing"

    # ------------------------------------------------------------------
    def _persist_progress(self, data: SaveData) -> None:
        store_save_data(data)
        self._debug(f"Progress saved: level={data.current_level} score={data.score}")

    def _save_user_settings(self) -> None:
        self._user_settings = UserSettings(
            scale=self.display.scale,
            show_touch_controls=self.show_touch_controls,
            keybindings=self.keybindings.to_config(),
            volume=self.soundscape.volumes(),
        )
        save_user_settings(self._user_settings)

    def _debug(self, message: str) -> None:
        if self.debug:
            logger.debug("%s", message)

    def _debug_level_summary(self) -> None:
        if not self.debug or self.session.game is None:
            return
        game = self.session.game
        self._debug(
            f"Level {game.level_number} loaded: enemies={len(game.enemies)}, walls={len(game.world.walls)}"
        )
        for row in game.render().splitlines():
            self._debug(f"  {row}")

    def _play_ui_sound(self, key: str) -> None:
        self.soundscape.play(key)

    def _register_audio_banks(self) -> None:
        banks = [
            ("shoot", "effects/shoot.wav", "effects"),
            ("explode", "effects/explode.wav", "effects"),
            ("levelUp", "effects/level_up.wav", "effects"),
            ("gameOver", "effects/game_over.wav", "effects"),
            ("menu_move", "ui/menu_move.wav", "ui"),
            ("menu_select", "ui/menu_select.wav", "ui"),
        ]
        for key, filename, category in banks:
            self.soundscape.load(key, filename, category=category)

    def _play_sound_cues(self) -> None:
        for cue in self.session.drain_sound_cues():
            self.soundscape.play(cue)

    # ------------------------------------------------------------------
    # Menus
    def _register_menus(self) -> None:
        self.menu.register(
            "start_menu",
            MenuDefinition(
                title=lambda: "Tank Battle",
                build_options=lambda: [
                    MenuOption("Start Game", self._action_start_game),
                    MenuOption("Level Select", self._action_open_level_select),
                    MenuOption("Settings", self._action_open_settings),
                    MenuOption("Exit Game", self._action_exit_game),
                ],
                default_message=lambda: "Use Up/Down and Enter to choose.",
            ),
        )
        self.menu.register(
            "level_select",
            MenuDefinition(
                title=lambda: "Level Select",
                build_options=self._build_level_select_options,
                default_message=lambda: "Locked levels open once you have scored.",
            ),
        )
        self.menu.register(
            "settings_menu",
            MenuDefinition(
                title=lambda: "Settings",
                build_options=self._build_settings_menu_options,
                default_message=lambda: "Changes to sound apply when saved.",
            ),
        )
        self.menu.register(
            "keybind_menu",
            MenuDefinition(
                title=lambda: "Key Bindings",
                build_options=self._build_keybinding_menu_options,
                default_message=self.keybindings.menu_message,
            ),
        )
        self.menu.register(
            "pause_menu",
            MenuDefinition(
                title=lambda: "Paused",
                build_options=lambda: [
                    MenuOption("Resume Game", self._action_resume_game),
                    MenuOption("Restart Game", self._action_restart_game),
                    MenuOption("Quit to Start Menu", self._action_quit_to_start),
                ],
                default_message=lambda: f"Level {self.session.current_level}  Score {self.session.score}",
            ),
        )
        self.menu.register(
            "game_over_menu",
            MenuDefinition(
                title=lambda: self.session.outcome_label,
                build_options=lambda: [
                    MenuOption("Play Again", self._action_restart_game),
                    MenuOption("Return to Start Menu", self._action_quit_to_start),
                ],
                default_message=lambda: f"Final score: {self.session.score}",
            ),
        )

    def _build_level_select_options(self) -> List[MenuOption]:
        options: List[MenuOption] = []
        for number in range(1, self.rules.max_level + 1):
            unlocked = self.session.is_level_unlocked(number)
            label = f"Level {number}" if unlocked else f"Level {number} (locked)"
            options.append(
                MenuOption(label, lambda n=number: self._action_start_at_level(n), enabled=unlocked)
            )
        options.append(MenuOption("Back to Start Menu", self._action_back_to_start))
        return options

    def _build_settings_menu_options(self) -> List[MenuOption]:
        sound_label = "Sound: On" if self._pending_sound else "Sound: Off"
        return [
            MenuOption(sound_label, self._action_toggle_sound),
            MenuOption(self.display.scale_option_label(), self._action_cycle_scale_forward),
            MenuOption(self._touch_option_label(), self._action_toggle_touch_controls),
            MenuOption("Configure Keybindings", self._action_open_keybindings),
            MenuOption("Save Settings", self._action_save_settings),
            MenuOption("Back to Start Menu", self._action_back_to_start),
        ]

    def _build_keybinding_menu_options(self) -> List[MenuOption]:
        entries = self.keybindings.build_menu_options(
            self._select_binding,
            self._action_reset_keybindings,
            self._action_keybindings_back,
        )
        return [MenuOption(label, action) for (label, action) in entries]

    def _touch_option_label(self) -> str:
        return "Touch Controls: On" if self.show_touch_controls else "Touch Controls: Off"

    def _sync_menu(self, message: Optional[str] = None) -> None:
        """Show the menu that matches the session phase."""
        phase = self.session.phase
        if phase is self._menu_phase and message is None:
            return
        if phase is not Phase.PLAYING:
            self.input.release_all()
        self._menu_phase = phase
        name = PHASE_MENUS.get(phase)
        if name is None:
            self.menu.close()
            return
        self.menu.activate(name, message=message)

    def _menu_back(self) -> None:
        """Handle Esc inside a menu."""
        state = self.state
        if state == "start_menu":
            self._action_exit_game()
        elif state == "keybind_menu":
            self._action_keybindings_back()
        elif state in {"level_select", "settings_menu"}:
            self._action_back_to_start()
        elif state == "pause_menu":
            self._action_resume_game()
        elif state == "game_over_menu":
            self._action_quit_to_start()

    # ------------------------------------------------------------------
    # Actions
    def _action_start_game(self) -> None:
        if self.session.start_game():
            self.message = None
            self._debug_level_summary()
        self._sync_menu()

    def _action_start_at_level(self, number: int) -> None:
        if self.session.start_at_level(number):
            self.message = None
            self._debug_level_summary()
        self._sync_menu()

    def _action_restart_game(self) -> None:
        if self.session.restart():
            self.message = None
            self._debug_level_summary()
        self._sync_menu()

    def _action_toggle_pause(self) -> None:
        self.session.toggle_pause()
        self._sync_menu()

    def _action_resume_game(self) -> None:
        self.session.resume()
        self._sync_menu()

    def _action_quit_to_start(self) -> None:
        self.session.quit_to_start()
        self._sync_menu()

    def _action_open_level_select(self) -> None:
        self.session.open_level_select()
        self._sync_menu()

    def _action_open_settings(self) -> None:
        if self.session.open_settings():
            self._pending_sound = self.session.sound_enabled
        self._sync_menu()

    def _action_back_to_start(self) -> None:
        self._pending_sound = self.session.sound_enabled
        self.session.back_to_start()
        self._sync_menu()

    def _action_toggle_sound(self) -> None:
        self._pending_sound = not self._pending_sound
        self.menu.update_options()

    def _action_save_settings(self) -> None:
        if self.session.save_settings(self._pending_sound):
            self.soundscape.set_enabled(self.session.sound_enabled)
            self._save_user_settings()
            self._sync_menu(message="Settings saved.")

    def _action_exit_game(self) -> None:
        self.running = False

    def _change_scale(self, direction: int) -> None:
        preset = self.display.change_scale(direction)
        if preset is not None:
            self.menu.set_message(f"Window scale {preset.label}")
        self.menu.update_options()

    def _action_cycle_scale_forward(self) -> None:
        self._change_scale(1)

    def _action_toggle_touch_controls(self) -> None:
        self.show_touch_controls = not self.show_touch_controls
        self.input.touch.release_all()
        self.menu.update_options()

    def _action_open_keybindings(self) -> None:
        self.keybindings.rebinding_target = None
        self.menu.activate("keybind_menu")

    def _action_keybindings_back(self) -> None:
        self.keybindings.rebinding_target = None
        self.menu.activate("settings_menu")
        self.menu.selection = 3

    def _action_reset_keybindings(self) -> None:
        self.menu.set_message(self.keybindings.reset_to_defaults())
        self.menu.update_options()
        self._save_user_settings()

    def _select_binding(self, field: str) -> None:
        self.menu.set_message(self.keybindings.start_rebinding(field))
        self.menu.update_options()

    def _finish_binding(self, key: int) -> None:
        self.menu.set_message(self.keybindings.finish_rebinding(key))
        self.menu.update_options()
        self._save_user_settings()

    def _cancel_binding(self) -> None:
        self.menu.set_message(self.keybindings.cancel_rebinding())
        self.menu.update_options()

    # ------------------------------------------------------------------
    # Game Loop helpers
    def run(self) -> None:
        """Main pygame loop."""

        while self.running:
            dt = self.clock.tick(60) / 1000.0
            self._handle_events()
            self._update(dt)
            self._draw()
        self._save_user_settings()
        pygame.quit()

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            else:
                self.input.process_event(event)

    def _update(self, dt: float) -> None:
        session = self.session
        if session.phase is Phase.PLAYING:
            level_before = session.current_level
            for _ in range(self.tick_clock.advance(dt)):
                session.tick(self.input.snapshot())
                if session.phase is not Phase.PLAYING:
                    break
            if session.current_level != level_before and session.phase is Phase.PLAYING:
                self._debug_level_summary()
        else:
            # Paused or in a menu: the frozen frame stays on screen.
            self.tick_clock.reset()
        self._play_sound_cues()
        self._sync_menu()

    def _draw(self) -> None:
        draw_world(self)
        draw_hud(self)
        draw_menu_overlay(self)
        self.display.present()


def run_pygame(**kwargs: object) -> None:
    """Convenience helper for launching the pygame client."""

    app = PygameTankBattle(**kwargs)
    app.run()


__all__ = ["PygameTankBattle", "run_pygame"]
