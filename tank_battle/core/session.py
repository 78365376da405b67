"""Game session management decoupled from rendering concerns."""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable, List, Optional

from tank_battle.core.game import FrameReport, Game
from tank_battle.core.input import InputSnapshot
from tank_battle.core.savegame import SaveData, store_save_data
from tank_battle.core.world import GameRules

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Top-level mode of the session."""

    START = "start"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    LEVEL_SELECT = "level_select"
    SETTINGS = "settings"


class SoundCue:
    SHOOT = "shoot"
    EXPLODE = "explode"
    LEVEL_UP = "levelUp"
    GAME_OVER = "gameOver"


class GameSession:
    """Own the mutable state of a play session: phase, progress and the live game."""

    def __init__(
        self,
        rules: Optional[GameRules] = None,
        save_data: Optional[SaveData] = None,
        *,
        rng: Optional[random.Random] = None,
        persist: Callable[[SaveData], None] = store_save_data,
    ) -> None:
        self.rules = rules or GameRules()
        self._rng = rng or random.Random(self.rules.seed)
        self._persist = persist

        saved = save_data or SaveData()
        self.current_level = max(1, min(self.rules.max_level, saved.current_level))
        self.score = saved.score
        self.lives = saved.lives
        self.sound_enabled = saved.sound_enabled

        self.phase = Phase.START
        self.victory = False
        self.game: Optional[Game] = None
        self.message = "Press Start to play"
        self._sound_cues: List[str] = []

    # ------------------------------------------------------------------
    # Properties
    @property
    def enemies_remaining(self) -> int:
        if self.game is None:
            return 0
        return self.game.enemies_remaining

    @property
    def outcome_label(self) -> str:
        return "Victory!" if self.victory else "Game Over"

    @property
    def is_final_level(self) -> bool:
        return self.current_level >= self.rules.max_level

    def is_level_unlocked(self, number: int) -> bool:
        if not 1 <= number <= self.rules.max_level:
            return False
        return number <= self.current_level or self.score > 0

    def save_data(self) -> SaveData:
        return SaveData(
            current_level=self.current_level,
            score=self.score,
            lives=self.lives,
            sound_enabled=self.sound_enabled,
        )

    def drain_sound_cues(self) -> List[str]:
        cues = self._sound_cues
        self._sound_cues = []
        return cues

    # ------------------------------------------------------------------
    # Phase transitions
    def start_game(self) -> bool:
        if self.phase not in {Phase.START, Phase.PAUSED, Phase.GAME_OVER}:
            return False
        self._begin(1)
        return True

    def restart(self) -> bool:
        if self.phase not in {Phase.PAUSED, Phase.GAME_OVER}:
            return False
        return self.start_game()

    def start_at_level(self, number: int) -> bool:
        if not 1 <= number <= self.rules.max_level:
            raise ValueError(
                f"level must be between 1 and {self.rules.max_level}, got {number}"
            )
        if self.phase is not Phase.LEVEL_SELECT or not self.is_level_unlocked(number):
            return False
        self._begin(number)
        return True

    def pause(self) -> bool:
        if self.phase is not Phase.PLAYING:
            return False
        self.phase = Phase.PAUSED
        self.message = "Paused"
        return True

    def resume(self) -> bool:
        if self.phase is not Phase.PAUSED:
            return False
        self.phase = Phase.PLAYING
        self.message = f"Level {self.current_level}"
        return True

    def toggle_pause(self) -> bool:
        if self.phase is Phase.PLAYING:
            return self.pause()
        return self.resume()

    def quit_to_start(self) -> bool:
        if self.phase not in {Phase.PAUSED, Phase.GAME_OVER}:
            return False
        self.phase = Phase.START
        self.message = "Press Start to play"
        return True

    def acknowledge_game_over(self) -> bool:
        if self.phase is not Phase.GAME_OVER:
            return False
        return self.quit_to_start()

    def open_level_select(self) -> bool:
        if self.phase is not Phase.START:
            return False
        self.phase = Phase.LEVEL_SELECT
        return True

    def open_settings(self) -> bool:
        if self.phase is not Phase.START:
            return False
        self.phase = Phase.SETTINGS
        return True

    def back_to_start(self) -> bool:
        if self.phase not in {Phase.LEVEL_SELECT, Phase.SETTINGS}:
            return False
        self.phase = Phase.START
        return True

    def save_settings(self, sound_enabled: bool) -> bool:
        if self.phase is not Phase.SETTINGS:
            return False
        self.sound_enabled = sound_enabled
        self._persist(self.save_data())
        self.phase = Phase.START
        return True

    # ------------------------------------------------------------------
    # Simulation
    def tick(self, controls: InputSnapshot) -> Optional[FrameReport]:
        if self.phase is not Phase.PLAYING or self.game is None:
            return None
        report = self.game.step(controls)

        self._sound_cues.extend([SoundCue.SHOOT] * report.shots_fired)
        if report.enemies_destroyed:
            self.score += report.enemies_destroyed * self.rules.score_per_kill
            self._sound_cues.extend([SoundCue.EXPLODE] * report.enemies_destroyed)
        if report.player_destroyed:
            self.lives = max(0, self.lives - 1)
            self._sound_cues.append(SoundCue.EXPLODE)
            if self.lives > 0:
                self.game.respawn_player()
                self.message = f"Tank lost! {self.lives} lives left"

        # Losing the last life outranks clearing the level in the same frame.
        if self.lives <= 0:
            self._game_over(victory=False)
        elif self.game.enemies_remaining == 0:
            self._advance_level(self.game)
        return report

    # ------------------------------------------------------------------
    # Internal helpers
    def _begin(self, number: int) -> None:
        self.score = 0
        self.lives = self.rules.starting_lives
        self.victory = False
        self.current_level = number
        self.game = Game(number, self.rules, self._rng)
        self.phase = Phase.PLAYING
        self.message = f"Level {number}"
        logger.info(
            "Level %d loaded with %d enemies", number, self.game.enemies_remaining
        )

    def _advance_level(self, game: Game) -> None:
        if self.is_final_level:
            self._game_over(victory=True)
            return
        self.current_level += 1
        game.load_level(self.current_level)
        self._sound_cues.append(SoundCue.LEVEL_UP)
        self.message = f"Level {self.current_level}"
        logger.info(
            "Advanced to level %d with %d enemies",
            self.current_level,
            game.enemies_remaining,
        )

    def _game_over(self, *, victory: bool) -> None:
        self.phase = Phase.GAME_OVER
        self.victory = victory
        self.message = f"{self.outcome_label} Final score: {self.score}"
        self._sound_cues.append(SoundCue.GAME_OVER)
        logger.info(
            "Game over (%s) on level %d with score %d",
            "victory" if victory else "defeat",
            self.current_level,
            self.score,
        )
        self._persist(self.save_data())


__all__ = ["GameSession", "Phase", "SoundCue"]
