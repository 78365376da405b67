"""Soundscape helpers wrapping pygame.mixer with category-aware playback."""

from __future__ import annotations

import logging
import math
import os
from array import array
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pygame

logger = logging.getLogger(__name__)


class Soundscape:
    """Mixer facade that groups sounds by category and honours a mute flag."""

    def __init__(
        self,
        base_path: Path,
        *,
        enabled: bool = True,
        frequency: int = 44_100,
        size: int = -16,
        channels: int = 2,
        buffer: int = 512,
    ) -> None:
        self.base_path = Path(base_path)
        self.enabled = enabled
        self._mixer_ready = False
        self._registry: Dict[str, pygame.mixer.Sound] = {}
        self._categories: Dict[str, str] = {}
        self._pending: Dict[str, Tuple[str, str]] = {}
        self._volumes: Dict[str, float] = {
            "master": 1.0,
            "effects": 1.0,
            "ui": 0.8,
        }
        self._missing_assets_reported: set[str] = set()
        self._status_message: Optional[str] = None
        self._active_driver: Optional[str] = None
        self._init_params = {
            "frequency": frequency,
            "size": size,
            "channels": channels,
            "buffer": buffer,
        }

        if enabled:
            self._initialise_mixer()

    # ------------------------------------------------------------------
    # Loading & playback
    def load(self, key: str, filename: str, *, category: str = "effects") -> None:
        self._pending[key] = (filename, category)
        self._categories[key] = category
        if self._mixer_ready:
            self._load_sound(key, filename, category)

    def play(self, key: str, *, volume: Optional[float] = None) -> bool:
        """Play ``key`` when sound is enabled. Returns whether playback was attempted."""
        if not self.enabled:
            return False
        logger.debug("Playing sound: %s", key)
        self.ensure_ready()
        if not self._mixer_ready:
            return False
        sound = self._registry.get(key)
        if sound is None:
            return False
        category = self._categories.get(key, "effects")
        vol = self._volumes.get("master", 1.0) * self._volumes.get(category, 1.0)
        if volume is not None:
            vol *= volume
        sound.set_volume(max(0.0, min(1.0, vol)))
        sound.play()
        return True

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = bool(enabled)
        if self.enabled:
            self.ensure_ready()
        elif self._mixer_ready:
            pygame.mixer.stop()

    # ------------------------------------------------------------------
    # Volume management
    def set_volume(self, category: str, value: float) -> None:
        self._volumes[category] = max(0.0, min(1.0, value))

    def get_volume(self, category: str) -> float:
        return self._volumes.get(category, 1.0)

    def volumes(self) -> Dict[str, float]:
        return dict(self._volumes)

    # ------------------------------------------------------------------
    def ensure_ready(self) -> None:
        if self._mixer_ready or not self.enabled:
            return
        self._initialise_mixer()

    @property
    def status_message(self) -> Optional[str]:
        return self._status_message

    @property
    def mixer_ready(self) -> bool:
        return self._mixer_ready

    def _load_sound(self, key: str, filename: str, category: str) -> None:
        path = self.base_path / filename
        sound: Optional[pygame.mixer.Sound]
        try:
            sound = pygame.mixer.Sound(path.as_posix()) if path.is_file() else None
        except pygame.error:
            sound = None

        if sound is None:
            sound = self._create_placeholder_sound(key, category)
            if sound is None:
                return
            self._report_missing_asset(filename)
        self._registry[key] = sound

    def _initialise_mixer(self) -> None:
        original_driver = os.environ.get("SDL_AUDIODRIVER")
        last_error: Optional[str] = None

        for driver in self._candidate_drivers(original_driver):
            try:
                self._apply_driver_env(driver)
                pygame.mixer.quit()
                pygame.mixer.init(**self._init_params)
            except pygame.error as exc:
                last_error = str(exc)
                continue
            self._mixer_ready = True
            self._active_driver = driver if driver is not None else os.environ.get("SDL_AUDIODRIVER")
            if self._active_driver == "dummy":
                self._set_status_message(
                    "Audio device unavailable; running with SDL 'dummy' driver (no sound output)."
                )
            else:
                self._set_status_message(None)
            break

        self._restore_driver_env(original_driver)

        if not self._mixer_ready:
            self._active_driver = None
            reason = f": {last_error}" if last_error else ""
            self._set_status_message(f"Audio initialisation failed{reason}. Sound remains muted.")
            return

        for key, (filename, category) in self._pending.items():
            self._load_sound(key, filename, category)

    def _candidate_drivers(self, original: Optional[str]) -> List[Optional[str]]:
        if original:
            return [original]
        return [None, "pulse", "pipewire", "alsa", "coreaudio", "directsound", "wasapi", "dummy"]

    def _apply_driver_env(self, driver: Optional[str]) -> None:
        if driver is None:
            os.environ.pop("SDL_AUDIODRIVER", None)
        else:
            os.environ["SDL_AUDIODRIVER"] = driver

    def _restore_driver_env(self, original: Optional[str]) -> None:
        if original is None:
            os.environ.pop("SDL_AUDIODRIVER", None)
        else:
            os.environ["SDL_AUDIODRIVER"] = original

    def _set_status_message(self, message: Optional[str]) -> None:
        if message and message != self._status_message:
            logger.warning("%s", message)
        self._status_message = message

    def _report_missing_asset(self, filename: str) -> None:
        if filename in self._missing_assets_reported:
            return
        self._missing_assets_reported.add(filename)
        logger.info("Missing audio asset '%s', using placeholder tone.", filename)

    def _create_placeholder_sound(self, key: str, category: str) -> Optional[pygame.mixer.Sound]:
        init = pygame.mixer.get_init()
        if not init:
            return None
        sample_rate, size, channels = init
        if abs(size) != 16:
            return None

        duration, base_freq, sweep = self._placeholder_shape(key, category)
        amplitude = 0.3 if category == "ui" else 0.55

        total_samples = max(1, int(sample_rate * duration))
        attack = max(1, int(total_samples * 0.03))
        release = max(1, int(total_samples * 0.2))
        scale = int(32767 * amplitude)

        wave = array("h")
        for index in range(total_samples):
            t = index / sample_rate
            progress = index / total_samples
            envelope = 1.0
            if index < attack:
                envelope = index / attack
            elif index > total_samples - release:
                envelope = max(0.0, (total_samples - index) / release)
            freq = base_freq * (1.0 + sweep * progress)
            sample_value = math.sin(2.0 * math.pi * freq * t)
            wave.append(int(scale * sample_value * envelope))

        if channels == 2:
            stereo = array("h")
            for sample in wave:
                stereo.extend([sample, sample])
            data = stereo.tobytes()
        else:
            data = wave.tobytes()

        try:
            return pygame.mixer.Sound(buffer=data)
        except pygame.error:
            return None

    def _placeholder_shape(self, key: str, category: str) -> Tuple[float, float, float]:
        """Return (duration, frequency, sweep) for a synthesised fallback tone."""
        key = key.lower()
        if category == "ui":
            return 0.12, 660.0 if "select" in key else 520.0, 0.0
        if key == "shoot":
            return 0.12, 880.0, -0.5
        if key == "explode":
            return 0.4, 160.0, -0.6
        if key == "levelup":
            return 0.6, 440.0, 1.0
        if key == "gameover":
            return 0.9, 330.0, -0.5
        return 0.3, 440.0, 0.0


__all__ = ["Soundscape"]
