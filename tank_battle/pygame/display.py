"""Display and window scaling for the pygame client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import pygame


@dataclass(frozen=True)
class ScalePreset:
    """Single window scale entry rendered in the settings menu."""

    factor: float
    label: str
    size: Tuple[int, int]


class DisplayManager:
    """Render into a fixed logical surface and present it scaled to the window."""

    SUPPORTED_SCALES: Tuple[float, ...] = (0.75, 1.0, 1.25, 1.5, 2.0)

    def __init__(
        self,
        *,
        playfield_size: Tuple[int, int],
        hud_height: int,
        caption: str,
        scale: float = 1.0,
    ) -> None:
        self.caption = caption
        self.playfield_width, self.playfield_height = playfield_size
        self.hud_height = hud_height
        self.logical_size = (self.playfield_width, self.playfield_height + hud_height)

        self.scale_presets: List[ScalePreset] = [
            ScalePreset(
                factor=factor,
                label=f"{factor:g}x",
                size=self._scaled_size(factor),
            )
            for factor in self.SUPPORTED_SCALES
        ]
        self.scale_index = self._closest_preset(scale)

        self.display_surface = pygame.display.set_mode(self.window_size)
        pygame.display.set_caption(self.caption)
        self.render_surface = pygame.Surface(self.logical_size, 0, 32)

    # ------------------------------------------------------------------
    @property
    def screen(self) -> pygame.Surface:
        return self.render_surface

    @property
    def scale(self) -> float:
        return self.scale_presets[self.scale_index].factor

    @property
    def window_size(self) -> Tuple[int, int]:
        return self.scale_presets[self.scale_index].size

    @property
    def hud_rect(self) -> pygame.Rect:
        return pygame.Rect(0, self.playfield_height, self.playfield_width, self.hud_height)

    def present(self) -> None:
        """Scale the logical frame onto the window and flip."""
        if self.display_surface.get_size() == self.logical_size:
            self.display_surface.blit(self.render_surface, (0, 0))
        else:
            scaled = pygame.transform.smoothscale(
                self.render_surface, self.display_surface.get_size()
            )
            self.display_surface.blit(scaled, (0, 0))
        pygame.display.flip()

    def to_logical(self, pos: Tuple[float, float]) -> Tuple[int, int]:
        """Map a window pixel position back onto the logical surface."""
        window_w, window_h = self.display_surface.get_size()
        logical_w, logical_h = self.logical_size
        x = int(pos[0] * logical_w / max(1, window_w))
        y = int(pos[1] * logical_h / max(1, window_h))
        return x, y

    def finger_to_logical(self, x: float, y: float) -> Tuple[int, int]:
        """Touch events report normalised coordinates in the 0..1 range."""
        logical_w, logical_h = self.logical_size
        return int(x * logical_w), int(y * logical_h)

    # ------------------------------------------------------------------
    def scale_option_label(self) -> str:
        return f"Window Scale: {self.scale_presets[self.scale_index].label}"

    def change_scale(self, direction: int) -> Optional[ScalePreset]:
        if not self.scale_presets:
            return None
        self.scale_index = (self.scale_index + direction) % len(self.scale_presets)
        preset = self.scale_presets[self.scale_index]
        self.display_surface = pygame.display.set_mode(preset.size)
        pygame.display.set_caption(self.caption)
        return preset

    def _scaled_size(self, factor: float) -> Tuple[int, int]:
        width, height = self.logical_size
        return int(round(width * factor)), int(round(height * factor))

    def _closest_preset(self, scale: float) -> int:
        best = 0
        for idx, preset in enumerate(self.scale_presets):
            if abs(preset.factor - scale) < abs(self.scale_presets[best].factor - scale):
                best = idx
        return best


__all__ = ["DisplayManager", "ScalePreset"]
