"""Fixed-step tick scheduling independent of any windowing callback."""

from __future__ import annotations

from typing import Iterable, List

from tank_battle.core.game import FrameReport
from tank_battle.core.input import InputSnapshot
from tank_battle.core.session import GameSession


class FixedStepClock:
    """Turn variable wall-clock deltas into a whole number of simulation ticks."""

    def __init__(self, step: float = 1 / 60, *, max_steps: int = 5) -> None:
        if step <= 0:
            raise ValueError("step must be positive")
        self.step = step
        self.max_steps = max(1, max_steps)
        self.accumulator = 0.0

    def advance(self, dt: float) -> int:
        self.accumulator += max(0.0, dt)
        steps = 0
        while self.accumulator >= self.step and steps < self.max_steps:
            self.accumulator -= self.step
            steps += 1
        if steps == self.max_steps and self.accumulator >= self.step:
            # Drop the backlog instead of trying to catch up after a long stall.
            self.accumulator = 0.0
        return steps

    def reset(self) -> None:
        self.accumulator = 0.0


def run_frames(session: GameSession, controls: Iterable[InputSnapshot]) -> List[FrameReport]:
    """Tick ``session`` once per snapshot; frames outside PLAYING are skipped."""

    reports: List[FrameReport] = []
    for snapshot in controls:
        report = session.tick(snapshot)
        if report is not None:
            reports.append(report)
    return reports


__all__ = ["FixedStepClock", "run_frames"]
