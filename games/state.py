"""Per-session bookkeeping: phase, mode, score and tick interval."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .modes import Mode


class Phase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    GAME_OVER = "game_over"  # Shown until acknowledged; otherwise treated as idle


@dataclass
class SessionState:
    """
    Mutable state of a game session.

    Only the session's transition methods change it. `best` survives
    across rounds for the lifetime of the process and never decreases.
    """
    interval_ms: float
    phase: Phase = Phase.IDLE
    mode: Mode = Mode.CLASSIC
    current: int = 0
    best: int = 0
    game_over_message: str = ""

    @property
    def is_idle(self) -> bool:
        """Idle or showing a game-over message; both accept start/reset."""
        return self.phase is not Phase.RUNNING

    def new_round(self, mode: Mode, interval_ms: float):
        self.mode = mode
        self.current = 0
        self.interval_ms = interval_ms
        self.game_over_message = ""

    def award(self, points: int) -> bool:
        """
        Add points to the current score.

        Returns:
            bool: True if this raised the best score
        """
        self.current += points
        return self.update_best()

    def update_best(self) -> bool:
        if self.current > self.best:
            self.best = self.current
            return True
        return False

    def speed_up(self, factor: float, floor_ms: float):
        self.interval_ms = max(self.interval_ms * factor, floor_ms)

    def score_text(self) -> dict:
        return {'current': f"Score: {self.current}", 'best': f"Best: {self.best}"}

    def to_dict(self) -> dict:
        return {
            'phase': self.phase.value,
            'mode': self.mode.value,
            'score': self.current,
            'best': self.best,
            'interval': self.interval_ms,
            'game_over': self.phase is Phase.GAME_OVER,
            'message': self.game_over_message,
        }
