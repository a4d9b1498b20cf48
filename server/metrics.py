"""
Round statistics.

Tracks scores, lengths and tick counts of recent rounds for display in
the frontend. Kept in memory only; nothing is persisted.
"""
from collections import Counter, deque
from typing import Dict


class RoundStats:
    """
    Collects per-round statistics.

    Maintains rolling windows of recent rounds to avoid unbounded memory
    growth during long play sessions.
    """

    def __init__(self, max_rounds: int = 100):
        """
        Args:
            max_rounds: Maximum number of rounds to retain
        """
        self.max_rounds = max_rounds

        self.round_scores: deque = deque(maxlen=max_rounds)
        self.round_lengths: deque = deque(maxlen=max_rounds)
        self.round_ticks: deque = deque(maxlen=max_rounds)
        self.reasons: Counter = Counter()

        # Current round tracking
        self._current_ticks = 0
        self._foods_eaten = 0
        self._round_count = 0

    def on_round_start(self):
        self._current_ticks = 0
        self._foods_eaten = 0

    def on_tick(self, ate_food: bool = False):
        self._current_ticks += 1
        if ate_food:
            self._foods_eaten += 1

    def on_round_end(self, score: int, length: int, reason: str = None):
        """
        Record the end of a round.

        Args:
            score: Final score for the round
            length: Final snake length
            reason: Game-over reason, or None if the round was abandoned
        """
        self.round_scores.append(score)
        self.round_lengths.append(length)
        self.round_ticks.append(self._current_ticks)
        self.reasons[reason or 'abandoned'] += 1
        self._round_count += 1
        self._current_ticks = 0
        self._foods_eaten = 0

    @property
    def rounds(self) -> int:
        return self._round_count

    @property
    def current_ticks(self) -> int:
        return self._current_ticks

    @property
    def foods_eaten(self) -> int:
        return self._foods_eaten

    def get_summary(self, window: int = 20) -> Dict:
        """
        Get summary statistics for recent rounds.

        Args:
            window: Number of recent rounds to summarize
        """
        scores = list(self.round_scores)[-window:]
        lengths = list(self.round_lengths)[-window:]
        ticks = list(self.round_ticks)[-window:]

        if not scores:
            return {
                'avg_score': 0,
                'avg_length': 0,
                'avg_ticks': 0,
                'max_score': 0,
                'rounds': 0,
                'reasons': {},
            }

        return {
            'avg_score': sum(scores) / len(scores),
            'avg_length': sum(lengths) / len(lengths),
            'avg_ticks': sum(ticks) / len(ticks),
            'max_score': max(scores),
            'rounds': self._round_count,
            'reasons': dict(self.reasons),
        }

    def reset(self):
        """Clear all statistics."""
        self.round_scores.clear()
        self.round_lengths.clear()
        self.round_ticks.clear()
        self.reasons.clear()
        self._current_ticks = 0
        self._foods_eaten = 0
        self._round_count = 0
