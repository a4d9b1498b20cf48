"""
Time-gated tick driver.

The host calls due() once per frame. A tick is due when at least the
current interval has passed since the last one, so the interval is a
minimum dwell time: the real tick rate can never beat the frame rate.
"""
import time
from typing import Callable, Optional


class Ticker:
    """
    Polls a clock and says when the next tick is due.

    The clock is injectable so tests can step time by hand.
    """

    def __init__(self, interval_ms: float, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            interval_ms: Minimum time between ticks, in milliseconds
            clock: Zero-argument callable returning seconds
        """
        self.interval_ms = interval_ms
        self.clock = clock
        self.running = False
        self._last: Optional[float] = None

    def start(self):
        """Arm the ticker. The first poll after this always fires."""
        self.running = True
        self._last = None

    def stop(self):
        self.running = False

    def due(self) -> bool:
        if not self.running:
            return False
        now = self.clock()
        if self._last is not None and (now - self._last) * 1000 < self.interval_ms:
            return False
        self._last = now
        return True
