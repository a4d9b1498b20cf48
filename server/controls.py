"""
Keyboard input for the session.

Key events arrive from the frontend over the socket whether or not a
round is running. The listener only forwards them while attached, which
mirrors adding/removing a keydown handler in the browser.
"""
from typing import Callable, Optional


class KeyboardInput:
    """Forwards key symbols to a handler while attached."""

    def __init__(self):
        self._handler: Optional[Callable[[str], bool]] = None

    @property
    def attached(self) -> bool:
        return self._handler is not None

    def attach(self, handler: Callable[[str], bool]):
        self._handler = handler

    def detach(self):
        self._handler = None

    def on_key(self, key: str) -> bool:
        """
        Deliver one key symbol.

        Returns:
            bool: True if the handler accepted it (direction changed)
        """
        if self._handler is None:
            return False
        return bool(self._handler(key))
