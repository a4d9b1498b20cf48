"""
Rendering collaborator.

The game core never draws directly: entities issue draw commands to a
Renderer. The server uses CommandBuffer, which records commands so they
can be shipped to the browser canvas over the socket. Tests use the same
buffer to inspect what was drawn.
"""
from abc import ABC, abstractmethod
from typing import List


class Renderer(ABC):
    """Minimal drawing surface: clear it, fill rectangles on it."""

    @abstractmethod
    def clear(self):
        pass

    @abstractmethod
    def fill_rect(self, x: int, y: int, w: int, h: int, color: int):
        """Fill a rectangle given in pixels."""
        pass


class CommandBuffer(Renderer):
    """
    Renderer that records draw commands as JSON-ready dicts.

    Commands accumulate until flush() hands them over and empties the buffer.
    """

    def __init__(self):
        self.commands: List[dict] = []

    def clear(self):
        self.commands.append({'op': 'clear'})

    def fill_rect(self, x: int, y: int, w: int, h: int, color: int):
        self.commands.append({
            'op': 'fillRect',
            'x': x, 'y': y, 'w': w, 'h': h,
            'color': color,
        })

    def flush(self) -> List[dict]:
        commands = self.commands
        self.commands = []
        return commands

    def rects(self, color: int = None) -> List[dict]:
        """Recorded fillRect commands, optionally only those of one color."""
        return [c for c in self.commands
                if c['op'] == 'fillRect' and (color is None or c['color'] == color)]
