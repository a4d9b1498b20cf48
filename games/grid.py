"""
Grid coordinates and movement directions.

The board is a fixed square of cells. Positions are immutable value
objects, so a snake body can share them freely between segments.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

GRID_SIZE = 20


@dataclass(frozen=True)
class Position:
    """A single cell on the grid."""
    x: int
    y: int

    def __add__(self, direction: 'Direction') -> 'Position':
        return Position(self.x + direction.dx, self.y + direction.dy)

    def in_bounds(self, grid_size: int = GRID_SIZE) -> bool:
        return 0 <= self.x < grid_size and 0 <= self.y < grid_size

    def to_dict(self) -> dict:
        return {'x': self.x, 'y': self.y}


class Direction(Enum):
    """
    The four directions of motion, as unit vectors.

    y grows downwards (screen coordinates), so UP is (0, -1).
    """
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def axis(self) -> str:
        """'x' for horizontal motion, 'y' for vertical."""
        return 'x' if self.dx != 0 else 'y'

    @property
    def opposite(self) -> 'Direction':
        return Direction((-self.dx, -self.dy))


# Key symbols as sent by the browser keydown event
KEY_DIRECTIONS: Dict[str, Direction] = {
    'ArrowUp': Direction.UP,
    'ArrowDown': Direction.DOWN,
    'ArrowLeft': Direction.LEFT,
    'ArrowRight': Direction.RIGHT,
}


def direction_for_key(key) -> Optional[Direction]:
    """Map a key symbol to a direction, or None for keys the game ignores."""
    if not isinstance(key, str):
        return None
    return KEY_DIRECTIONS.get(key)
