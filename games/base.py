"""
Base class for single-cell board entities (food, walls, portals).

Every entity occupies exactly one cell, can be (re)spawned on a random cell,
and can draw itself onto a Renderer.

Example:
    class Food(Entity):
        color_key = 'food'
"""
import random
from abc import ABC
from typing import Optional

from .config import GameConfig
from .grid import Position
from .render import Renderer


class Entity(ABC):
    """
    Abstract base class for the single-cell board occupants.

    Spawning and drawing are separate steps: spawn() only mutates the
    position, draw() only emits commands to the renderer.
    """

    # Key into GameConfig.colors; set by each subclass
    color_key: str = ''

    def __init__(self, config: GameConfig = None, rng: random.Random = None):
        """
        Args:
            config: Game configuration (grid size, cell size, colors)
            rng: Random source used for spawning. Share one between
                 entities to make a whole board reproducible from a seed.
        """
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.position: Optional[Position] = None

    @property
    def color(self) -> int:
        return self.config.colors[self.color_key]

    def spawn(self) -> Position:
        """
        Move to a uniformly random cell.

        Two independent draws, one per axis. Other entities and the snake
        are not avoided, so an entity may land on an occupied cell.
        """
        grid = self.config.grid_size
        self.position = Position(self.rng.randrange(grid), self.rng.randrange(grid))
        return self.position

    def place(self, position: Position) -> Position:
        """Put the entity on a specific cell (tests, scripted setups)."""
        self.position = position
        return self.position

    def draw(self, renderer: Renderer):
        """Emit one filled cell at the current position. Unspawned entities draw nothing."""
        if self.position is None:
            return
        size = self.config.cell_size
        renderer.fill_rect(self.position.x * size, self.position.y * size,
                           size, size, self.color)

    def __repr__(self):
        return f"<{type(self).__name__} at {self.position}>"
