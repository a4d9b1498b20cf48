"""
Everything that lives on the grid for one session.

The board owns the snake, the food, the walls and the portal pair, plus
the random source they all spawn from. Mutation and drawing are kept
apart: nothing here draws unless draw() is called.
"""
import logging
import random
from typing import List

import numpy as np

from .config import GameConfig
from .entities import Food, Portal, Wall
from .render import Renderer
from .snake import Snake

logger = logging.getLogger(__name__)

# Cell codes for occupancy()
EMPTY = 0
BODY = 1
HEAD = 2
FOOD = 3
WALL = 4
PORTAL = 5


class Board:
    """Snake plus entities on a square grid."""

    def __init__(self, config: GameConfig = None, rng: random.Random = None):
        """
        Args:
            config: Game configuration
            rng: Random source for every spawn on this board
        """
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.snake = Snake(self.config)
        self.food = Food(self.config, self.rng)
        self.walls: List[Wall] = []
        self.portals: List[Portal] = []
        self.food.spawn()

    def new_round(self, with_portals: bool = False):
        """Fresh snake and food, no walls, portals only when asked for."""
        self.snake.reset()
        self.food.spawn()
        self.walls.clear()
        self.portals.clear()
        if with_portals:
            self.spawn_portals()

    def clear(self):
        """Back to the pre-round layout. The food stays where it is."""
        self.snake.reset()
        self.walls.clear()
        self.portals.clear()

    def add_wall(self) -> Wall:
        wall = Wall(self.config, self.rng)
        wall.spawn()
        self.walls.append(wall)
        logger.debug(f"Wall #{len(self.walls)} spawned at {wall.position}")
        return wall

    def spawn_portals(self) -> List[Portal]:
        """Replace the portal pair with two freshly spawned portals."""
        self.portals.clear()
        for _ in range(2):
            portal = Portal(self.config, self.rng)
            portal.spawn()
            self.portals.append(portal)
        return self.portals

    def draw(self, renderer: Renderer):
        renderer.clear()
        self.snake.draw(renderer)
        self.food.draw(renderer)
        for wall in self.walls:
            wall.draw(renderer)
        for portal in self.portals:
            portal.draw(renderer)

    def occupancy(self) -> np.ndarray:
        """
        Grid of cell codes, indexed [y, x].

        Later layers overwrite earlier ones: food, walls, portals, body,
        then the head. Cells outside the grid (a head that just left it)
        are skipped.
        """
        size = self.config.grid_size
        grid = np.full((size, size), EMPTY, dtype=np.int8)

        def mark(position, code):
            if position is not None and position.in_bounds(size):
                grid[position.y, position.x] = code

        mark(self.food.position, FOOD)
        for wall in self.walls:
            mark(wall.position, WALL)
        for portal in self.portals:
            mark(portal.position, PORTAL)
        for segment in self.snake.body[1:]:
            mark(segment, BODY)
        mark(self.snake.head, HEAD)
        return grid

    def to_dict(self) -> dict:
        """Board snapshot for the frontend."""
        return {
            'snake_position': self.snake.to_list(),
            'food_position': self.food.position.to_dict() if self.food.position else None,
            'walls': [w.position.to_dict() for w in self.walls],
            'portals': [p.position.to_dict() for p in self.portals],
            'board': self.occupancy().tolist(),
        }
