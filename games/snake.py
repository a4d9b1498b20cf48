"""
The player's snake.

Controls (key symbols from the browser):
    ArrowUp / ArrowDown / ArrowLeft / ArrowRight
Anything else is ignored, as are requests to reverse into the body.
"""
from typing import List

from .config import GameConfig
from .grid import Direction, Position, direction_for_key
from .render import Renderer


class Snake:
    """
    Ordered body segments, head first.

    The snake only knows how to move and how to test its head against
    things. Deciding what a collision means is up to the rule engine.
    """

    def __init__(self, config: GameConfig = None):
        self.config = config or GameConfig()
        self.body: List[Position] = []
        self.direction = Direction.UP
        self._moving = Direction.UP  # Direction of the last update
        self.game_over = False
        self.reset()

    @property
    def head(self) -> Position:
        return self.body[0]

    def __len__(self):
        return len(self.body)

    def reset(self):
        """Back to the starting body, heading up, terminal flag cleared."""
        self.body = [Position(x, y) for x, y in self.config.start_body]
        self.direction = Direction.UP
        self._moving = Direction.UP
        self.game_over = False

    def change_direction(self, key) -> bool:
        """
        Turn towards the direction mapped from a key symbol.

        A turn is only accepted onto the other axis. It is checked against
        both the direction of the last move and any turn already queued for
        the next move, so two quick presses cannot add up to a reversal.

        Returns:
            bool: True if the direction changed
        """
        requested = direction_for_key(key)
        if requested is None:
            return False
        if requested.axis == self._moving.axis or requested.axis == self.direction.axis:
            return False
        self.direction = requested
        return True

    def update(self):
        """Advance one cell: new head in front, tail dropped."""
        if self.game_over:
            return
        self.body.insert(0, self.head + self.direction)
        self.body.pop()
        self._moving = self.direction

    def grow(self):
        """
        Lengthen by one segment.

        The tail position is appended a second time. The next update drops
        that duplicate instead of the real tail, so the tail holds still
        for one tick.
        """
        self.body.append(self.body[-1])

    def teleport_to(self, position: Position):
        """Relocate the head only; the rest of the body stays where it is."""
        self.body[0] = position

    def is_out_of_bounds(self) -> bool:
        return not self.head.in_bounds(self.config.grid_size)

    def collides_with_self(self) -> bool:
        head = self.head
        return any(segment == head for segment in self.body[1:])

    def collides_with(self, entity) -> bool:
        """True if the head is on the entity's cell (food, wall or portal)."""
        return entity.position is not None and self.head == entity.position

    def draw(self, renderer: Renderer):
        size = self.config.cell_size
        color = self.config.colors['snake']
        for segment in self.body:
            renderer.fill_rect(segment.x * size, segment.y * size, size, size, color)

    def to_list(self) -> List[dict]:
        return [segment.to_dict() for segment in self.body]
