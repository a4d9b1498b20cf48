"""Snake game core: grid, entities, snake, board and mode rules."""

from .board import Board
from .config import GameConfig
from .entities import Food, Portal, Wall
from .grid import GRID_SIZE, Direction, Position, direction_for_key
from .modes import HIT_BOUNDS, HIT_SELF, HIT_WALL, Mode, RuleEngine, TickOutcome
from .render import CommandBuffer, Renderer
from .snake import Snake
from .state import Phase, SessionState

__all__ = [
    "Board",
    "GameConfig",
    "Food",
    "Portal",
    "Wall",
    "GRID_SIZE",
    "Direction",
    "Position",
    "direction_for_key",
    "HIT_BOUNDS",
    "HIT_SELF",
    "HIT_WALL",
    "Mode",
    "RuleEngine",
    "TickOutcome",
    "CommandBuffer",
    "Renderer",
    "Snake",
    "Phase",
    "SessionState",
]
