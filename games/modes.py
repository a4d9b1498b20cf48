"""
Game modes and the per-tick rule engine.

Modes:
    classic  - leaving the grid or biting yourself ends the round
    walls    - every food eaten spawns a wall; hitting a wall ends the round
    portal   - two linked portals; entering one exits the other, then both move
    speed    - every food eaten shortens the tick interval (down to a floor)
    god-mode - no bounds or self collisions at all
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

HIT_BOUNDS = "You hit the wall!"
HIT_SELF = "You hit yourself!"
HIT_WALL = "You hit a wall!"


class Mode(str, Enum):
    CLASSIC = "classic"
    WALLS = "walls"
    PORTAL = "portal"
    SPEED = "speed"
    GOD_MODE = "god-mode"

    @classmethod
    def values(cls) -> List[str]:
        return [mode.value for mode in cls]


@dataclass
class TickOutcome:
    """What happened during one evaluation."""
    ate_food: bool = False
    wall_added: bool = False
    teleported: bool = False
    terminal: List[str] = field(default_factory=list)

    @property
    def ended(self) -> bool:
        return bool(self.terminal)


class RuleEngine:
    """
    Applies one mode's rules after the snake has moved.

    The checks run in a fixed order and none of them short-circuits the
    rest: each one sees the state left behind by the ones before it, even
    after a terminal condition was raised.
    """

    def __init__(self, mode: Mode, config):
        """
        Args:
            mode: The mode captured for this round
            config: GameConfig (points, speed factor, interval floor)
        """
        self.mode = Mode(mode)
        self.config = config

    def evaluate(self, board, state, terminate: Callable[[str], None],
                 on_score: Optional[Callable[[], None]] = None) -> TickOutcome:
        """
        Run every rule once against the current board.

        Args:
            board: Board holding snake, food, walls and portals
            state: SessionState (score and interval are updated here)
            terminate: Called with the reason for each terminal condition
            on_score: Called after the score changed

        Returns:
            TickOutcome describing the tick
        """
        outcome = TickOutcome()
        snake = board.snake
        mode = self.mode

        def end(reason):
            outcome.terminal.append(reason)
            terminate(reason)

        if mode is Mode.CLASSIC and snake.is_out_of_bounds():
            end(HIT_BOUNDS)

        if mode is Mode.CLASSIC and snake.collides_with_self():
            end(HIT_SELF)

        # god-mode: bounds and self collisions are never checked

        if mode is Mode.WALLS and snake.collides_with(board.food):
            board.add_wall()
            outcome.wall_added = True

        if mode is Mode.PORTAL:
            # Index into the live list: after a jump, the second check sees
            # the newly spawned pair.
            for index in range(len(board.portals)):
                if snake.collides_with(board.portals[index]):
                    target = board.portals[1 - index].position
                    logger.debug(f"Portal {index}: {snake.head} -> {target}")
                    snake.teleport_to(target)
                    board.spawn_portals()
                    outcome.teleported = True

        if snake.collides_with(board.food):
            snake.grow()
            board.food.spawn()
            state.award(self.config.food_points)
            outcome.ate_food = True
            if on_score is not None:
                on_score()

            if mode is Mode.SPEED:
                state.speed_up(self.config.speed_factor, self.config.min_interval_ms)

        if mode is Mode.WALLS:
            if any(snake.collides_with(wall) for wall in board.walls):
                end(HIT_WALL)

        return outcome
