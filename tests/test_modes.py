"""
Tests for the per-tick rule engine, mode by mode.
"""
import pytest
import itertools
import random
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from games.board import Board
from games.config import GameConfig
from games.grid import Direction, Position
from games.modes import HIT_BOUNDS, HIT_SELF, HIT_WALL, Mode, RuleEngine
from games.state import SessionState


class ScriptedRng:
    """Stands in for random.Random: randrange cycles through fixed values."""

    def __init__(self, values):
        self._values = itertools.cycle(values)

    def randrange(self, n):
        return next(self._values) % n


def make_board(rng=None):
    board = Board(GameConfig(), rng or random.Random(0))
    board.food.place(Position(0, 19))  # out of the way
    return board


def run(mode, board, state=None):
    """Evaluate once; returns (outcome, reasons passed to terminate, score calls)."""
    state = state or SessionState(interval_ms=150.0)
    reasons = []
    scores = []
    outcome = RuleEngine(mode, GameConfig()).evaluate(
        board, state, terminate=reasons.append, on_score=lambda: scores.append(state.current))
    return outcome, reasons, scores


class TestClassic:
    """Tests for classic mode."""

    def test_out_of_bounds_is_terminal(self):
        """Leaving the grid ends the round with the wall message."""
        board = make_board()
        board.snake.body = [Position(10, -1), Position(10, 0), Position(10, 1)]
        outcome, reasons, _ = run(Mode.CLASSIC, board)
        assert reasons == [HIT_BOUNDS]
        assert outcome.ended

    def test_self_collision_is_terminal(self):
        """Biting the body ends the round."""
        board = make_board()
        board.snake.body = [Position(4, 5), Position(5, 5), Position(5, 4),
                            Position(4, 4), Position(4, 5)]
        _, reasons, _ = run(Mode.CLASSIC, board)
        assert reasons == [HIT_SELF]

    def test_free_move_is_not_terminal(self):
        """Nothing happens on an empty cell."""
        board = make_board()
        outcome, reasons, _ = run(Mode.CLASSIC, board)
        assert reasons == []
        assert not outcome.ate_food


class TestGodMode:
    """Tests for god-mode."""

    def test_bounds_ignored(self):
        """Out of bounds is not terminal."""
        board = make_board()
        board.snake.body = [Position(10, -5), Position(10, -4), Position(10, -3)]
        _, reasons, _ = run(Mode.GOD_MODE, board)
        assert reasons == []

    def test_self_ignored(self):
        """Self collision is not terminal."""
        board = make_board()
        board.snake.body = [Position(4, 5), Position(5, 5), Position(4, 5)]
        _, reasons, _ = run(Mode.GOD_MODE, board)
        assert reasons == []

    def test_food_still_eaten(self):
        """Food works in every mode."""
        board = make_board()
        board.food.place(Position(10, 10))
        outcome, _, _ = run(Mode.GOD_MODE, board)
        assert outcome.ate_food


class TestFood:
    """Tests for the food rule shared by all modes."""

    def test_eating(self):
        """Eating grows the snake, respawns food and scores 10."""
        board = make_board(ScriptedRng([3, 4]))
        board.food.place(Position(10, 10))
        state = SessionState(interval_ms=150.0)
        outcome, _, scores = run(Mode.CLASSIC, board, state)
        assert outcome.ate_food
        assert len(board.snake) == 4
        assert board.food.position == Position(3, 4)
        assert state.current == 10
        assert state.best == 10
        assert scores == [10]

    def test_interval_unchanged_outside_speed(self):
        """Only speed mode touches the interval."""
        board = make_board()
        board.food.place(Position(10, 10))
        state = SessionState(interval_ms=150.0)
        run(Mode.CLASSIC, board, state)
        assert state.interval_ms == 150.0


class TestSpeed:
    """Tests for speed mode."""

    def test_three_foods(self):
        """Each food multiplies the interval by 0.9."""
        state = SessionState(interval_ms=150.0)
        for _ in range(3):
            board = make_board()
            board.food.place(board.snake.head)
            run(Mode.SPEED, board, state)
        assert state.interval_ms == pytest.approx(150 * 0.9 ** 3)
        assert state.interval_ms == pytest.approx(109.35)

    def test_floor(self):
        """The interval never drops below 50ms."""
        state = SessionState(interval_ms=52.0)
        board = make_board()
        board.food.place(board.snake.head)
        run(Mode.SPEED, board, state)
        assert state.interval_ms == 50.0

    def test_monotonic(self):
        """Many foods only ever shrink the interval, down to the floor."""
        state = SessionState(interval_ms=150.0)
        previous = state.interval_ms
        for _ in range(30):
            board = make_board()
            board.food.place(board.snake.head)
            run(Mode.SPEED, board, state)
            assert state.interval_ms <= previous
            previous = state.interval_ms
        assert state.interval_ms == 50.0


class TestWalls:
    """Tests for walls mode."""

    def test_food_adds_wall(self):
        """Eating in walls mode adds one wall as well as growing."""
        # Board construction draws (1, 2) for the first food
        board = make_board(ScriptedRng([1, 2, 3, 4]))
        board.food.place(Position(10, 10))
        outcome, _, _ = run(Mode.WALLS, board)
        assert outcome.wall_added and outcome.ate_food
        assert len(board.walls) == 1
        assert board.walls[0].position == Position(3, 4)
        assert board.food.position == Position(1, 2)

    def test_wall_hit_is_terminal(self):
        """Head on any wall ends the round."""
        board = make_board()
        board.add_wall().place(Position(3, 3))
        board.add_wall().place(Position(10, 10))
        _, reasons, _ = run(Mode.WALLS, board)
        assert reasons == [HIT_WALL]

    def test_new_wall_on_head_is_terminal_same_tick(self):
        """A wall spawned onto the head by this tick's food ends the round."""
        board = make_board(ScriptedRng([10]))
        board.food.place(Position(10, 10))
        outcome, reasons, _ = run(Mode.WALLS, board)
        assert outcome.ate_food
        assert reasons == [HIT_WALL]

    def test_bounds_not_checked(self):
        """Walls mode does not apply the classic bounds rule."""
        board = make_board()
        board.snake.body = [Position(10, -1), Position(10, 0), Position(10, 1)]
        _, reasons, _ = run(Mode.WALLS, board)
        assert reasons == []

    def test_walls_ignored_in_classic(self):
        """Walls left on the board do not hurt in other modes."""
        board = make_board()
        board.add_wall().place(Position(10, 10))
        _, reasons, _ = run(Mode.CLASSIC, board)
        assert reasons == []


class TestPortal:
    """Tests for portal mode."""

    def _portal_board(self, rng=None):
        board = make_board(rng or ScriptedRng([1, 2]))
        board.spawn_portals()
        board.portals[0].place(Position(5, 5))
        board.portals[1].place(Position(15, 15))
        return board

    def test_enter_first_portal(self):
        """Entering portal 0 puts the head on portal 1 and moves both portals."""
        board = self._portal_board()
        old = list(board.portals)
        board.snake.body = [Position(5, 5), Position(5, 6), Position(5, 7)]
        outcome, reasons, _ = run(Mode.PORTAL, board)
        assert outcome.teleported
        assert board.snake.head == Position(15, 15)
        assert board.snake.body[1:] == [Position(5, 6), Position(5, 7)]
        assert all(p not in old for p in board.portals)
        assert [p.position for p in board.portals] == [Position(1, 2), Position(1, 2)]
        assert reasons == []

    def test_enter_second_portal(self):
        """Entering portal 1 exits at portal 0."""
        board = self._portal_board()
        board.snake.body = [Position(15, 15), Position(15, 16), Position(15, 17)]
        run(Mode.PORTAL, board)
        assert board.snake.head == Position(5, 5)

    def test_no_portal_no_jump(self):
        """Missing both portals changes nothing."""
        board = self._portal_board()
        old = list(board.portals)
        outcome, _, _ = run(Mode.PORTAL, board)
        assert not outcome.teleported
        assert board.portals == old

    def test_portals_ignored_in_other_modes(self):
        """Portals only teleport in portal mode."""
        board = self._portal_board()
        board.snake.body = [Position(5, 5), Position(5, 6), Position(5, 7)]
        run(Mode.CLASSIC, board)
        assert board.snake.head == Position(5, 5)

    def test_food_at_exit_is_eaten(self):
        """Food checks run after the jump, against the new head."""
        board = self._portal_board()
        board.food.place(Position(15, 15))
        board.snake.body = [Position(5, 5), Position(5, 6), Position(5, 7)]
        outcome, _, _ = run(Mode.PORTAL, board)
        assert outcome.teleported and outcome.ate_food


class TestModeValues:
    """Tests for the Mode enum."""

    def test_values(self):
        """The five selector values."""
        assert Mode.values() == ['classic', 'walls', 'portal', 'speed', 'god-mode']

    def test_from_string(self):
        """Selector strings convert to modes."""
        assert Mode('god-mode') is Mode.GOD_MODE


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
