"""
Game session management.

A Session ties together the board, the rule engine and the tick driver,
handling:
- Round lifecycle (start / stop / reset / game over)
- Mode selection (captured when a round starts)
- Score tracking (current and best)
- Keyboard input routing
- Redrawing into the renderer after each tick
"""
import logging
import random
import time
from typing import Callable, Optional

from games.board import Board
from games.config import GameConfig
from games.modes import Mode, RuleEngine, TickOutcome
from games.render import CommandBuffer, Renderer
from games.state import Phase, SessionState
from .controls import KeyboardInput
from .metrics import RoundStats
from .ticker import Ticker

logger = logging.getLogger(__name__)


class GameSession:
    """
    One player's game, driven by host frame callbacks.

    Phases: IDLE -> RUNNING -> (GAME_OVER) -> IDLE. GAME_OVER only holds
    the message until acknowledged and is otherwise treated as IDLE.
    All state changes go through the transition methods below.
    """

    def __init__(self, config: GameConfig = None, renderer: Renderer = None,
                 rng: random.Random = None, seed: int = None,
                 clock: Callable[[], float] = time.monotonic):
        """
        Args:
            config: Game configuration (defaults to the standard 20x20 game)
            renderer: Where draw commands go (defaults to a CommandBuffer)
            rng: Random source for spawns; built from seed if not given
            seed: Seed for a fresh random source
            clock: Time source for the ticker, in seconds
        """
        self.config = config or GameConfig()
        self.renderer = renderer or CommandBuffer()
        self.board = Board(self.config, rng or random.Random(seed))
        self.state = SessionState(interval_ms=self.config.initial_interval_ms)
        self.ticker = Ticker(self.state.interval_ms, clock)
        self.input = KeyboardInput()
        self.stats = RoundStats()
        self.engine = RuleEngine(self.state.mode, self.config)
        self.selected_mode = Mode.CLASSIC

        self._game_over_callback: Optional[Callable[[str], None]] = None
        self._score_callback: Optional[Callable[[dict], None]] = None

    # ---------- callbacks ----------

    def set_game_over_callback(self, callback: Callable[[str], None]):
        """Set callback that surfaces the game-over message to the player."""
        self._game_over_callback = callback

    def set_score_callback(self, callback: Callable[[dict], None]):
        """Set callback for the current/best score text sinks."""
        self._score_callback = callback

    def _emit_score(self):
        self.state.update_best()
        if self._score_callback is not None:
            self._score_callback(self.score_payload())

    # ---------- properties ----------

    @property
    def snake(self):
        return self.board.snake

    @property
    def is_running(self) -> bool:
        return self.state.phase is Phase.RUNNING

    @property
    def mode(self) -> Mode:
        """Mode of the current (or last) round."""
        return self.state.mode

    # ---------- transitions ----------

    def select_mode(self, mode):
        """Set the mode selector. Takes effect at the next start()."""
        self.selected_mode = Mode(mode)

    def start(self) -> bool:
        """
        Begin a round in the selected mode.

        Returns:
            bool: False if a round is already running
        """
        if not self.state.is_idle:
            logger.warning("start ignored: round already running")
            return False

        mode = self.selected_mode
        self.engine = RuleEngine(mode, self.config)
        self.board.new_round(with_portals=mode is Mode.PORTAL)
        self.state.new_round(mode, self.config.initial_interval_ms)
        self.state.phase = Phase.RUNNING

        self.ticker.interval_ms = self.state.interval_ms
        self.ticker.start()
        self.input.attach(self.board.snake.change_direction)
        self.stats.on_round_start()

        self._emit_score()
        self.board.draw(self.renderer)
        logger.info(f"Round started: mode={mode.value}")
        return True

    def stop(self):
        """Halt the tick driver and stop listening for keys. Safe to repeat."""
        if self.state.phase is Phase.RUNNING:
            self._finish_round(None)
        self.ticker.stop()
        self.input.detach()

    def reset(self) -> bool:
        """
        Clear the board and score without starting a round.

        Returns:
            bool: False if a round is running
        """
        if not self.state.is_idle:
            logger.warning("reset ignored: stop the round first")
            return False

        self.board.clear()
        self.state.current = 0
        self.state.interval_ms = self.config.initial_interval_ms
        self.state.game_over_message = ""
        self.state.phase = Phase.IDLE
        self.ticker.interval_ms = self.state.interval_ms
        self._emit_score()
        self.board.draw(self.renderer)
        return True

    def menu(self):
        """Menu button: abandon the round and clear the board."""
        self.stop()
        self.reset()

    def game_over(self, reason: str):
        """End the round and surface the reason to the player."""
        self.board.snake.game_over = True
        if self.state.phase is Phase.RUNNING:
            self._finish_round(reason)
        self.stop()

        message = f"Game Over! {reason}"
        self.state.phase = Phase.GAME_OVER
        self.state.game_over_message = message
        logger.info(f"{message} mode={self.state.mode.value}, score={self.state.current}")

        if self._game_over_callback is not None:
            self._game_over_callback(message)

    def acknowledge(self):
        """Dismiss the game-over message."""
        if self.state.phase is Phase.GAME_OVER:
            self.state.phase = Phase.IDLE

    def _finish_round(self, reason: Optional[str]):
        self.state.phase = Phase.IDLE
        self.stats.on_round_end(self.state.current, len(self.board.snake), reason)

    # ---------- per-frame work ----------

    def change_direction(self, key) -> bool:
        """Route a key symbol to the snake (only while a round listens)."""
        return self.input.on_key(key)

    def on_frame(self) -> bool:
        """
        Host frame callback.

        Returns:
            bool: True if the interval had elapsed and a tick ran
        """
        if not self.ticker.due():
            return False
        self.tick()
        return True

    def tick(self) -> TickOutcome:
        """
        Execute one simulation step.

        1. Move the snake
        2. Apply the mode's rules (collisions, growth, spawns, score)
        3. Carry a changed interval over to the ticker
        4. Redraw, unless the step ended the round
        """
        self.board.snake.update()
        outcome = self.engine.evaluate(self.board, self.state,
                                       terminate=self.game_over,
                                       on_score=self._emit_score)
        self.ticker.interval_ms = self.state.interval_ms
        self.stats.on_tick(outcome.ate_food)

        if not outcome.ended:
            self.board.draw(self.renderer)
        return outcome

    # ---------- views ----------

    def score_payload(self) -> dict:
        return {
            'current': self.state.current,
            'best': self.state.best,
            'text': self.state.score_text(),
        }

    def ui_state(self) -> dict:
        """Which of the three buttons the frontend should show."""
        idle = self.state.is_idle
        return {'play': idle, 'exit': idle, 'menu': not idle}

    def get_state(self) -> dict:
        """
        Get current game state without stepping.

        Returns:
            dict: Board snapshot plus phase, mode, score and interval
        """
        return {
            **self.board.to_dict(),
            **self.state.to_dict(),
            'selected_mode': self.selected_mode.value,
            'grid_size': self.config.grid_size,
            'cell_size': self.config.cell_size,
        }
