"""
Flask SocketIO server for Snake Modes.

This handles WebSocket communication between the browser page and the
game session: button triggers and key presses come in, draw commands,
score text and game-over messages go out.
"""
import sys
import os
import logging
import threading

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flask import Flask
from flask_socketio import SocketIO, emit
from flask_cors import CORS

from games.config import GameConfig
from server.session import GameSession
from server.validation import (
    validate_mode,
    validate_key,
    validate_frame_rate,
    validate_seed,
    validate_config_overrides
)

# ========== LOGGING SETUP ==========
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%H:%M:%S'
)

logger = logging.getLogger('SnakeModes')
logger.setLevel(logging.INFO)

# Reduce noise from Flask and SocketIO internals
logging.getLogger('werkzeug').setLevel(logging.ERROR)
logging.getLogger('socketio').setLevel(logging.ERROR)
logging.getLogger('engineio').setLevel(logging.ERROR)

# CORS configuration
# In production, set CORS_ORIGINS environment variable to restrict origins
# Example: CORS_ORIGINS=http://localhost:3000,https://myapp.com
CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000')
if CORS_ORIGINS == '*':
    allowed_origins = '*'
else:
    allowed_origins = [origin.strip() for origin in CORS_ORIGINS.split(',')]

# Host frame rate: how often the frame loop polls the session ticker
_fps_ok, _fps_error, FRAME_RATE = validate_frame_rate(os.environ.get('FRAME_RATE', 60))
if not _fps_ok:
    logger.warning(f"FRAME_RATE: {_fps_error}, using {FRAME_RATE}")

app = Flask(__name__)
CORS(app, resources={r"/*": {"origins": allowed_origins}})
socketio = SocketIO(app, cors_allowed_origins=allowed_origins)


@app.route('/')
def index():
    """Health check endpoint."""
    return {'status': 'ok', 'message': 'Snake Modes backend running'}


# ========== GLOBAL STATE ==========
# Single-player: one session per server process
session = None
frame_loop_active = False
# Socket handlers and the frame loop both touch the session
session_lock = threading.Lock()


def set_frame_rate(fps):
    """Change the frame loop rate (used by dev.py)."""
    global FRAME_RATE
    is_valid, error, FRAME_RATE = validate_frame_rate(fps)
    if not is_valid:
        logger.warning(f"Frame rate: {error}, using {FRAME_RATE}")
    return FRAME_RATE


def _on_game_over(message):
    socketio.emit('game_over', {'message': message})
    socketio.emit('ui_state', session.ui_state())


def _on_score(payload):
    socketio.emit('score_update', payload)


def create_session(seed=None, overrides=None):
    """
    Factory function for creating a wired-up game session.

    Args:
        seed: Optional random seed for reproducible spawns
        overrides: Validated GameConfig overrides

    Returns:
        GameSession instance
    """
    config = GameConfig.from_dict(overrides or {})
    new_session = GameSession(config=config, seed=seed)
    new_session.set_game_over_callback(_on_game_over)
    new_session.set_score_callback(_on_score)
    return new_session


def run_frame():
    """
    One host frame: tick the session if its interval has elapsed,
    then ship the draw commands and state to the frontend.

    Returns:
        bool: True if a tick ran
    """
    if session is None:
        return False

    with session_lock:
        ticked = session.on_frame()
        if not ticked:
            return False
        commands = session.renderer.flush()
        game_state = session.get_state()

    if commands:
        socketio.emit('draw', {'commands': commands})
    socketio.emit('game_update', game_state)
    return True


def frame_loop():
    """
    Drive the session until the round stops.

    Runs as a background task; socketio.sleep yields between frames so
    key presses and button clicks are handled in between. The exit check
    and clearing frame_loop_active happen under session_lock, the same
    lock handle_play holds while deciding whether to launch a new loop.
    """
    global frame_loop_active
    logger.info(f"Frame loop started at {FRAME_RATE} fps")
    try:
        while True:
            with session_lock:
                if session is None or not session.is_running:
                    frame_loop_active = False
                    break
            run_frame()
            socketio.sleep(1.0 / FRAME_RATE)
    except Exception as e:
        logger.error(f"Error in frame loop: {e}")
        with session_lock:
            frame_loop_active = False
        raise
    logger.info("Frame loop stopped")


def _emit_board():
    """Send pending draw commands plus state and buttons to the caller."""
    commands = session.renderer.flush()
    if commands:
        emit('draw', {'commands': commands})
    emit('game_update', session.get_state())
    emit('ui_state', session.ui_state())


@socketio.on('init')
def handle_init(data=None):
    """
    Initialize a new game session.

    Expected data:
        - seed: int (optional) for reproducible spawns
        - config: dict (optional) of GameConfig overrides
        - mode: str (optional) initial mode selector value
    """
    global session
    if not isinstance(data, dict):
        data = {}

    is_valid, error, seed = validate_seed(data.get('seed'))
    if not is_valid:
        logger.warning(f"[INIT] Seed validation warning: {error}")

    is_valid, errors, overrides = validate_config_overrides(data.get('config', {}))
    if not is_valid:
        logger.warning(f"[INIT] Config validation warnings: {errors}")

    with session_lock:
        if session is not None:
            session.stop()
        session = create_session(seed=seed, overrides=overrides)

        if 'mode' in data:
            is_valid, error, mode = validate_mode(data['mode'])
            if not is_valid:
                logger.warning(f"[INIT] {error}, defaulting to {mode}")
            session.select_mode(mode)

        logger.info(f"Session initialized: seed={seed}, mode={session.selected_mode.value}")
        session.board.draw(session.renderer)
        _emit_board()
        emit('score_update', session.score_payload())


@socketio.on('select_mode')
def handle_select_mode(data):
    """
    Mode selector changed. Applies from the next round on.

    Expected data:
        - mode: 'classic', 'walls', 'portal', 'speed' or 'god-mode'
    """
    if session is None:
        return

    is_valid, error, mode = validate_mode(data.get('mode') if data else None)
    if not is_valid:
        logger.warning(f"[MODE] {error}, defaulting to {mode}")

    with session_lock:
        session.select_mode(mode)
    emit('mode_selected', {'mode': mode, 'applies_next_round': session.is_running})


@socketio.on('play')
def handle_play(data=None):
    """Play button: start a round and, if none is alive, the frame loop."""
    global frame_loop_active
    if session is None:
        logger.warning("play called but no session exists")
        return

    with session_lock:
        started = session.start()
        if started:
            _emit_board()
        # A loop that is still alive picks up the new round by itself
        launch = started and not frame_loop_active
        if launch:
            frame_loop_active = True

    if launch:
        socketio.start_background_task(frame_loop)


@socketio.on('keydown')
def handle_keydown(data):
    """
    Key pressed in the browser.

    Expected data:
        - key: str, e.g. 'ArrowUp'
    """
    if session is None or not data:
        return

    key = data.get('key')
    if not validate_key(key):
        return

    with session_lock:
        session.change_direction(key)


@socketio.on('menu')
def handle_menu(data=None):
    """Menu button: stop the round and clear the board."""
    if session is None:
        return

    with session_lock:
        session.menu()
        _emit_board()


@socketio.on('acknowledge')
def handle_acknowledge(data=None):
    """Player dismissed the game-over message."""
    if session is None:
        return

    with session_lock:
        session.acknowledge()
        emit('ui_state', session.ui_state())


@socketio.on('exit')
def handle_exit(data=None):
    """Exit button: ask the page to close its window."""
    with session_lock:
        if session is not None:
            session.stop()
    logger.info("Exit requested")
    emit('close_window', {})


@socketio.on('get_state')
def handle_get_state(data=None):
    if session is None:
        return
    with session_lock:
        emit('game_update', session.get_state())


@socketio.on('get_stats')
def handle_get_stats(data=None):
    """Summary of the rounds played in this process."""
    if session is None:
        emit('round_stats', {'avg_score': 0, 'avg_length': 0, 'avg_ticks': 0,
                             'max_score': 0, 'rounds': 0, 'reasons': {}})
        return

    with session_lock:
        emit('round_stats', session.stats.get_summary())


if __name__ == '__main__':
    socketio.run(
        app,
        host=os.environ.get('HOST', '127.0.0.1'),
        port=int(os.environ.get('PORT', 5000)),
        debug=False,
        use_reloader=False,
        log_output=False
    )
