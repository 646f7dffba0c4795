"""
HTTP surface for Neon Snake.

A browser page (or any client) drives a server-side game: it posts
directional input and elapsed frame time, and fetches the rendered frame
as PNG or the state as JSON. Each game is only ever mutated under its own
lock, so there is a single writer per game even with a threaded server.
"""

import io
import os
import uuid
import logging
import threading
from collections import OrderedDict
from typing import Callable, Optional

from flask import Flask, jsonify, request, send_file
from flask_cors import CORS
from dotenv import load_dotenv

from config import GameConfig
from domain.constants import VALID_MOVES
from main import ArcadeGame
from services.high_score import HighScoreTracker, KeyValueStore, SqliteStore

load_dotenv()

app = Flask(__name__)
logging.basicConfig(level=logging.INFO)

# Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
if allowed_origins_env:
    allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
else:
    # sensible defaults for local dev
    allowed_origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

logger = logging.getLogger(__name__)

CORS(app, resources={r"/api/*": {"origins": allowed_origins}})

MAX_GAMES = int(os.getenv("SNAKE_MAX_GAMES", "256"))
MAX_FRAME_DELTA_MS = 10_000


class GameHandle:
    def __init__(self, game: ArcadeGame):
        self.game = game
        self.lock = threading.Lock()


class GameRegistry:
    """
    Live games by id. The oldest game is dropped once max_games is reached.
    """

    def __init__(self, store_factory: Callable[[], Optional[KeyValueStore]] = SqliteStore, max_games: int = MAX_GAMES):
        self.store_factory = store_factory
        self.max_games = max_games
        self._games = OrderedDict()
        self._lock = threading.Lock()

    def create(self, config: GameConfig) -> str:
        game = ArcadeGame(config, store=self.store_factory())
        game_id = str(uuid.uuid4())
        with self._lock:
            self._games[game_id] = GameHandle(game)
            while len(self._games) > self.max_games:
                dropped, _ = self._games.popitem(last=False)
                logger.info(f"Dropping game {dropped} (registry full)")
        return game_id

    def get(self, game_id: str) -> Optional[GameHandle]:
        with self._lock:
            return self._games.get(game_id)

    def high_score(self) -> int:
        return HighScoreTracker(self.store_factory()).best

    def __len__(self):
        return len(self._games)


registry = GameRegistry()


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _payload():
    """JSON object body, or {} for anything else (missing, malformed, not an object)."""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _game_response(game: ArcadeGame, **extra):
    scoreboard = game.scoreboard
    body = {
        "state": game.state().to_dict(),
        "fraction": game.fraction,
        "canvas": {"width": game.canvas_size[0], "height": game.canvas_size[1]},
        "scoreboard": {
            "score": scoreboard.score,
            "high_score": scoreboard.high_score,
            "final_score": scoreboard.final_score,
            "new_record": scoreboard.new_record,
            "screen": scoreboard.screen,
        },
    }
    body.update(extra)
    return jsonify(body)


def _read_viewport(payload, default):
    viewport = payload.get("viewport")
    if viewport is None:
        return default
    try:
        width, height = float(viewport["width"]), float(viewport["height"])
    except (KeyError, TypeError, ValueError):
        raise ValueError("viewport must be an object with numeric width and height")
    if width <= 0 or height <= 0:
        raise ValueError("viewport width and height must be positive")
    return (width, height)


@app.route("/api/games", methods=["POST"])
def create_game():
    """
    Create a game in the idle state.

    Body (optional): {"viewport": {"width": 1280, "height": 800}}
    """
    config = GameConfig.from_env()
    try:
        config.viewport = _read_viewport(_payload(), config.viewport)
        game_id = registry.create(config)
    except ValueError as e:
        return _error(str(e), 400)

    handle = registry.get(game_id)
    with handle.lock:
        response = _game_response(handle.game, game_id=game_id)
    return response, 201


def _with_game(game_id: str, action):
    handle = registry.get(game_id)
    if handle is None:
        return _error(f"Game '{game_id}' not found", 404)
    with handle.lock:
        return action(handle.game)


@app.route("/api/games/<game_id>/start", methods=["POST"])
def start_game(game_id):
    """Start or restart a game."""
    def action(game):
        game.start()
        return _game_response(game)
    return _with_game(game_id, action)


@app.route("/api/games/<game_id>/input", methods=["POST"])
def send_input(game_id):
    """
    Queue a direction.

    Body: {"direction": "UP"} or {"key": "ArrowUp"}.
    Input while the game is not running is accepted and ignored.
    """
    payload = _payload()
    direction = payload.get("direction")
    key = payload.get("key")

    if direction is None and key is None:
        return _error("Provide 'direction' or 'key'", 400)
    if direction is not None and (not isinstance(direction, str) or direction not in VALID_MOVES):
        return _error(f"Unknown direction '{direction}'", 400)

    def action(game):
        if direction is not None:
            accepted = game.press(direction)
        else:
            accepted = game.key_down(str(key))
        return jsonify({"accepted": accepted, "queued": len(game.session.input_buffer)})
    return _with_game(game_id, action)


@app.route("/api/games/<game_id>/frame", methods=["POST"])
def advance_frame(game_id):
    """
    Advance by one animation frame.

    Body: {"delta_ms": 16.7}
    """
    raw = _payload().get("delta_ms")
    try:
        delta_ms = float(raw)
    except (TypeError, ValueError):
        return _error("delta_ms must be a number", 400)
    if not 0 <= delta_ms <= MAX_FRAME_DELTA_MS:
        return _error(f"delta_ms must be between 0 and {MAX_FRAME_DELTA_MS}", 400)

    def action(game):
        ticks = game.advance_frame(delta_ms)
        return _game_response(game, ticks=ticks)
    return _with_game(game_id, action)


@app.route("/api/games/<game_id>/state", methods=["GET"])
def get_state(game_id):
    return _with_game(game_id, _game_response)


@app.route("/api/games/<game_id>/frame.png", methods=["GET"])
def get_frame_png(game_id):
    """Rendered frame for the game's current state."""
    def action(game):
        buffer = io.BytesIO()
        game.frame().save(buffer, format="PNG")
        buffer.seek(0)
        return send_file(buffer, mimetype="image/png")
    return _with_game(game_id, action)


@app.route("/api/games/<game_id>/resize", methods=["POST"])
def resize_game(game_id):
    """
    Report a new viewport. A running game keeps its board until restart.

    Body: {"viewport": {"width": 800, "height": 600}}
    """
    try:
        viewport = _read_viewport(_payload(), None)
    except ValueError as e:
        return _error(str(e), 400)
    if viewport is None:
        return _error("Provide 'viewport'", 400)

    def action(game):
        grid = game.resize(*viewport)
        return _game_response(game, next_grid={"width": grid.width, "height": grid.height})
    return _with_game(game_id, action)


@app.route("/api/high-score", methods=["GET"])
def get_high_score():
    try:
        return jsonify({"high_score": registry.high_score()})
    except Exception as error:
        logger.error(f"Error reading high score: {error}")
        return _error("Failed to load high score", 500)


if __name__ == "__main__":
    # Run the Flask app in debug mode.
    app.run(debug=os.getenv("FLASK_DEBUG"))
