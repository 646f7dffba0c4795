import argparse
import json
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv
from PIL import Image

from config import GameConfig
from domain.constants import FOOD_COLOR
from domain.clock import FixedStepClock
from domain.game_state import GameState
from domain.grid import Grid, configure
from domain.session import GameSession, SessionListener, CompositeListener
from players import Player, get_player_class
from services.high_score import HighScoreTracker, KeyValueStore
from services.input_sources import SwipeDetector, direction_for_key
from services.particles import ParticleSystem
from services.renderer import SnakeRenderer

logger = logging.getLogger(__name__)

START_SCREEN = "start"
PLAYING_SCREEN = "playing"
GAME_OVER_SCREEN = "game_over"


class ScoreBoard(SessionListener):
    """
    What the score displays and overlay screens should show.

    Hosts read these fields after each frame; they are updated from
    session events only.
    """

    def __init__(self, high_score: int = 0):
        self.score = 0
        self.high_score = high_score
        self.final_score: Optional[int] = None
        self.new_record = False
        self.screen = START_SCREEN

    def started(self, state):
        self.final_score = None
        self.new_record = False
        self.screen = PLAYING_SCREEN

    def score_changed(self, score, high_score):
        self.score = score
        self.high_score = high_score

    def game_over(self, final_score, high_score, reason):
        self.new_record = final_score == high_score and final_score > self.high_score
        self.final_score = final_score
        self.high_score = high_score
        self.screen = GAME_OVER_SCREEN


class ParticleBurst(SessionListener):
    """Spawns a particle burst on every eaten food."""

    def __init__(self, particles: ParticleSystem, cell_size: int, color: str = FOOD_COLOR):
        self.particles = particles
        self.cell_size = cell_size
        self.color = color

    def food_eaten(self, cell):
        self.particles.spawn(cell, self.color, self.cell_size)


class ArcadeGame:
    """
    Tick driver for one player's game.

    Owns the session, the fixed-step clock, the particles and the
    renderer. Hosts (window, HTTP API, headless runner) call
    advance_frame() once per animation frame with the elapsed time, then
    frame() to get the picture. Everything runs on the caller's thread.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        store: Optional[KeyValueStore] = None,
        rng: Optional[random.Random] = None,
        listener: Optional[SessionListener] = None,
    ):
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.high_scores = HighScoreTracker(store)
        self.scoreboard = ScoreBoard(self.high_scores.best)
        self.particles = ParticleSystem(rng=self.rng)
        self.renderer = SnakeRenderer(self.config.cell_size, glow=self.config.glow)
        self.swipe = SwipeDetector()
        self.elapsed_ms = 0.0

        self.grid = self._configure(*self.config.viewport)

        listeners = CompositeListener([
            self.scoreboard,
            ParticleBurst(self.particles, self.config.cell_size),
        ])
        if listener is not None:
            listeners.add(listener)

        self.session = GameSession(self.grid, self.high_scores, listeners, rng=self.rng)
        self.clock = FixedStepClock(self.config.tick_ms, on_tick=self.session.tick)

    def _configure(self, viewport_width: float, viewport_height: float) -> Grid:
        return configure(
            viewport_width,
            viewport_height,
            self.config.cell_size,
            self.config.width_fraction,
            self.config.height_fraction,
        )

    @property
    def running(self) -> bool:
        return self.session.running

    @property
    def canvas_size(self):
        """Pixel size of the board currently on screen."""
        return self.session.grid.pixel_size(self.config.cell_size)

    def resize(self, viewport_width: float, viewport_height: float) -> Grid:
        """
        Recompute the grid for a new viewport.

        A live game keeps its board; the new grid applies from the next
        start. A viewport too small for a board is logged and ignored.
        """
        try:
            grid = self._configure(viewport_width, viewport_height)
        except ValueError as e:
            logger.warning(f"Ignoring resize: {e}")
            return self.grid

        self.grid = grid
        self.session.resize(grid)
        return grid

    def start(self):
        """Start (or restart) a game, discarding all previous session state."""
        self.session.start()
        self.clock.reset()
        self.particles.clear()
        self.swipe.end()

    def press(self, direction: str) -> bool:
        return self.session.enqueue(direction)

    def key_down(self, key: str) -> bool:
        direction = direction_for_key(key)
        if direction is None or not self.running:
            return False
        return self.press(direction)

    def touch_start(self, x: float, y: float):
        if self.running:
            self.swipe.begin(x, y)

    def touch_move(self, x: float, y: float) -> bool:
        if not self.running:
            return False
        direction = self.swipe.move(x, y)
        if direction is None:
            return False
        return self.press(direction)

    def advance_frame(self, delta_ms: float) -> int:
        """
        One animation frame: simulation ticks, then particles.

        Returns:
            Number of ticks committed in this frame
        """
        ticks = 0
        if self.session.running:
            ticks = self.clock.advance(delta_ms)
        self.particles.advance(delta_ms)
        self.elapsed_ms += max(0.0, delta_ms)
        return ticks

    @property
    def fraction(self) -> float:
        return self.clock.fraction if self.session.running else 0.0

    def state(self) -> GameState:
        return self.session.snapshot()

    def frame(self, now_ms: Optional[float] = None) -> Image.Image:
        """Render the current state. now_ms drives the food pulse."""
        return self.renderer.render(
            self.session.snapshot(),
            fraction=self.fraction,
            particles=self.particles,
            now_ms=self.elapsed_ms if now_ms is None else now_ms,
        )


@dataclass
class HeadlessResult:
    final_state: GameState
    ticks: int
    frame_count: int
    frames: List[Image.Image] = field(default_factory=list)
    output_path: Optional[str] = None


def run_headless(
    game: ArcadeGame,
    player: Player,
    max_ticks: int = 1000,
    frame_ms: float = 1000 / 60,
    record: bool = False,
    linger_frames: int = 0,
) -> HeadlessResult:
    """
    Play one game with an autopilot, feeding synthetic frame deltas.

    The player is asked for a move whenever the input buffer is empty, so
    its choice always applies from the snake's current head.

    Args:
        game: The game to drive (started here)
        player: Autopilot choosing directions
        max_ticks: Stop after this many ticks even if the snake is alive
        frame_ms: Synthetic time between frames
        record: Keep every rendered frame
        linger_frames: Extra frames rendered after game over (particles fade)
    """
    game.start()
    frames: List[Image.Image] = []
    frame_count = 0

    while game.running and game.session.tick_number < max_ticks:
        if len(game.session.input_buffer) == 0:
            game.press(player.get_move(game.state()))
        game.advance_frame(frame_ms)
        frame_count += 1
        if record:
            frames.append(game.frame())

    for _ in range(linger_frames):
        game.advance_frame(frame_ms)
        frame_count += 1
        if record:
            frames.append(game.frame())

    state = game.state()
    logger.info(f"Headless game finished: {state!r}")
    return HeadlessResult(final_state=state, ticks=state.tick_number, frame_count=frame_count, frames=frames)


def _open_store(use_memory: bool):
    if use_memory:
        return None
    from services.high_score import SqliteStore
    return SqliteStore()


def main():
    load_dotenv()
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    parser = argparse.ArgumentParser(description="Neon Snake - fixed-step arcade snake.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    play_parser = subparsers.add_parser("play", help="Play in a desktop window")
    play_parser.add_argument("--memory", action="store_true", help="Don't persist the high score")

    headless_parser = subparsers.add_parser("headless", help="Let an autopilot play without a window")
    headless_parser.add_argument("--player", default="greedy", help="Autopilot: random or greedy")
    headless_parser.add_argument("--max_ticks", type=int, default=1000, help="Maximum number of ticks")
    headless_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    headless_parser.add_argument("--output", type=str, default=None, help="Write an MP4 of the game here")
    headless_parser.add_argument("--memory", action="store_true", help="Don't persist the high score")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=5000)

    args = parser.parse_args()
    config = GameConfig.from_env()

    if args.command == "play":
        from cli.play_window import run_window
        run_window(config, store=_open_store(args.memory))

    elif args.command == "headless":
        rng = random.Random(args.seed)
        game = ArcadeGame(config, store=_open_store(args.memory), rng=rng)
        player = get_player_class(args.player)(rng=rng)

        if args.output:
            from services.video_generator import SnakeVideoGenerator
            result = SnakeVideoGenerator().record_autoplay(game, player, args.output, max_ticks=args.max_ticks)
        else:
            result = run_headless(game, player, max_ticks=args.max_ticks)

        print(result.final_state.print_board())
        print(json.dumps(result.final_state.to_dict(), indent=2))

    elif args.command == "serve":
        from app import app
        app.run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()
