"""
Tests for main.py - the frame driver that ties session, clock, particles
and renderer together.
"""

import random
import sys
import os

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import GameConfig
from domain import UP, LEFT, Grid, Snake, RUNNING, ENDED
from main import (
    ArcadeGame,
    ScoreBoard,
    run_headless,
    START_SCREEN,
    PLAYING_SCREEN,
    GAME_OVER_SCREEN,
)
from players import GreedyPlayer, RandomPlayer
from services.high_score import InMemoryStore


def make_game(best=None, seed=0, tick_ms=110):
    """A game on a 20x20 board (500x500 viewport, whole viewport usable)."""
    config = GameConfig(
        cell_size=25,
        tick_ms=tick_ms,
        viewport=(500, 500),
        width_fraction=1.0,
        height_fraction=1.0,
        glow=False,
    )
    store = InMemoryStore({"snakeHighScore": best} if best is not None else None)
    return ArcadeGame(config, store=store, rng=random.Random(seed)), store


class TestArcadeGameSetup:
    def test_initial_state(self):
        game, _ = make_game(best=90)
        assert game.session.grid == Grid(20, 20)
        assert game.running is False
        assert game.canvas_size == (500, 500)
        assert game.scoreboard.screen == START_SCREEN
        assert game.scoreboard.high_score == 90

    def test_start_resets_clock_and_particles(self):
        game, _ = make_game()
        game.start()
        game.advance_frame(50)
        game.particles.spawn((1, 1), "#ff0055")

        game.start()

        assert game.clock.accumulator == 0.0
        assert len(game.particles) == 0
        assert game.scoreboard.screen == PLAYING_SCREEN
        assert game.scoreboard.score == 0


class TestFrames:
    """advance_frame(): ticks, then particles."""

    def test_no_ticks_while_idle(self):
        game, _ = make_game()
        assert game.advance_frame(500) == 0
        assert game.state().tick_number == 0

    def test_one_tick_after_tick_duration(self):
        """Starting a 20x20 game, one tick with no input moves the head up one cell."""
        game, _ = make_game()
        game.start()
        game.session.food = (0, 0)

        assert game.advance_frame(60) == 0
        assert game.fraction == pytest.approx(60 / 110)
        assert game.advance_frame(50) == 1

        state = game.state()
        assert state.snake_positions[0] == (10, 9)
        assert len(state.snake_positions) == 3
        assert state.score == 0
        assert game.fraction == 0.0

    def test_slow_frame_runs_catch_up_ticks(self):
        game, _ = make_game()
        game.start()
        game.session.food = (0, 0)
        assert game.advance_frame(330) == 3
        assert game.state().snake_positions[0] == (10, 7)

    def test_game_ending_mid_frame_stops_ticking(self):
        game, _ = make_game()
        game.start()
        game.session.food = (0, 19)
        game.session.snake = Snake([(10, 1), (10, 2), (10, 3)], heading=UP)

        ticks = game.advance_frame(110 * 5)

        assert ticks == 2
        assert game.session.status == ENDED
        assert game.fraction == 0.0

    def test_eating_spawns_particle_burst(self):
        """Eating scores 10, grows by one, places new food and bursts 12 particles."""
        game, _ = make_game()
        game.start()
        game.session.food = (10, 9)

        game.advance_frame(110)

        state = game.state()
        assert state.score == 10
        assert len(state.snake_positions) == 4
        assert state.food not in state.snake_positions
        assert len(game.particles) == 12
        for p in game.particles:
            # Spawned at the pixel centre of (10, 9), then moved one frame
            assert p.x - p.vx == pytest.approx(10 * 25 + 12.5)
            assert p.y - p.vy == pytest.approx(9 * 25 + 12.5)
            assert p.life == pytest.approx(1 - 110 * 0.002)
        assert game.scoreboard.score == 10

    def test_particles_keep_fading_after_game_over(self):
        game, _ = make_game()
        game.start()
        game.particles.spawn((3, 3), "#ff0055")
        game.session.end("wall")

        game.advance_frame(100)
        assert all(p.life == pytest.approx(0.8) for p in game.particles)

        game.advance_frame(500)
        assert len(game.particles) == 0


class TestInput:
    def test_keys_ignored_when_not_running(self):
        game, _ = make_game()
        assert game.key_down("ArrowLeft") is False
        assert len(game.session.input_buffer) == 0

    def test_key_down_feeds_buffer(self):
        game, _ = make_game()
        game.start()
        assert game.key_down("ArrowLeft") is True
        assert game.key_down("left") is True
        assert game.key_down("ArrowDown") is False
        assert game.key_down("KeyQ") is False
        assert len(game.session.input_buffer) == 2

    def test_swipe_feeds_same_buffer(self):
        game, _ = make_game()
        game.start()
        game.key_down("ArrowLeft")
        game.touch_start(100, 100)
        assert game.touch_move(80, 100) is True
        assert game.touch_move(80, 50) is False  # buffer full
        assert list(game.session.input_buffer._queue) == [LEFT, LEFT]

    def test_swipe_ignored_when_not_running(self):
        game, _ = make_game()
        game.touch_start(100, 100)
        assert game.touch_move(300, 100) is False
        assert game.swipe.origin is None


class TestScoreBoard:
    def test_game_over_screen_and_record(self):
        game, store = make_game(best=0)
        game.start()
        game.session.score = 30
        game.session.snake = Snake([(10, 0)], heading=UP)

        game.advance_frame(110)

        board = game.scoreboard
        assert board.screen == GAME_OVER_SCREEN
        assert board.final_score == 30
        assert board.high_score == 30
        assert board.new_record is True
        assert store.values["snakeHighScore"] == 30

    def test_no_record_below_best(self):
        board = ScoreBoard(high_score=100)
        board.game_over(40, 100, "self")
        assert board.new_record is False
        assert board.final_score == 40

    def test_no_record_when_another_game_scored_higher(self):
        board = ScoreBoard(high_score=0)
        board.game_over(10, 20, "wall")
        assert board.new_record is False
        assert board.high_score == 20


class TestResize:
    def test_resize_during_game_only_affects_next_game(self):
        game, _ = make_game()
        game.start()

        grid = game.resize(300, 250)

        assert grid == Grid(12, 10)
        assert game.session.grid == Grid(20, 20)
        assert game.canvas_size == (500, 500)
        assert game.session.status == RUNNING

        game.session.end("wall")
        game.start()
        assert game.session.grid == Grid(12, 10)
        assert game.canvas_size == (300, 250)

    def test_too_small_resize_ignored(self):
        game, _ = make_game()
        assert game.resize(10, 10) == Grid(20, 20)


class TestRendering:
    def test_frame_matches_canvas(self):
        game, _ = make_game()
        game.start()
        image = game.frame()
        assert image.size == (500, 500)


class TestHeadless:
    def test_random_autopilot_game(self):
        game, _ = make_game(seed=3)
        result = run_headless(game, RandomPlayer(rng=random.Random(3)), max_ticks=60)

        assert result.ticks <= 60
        assert result.frames == []
        assert result.frame_count >= result.ticks
        if result.final_state.status == RUNNING:
            assert result.ticks == 60

    def test_greedy_autopilot_scores(self):
        game, _ = make_game(seed=1)
        result = run_headless(game, GreedyPlayer(), max_ticks=200)
        assert result.final_state.score >= 10

    def test_record_and_linger(self):
        game, _ = make_game(seed=5)
        result = run_headless(game, RandomPlayer(rng=random.Random(5)), max_ticks=3, record=True, linger_frames=4)
        assert len(result.frames) == result.frame_count
        assert result.frame_count >= 4
        assert all(frame.size == (500, 500) for frame in result.frames)

    def test_restart_after_headless_game_is_fresh(self):
        game, _ = make_game(seed=2)
        run_headless(game, RandomPlayer(rng=random.Random(2)), max_ticks=500)
        game.start()
        state = game.state()
        assert state.snake_positions == [(10, 10), (10, 11), (10, 12)]
        assert state.score == 0
        assert state.heading == UP
