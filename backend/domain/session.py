"""
GameSession - the single owner of all mutable game state.

Lifecycle: idle -> running -> ended, and ended -> running again on restart.
Every mutation happens inside start(), enqueue(), tick() and end(), which
the frame driver calls from one thread only.
"""

import logging
import random
from typing import Iterable, Optional, Tuple

from .constants import INITIAL_LENGTH, POINTS_PER_FOOD, VALID_MOVES, INITIAL_HEADING
from .food import place_food
from .game_state import GameState
from .grid import Grid
from .input_buffer import InputBuffer
from .snake import Snake

logger = logging.getLogger(__name__)

IDLE = "idle"
RUNNING = "running"
ENDED = "ended"


class SessionListener:
    """
    Receives session events. Override the hooks you need; the defaults
    do nothing.
    """

    def started(self, state: GameState):
        pass

    def score_changed(self, score: int, high_score: int):
        pass

    def food_eaten(self, cell: Tuple[int, int]):
        pass

    def game_over(self, final_score: int, high_score: int, reason: str):
        pass


class CompositeListener(SessionListener):
    """Forwards every event to each wrapped listener in order."""

    def __init__(self, listeners: Iterable[SessionListener] = ()):
        self.listeners = list(listeners)

    def add(self, listener: SessionListener):
        self.listeners.append(listener)

    def started(self, state):
        for listener in self.listeners:
            listener.started(state)

    def score_changed(self, score, high_score):
        for listener in self.listeners:
            listener.score_changed(score, high_score)

    def food_eaten(self, cell):
        for listener in self.listeners:
            listener.food_eaten(cell)

    def game_over(self, final_score, high_score, reason):
        for listener in self.listeners:
            listener.game_over(final_score, high_score, reason)


class GameSession:
    """
    Snake state machine.

    high_scores is any object exposing `best`, `refresh()` and
    `submit(score) -> bool`
    (see services.high_score.HighScoreTracker).
    """

    def __init__(
        self,
        grid: Grid,
        high_scores,
        listener: Optional[SessionListener] = None,
        rng: Optional[random.Random] = None,
        initial_length: int = INITIAL_LENGTH,
    ):
        self.grid = grid
        self.next_grid = grid
        self.high_scores = high_scores
        self.listener = listener or SessionListener()
        self.rng = rng or random.Random()
        self.initial_length = initial_length

        self.status = IDLE
        self.snake: Optional[Snake] = None
        self.food: Optional[Tuple[int, int]] = None
        self.score = 0
        self.tick_number = 0
        self.input_buffer = InputBuffer()

    @property
    def running(self) -> bool:
        return self.status == RUNNING

    def resize(self, grid: Grid):
        """Use a new grid from the next start(); a live session keeps its board."""
        self.next_grid = grid
        if self.status != RUNNING:
            self.grid = grid
        else:
            logger.debug(f"Resize to {grid.width}x{grid.height} deferred until restart")

    def start(self):
        """Reset every piece of session state and begin ticking."""
        self.grid = self.next_grid
        self.snake = Snake.spawn(self.grid, self.initial_length)
        self.input_buffer.clear()
        self.score = 0
        self.tick_number = 0
        self.food = place_food(self.grid, self.snake.positions, self.rng)
        self.status = RUNNING
        self.high_scores.refresh()

        logger.info(f"Session started on a {self.grid.width}x{self.grid.height} grid")
        self.listener.started(self.snapshot())
        self.listener.score_changed(self.score, self.high_scores.best)

    def enqueue(self, direction: str) -> bool:
        """
        Buffer a direction for an upcoming tick.

        Ignored (returns False) unless the session is running or if the
        buffer is already full.
        """
        if self.status != RUNNING:
            return False
        if direction not in VALID_MOVES:
            logger.debug(f"Ignoring unknown direction {direction!r}")
            return False
        return self.input_buffer.enqueue(direction)

    def tick(self) -> bool:
        """
        Advance the snake by one cell.

        Returns:
            True while the session keeps running after this tick
        """
        if self.status != RUNNING:
            return False

        self.tick_number += 1

        requested = self.input_buffer.dequeue()
        if requested is not None:
            self.snake.steer(requested)

        new_head = self.snake.next_head()

        if not self.grid.contains(new_head):
            self.end("wall")
            return False

        if self.snake.hits_self(new_head):
            self.end("self")
            return False

        ate = new_head == self.food
        self.snake.advance(new_head, grow=ate)

        if ate:
            self.score += POINTS_PER_FOOD
            self.listener.score_changed(self.score, self.high_scores.best)
            self.listener.food_eaten(new_head)
            self.food = place_food(self.grid, self.snake.positions, self.rng)
            if self.food is None:
                logger.info("Snake fills the whole board, no free cell left for food")

        return True

    def end(self, reason: str):
        """Running -> ended. Records the high score and reports the final score."""
        if self.status != RUNNING:
            return

        self.status = ENDED
        self.snake.kill(reason, self.tick_number)
        self.high_scores.submit(self.score)

        logger.info(f"Game over ({reason}) after {self.tick_number} ticks, score {self.score}")
        self.listener.game_over(self.score, self.high_scores.best, reason)

    def snapshot(self) -> GameState:
        return GameState(
            tick_number=self.tick_number,
            status=self.status,
            width=self.grid.width,
            height=self.grid.height,
            snake_positions=list(self.snake.positions) if self.snake else [],
            heading=self.snake.heading if self.snake else INITIAL_HEADING,
            food=self.food,
            score=self.score,
            high_score=self.high_scores.best,
            death_reason=self.snake.death_reason if self.snake else None,
        )
