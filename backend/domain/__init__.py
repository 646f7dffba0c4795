"""
Domain entities for the Neon Snake game engine.

This module contains the core simulation that is independent of
infrastructure concerns (rendering, storage, windowing, HTTP).
"""

from .constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES, DIRECTION_VECTORS
from .grid import Grid, configure
from .input_buffer import InputBuffer
from .snake import Snake
from .food import place_food
from .clock import FixedStepClock
from .game_state import GameState
from .session import GameSession, SessionListener, CompositeListener, IDLE, RUNNING, ENDED

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'DIRECTION_VECTORS',
    'Grid', 'configure',
    'InputBuffer',
    'Snake',
    'place_food',
    'FixedStepClock',
    'GameState',
    'GameSession', 'SessionListener', 'CompositeListener',
    'IDLE', 'RUNNING', 'ENDED',
]
