"""
Game constants for Neon Snake.
"""

from typing import Dict, Tuple

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Screen coordinates: (0, 0) is the top-left cell, y grows downward
DIRECTION_VECTORS: Dict[str, Tuple[int, int]] = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITES = {UP: DOWN, DOWN: UP, LEFT: RIGHT, RIGHT: LEFT}

# Board settings
CELL_SIZE = 25
USABLE_WIDTH_FRACTION = 0.95
USABLE_HEIGHT_FRACTION = 0.8
MIN_GRID_WIDTH = 1
MIN_GRID_HEIGHT = 5

# Game settings
TICK_MS = 110
INITIAL_LENGTH = 3
INITIAL_HEADING = UP
POINTS_PER_FOOD = 10
INPUT_QUEUE_LIMIT = 2

# Effects
PARTICLE_COUNT = 12
PARTICLE_FADE_PER_MS = 0.002
PARTICLE_SPEED = 8.0
FOOD_COLOR = "#ff0055"

# Input
SWIPE_THRESHOLD = 10

# Persistence
HIGH_SCORE_KEY = "snakeHighScore"


def opposite(direction: str) -> str:
    """Return the direction pointing the other way."""
    return OPPOSITES[direction]


def is_reversal(candidate: str, heading: str) -> bool:
    """True if turning from heading to candidate would be a 180 degree turn."""
    return OPPOSITES.get(heading) == candidate
