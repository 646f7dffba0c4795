"""
Food placement - a random free cell outside the snake body.
"""

import random
from typing import Iterable, Optional, Tuple

from .grid import Grid

Cell = Tuple[int, int]


def place_food(
    grid: Grid,
    body: Iterable[Cell],
    rng: random.Random = None,
    max_attempts: Optional[int] = None,
) -> Optional[Cell]:
    """
    Return a random cell (x, y) not occupied by the snake.

    Rejection sampling is fast while the snake is short. After max_attempts
    misses (default 4x the number of cells) we enumerate the free cells and
    pick one uniformly, so a nearly full board still terminates.

    Returns:
        The chosen cell, or None if the snake covers the whole board
    """
    rng = rng or random
    occupied = set(body)
    if len(occupied) >= grid.size:
        return None

    if max_attempts is None:
        max_attempts = 4 * grid.size

    for _ in range(max_attempts):
        x = rng.randint(0, grid.width - 1)
        y = rng.randint(0, grid.height - 1)
        if (x, y) not in occupied:
            return (x, y)

    free_cells = [cell for cell in grid.cells() if cell not in occupied]
    return rng.choice(free_cells)
