"""
Snake entity for the game engine.
"""

from collections import deque
from typing import List, Tuple, Optional

from .constants import DIRECTION_VECTORS, INITIAL_HEADING, INITIAL_LENGTH, is_reversal
from .grid import Grid


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
        heading: committed direction applied at the last tick
        alive: whether this snake is still alive
        death_reason: 'wall' or 'self'
        death_tick: The tick number when the snake died
    """

    def __init__(self, positions: List[Tuple[int, int]], heading: str = INITIAL_HEADING):
        if not positions:
            raise ValueError("A snake needs at least one segment")
        self.positions = deque(positions)
        self.heading = heading
        self.alive = True
        self.death_reason: Optional[str] = None
        self.death_tick: Optional[int] = None

    @classmethod
    def spawn(cls, grid: Grid, length: int = INITIAL_LENGTH) -> "Snake":
        """Vertical snake centred on the grid, head on top, heading up."""
        cx, cy = grid.center
        return cls([(cx, cy + i) for i in range(length)], heading=INITIAL_HEADING)

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Tuple[int, int]:
        return self.positions[-1]

    def __len__(self) -> int:
        return len(self.positions)

    def steer(self, direction: str) -> bool:
        """
        Commit a new heading unless it reverses the current one.

        Returns:
            True if the heading was changed
        """
        if is_reversal(direction, self.heading):
            return False
        self.heading = direction
        return True

    def next_head(self) -> Tuple[int, int]:
        hx, hy = self.head
        dx, dy = DIRECTION_VECTORS[self.heading]
        return (hx + dx, hy + dy)

    def previous_head(self) -> Tuple[int, int]:
        """Cell the head occupied before the last tick, assuming a straight move."""
        hx, hy = self.head
        dx, dy = DIRECTION_VECTORS[self.heading]
        return (hx - dx, hy - dy)

    def hits_self(self, cell: Tuple[int, int]) -> bool:
        """Check a candidate head against the body (excluding tail, which will move)."""
        return cell in list(self.positions)[:-1]

    def advance(self, new_head: Tuple[int, int], grow: bool = False):
        self.positions.appendleft(new_head)
        if not grow:
            self.positions.pop()

    def kill(self, reason: str, tick: int):
        self.alive = False
        self.death_reason = reason
        self.death_tick = tick
