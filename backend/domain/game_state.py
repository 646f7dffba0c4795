"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import Any, Dict, List, Tuple, Optional


class GameState:
    """
    A snapshot of the session at a specific tick.

    Attributes:
        tick_number: ticks committed since the session started
        status: 'idle', 'running' or 'ended'
        width, height: board dimensions
        snake_positions: list of (x, y), head first
        heading: committed direction of travel
        food: (x, y) of the food, or None when the board is full
        score: current score
        high_score: best score seen so far
        death_reason: 'wall' or 'self' once the session has ended
    """

    def __init__(
        self,
        tick_number: int,
        status: str,
        width: int,
        height: int,
        snake_positions: List[Tuple[int, int]],
        heading: str,
        food: Optional[Tuple[int, int]],
        score: int,
        high_score: int,
        death_reason: Optional[str] = None
    ):
        self.tick_number = tick_number
        self.status = status
        self.width = width
        self.height = height
        self.snake_positions = snake_positions
        self.heading = heading
        self.food = food
        self.score = score
        self.high_score = high_score
        self.death_reason = death_reason

    @property
    def running(self) -> bool:
        return self.status == "running"

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        T = snake body
        H = snake head
        Row 0 is printed first (top of the screen).
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        if self.food is not None:
            fx, fy = self.food
            board[fy][fx] = 'F'

        for pos_idx, (x, y) in enumerate(self.snake_positions):
            if not (0 <= x < self.width and 0 <= y < self.height):
                continue
            board[y][x] = 'H' if pos_idx == 0 else 'T'

        result = []
        for y in range(self.height):
            result.append(f"{y:2d} {' '.join(board[y])}")

        # x-axis labels (last digit only, keeps columns aligned)
        result.append("   " + " ".join(str(i % 10) for i in range(self.width)))

        return "\n".join(result)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation; tuples become lists."""
        return {
            "tick_number": self.tick_number,
            "status": self.status,
            "width": self.width,
            "height": self.height,
            "snake": [list(p) for p in self.snake_positions],
            "heading": self.heading,
            "food": list(self.food) if self.food is not None else None,
            "score": self.score,
            "high_score": self.high_score,
            "death_reason": self.death_reason,
        }

    def __repr__(self):
        return (
            f"<GameState tick={self.tick_number}, status={self.status}, "
            f"length={len(self.snake_positions)}, food={self.food}, score={self.score}>"
        )
