"""
Base player interface for the autopilot.
"""

import random
from typing import List, Optional, Tuple

from domain.constants import DIRECTION_VECTORS, VALID_MOVES, is_reversal
from domain.game_state import GameState


class Player:
    """
    Base class/interface for autopilot logic.

    A player looks at a snapshot and returns the direction it wants to
    queue before the next tick.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> str:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of: "UP", "DOWN", "LEFT", "RIGHT"
        """
        raise NotImplementedError

    @staticmethod
    def safe_moves(game_state: GameState) -> List[Tuple[str, Tuple[int, int]]]:
        """
        Moves that neither reverse, leave the board, nor hit the body
        (the tail is fine, it moves away this tick).
        """
        positions = game_state.snake_positions
        head_x, head_y = positions[0]

        safe = []
        for move in sorted(VALID_MOVES):
            if is_reversal(move, game_state.heading):
                continue
            dx, dy = DIRECTION_VECTORS[move]
            new_x, new_y = head_x + dx, head_y + dy

            # Check wall collisions
            if (new_x < 0 or new_x >= game_state.width or
                new_y < 0 or new_y >= game_state.height):
                continue

            # Check self collisions (excluding tail which will move)
            if (new_x, new_y) in positions[:-1]:
                continue

            safe.append((move, (new_x, new_y)))
        return safe
