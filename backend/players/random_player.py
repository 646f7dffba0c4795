"""
Random player implementation - picks random safe moves.
"""

from domain.game_state import GameState
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a valid direction that avoids walls and self-collisions.
    """

    def get_move(self, game_state: GameState) -> str:
        valid_moves = [move for move, _ in self.safe_moves(game_state)]

        # If no valid moves, keep going (we'll die anyway)
        if not valid_moves:
            return game_state.heading

        return self.rng.choice(valid_moves)
