"""
Greedy player - heads for the food along safe cells.
"""

from domain.game_state import GameState
from .base import Player


class GreedyPlayer(Player):
    """
    Picks the safe move that gets closest (Manhattan distance) to the food.
    Ties go to the current heading so the snake doesn't zig-zag.
    """

    def get_move(self, game_state: GameState) -> str:
        candidates = self.safe_moves(game_state)
        if not candidates:
            return game_state.heading

        if game_state.food is None:
            moves = [move for move, _ in candidates]
            return game_state.heading if game_state.heading in moves else moves[0]

        fx, fy = game_state.food

        def score(candidate):
            move, (x, y) = candidate
            return (abs(fx - x) + abs(fy - y), move != game_state.heading)

        return min(candidates, key=score)[0]
