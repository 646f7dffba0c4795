"""
Autopilot players for Neon Snake.

Players are used by the headless runner and the video recorder to steer
the snake without a human at the keyboard.
"""

from .base import Player
from .random_player import RandomPlayer
from .greedy_player import GreedyPlayer

AVAILABLE_PLAYERS = {
    'random': RandomPlayer,
    'greedy': GreedyPlayer,
}


def get_player_class(name: str):
    """Look up a player class by name, raising ValueError for unknown names."""
    try:
        return AVAILABLE_PLAYERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown player '{name}'. Available: {', '.join(sorted(AVAILABLE_PLAYERS))}"
        )


__all__ = [
    'Player',
    'RandomPlayer',
    'GreedyPlayer',
    'AVAILABLE_PLAYERS',
    'get_player_class',
]
