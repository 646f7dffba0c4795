"""
Bounded FIFO of directional intents, consumed one per tick.
"""

from collections import deque
from typing import Optional

from .constants import INPUT_QUEUE_LIMIT, VALID_MOVES


class InputBuffer:
    """
    Queues directions between ticks.

    Legality is not checked here; the session filters reversals against
    the committed heading when it dequeues.
    """

    def __init__(self, limit: int = INPUT_QUEUE_LIMIT):
        self.limit = limit
        self._queue = deque()

    def enqueue(self, direction: str) -> bool:
        """Append a direction. Returns False if the buffer is full."""
        if direction not in VALID_MOVES:
            raise ValueError(f"Unknown direction: {direction!r}")
        if len(self._queue) >= self.limit:
            return False
        self._queue.append(direction)
        return True

    def dequeue(self) -> Optional[str]:
        if not self._queue:
            return None
        return self._queue.popleft()

    def clear(self):
        self._queue.clear()

    def __len__(self) -> int:
        return len(self._queue)

    def __repr__(self):
        return f"<InputBuffer {list(self._queue)}>"
