"""
Fixed-step simulation clock.

Frames arrive at whatever rate the host manages; ticks happen every
tick_ms of accumulated time. Several ticks may run in one frame when the
host falls behind, none are skipped.
"""

from typing import Callable, Optional

from .constants import TICK_MS


class FixedStepClock:
    """
    Accumulates frame time and fires on_tick once per elapsed tick.

    on_tick may return False to stop catch-up ticks for the rest of the
    frame (the game ended). Any other return value keeps ticking.
    """

    def __init__(self, tick_ms: float = TICK_MS, on_tick: Optional[Callable[[], Optional[bool]]] = None):
        if tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {tick_ms}")
        self.tick_ms = tick_ms
        self.on_tick = on_tick
        self.accumulator = 0.0
        self.ticks = 0
        self._fraction = 0.0

    @property
    def fraction(self) -> float:
        """
        Interpolation progress toward the next tick, in [0, 1].

        Reads 0 for the frame in which a tick committed, since the snake was
        just snapped to its new cells.
        """
        return self._fraction

    def advance(self, delta_ms: float) -> int:
        """
        Add elapsed frame time and run every tick that became due.

        Returns:
            Number of ticks performed during this call
        """
        self.accumulator += max(0.0, delta_ms)
        self._fraction = min(self.accumulator / self.tick_ms, 1.0)

        performed = 0
        while self.accumulator >= self.tick_ms:
            self.accumulator -= self.tick_ms
            self._fraction = 0.0
            self.ticks += 1
            performed += 1
            if self.on_tick is not None and self.on_tick() is False:
                self.accumulator = 0.0
                break
        return performed

    def reset(self):
        self.accumulator = 0.0
        self.ticks = 0
        self._fraction = 0.0
