"""
Translate raw host input (key names, pointer/touch drags) into directions.

Keyboard and swipe both end up in the same session input buffer, so they
share its two-entry cap.
"""

from typing import Optional

from domain.constants import UP, DOWN, LEFT, RIGHT, SWIPE_THRESHOLD

# Browser KeyboardEvent.code values and pygame key names
KEY_BINDINGS = {
    "ArrowUp": UP,
    "ArrowDown": DOWN,
    "ArrowLeft": LEFT,
    "ArrowRight": RIGHT,
    "up": UP,
    "down": DOWN,
    "left": LEFT,
    "right": RIGHT,
}


def direction_for_key(key: str) -> Optional[str]:
    """Direction bound to a key name, or None for keys we don't handle."""
    return KEY_BINDINGS.get(key)


class SwipeDetector:
    """
    Dominant-axis swipe detection.

    Once the pointer has travelled more than `threshold` pixels from the
    origin on either axis, one direction is emitted and the origin moves to
    the current point, so a long drag can steer several times.

    The comparison is strict: travel of exactly `threshold` pixels does not
    count as a swipe, matching the browser game's touch handler.
    """

    def __init__(self, threshold: float = SWIPE_THRESHOLD):
        self.threshold = threshold
        self.origin = None

    def begin(self, x: float, y: float):
        self.origin = (x, y)

    def end(self):
        self.origin = None

    def move(self, x: float, y: float) -> Optional[str]:
        if self.origin is None:
            return None

        start_x, start_y = self.origin
        x_diff = start_x - x
        y_diff = start_y - y

        if abs(x_diff) <= self.threshold and abs(y_diff) <= self.threshold:
            return None

        if abs(x_diff) > abs(y_diff):
            direction = LEFT if x_diff > 0 else RIGHT
        else:
            direction = UP if y_diff > 0 else DOWN

        self.origin = (x, y)
        return direction
