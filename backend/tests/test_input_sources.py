"""
Tests for key bindings and swipe detection.
"""

import sys
import os

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import UP, DOWN, LEFT, RIGHT
from services.input_sources import SwipeDetector, direction_for_key


class TestKeyBindings:
    @pytest.mark.parametrize("key,direction", [
        ("ArrowUp", UP),
        ("ArrowDown", DOWN),
        ("ArrowLeft", LEFT),
        ("ArrowRight", RIGHT),
        ("up", UP),
        ("left", LEFT),
    ])
    def test_bound_keys(self, key, direction):
        assert direction_for_key(key) == direction

    def test_unbound_key(self):
        assert direction_for_key("Space") is None


class TestSwipeDetector:
    def test_no_origin_ignored(self):
        assert SwipeDetector().move(50, 50) is None

    def test_small_movement_ignored(self):
        swipe = SwipeDetector(threshold=10)
        swipe.begin(100, 100)
        assert swipe.move(110, 95) is None
        assert swipe.origin == (100, 100)

    def test_threshold_is_exclusive(self):
        swipe = SwipeDetector(threshold=10)
        swipe.begin(100, 100)
        assert swipe.move(90, 100) is None
        assert swipe.move(89, 100) == LEFT

    @pytest.mark.parametrize("end,direction", [
        ((130, 105), RIGHT),
        ((70, 95), LEFT),
        ((105, 70), UP),
        ((95, 130), DOWN),
    ])
    def test_direction_follows_finger(self, end, direction):
        swipe = SwipeDetector()
        swipe.begin(100, 100)
        assert swipe.move(*end) == direction

    def test_origin_moves_after_swipe(self):
        """A long drag can steer more than once."""
        swipe = SwipeDetector()
        swipe.begin(100, 100)
        assert swipe.move(120, 100) == RIGHT
        assert swipe.origin == (120, 100)
        assert swipe.move(125, 100) is None
        assert swipe.move(125, 80) == UP

    def test_end_forgets_origin(self):
        swipe = SwipeDetector()
        swipe.begin(0, 0)
        swipe.end()
        assert swipe.move(100, 0) is None
