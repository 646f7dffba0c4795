"""
Tests for environment-driven configuration.
"""

import sys
import os

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import DEFAULT_VIEWPORT, GameConfig, parse_viewport


class TestParseViewport:
    def test_parses_width_and_height(self):
        assert parse_viewport("800x600") == (800, 600)
        assert parse_viewport("1024X768") == (1024, 768)

    @pytest.mark.parametrize("raw", ["800", "wide x tall", "1x2x3"])
    def test_rejects_malformed(self, raw):
        with pytest.raises(ValueError, match="WIDTHxHEIGHT"):
            parse_viewport(raw)


class TestGameConfig:
    def test_defaults(self, monkeypatch):
        for name in ("SNAKE_CELL_SIZE", "SNAKE_TICK_MS", "SNAKE_VIEWPORT", "SNAKE_GLOW"):
            monkeypatch.delenv(name, raising=False)

        config = GameConfig.from_env()

        assert config.cell_size == 25
        assert config.tick_ms == 110
        assert config.viewport == DEFAULT_VIEWPORT
        assert config.glow is True

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SNAKE_CELL_SIZE", "20")
        monkeypatch.setenv("SNAKE_TICK_MS", "90")
        monkeypatch.setenv("SNAKE_VIEWPORT", "640x480")
        monkeypatch.setenv("SNAKE_GLOW", "false")

        config = GameConfig.from_env()

        assert config.cell_size == 20
        assert config.tick_ms == 90.0
        assert config.viewport == (640, 480)
        assert config.glow is False
