"""
Runtime configuration for Neon Snake.

Defaults come from domain.constants; each can be overridden through the
environment (a .env file is honoured by the entry points via python-dotenv).
"""

import os
from dataclasses import dataclass
from typing import Tuple

from domain.constants import (
    CELL_SIZE,
    TICK_MS,
    USABLE_HEIGHT_FRACTION,
    USABLE_WIDTH_FRACTION,
)

DEFAULT_VIEWPORT = (1280, 800)


def parse_viewport(raw: str) -> Tuple[int, int]:
    try:
        width, height = raw.lower().split("x")
        return int(width), int(height)
    except ValueError:
        raise ValueError(f"viewport must look like WIDTHxHEIGHT (e.g. 1280x800), got {raw!r}")


@dataclass
class GameConfig:
    cell_size: int = CELL_SIZE
    tick_ms: float = TICK_MS
    viewport: Tuple[int, int] = DEFAULT_VIEWPORT
    width_fraction: float = USABLE_WIDTH_FRACTION
    height_fraction: float = USABLE_HEIGHT_FRACTION
    glow: bool = True

    @classmethod
    def from_env(cls) -> "GameConfig":
        """
        Build a config from environment variables:
        - SNAKE_CELL_SIZE: cell size in pixels
        - SNAKE_TICK_MS: milliseconds per simulation tick
        - SNAKE_VIEWPORT: initial viewport, e.g. 1280x800
        - SNAKE_GLOW: set to 0 to disable the (slower) glow effect
        """
        config = cls()
        if os.getenv("SNAKE_CELL_SIZE"):
            config.cell_size = int(os.getenv("SNAKE_CELL_SIZE"))
        if os.getenv("SNAKE_TICK_MS"):
            config.tick_ms = float(os.getenv("SNAKE_TICK_MS"))
        if os.getenv("SNAKE_VIEWPORT"):
            config.viewport = parse_viewport(os.getenv("SNAKE_VIEWPORT"))
        if os.getenv("SNAKE_GLOW"):
            config.glow = os.getenv("SNAKE_GLOW").lower() not in ("0", "false", "no")
        return config
