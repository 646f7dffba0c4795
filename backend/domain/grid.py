"""
Grid value object - board dimensions derived from the viewport.
"""

import math
from dataclasses import dataclass
from typing import Iterator, Tuple

from .constants import (
    MIN_GRID_HEIGHT,
    MIN_GRID_WIDTH,
    USABLE_HEIGHT_FRACTION,
    USABLE_WIDTH_FRACTION,
)

Cell = Tuple[int, int]


@dataclass(frozen=True)
class Grid:
    """
    Board dimensions in cells.

    A grid never changes during a session; a resize produces a new Grid
    that only applies to the next session.
    """

    width: int
    height: int

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Cell:
        return (self.width // 2, self.height // 2)

    def contains(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def cells(self) -> Iterator[Cell]:
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def pixel_size(self, cell_size: int) -> Tuple[int, int]:
        """Canvas size in pixels for a given cell size."""
        return (self.width * cell_size, self.height * cell_size)


def configure(
    viewport_width: float,
    viewport_height: float,
    cell_size: int,
    width_fraction: float = USABLE_WIDTH_FRACTION,
    height_fraction: float = USABLE_HEIGHT_FRACTION,
) -> Grid:
    """
    Compute the grid that fits the usable part of a viewport.

    Args:
        viewport_width: Viewport width in pixels
        viewport_height: Viewport height in pixels
        cell_size: Size of one cell in pixels
        width_fraction: Share of the viewport width the board may use
        height_fraction: Share of the viewport height the board may use

    Returns:
        A new Grid

    Raises:
        ValueError: If the cell size is not positive or the viewport cannot
            hold a playable board
    """
    if cell_size <= 0:
        raise ValueError(f"cell_size must be positive, got {cell_size}")

    cols = math.floor(viewport_width * width_fraction / cell_size)
    rows = math.floor(viewport_height * height_fraction / cell_size)

    if cols < MIN_GRID_WIDTH or rows < MIN_GRID_HEIGHT:
        raise ValueError(
            f"Viewport {viewport_width}x{viewport_height} is too small for a "
            f"board of {cell_size}px cells ({cols}x{rows})"
        )

    return Grid(width=cols, height=rows)
