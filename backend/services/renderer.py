"""
Frame renderer for Neon Snake.

Paints one frame with PIL (Pillow) from a read-only GameState:
- dark background with a reference grid
- pulsing food with a glow
- snake body on its grid cells and a head that slides between cells
- fading particles

Only the head is interpolated. Body segments snap to their cells at each
tick, and the head is assumed to have travelled in a straight line even
right after a turn. This is a known simplification of the smoothing.
"""

import math
from typing import Iterable, Optional, Tuple

from PIL import Image, ImageDraw, ImageFilter

from domain.constants import CELL_SIZE, DIRECTION_VECTORS
from domain.game_state import GameState


class ColorScheme:
    """Neon palette"""

    BACKGROUND = "#05070a"
    GRID_LINE = "#161b22"

    FOOD = "#ff0055"

    SNAKE_HEAD = "#00ff9d"
    SNAKE_BODY = "#00cc7a"
    SNAKE_GLOW = "#00ff9d"
    SNAKE_EYES = "#000000"

    # Glow alpha for body segments and for head/food
    BODY_GLOW_ALPHA = 77
    STRONG_GLOW_ALPHA = 200


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def pulse_scale(now_ms: float) -> float:
    """Food size multiplier, driven by wall-clock time rather than ticks."""
    return 1 + math.sin(now_ms / 150) * 0.1


def head_position(state: GameState, fraction: float) -> Tuple[float, float]:
    """
    Visual head position in (fractional) cells.

    While running, the head slides from the cell behind it (head minus
    heading) to its committed cell as fraction goes from 0 to 1. Otherwise
    it sits on its cell.
    """
    hx, hy = state.snake_positions[0]
    if not state.running:
        return (float(hx), float(hy))

    fraction = max(0.0, min(1.0, fraction))
    dx, dy = DIRECTION_VECTORS[state.heading]
    prev_x, prev_y = hx - dx, hy - dy
    return (prev_x + dx * fraction, prev_y + dy * fraction)


class SnakeRenderer:
    """Render GameState snapshots to PIL images"""

    def __init__(self, cell_size: int = CELL_SIZE, glow: bool = True):
        self.cell_size = cell_size
        self.glow = glow

    def canvas_size(self, state: GameState) -> Tuple[int, int]:
        return (state.width * self.cell_size, state.height * self.cell_size)

    def render(
        self,
        state: GameState,
        fraction: float = 0.0,
        particles: Iterable = (),
        now_ms: float = 0.0,
    ) -> Image.Image:
        """Render a single frame of the game"""
        size = self.canvas_size(state)
        img = Image.new('RGB', size, hex_to_rgb(ColorScheme.BACKGROUND))
        draw = ImageDraw.Draw(img)

        self._draw_grid(draw, size)

        glow_layer = Image.new('RGBA', size, (0, 0, 0, 0)) if self.glow else None
        glow_draw = ImageDraw.Draw(glow_layer) if glow_layer is not None else None

        food_box = self._food_box(state, now_ms)
        body_boxes = []
        head_box = None
        if state.snake_positions:
            body_boxes = [self._cell_box(x, y) for x, y in state.snake_positions[1:]]
            head_box = self._cell_box(*head_position(state, fraction))

        if glow_draw is not None:
            if food_box is not None:
                glow_draw.ellipse(self._grow(food_box, 4), fill=hex_to_rgb(ColorScheme.FOOD) + (ColorScheme.STRONG_GLOW_ALPHA,))
            if state.running:
                for box in body_boxes:
                    glow_draw.rectangle(self._grow(box, 2), fill=hex_to_rgb(ColorScheme.SNAKE_GLOW) + (ColorScheme.BODY_GLOW_ALPHA,))
                if head_box is not None:
                    glow_draw.rectangle(self._grow(head_box, 4), fill=hex_to_rgb(ColorScheme.SNAKE_GLOW) + (ColorScheme.STRONG_GLOW_ALPHA,))
            blurred = glow_layer.filter(ImageFilter.GaussianBlur(radius=max(2, self.cell_size // 3)))
            img.paste(blurred, (0, 0), blurred)
            draw = ImageDraw.Draw(img)

        if food_box is not None:
            draw.ellipse(food_box, fill=hex_to_rgb(ColorScheme.FOOD))

        for box in body_boxes:
            draw.rectangle(box, fill=hex_to_rgb(ColorScheme.SNAKE_BODY))

        if head_box is not None:
            draw.rectangle(head_box, fill=hex_to_rgb(ColorScheme.SNAKE_HEAD))
            if state.running:
                self._draw_eyes(draw, head_box)

        img = self._draw_particles(img, particles)
        return img

    def _draw_grid(self, draw: ImageDraw.ImageDraw, size: Tuple[int, int]):
        width, height = size
        color = hex_to_rgb(ColorScheme.GRID_LINE)
        for x in range(0, width + 1, self.cell_size):
            draw.line([x, 0, x, height], fill=color, width=1)
        for y in range(0, height + 1, self.cell_size):
            draw.line([0, y, width, y], fill=color, width=1)

    def _cell_box(self, x: float, y: float):
        """Pixel box of a (possibly fractional) cell, inset by 1px like a tile."""
        left = x * self.cell_size + 1
        top = y * self.cell_size + 1
        return [left, top, left + self.cell_size - 3, top + self.cell_size - 3]

    def _food_box(self, state: GameState, now_ms: float) -> Optional[list]:
        if state.food is None:
            return None
        fx = state.food[0] * self.cell_size + self.cell_size / 2
        fy = state.food[1] * self.cell_size + self.cell_size / 2
        radius = max(1.0, (self.cell_size / 2 - 4) * pulse_scale(now_ms))
        return [fx - radius, fy - radius, fx + radius, fy + radius]

    @staticmethod
    def _grow(box, amount):
        return [box[0] - amount, box[1] - amount, box[2] + amount, box[3] + amount]

    def _draw_eyes(self, draw: ImageDraw.ImageDraw, head_box):
        eye = max(2, round(self.cell_size * 0.16))
        inset = round(self.cell_size * 0.24)
        x0, y0 = head_box[0] - 1, head_box[1] - 1
        color = hex_to_rgb(ColorScheme.SNAKE_EYES)
        draw.rectangle([x0 + inset, y0 + inset, x0 + inset + eye - 1, y0 + inset + eye - 1], fill=color)
        right = self.cell_size - inset - eye
        draw.rectangle([x0 + right, y0 + inset, x0 + right + eye - 1, y0 + inset + eye - 1], fill=color)

    def _draw_particles(self, img: Image.Image, particles: Iterable) -> Image.Image:
        particles = list(particles)
        if not particles:
            return img

        layer = Image.new('RGBA', img.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        for p in particles:
            alpha = int(255 * max(0.0, min(1.0, p.life)))
            draw.ellipse([p.x - 3, p.y - 3, p.x + 3, p.y + 3], fill=hex_to_rgb(p.color) + (alpha,))

        return Image.alpha_composite(img.convert('RGBA'), layer).convert('RGB')
