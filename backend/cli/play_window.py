#!/usr/bin/env python3
"""
Desktop host for Neon Snake (pygame window).

Controls:
    Arrow keys          steer
    Mouse / finger drag swipe to steer
    Space / Enter       start, restart after game over (or click)
    Esc                 quit

The window is the viewport: the board takes 95% of its width and 80% of
its height. Resizing the window only changes the board of the next game.
"""

import os
import sys
import logging

# Add parent directory to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pygame
from dotenv import load_dotenv

from config import GameConfig
from main import ArcadeGame, GAME_OVER_SCREEN, START_SCREEN
from services.renderer import ColorScheme, hex_to_rgb

logger = logging.getLogger(__name__)

FPS = 60
HUD_TEXT = (230, 237, 243)
HUD_ACCENT = hex_to_rgb(ColorScheme.SNAKE_HEAD)
OVERLAY = (5, 7, 10, 200)


def _blit_centered(screen, font, text, color, center):
    rendered = font.render(text, True, color)
    screen.blit(rendered, rendered.get_rect(center=center))


def draw_hud(screen, fonts, game: ArcadeGame, board_rect: pygame.Rect):
    small, large = fonts
    board = game.scoreboard

    score = small.render(f"SCORE {board.score}", True, HUD_TEXT)
    high = small.render(f"BEST {board.high_score}", True, HUD_ACCENT)
    y = max(4, board_rect.top - score.get_height() - 6)
    screen.blit(score, (board_rect.left, y))
    screen.blit(high, (board_rect.right - high.get_width(), y))

    if board.screen not in (START_SCREEN, GAME_OVER_SCREEN):
        return

    overlay = pygame.Surface(board_rect.size, pygame.SRCALPHA)
    overlay.fill(OVERLAY)
    screen.blit(overlay, board_rect.topleft)

    cx, cy = board_rect.center
    if board.screen == START_SCREEN:
        _blit_centered(screen, large, "NEON SNAKE", HUD_ACCENT, (cx, cy - 30))
        _blit_centered(screen, small, "Press Space or click to start", HUD_TEXT, (cx, cy + 20))
    else:
        _blit_centered(screen, large, "GAME OVER", hex_to_rgb(ColorScheme.FOOD), (cx, cy - 40))
        _blit_centered(screen, small, f"Score: {board.final_score}", HUD_TEXT, (cx, cy + 5))
        if board.new_record:
            _blit_centered(screen, small, "New high score!", HUD_ACCENT, (cx, cy + 35))
        _blit_centered(screen, small, "Press Space or click to restart", HUD_TEXT, (cx, cy + 65))


def _board_rect(screen, game: ArcadeGame) -> pygame.Rect:
    width, height = game.canvas_size
    rect = pygame.Rect(0, 0, width, height)
    rect.center = screen.get_rect().center
    return rect


def run_window(config: GameConfig, store=None):
    """Open the window and run until the player quits."""
    pygame.init()
    pygame.display.set_caption("Neon Snake")
    screen = pygame.display.set_mode(config.viewport, pygame.RESIZABLE)
    fonts = (pygame.font.SysFont("consolas", 22, bold=True), pygame.font.SysFont("consolas", 48, bold=True))
    clock = pygame.time.Clock()

    game = ArcadeGame(config, store=store)
    board_rect = _board_rect(screen, game)
    running = True

    while running:
        delta_ms = clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                game.resize(event.w, event.h)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key in (pygame.K_SPACE, pygame.K_RETURN) and not game.running:
                    game.start()
                else:
                    game.key_down(pygame.key.name(event.key))

            # Touch also produces synthetic mouse events; only take the finger ones
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not getattr(event, "touch", False):
                if game.running:
                    game.touch_start(*event.pos)
                else:
                    game.start()
            elif event.type == pygame.MOUSEMOTION and event.buttons[0] and not getattr(event, "touch", False):
                game.touch_move(*event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                game.swipe.end()

            elif event.type == pygame.FINGERDOWN:
                w, h = screen.get_size()
                if game.running:
                    game.touch_start(event.x * w, event.y * h)
                else:
                    game.start()
            elif event.type == pygame.FINGERMOTION:
                w, h = screen.get_size()
                game.touch_move(event.x * w, event.y * h)
            elif event.type == pygame.FINGERUP:
                game.swipe.end()

        game.advance_frame(delta_ms)
        image = game.frame(now_ms=pygame.time.get_ticks())

        board_rect = _board_rect(screen, game)
        screen.fill(hex_to_rgb(ColorScheme.BACKGROUND))
        screen.blit(pygame.image.frombuffer(image.tobytes(), image.size, "RGB"), board_rect.topleft)
        draw_hud(screen, fonts, game, board_rect)
        pygame.display.flip()

    pygame.quit()


def main():
    load_dotenv()
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    from services.high_score import SqliteStore
    run_window(GameConfig.from_env(), store=SqliteStore())


if __name__ == '__main__':
    main()
