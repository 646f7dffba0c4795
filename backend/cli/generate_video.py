#!/usr/bin/env python3
"""
CLI tool to record an autopilot game as an MP4

Usage:
    python generate_video.py [--player greedy|random] [--output path.mp4]

Examples:
    # Greedy autopilot, default output in the temp directory
    python generate_video.py

    # Reproducible random game on a small board
    python generate_video.py --player random --seed 7 --viewport 500x400

    # Custom output path and frame rate
    python generate_video.py --output ./my_video.mp4 --fps 30
"""

import os
import sys
import random
import argparse
import logging

# Add parent directory to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from config import GameConfig, parse_viewport
from main import ArcadeGame
from players import get_player_class
from services.video_generator import SnakeVideoGenerator, DEFAULT_FPS

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description='Record an autopilot Neon Snake game to MP4',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        '--player',
        type=str,
        default='greedy',
        help='Autopilot to use: greedy or random (default: greedy)'
    )
    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output video file path (default: temp directory)'
    )
    parser.add_argument(
        '--fps',
        type=int,
        default=DEFAULT_FPS,
        help=f'Frames per second (default: {DEFAULT_FPS})'
    )
    parser.add_argument(
        '--max-ticks',
        type=int,
        default=600,
        help='Stop after this many ticks (default: 600)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for food placement and the autopilot'
    )
    parser.add_argument(
        '--viewport',
        type=str,
        default=None,
        help='Viewport as WIDTHxHEIGHT, e.g. 800x600 (default: SNAKE_VIEWPORT or 1280x800)'
    )

    args = parser.parse_args()

    try:
        config = GameConfig.from_env()
        if args.viewport:
            config.viewport = parse_viewport(args.viewport)

        rng = random.Random(args.seed)
        # The recorder never touches the persisted high score
        game = ArcadeGame(config, rng=rng)
        player = get_player_class(args.player)(rng=rng)

        generator = SnakeVideoGenerator(fps=args.fps)
        logger.info(f"Recording a {args.player} game...")
        result = generator.record_autoplay(game, player, args.output, max_ticks=args.max_ticks)

        logger.info(
            f"[OK] {result.frame_count} frames, {result.ticks} ticks, "
            f"score {result.final_state.score}: {result.output_path}"
        )

    except KeyboardInterrupt:
        logger.info("\nCancelled by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
