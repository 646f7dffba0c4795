"""
Tests for the video generator. Encoding itself is mocked out; ffmpeg is
not needed to run these.
"""

import random
import sys
import os
from unittest.mock import patch

import numpy as np
import pytest
from PIL import Image

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import GameConfig
from main import ArcadeGame
from players import RandomPlayer
from services.high_score import InMemoryStore
from services.video_generator import FRAMES_AFTER_GAME_OVER, SnakeVideoGenerator


def blank_frames(count, size=(40, 30)):
    return [Image.new("RGB", size, (i, 0, 0)) for i in range(count)]


class TestFramesToArrays:
    def test_converts_to_rgb_arrays(self):
        arrays = SnakeVideoGenerator().frames_to_arrays(blank_frames(3))
        assert len(arrays) == 3
        assert arrays[0].shape == (30, 40, 3)
        assert arrays[2][0, 0].tolist() == [2, 0, 0]

    def test_rgba_frames_are_flattened(self):
        frame = Image.new("RGBA", (10, 10), (1, 2, 3, 128))
        (array,) = SnakeVideoGenerator().frames_to_arrays([frame])
        assert array.shape == (10, 10, 3)

    def test_empty_frames_rejected(self):
        with pytest.raises(ValueError, match="No frames"):
            SnakeVideoGenerator().frames_to_arrays([])

    def test_mismatched_sizes_rejected(self):
        frames = blank_frames(2) + [Image.new("RGB", (10, 10))]
        with pytest.raises(ValueError, match="Frame 2"):
            SnakeVideoGenerator().frames_to_arrays(frames)


class TestSnakeVideoGenerator:
    def test_invalid_fps(self):
        with pytest.raises(ValueError):
            SnakeVideoGenerator(fps=0)

    def test_frame_ms(self):
        assert SnakeVideoGenerator(fps=50).frame_ms == 20

    @patch("services.video_generator.ImageSequenceClip")
    def test_generate_video_encodes_frames(self, mock_clip, tmp_path):
        output = tmp_path / "videos" / "game.mp4"

        path = SnakeVideoGenerator(fps=30).generate_video(blank_frames(5), str(output))

        assert path == str(output)
        assert output.parent.is_dir()
        arrays = mock_clip.call_args[0][0]
        assert len(arrays) == 5
        assert all(isinstance(a, np.ndarray) for a in arrays)
        assert mock_clip.call_args[1] == {"fps": 30}
        mock_clip.return_value.write_videofile.assert_called_once_with(
            str(output), codec="libx264", audio=False, logger=None
        )

    @patch("services.video_generator.ImageSequenceClip")
    def test_generate_video_default_path(self, mock_clip):
        path = SnakeVideoGenerator().generate_video(blank_frames(1))
        assert path.endswith(".mp4")

    @patch("services.video_generator.ImageSequenceClip")
    def test_record_autoplay(self, mock_clip, tmp_path):
        config = GameConfig(viewport=(200, 200), width_fraction=1.0, height_fraction=1.0, glow=False)
        game = ArcadeGame(config, store=InMemoryStore(), rng=random.Random(4))
        output = str(tmp_path / "auto.mp4")

        result = SnakeVideoGenerator(fps=60).record_autoplay(
            game, RandomPlayer(rng=random.Random(4)), output, max_ticks=20
        )

        assert result.output_path == output
        assert len(result.frames) == result.frame_count
        assert result.frame_count >= FRAMES_AFTER_GAME_OVER
        arrays = mock_clip.call_args[0][0]
        assert len(arrays) == result.frame_count
        assert arrays[0].shape == (200, 200, 3)
