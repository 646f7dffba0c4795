"""
Video Generation Service for Neon Snake

Turns a sequence of rendered frames into an MP4:
1. Frames come from SnakeRenderer (PIL images)
2. They are converted to numpy arrays
3. MoviePy/FFmpeg encodes them

record_autoplay() plays a whole game headlessly with an autopilot and
encodes every frame, which is handy for demos and for eyeballing the
interpolation.
"""

import os
import logging
import tempfile
from typing import List, Optional

import numpy as np
from moviepy import ImageSequenceClip
from PIL import Image

logger = logging.getLogger(__name__)

# Video settings
DEFAULT_FPS = 60
FRAMES_AFTER_GAME_OVER = 45  # let the last particles fade out


class SnakeVideoGenerator:
    """Generate MP4 videos from rendered frames"""

    def __init__(self, fps: int = DEFAULT_FPS):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.fps = fps

    @property
    def frame_ms(self) -> float:
        return 1000 / self.fps

    def frames_to_arrays(self, frames: List[Image.Image]) -> List[np.ndarray]:
        """Convert PIL frames to RGB arrays; all frames must share one size."""
        if not frames:
            raise ValueError("No frames to encode")

        size = frames[0].size
        arrays = []
        for i, frame in enumerate(frames):
            if frame.size != size:
                raise ValueError(f"Frame {i} is {frame.size}, expected {size}")
            arrays.append(np.array(frame.convert('RGB')))
        return arrays

    def generate_video(self, frames: List[Image.Image], output_path: Optional[str] = None) -> str:
        """
        Encode frames to an MP4

        Args:
            frames: Rendered frames, in order
            output_path: Optional output path (if None, uses temp file)

        Returns:
            Path to the generated video file
        """
        arrays = self.frames_to_arrays(frames)
        logger.info(f"Encoding {len(arrays)} frames at {self.fps} fps")

        if output_path is None:
            output_path = os.path.join(tempfile.gettempdir(), "neon_snake_replay.mp4")

        parent = os.path.dirname(output_path)
        if parent:
            os.makedirs(parent, exist_ok=True)

        clip = ImageSequenceClip(arrays, fps=self.fps)
        clip.write_videofile(
            output_path,
            codec='libx264',
            audio=False,
            logger=None
        )

        logger.info(f"Video created successfully at {output_path}")
        return output_path

    def record_autoplay(self, game, player, output_path: Optional[str] = None, max_ticks: int = 1000):
        """
        Play one game with an autopilot at this generator's frame rate and
        encode it.

        Returns:
            The HeadlessResult, with output_path set on it
        """
        from main import run_headless

        result = run_headless(
            game,
            player,
            max_ticks=max_ticks,
            frame_ms=self.frame_ms,
            record=True,
            linger_frames=FRAMES_AFTER_GAME_OVER,
        )
        result.output_path = self.generate_video(result.frames, output_path)
        return result
