"""
Module 1: Video I/O

This module provides video input/output operations for the HDMI file
transport. It handles loading videos, writing videos, and normalizing frames
to a consistent format.
"""

from typing import Iterator, List, Tuple
import numpy as np

from .video_loader import (
    load_video as _load_video,
    iter_video_frames as _iter_video_frames,
    VideoMetadata,
)
from .video_writer import write_video as _write_video, DEFAULT_CODEC
from .preprocessing import normalize_frames as _normalize_frames


# Type alias for Frame
Frame = np.ndarray  # Shape: (H, W, 3), dtype: uint8, range: [0, 255]


class VideoIO:
    """Video input/output operations"""

    def load_video(self, path: str) -> Tuple[List[Frame], VideoMetadata]:
        """
        Load video from file.

        Args:
            path: Path to video file

        Returns:
            frames: List of RGB frames in file order
            metadata: Video metadata

        Raises:
            FileNotFoundError: If video file doesn't exist
            ValueError: If video format unsupported
        """
        return _load_video(path)

    def iter_frames(self, path: str) -> Iterator[Frame]:
        """Stream RGB frames from a video file in file order."""
        return _iter_video_frames(path)

    def write_video(
        self,
        frames: List[Frame],
        path: str,
        fps: int,
        codec: str = DEFAULT_CODEC
    ) -> None:
        """
        Encode RGB frames into a video file, in list order.

        Args:
            frames: List of RGB frames
            path: Output video path
            fps: Frame rate
            codec: Video codec

        Raises:
            ValueError: If there is no frame or the frames are not same-sized RGB uint8
            IOError: If the writer cannot be opened or fails
        """
        _write_video(frames, path, fps, codec)

    def normalize_frames(self, frames: List[Frame]) -> List[Frame]:
        """
        Normalize frames to RGB uint8.

        Args:
            frames: List of frames (grayscale, RGB, RGBA or float)

        Returns:
            normalized_frames: RGB, uint8
        """
        return _normalize_frames(frames)


# Export public interface
__all__ = [
    'VideoIO',
    'VideoMetadata',
    'Frame',
    'DEFAULT_CODEC',
]
