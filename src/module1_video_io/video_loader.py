"""
Video loading functionality for the HDMI file transport.

This module provides functions to read a video file and extract its frames
in file order. Frames are never resampled or resized: every pixel may carry
payload.
"""

from typing import Iterator, List, Tuple
import numpy as np
import cv2
import os
from dataclasses import dataclass


@dataclass
class VideoMetadata:
    """Metadata for loaded video"""
    fps: float
    width: int
    height: int
    num_frames: int
    duration: float  # seconds
    codec: str
    pixel_format: str


# Type alias for Frame
Frame = np.ndarray  # Shape: (H, W, 3), dtype: uint8, range: [0, 255]


def _open_capture(path: str) -> cv2.VideoCapture:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Video file not found: {path}")

    cap = cv2.VideoCapture(path)

    if not cap.isOpened():
        raise ValueError(f"Unable to open video file: {path}. Format may be unsupported.")

    return cap


def iter_video_frames(path: str) -> Iterator[Frame]:
    """
    Lazily read a video file frame by frame.

    Args:
        path: Path to video file

    Yields:
        RGB frames in file order

    Raises:
        FileNotFoundError: If video file doesn't exist
        ValueError: If video format unsupported
    """
    cap = _open_capture(path)

    try:
        while True:
            ret, frame = cap.read()

            if not ret or frame is None or frame.shape[1] == 0:
                break

            # Convert BGR to RGB
            yield cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
    finally:
        cap.release()


def read_video_metadata(path: str) -> VideoMetadata:
    """Read container metadata without decoding frames."""
    cap = _open_capture(path)

    try:
        fps = cap.get(cv2.CAP_PROP_FPS)
        width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        total_frames = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))
        fourcc = int(cap.get(cv2.CAP_PROP_FOURCC))
    finally:
        cap.release()

    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid resolution detected: {width}x{height}")

    # Decode codec
    codec_str = "".join([chr((fourcc >> 8 * i) & 0xFF) for i in range(4)])

    return VideoMetadata(
        fps=fps,
        width=width,
        height=height,
        num_frames=max(total_frames, 0),
        duration=total_frames / fps if fps > 0 else 0.0,
        codec=codec_str,
        pixel_format="rgb24"  # We always convert to RGB
    )


def load_video(path: str) -> Tuple[List[Frame], VideoMetadata]:
    """
    Load every frame of a video file.

    Args:
        path: Path to video file

    Returns:
        frames: List of RGB frames in file order
        metadata: Video metadata (num_frames is the count actually decoded)

    Raises:
        FileNotFoundError: If video file doesn't exist
        ValueError: If video format unsupported or holds no frame
    """
    metadata = read_video_metadata(path)
    frames = list(iter_video_frames(path))

    # Validate that frames were loaded
    if len(frames) == 0:
        raise ValueError("No frames could be loaded from video file")

    metadata.num_frames = len(frames)
    if metadata.fps > 0:
        metadata.duration = len(frames) / metadata.fps

    return frames, metadata
