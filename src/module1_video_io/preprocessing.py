"""
Frame preprocessing functionality for the HDMI file transport.

This module brings decoded frames to the RGB uint8 format the extraction
pipeline expects. Frames are never resized: resampling would blend cells.
"""

from typing import List
import numpy as np
import cv2


# Type alias for Frame
Frame = np.ndarray  # Shape: (H, W, 3), dtype: uint8, range: [0, 255]


def normalize_frame(frame: Frame) -> Frame:
    """
    Normalize a single frame to RGB, uint8, values in [0, 255].

    Raises:
        ValueError: If the frame layout is unsupported
    """
    if frame.ndim == 2:
        frame = frame[:, :, np.newaxis]

    if frame.ndim != 3:
        raise ValueError(f"Invalid frame dimensions: {frame.ndim}. Expected 2 or 3.")

    # Convert to uint8 if necessary
    if frame.dtype != np.uint8:
        if frame.dtype in [np.float32, np.float64] and frame.max() <= 1.0:
            # Assume float values are in [0, 1] range
            frame = frame * 255
        frame = np.clip(frame, 0, 255).astype(np.uint8)

    channels = frame.shape[2]

    if channels == 1:
        frame = cv2.cvtColor(frame, cv2.COLOR_GRAY2RGB)
    elif channels == 4:
        # Handle RGBA (drop alpha channel)
        frame = cv2.cvtColor(frame, cv2.COLOR_RGBA2RGB)
    elif channels != 3:
        raise ValueError(
            f"Unsupported number of channels: {channels}. Expected 1, 3, or 4."
        )

    return frame


def normalize_frames(frames: List[Frame]) -> List[Frame]:
    """
    Normalize frames to RGB uint8.

    Unlike a generic video pipeline, frames of different sizes are kept as
    they are; the extraction geometry check rejects them.
    """
    normalized_frames: List[Frame] = []

    for idx, frame in enumerate(frames):
        try:
            normalized_frames.append(normalize_frame(frame))
        except ValueError as e:
            raise ValueError(f"Frame {idx}: {e}") from e

    return normalized_frames
