"""
Video writing functionality for the HDMI file transport.

This module provides functions to write frames to video files with a
specified codec. RGB mode stores raw bytes in pixel values, so it needs a
lossless codec; the default is PNG in an AVI container.
"""

from typing import List, Tuple
import numpy as np
import cv2
import os


# Type alias for Frame
Frame = np.ndarray  # Shape: (H, W, 3), dtype: uint8, range: [0, 255]

DEFAULT_CODEC = "png"

# Careful, codec and file extension must match
CODEC_FOURCC = {
    "png": "png ",
    "ffv1": "FFV1",
    "mjpg": "MJPG",
    "jpeg": "MJPG",
    "mp4v": "mp4v",
    "mpeg4": "mp4v",
    "h264": "H264",
    "h265": "HEVC",
    "xvid": "XVID",
}


def fourcc_for_codec(codec: str) -> int:
    """
    Map a codec name to an OpenCV FourCC code.

    Raises:
        ValueError: If the codec name is unknown
    """
    key = codec.lower()
    if key not in CODEC_FOURCC:
        raise ValueError(
            f"Unsupported codec: {codec}. Expected one of {sorted(CODEC_FOURCC)}."
        )
    return cv2.VideoWriter_fourcc(*CODEC_FOURCC[key])


def _frame_size(frames: List[Frame]) -> Tuple[int, int]:
    """
    Check every frame is an RGB uint8 image of the same shape.

    Returns:
        (width, height) shared by all frames
    """
    reference = frames[0]
    if reference.ndim != 3 or reference.shape[2] != 3:
        raise ValueError(f"Frame 0 has shape {reference.shape}, expected (H, W, 3) RGB.")

    for idx, frame in enumerate(frames):
        if frame.shape != reference.shape:
            raise ValueError(
                f"Inconsistent frame shapes: frame {idx} is {frame.shape}, "
                f"frame 0 is {reference.shape}."
            )
        if frame.dtype != np.uint8:
            raise ValueError(f"Frame {idx} has dtype {frame.dtype}, expected uint8.")

    return reference.shape[1], reference.shape[0]


def write_video(
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
        codec: Video codec name (see CODEC_FOURCC)

    Raises:
        ValueError: If there is no frame, fps is not positive, the codec is
            unknown or the frames are not same-sized RGB uint8 images
        IOError: If the writer cannot be opened or fails mid-stream
    """
    if len(frames) == 0:
        raise ValueError("Cannot write a video from an empty frame list")

    if fps <= 0:
        raise ValueError(f"Invalid fps: {fps}. Must be positive.")

    fourcc = fourcc_for_codec(codec)
    width, height = _frame_size(frames)

    output_dir = os.path.dirname(path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    writer = cv2.VideoWriter(path, fourcc, fps, (width, height))
    if not writer.isOpened():
        raise IOError(f"Could not open a {codec} video writer for: {path}")

    try:
        for frame in frames:
            # OpenCV expects BGR
            writer.write(cv2.cvtColor(frame, cv2.COLOR_RGB2BGR))
    except cv2.error as e:
        writer.release()
        if os.path.exists(path):
            os.remove(path)
        raise IOError(f"Error writing video {path}: {e}") from e
    finally:
        writer.release()

    if not os.path.exists(path):
        raise IOError(f"Video file was not created: {path}")
