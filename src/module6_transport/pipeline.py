# file: module6_transport/pipeline.py
"""
Inject / extract pipelines.

Inject:
    source file → payload bytes → frames (Module 4) → video file (Module 1)

Extract:
    video file (Module 1) → normalised frames → payload bytes (Module 5) → file
"""

import logging
import os

from module1_video_io.video_loader import iter_video_frames, read_video_metadata
from module1_video_io.video_writer import write_video
from module1_video_io.preprocessing import normalize_frame
from module4_injection import encode_payload
from module5_extraction import frames_to_data_with_metadata
from .errors import TransportIOError
from .options import (
    AppMode,
    ExtractOptions,
    InjectOptions,
    PatternOptions,
    VideoOptions,
)
from .patterns import color_bars_frame, diagonal_frame, pattern_frames


logger = logging.getLogger(__name__)


def file_to_data(path: str) -> bytes:
    """
    Read the whole content of the file to inject.

    Raises:
        TransportIOError: If the file cannot be read
    """
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise TransportIOError(f"Unable to read file: {path} with error: {e}") from e


def data_to_file(path: str, data: bytes) -> None:
    """
    Write the extracted payload, replacing any existing content.

    Raises:
        TransportIOError: If the file cannot be written
    """
    output_dir = os.path.dirname(path)
    try:
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        with open(path, 'wb') as f:
            f.write(data)
    except OSError as e:
        raise TransportIOError(f"Unable to write file: {path} with error: {e}") from e


def inject_file(options: InjectOptions) -> int:
    """
    Inject a file into a video.

    Returns:
        Number of frames written (starting frame included)
    """
    data = file_to_data(options.file_path)
    logger.info(f"Input file: {options.file_path} ({len(data)} bytes)")

    frames = encode_payload(
        data,
        options.geometry,
        options.algo,
        show_progress=options.show_progress
    )

    try:
        write_video(
            [frame.image for frame in frames],
            options.output_video_file,
            fps=options.fps,
            codec=options.codec
        )
    except (IOError, ValueError) as e:
        raise TransportIOError(f"Error saving the video: {e}") from e

    logger.info(f"Video saved: {options.output_video_file} ({len(frames)} frames)")
    return len(frames)


def extract_file(options: ExtractOptions) -> int:
    """
    Extract a file from a video.

    Returns:
        Number of bytes written
    """
    try:
        video = read_video_metadata(options.video_file_path)
    except (FileNotFoundError, ValueError) as e:
        raise TransportIOError(f"Unable to read video: {options.video_file_path}: {e}") from e

    logger.info(f"Input video: {options.video_file_path} ({video.num_frames} frames, {video.codec})")

    frames = (normalize_frame(frame) for frame in iter_video_frames(options.video_file_path))
    data, metadata = frames_to_data_with_metadata(
        frames,
        options.geometry,
        options.algo,
        show_progress=options.show_progress,
        marker_threshold=options.marker_threshold,
        marker_tolerance=options.marker_tolerance
    )

    logger.debug(f"Extraction statistics: {metadata}")

    data_to_file(options.extracted_file_path, data)
    logger.info(f"File saved: {options.extracted_file_path} ({len(data)} bytes)")
    return len(data)


def generate_pattern(options: PatternOptions) -> int:
    """
    Write a calibration pattern video.

    Returns:
        Number of frames written
    """
    if options.pattern == AppMode.COLORFRAME:
        frame = color_bars_frame(options.width, options.height, options.size)
    else:
        frame = diagonal_frame(options.width, options.height, options.size, options.diagonal_cells)

    frames = pattern_frames(frame, options.num_frames)

    try:
        write_video(
            [f.image for f in frames],
            options.output_video_file,
            fps=options.fps,
            codec=options.codec
        )
    except (IOError, ValueError) as e:
        raise TransportIOError(f"Error saving the video: {e}") from e

    logger.info(f"Pattern video saved: {options.output_video_file}")
    return len(frames)


def execute_with_video_options(options: VideoOptions) -> int:
    """
    Execute video logics.

    Dispatches on the option type: inject a file into a video, extract it,
    or write a calibration pattern.
    """
    if isinstance(options, InjectOptions):
        return inject_file(options)
    if isinstance(options, ExtractOptions):
        return extract_file(options)
    return generate_pattern(options)
