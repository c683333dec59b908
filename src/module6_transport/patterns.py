# file: module6_transport/patterns.py
"""
Calibration pattern frames.

Played back through the same capture chain as a transfer, these frames show
how colours and cell edges survive before picking a size and algo:

    - colour bars: nested rectangles of 9 colours from the border inwards
    - diagonal: black diagonals in the 4 corners of a white frame
"""

from typing import List
import numpy as np

from module3_video_frame import FrameGeometry, VideoFrame


PATTERN_COLORS = np.array([
    (255, 0, 0),      # Red
    (255, 225, 0),    # Yellow
    (75, 255, 0),     # Green
    (0, 255, 255),    # Cyan
    (0, 125, 255),    # Dark blue
    (0, 125, 255),    # Dark blue
    (110, 0, 255),    # Purple
    (255, 0, 190),    # Pink
    (255, 255, 255),  # White
], dtype=np.uint8)


def _cell_coordinates(geometry: FrameGeometry):
    cy, cx = np.divmod(np.arange(geometry.cell_count), geometry.columns)
    return cx, cy


def color_bars_frame(width: int, height: int, size: int = 1) -> VideoFrame:
    """Frame of nested colour rectangles, red on the outer border."""
    geometry = FrameGeometry(width, height, size)
    cx, cy = _cell_coordinates(geometry)
    last = len(PATTERN_COLORS) - 1

    distance_x = np.minimum(cx, geometry.columns - 1 - cx)
    distance_y = np.minimum(cy, geometry.rows - 1 - cy)
    index = np.minimum(np.minimum(distance_x, distance_y), last)

    frame = VideoFrame.create(width, height)
    frame.write_cells(PATTERN_COLORS[index], 0, size)
    return frame


def diagonal_frame(width: int, height: int, size: int = 1, diagonal_cells: int = 10) -> VideoFrame:
    """White frame with a black diagonal of `diagonal_cells` cells in each corner."""
    geometry = FrameGeometry(width, height, size)
    cx, cy = _cell_coordinates(geometry)
    rx = geometry.columns - 1 - cx
    ry = geometry.rows - 1 - cy

    black = (
        ((cx == cy) & (cx < diagonal_cells))
        | ((rx == cy) & (rx < diagonal_cells))
        | ((cx == ry) & (cx < diagonal_cells))
        | ((rx == ry) & (rx < diagonal_cells))
    )

    colors = np.full((geometry.cell_count, 3), 255, dtype=np.uint8)
    colors[black] = 0

    frame = VideoFrame.create(width, height)
    frame.write_cells(colors, 0, size)
    return frame


def pattern_frames(frame: VideoFrame, num_frames: int) -> List[VideoFrame]:
    """Repeat a still pattern for `num_frames` frames."""
    return [frame.copy() for _ in range(num_frames)]
