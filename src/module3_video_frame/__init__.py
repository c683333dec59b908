"""
Module 3: Video Frame

Cell grid abstraction over a single RGB frame, the frame geometry shared by
the injection and extraction pipelines, and the reserved marker colour of the
starting frame.
"""

from .frame import VideoFrame, Frame
from .geometry import (
    AlgoFrame,
    FrameGeometry,
    MARKER_COLOR,
    DEFAULT_MARKER_TOLERANCE,
    DEFAULT_MARKER_THRESHOLD,
    is_marker_color,
    is_marker_region,
)
from .errors import FrameError, FrameBoundsError, GeometryError

__all__ = [
    'VideoFrame',
    'Frame',
    'AlgoFrame',
    'FrameGeometry',
    'MARKER_COLOR',
    'DEFAULT_MARKER_TOLERANCE',
    'DEFAULT_MARKER_THRESHOLD',
    'is_marker_color',
    'is_marker_region',
    'FrameError',
    'FrameBoundsError',
    'GeometryError',
]

__version__ = '1.0.0'
