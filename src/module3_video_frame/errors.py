# file: src/module3_video_frame/errors.py
"""
Frame error types for Module 3.
"""


class FrameError(Exception):
    """Base exception for Module 3 frame operations."""
    pass


class FrameBoundsError(FrameError, IndexError):
    """Raised when a cell block falls outside of the frame extent."""
    pass


class GeometryError(FrameError, ValueError):
    """Raised when a frame geometry cannot carry the transport layout."""
    pass
