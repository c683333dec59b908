"""
Module 5: Extraction

Rebuilds the payload from transport frames that may arrive reordered,
duplicated or with the starting frame anywhere in the stream.

This module does NOT:
- Read video files (handled by Module 1)
- Write the recovered file (handled by Module 6)
- Correct errors: a missing page is always a failure
"""

from .decoder import (
    ExtractionRun,
    classify_frame,
    decode_page,
    frames_to_data,
    frames_to_data_with_metadata,
)
from .page_map import PageMap
from .errors import (
    ExtractionError,
    InstructionNotFoundError,
    ConflictingInstructionError,
    IncompleteTransferError,
    GeometryMismatchError,
)

__all__ = [
    'ExtractionRun',
    'classify_frame',
    'decode_page',
    'frames_to_data',
    'frames_to_data_with_metadata',
    'PageMap',
    'ExtractionError',
    'InstructionNotFoundError',
    'ConflictingInstructionError',
    'IncompleteTransferError',
    'GeometryMismatchError',
]

__version__ = '1.0.0'
