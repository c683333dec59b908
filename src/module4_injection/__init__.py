# file: src/module4_injection/__init__.py

"""
Module 4: Injection

Turns a payload into a starting frame plus self-describing data frames.

Public API:
    - FrameEncoder(geometry, algo, show_progress=False)
    - encode_payload(data, geometry, algo, show_progress=False) -> List[VideoFrame]
"""

from .encoder import FrameEncoder, encode_payload, PADDING_BYTE
from .errors import (
    InjectionError,
    InjectionConfigurationError,
    InjectionEncodingError,
)

__version__ = "1.0.0"

__all__ = [
    "FrameEncoder",
    "encode_payload",
    "PADDING_BYTE",
    "InjectionError",
    "InjectionConfigurationError",
    "InjectionEncodingError",
]
