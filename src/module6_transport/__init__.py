# file: module6_transport/__init__.py
"""
Module 6: Transport tooling

Options, configuration, file I/O and the inject/extract pipelines around the
frame codec, plus calibration pattern videos and the command line.
"""

from .config import load_config, DEFAULT_CONFIG
from .options import (
    AppMode,
    InjectOptions,
    ExtractOptions,
    PatternOptions,
    extract_options,
)
from .pipeline import (
    file_to_data,
    data_to_file,
    inject_file,
    extract_file,
    generate_pattern,
    execute_with_video_options,
)
from .patterns import color_bars_frame, diagonal_frame
from .errors import TransportError, OptionsError, TransportIOError


__all__ = [
    'load_config',
    'DEFAULT_CONFIG',
    'AppMode',
    'InjectOptions',
    'ExtractOptions',
    'PatternOptions',
    'extract_options',
    'file_to_data',
    'data_to_file',
    'inject_file',
    'extract_file',
    'generate_pattern',
    'execute_with_video_options',
    'color_bars_frame',
    'diagonal_frame',
    'TransportError',
    'OptionsError',
    'TransportIOError',
]


__version__ = '1.0.0'
