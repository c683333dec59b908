#!/usr/bin/env python3
"""
HDMI File Transport command line.

Injects a file into a video that can be played over a display link, and
extracts it back from a captured video.
"""

import argparse
import logging
import sys
from typing import List, Optional

from module2_bit_codec import BitCodecError
from module3_video_frame import FrameError
from module4_injection import InjectionError
from module5_extraction import ExtractionError
from .config import load_config
from .errors import TransportError
from .options import AppMode, extract_options
from .pipeline import execute_with_video_options


FATAL_ERRORS = (TransportError, InjectionError, ExtractionError, FrameError, BitCodecError)


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(verbose: bool = False):
    """Configure logging for the command line."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


# =============================================================================
# COMMAND-LINE INTERFACE
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='hdmi-transport',
        description='Inject a file into a video, or extract it back from a video',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Inject a file
  hdmi-transport -m inject -i archive.zip -o video.avi -w 1920 -g 1080

  # Extract it from a captured video
  hdmi-transport -m extract -i capture.avi -o archive.zip -w 1920 -g 1080

  # Black and white cells of 4x4 pixels for a lossy capture chain
  hdmi-transport -m inject -i archive.zip -a bw -s 4

  # Calibration pattern
  hdmi-transport -m colorframe -w 1920 -g 1080
        """
    )

    parser.add_argument(
        '-m', '--mode',
        choices=[m.value for m in AppMode],
        default=None,
        help='inject a file, extract a file, or write a calibration pattern'
    )

    parser.add_argument(
        '-i', '--input-file-path',
        type=str,
        default=None,
        help='File to inject (inject) or video to read (extract)'
    )

    parser.add_argument(
        '-o', '--output-video-path',
        type=str,
        default=None,
        help='Video to write (inject, patterns) or file to write (extract)'
    )

    parser.add_argument('-f', '--fps', type=int, default=None, help='Frames per second')

    parser.add_argument(
        '-s', '--size',
        type=int,
        default=None,
        help='Pixels per cell side (1, 2 or 4); the same value must be used to extract'
    )

    parser.add_argument('-g', '--height', type=int, default=None, help='Frame height in pixels')
    parser.add_argument('-w', '--width', type=int, default=None, help='Frame width in pixels')

    parser.add_argument(
        '-a', '--algo',
        choices=['rgb', 'bw'],
        default=None,
        help='rgb: 3 bytes per cell, bw: 1 bit per cell'
    )

    parser.add_argument(
        '--codec',
        type=str,
        default=None,
        help='Video codec of written videos (default: png, lossless)'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to configuration YAML file (default: packaged default_config.yaml)'
    )

    parser.add_argument(
        '--show-progress',
        action='store_true',
        help='Display a progress bar'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point of the command line."""
    args = build_parser().parse_args(argv)

    setup_logging(verbose=args.verbose)

    try:
        config = load_config(args.config)
        options = extract_options(args, config)
        execute_with_video_options(options)
    except FATAL_ERRORS as e:
        logging.error(f"{type(e).__name__}: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
