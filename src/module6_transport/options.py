# file: module6_transport/options.py
"""
Run options.

Command line arguments win over configuration values; configuration values
win over built-in defaults. The resulting option objects are immutable and
already validated.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from module3_video_frame import AlgoFrame, FrameGeometry, GeometryError
from .errors import OptionsError


class AppMode(Enum):
    INJECT = "inject"
    EXTRACT = "extract"
    COLORFRAME = "colorframe"
    DIAGONAL = "diagonal"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class InjectOptions:
    """Required options for the injection of a file into a video"""
    file_path: str
    output_video_file: str
    fps: int
    width: int
    height: int
    size: int
    algo: AlgoFrame
    show_progress: bool = False
    codec: str = "png"

    @property
    def geometry(self) -> FrameGeometry:
        return FrameGeometry(self.width, self.height, self.size)


@dataclass(frozen=True)
class ExtractOptions:
    """Required options for the extraction of a file from a video"""
    video_file_path: str
    extracted_file_path: str
    fps: int
    width: int
    height: int
    size: int
    algo: AlgoFrame
    show_progress: bool = False
    marker_threshold: float = 0.9
    marker_tolerance: int = 64

    @property
    def geometry(self) -> FrameGeometry:
        return FrameGeometry(self.width, self.height, self.size)


@dataclass(frozen=True)
class PatternOptions:
    """Options of a calibration pattern video"""
    pattern: AppMode
    output_video_file: str
    fps: int
    width: int
    height: int
    size: int
    num_frames: int = 30
    diagonal_cells: int = 10
    codec: str = "png"


VideoOptions = Union[InjectOptions, ExtractOptions, PatternOptions]


def _pick(args: Any, name: str, fallback):
    value = getattr(args, name, None)
    return fallback if value is None else value


def _positive_int(name: str, value) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise OptionsError(f"Invalid {name}: {value}") from None
    if number <= 0:
        raise OptionsError(f"Invalid {name}: {value}. Must be positive.")
    return number


def extract_options(args: Any, config: Dict[str, Any]) -> VideoOptions:
    """
    Build the options of the requested mode.

    Args:
        args: Parsed command line (attributes may be None)
        config: Configuration dictionary, see load_config

    Returns:
        InjectOptions, ExtractOptions or PatternOptions

    Raises:
        OptionsError: If the mode is missing or an argument is invalid
    """
    mode = getattr(args, "mode", None)
    if mode is None:
        raise OptionsError("Mode is required (inject, extract, colorframe or diagonal)")

    try:
        mode = AppMode(str(mode))
    except ValueError:
        raise OptionsError(f"Unknown mode: {mode}") from None

    transport = config["transport"]

    fps = _positive_int("fps", _pick(args, "fps", transport["fps"]))
    width = _positive_int("width", _pick(args, "width", transport["width"]))
    height = _positive_int("height", _pick(args, "height", transport["height"]))
    size = _positive_int("size", _pick(args, "size", transport["size"]))
    show_progress = bool(getattr(args, "show_progress", False) or transport["show_progress"])
    codec = str(_pick(args, "codec", transport["video_codec"]))

    try:
        algo = AlgoFrame.parse(_pick(args, "algo", transport["algo"]))
        FrameGeometry(width, height, size)
    except (ValueError, GeometryError) as e:
        raise OptionsError(str(e)) from e

    input_path: Optional[str] = getattr(args, "input_file_path", None)
    output_path: Optional[str] = getattr(args, "output_video_path", None)

    if mode == AppMode.INJECT:
        if input_path is None:
            raise OptionsError("Missing input file")
        return InjectOptions(
            file_path=input_path,
            output_video_file=output_path or transport["output_video_path"],
            fps=fps,
            width=width,
            height=height,
            size=size,
            algo=algo,
            show_progress=show_progress,
            codec=codec,
        )

    if mode == AppMode.EXTRACT:
        extraction = config["extraction"]
        return ExtractOptions(
            video_file_path=input_path or transport["output_video_path"],
            extracted_file_path=output_path or transport["extracted_file_path"],
            fps=fps,
            width=width,
            height=height,
            size=size,
            algo=algo,
            show_progress=show_progress,
            marker_threshold=float(extraction["marker_threshold"]),
            marker_tolerance=int(extraction["marker_tolerance"]),
        )

    patterns = config["patterns"]
    return PatternOptions(
        pattern=mode,
        output_video_file=output_path or f"{mode.value}_video.avi",
        fps=fps,
        width=width,
        height=height,
        size=size,
        num_frames=_positive_int("num_frames", patterns["num_frames"]),
        diagonal_cells=_positive_int("diagonal_cells", patterns["diagonal_cells"]),
        codec=codec,
    )
