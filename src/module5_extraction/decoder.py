# file: src/module5_extraction/decoder.py

"""
Frames to payload decoder.

Pipeline for each frame:
    Frame
    → per-cell averaged colours
    → 64-bit header value
    → classification (starting frame vs data frame)
    → Instruction recorded, or page inserted into the page map

Finalisation walks pages 0, 1, 2, ... and trims to the declared payload
length. A missing starting frame or a gap before the end of the payload is
always an error, never a shorter result.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Tuple, Union
import numpy as np
from tqdm import tqdm

from module2_bit_codec import HEADER_BITS, bits_from_cells, bytes_from_bits, decode_header
from module3_video_frame import (
    AlgoFrame,
    DEFAULT_MARKER_THRESHOLD,
    DEFAULT_MARKER_TOLERANCE,
    FrameGeometry,
    GeometryError,
    VideoFrame,
    is_marker_region,
)
from .errors import (
    ConflictingInstructionError,
    GeometryMismatchError,
    IncompleteTransferError,
    InstructionNotFoundError,
)
from .page_map import PageMap


logger = logging.getLogger(__name__)

FrameLike = Union[VideoFrame, np.ndarray]


def classify_frame(
    content_cells: np.ndarray,
    marker_threshold: float = DEFAULT_MARKER_THRESHOLD,
    marker_tolerance: int = DEFAULT_MARKER_TOLERANCE
) -> bool:
    """
    Tell whether content cells belong to the starting frame.

    Returns:
        True if strictly more than `marker_threshold` of the content cells
        carry the marker colour
    """
    return is_marker_region(content_cells, marker_threshold, marker_tolerance)


def decode_page(content_cells: np.ndarray, algo: AlgoFrame) -> bytes:
    """
    Decode the content cells of a data frame into page bytes.

    RGB: 3 bytes per cell (R, G, B). BW: 8 cells per byte, most significant
    bit first.
    """
    if AlgoFrame.parse(algo) == AlgoFrame.RGB:
        return np.ascontiguousarray(content_cells, dtype=np.uint8).tobytes()

    return bytes_from_bits(bits_from_cells(content_cells))


class ExtractionRun:
    """
    State of one extraction run.

    Holds the Instruction (payload length) once seen and the page map. A run
    is created per decode call and discarded afterwards, so independent runs
    never share pages.
    """

    def __init__(
        self,
        geometry: FrameGeometry,
        algo: AlgoFrame,
        marker_threshold: float = DEFAULT_MARKER_THRESHOLD,
        marker_tolerance: int = DEFAULT_MARKER_TOLERANCE
    ):
        self.geometry = geometry
        self.algo = AlgoFrame.parse(algo)
        self.marker_threshold = marker_threshold
        self.marker_tolerance = marker_tolerance

        try:
            geometry.validate_for(self.algo)
        except GeometryError as e:
            raise GeometryMismatchError(str(e)) from e

        self.instruction: Optional[int] = None
        self.pages = PageMap()
        self.frames_processed = 0
        self.sentinel_frames = 0

    def process_frame(self, frame: FrameLike) -> Tuple[bool, int]:
        """
        Decode one frame and fold it into the run state.

        Returns:
            (is_starting_frame, header_value)

        Raises:
            GeometryMismatchError: If the frame size differs from the geometry
            ConflictingInstructionError: If a starting frame contradicts an earlier one
        """
        frame = self._as_video_frame(frame)

        cells = frame.read_cells(self.geometry.size)
        header_value = decode_header(bits_from_cells(cells[:HEADER_BITS]).tolist())
        content_cells = cells[HEADER_BITS:]

        self.frames_processed += 1

        if classify_frame(content_cells, self.marker_threshold, self.marker_tolerance):
            self.sentinel_frames += 1
            if self.instruction is None:
                self.instruction = header_value
                logger.debug(f"Instruction found: {header_value} bytes")
            elif self.instruction != header_value:
                # A data page read as a starting frame; no length can be trusted
                raise ConflictingInstructionError(
                    f"Starting frames declare {self.instruction} and {header_value} bytes",
                    first_length=self.instruction,
                    other_length=header_value
                )
            return True, header_value

        if not self.pages.insert(header_value, decode_page(content_cells, self.algo)):
            logger.debug(f"Duplicate page {header_value} dropped")

        return False, header_value

    def finalize(self) -> bytes:
        """
        Reassemble the payload.

        Raises:
            InstructionNotFoundError: If no starting frame was processed
            IncompleteTransferError: If contiguous pages are shorter than the payload
        """
        if self.instruction is None:
            raise InstructionNotFoundError()

        data = self.pages.assemble()

        if len(data) < self.instruction:
            missing_page = self.pages.first_missing()
            raise IncompleteTransferError(
                f"Incomplete transfer: recovered {len(data)} of {self.instruction} bytes, "
                f"page {missing_page} is missing",
                expected_length=self.instruction,
                recovered_length=len(data),
                missing_page=missing_page
            )

        return data[:self.instruction]

    def statistics(self) -> Dict[str, Any]:
        contiguous_pages = self.pages.first_missing()
        return {
            'instruction': self.instruction,
            'frames_processed': self.frames_processed,
            'sentinel_frames': self.sentinel_frames,
            'pages_recovered': len(self.pages),
            'contiguous_pages': contiguous_pages,
            'duplicate_pages': self.pages.duplicates,
            'page_capacity': self.geometry.page_capacity(self.algo),
        }

    def _as_video_frame(self, frame: FrameLike) -> VideoFrame:
        if not isinstance(frame, VideoFrame):
            frame = VideoFrame.from_image(frame)

        if frame.width != self.geometry.width or frame.height != self.geometry.height:
            raise GeometryMismatchError(
                f"Frame of {frame.width}x{frame.height} does not match the extraction "
                f"geometry {self.geometry.width}x{self.geometry.height}"
            )
        return frame


def frames_to_data_with_metadata(
    frames: Iterable[FrameLike],
    geometry: FrameGeometry,
    algo: AlgoFrame,
    show_progress: bool = False,
    marker_threshold: float = DEFAULT_MARKER_THRESHOLD,
    marker_tolerance: int = DEFAULT_MARKER_TOLERANCE
) -> Tuple[bytes, Dict[str, Any]]:
    """
    Decode frames and collect run statistics.

    Returns:
        data: Payload bytes
        metadata: Dictionary containing:
            - instruction: Declared payload length
            - frames_processed: Number of frames decoded
            - sentinel_frames: Starting frames seen
            - pages_recovered: Distinct pages
            - contiguous_pages: Pages reachable from index 0 without a gap
            - duplicate_pages: Data frames dropped as duplicates
            - page_capacity: Bytes per data frame
    """
    run = ExtractionRun(
        geometry,
        algo,
        marker_threshold=marker_threshold,
        marker_tolerance=marker_tolerance
    )

    if show_progress:
        frames = tqdm(frames, desc="Extracting", unit="frame")

    for frame in frames:
        run.process_frame(frame)

    metadata = run.statistics()
    logger.info(
        f"Processed {metadata['frames_processed']} frames: "
        f"{metadata['pages_recovered']} pages, {metadata['duplicate_pages']} duplicates"
    )

    data = run.finalize()
    return data, metadata


def frames_to_data(
    frames: Iterable[FrameLike],
    geometry: FrameGeometry,
    algo: AlgoFrame,
    show_progress: bool = False,
    marker_threshold: float = DEFAULT_MARKER_THRESHOLD,
    marker_tolerance: int = DEFAULT_MARKER_TOLERANCE
) -> bytes:
    """
    Decode an unordered, possibly duplicated frame sequence into the payload.

    Args:
        frames: Frames in any order (VideoFrame or RGB arrays)
        geometry: Geometry used at injection time
        algo: Content encoding mode used at injection time
        show_progress: Display a progress bar
        marker_threshold: Fraction of marker cells identifying the starting frame
        marker_tolerance: Per-channel tolerance of the marker colour match

    Returns:
        data: Exactly the injected payload

    Raises:
        InstructionNotFoundError: If no starting frame is present
        IncompleteTransferError: If a page before the end of the payload is missing
        GeometryMismatchError: If a frame does not match the geometry
        ConflictingInstructionError: If starting frames declare different lengths
    """
    data, _ = frames_to_data_with_metadata(
        frames,
        geometry,
        algo,
        show_progress=show_progress,
        marker_threshold=marker_threshold,
        marker_tolerance=marker_tolerance
    )
    return data
