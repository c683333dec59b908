# file: src/module4_injection/encoder.py

"""
Payload to frames encoder.

Output layout:
    [starting frame][page 0][page 1]...[page N-1]

The starting frame is painted with the marker colour and carries the
Instruction header (payload length). Every data frame carries its own
Pagination header followed by one page of payload, so frames can be decoded
in any order.
"""

import logging
from typing import List
import numpy as np
from tqdm import tqdm

from module2_bit_codec import HEADER_BITS, HeaderValue, bits_from_bytes, colors_from_bits
from module3_video_frame import (
    AlgoFrame,
    DEFAULT_MARKER_THRESHOLD,
    FrameGeometry,
    GeometryError,
    MARKER_COLOR,
    VideoFrame,
    is_marker_region,
)
from .errors import InjectionConfigurationError, InjectionEncodingError


logger = logging.getLogger(__name__)

PADDING_BYTE = b'\x00'


class FrameEncoder:
    """
    Encoder from payload bytes to transport frames.

    Parameters:
        geometry: Frame width, height and cell size
        algo: RGB (3 bytes per cell) or BW (1 bit per cell)
        show_progress: Display a progress bar over data frames

    Invariants:
        - Page indices are 0..N-1, contiguous, in emission order
        - Every page except the last is exactly page_capacity bytes of payload
        - The last page is padded with null bytes up to page_capacity
    """

    def __init__(self, geometry: FrameGeometry, algo: AlgoFrame, show_progress: bool = False):
        self.algo = AlgoFrame.parse(algo)
        self.geometry = geometry
        self.show_progress = show_progress

        try:
            geometry.validate_for(self.algo)
        except GeometryError as e:
            raise InjectionConfigurationError(str(e)) from e

        self.page_capacity = geometry.page_capacity(self.algo)

    def page_count(self, payload_length: int) -> int:
        """Number of data frames needed for a payload."""
        return -(-payload_length // self.page_capacity)

    def create_starting_frame(self, payload_length: int) -> VideoFrame:
        """
        Create the frame announcing the transfer.

        Every cell is painted with the marker colour, then the Instruction
        header overwrites the first 64 cells.
        """
        instruction = HeaderValue.instruction(payload_length)

        frame = VideoFrame.create(self.geometry.width, self.geometry.height)
        frame.fill(MARKER_COLOR, self.geometry.size)
        frame.write_header(instruction.bits, self.geometry.size)

        return frame

    def data_to_frames(self, data: bytes) -> List[VideoFrame]:
        """Split the payload into pages and render one data frame per page."""
        data = _as_bytes(data)
        num_pages = self.page_count(len(data))

        logger.debug(
            f"Encoding {len(data)} bytes into {num_pages} {self.algo} frames "
            f"({self.page_capacity} bytes per frame)"
        )

        pages = range(num_pages)
        if self.show_progress:
            pages = tqdm(pages, desc="Injecting", unit="frame")

        frames = []
        for page_index in pages:
            start = page_index * self.page_capacity
            page = data[start:start + self.page_capacity]
            frames.append(self._render_page(page_index, page))

        return frames

    def encode(self, data: bytes) -> List[VideoFrame]:
        """Starting frame followed by all data frames in page order."""
        data = _as_bytes(data)

        frames = [self.create_starting_frame(len(data))]
        frames.extend(self.data_to_frames(data))

        logger.info(f"Encoded {len(data)} bytes into {len(frames)} frames")
        return frames

    def _render_page(self, page_index: int, page: bytes) -> VideoFrame:
        if len(page) < self.page_capacity:
            page = page + PADDING_BYTE * (self.page_capacity - len(page))

        colors = self._content_colors(page)
        if is_marker_region(colors):
            raise InjectionEncodingError(
                f"Page {page_index} reads as a starting frame: more than "
                f"{DEFAULT_MARKER_THRESHOLD:.0%} of its cells are close to the marker colour"
            )

        frame = VideoFrame.create(self.geometry.width, self.geometry.height)
        frame.write_header(HeaderValue.pagination(page_index).bits, self.geometry.size)
        frame.write_cells(colors, HEADER_BITS, self.geometry.size)

        return frame

    def _content_colors(self, page: bytes) -> np.ndarray:
        """Colours of the content cells, one row per cell."""
        content_cells = self.geometry.content_cells

        if self.algo == AlgoFrame.RGB:
            # page_capacity is exactly 3 bytes per content cell
            return np.frombuffer(page, dtype=np.uint8).reshape(content_cells, 3)

        # BW content region is byte aligned: 8 cells per page byte, most significant bit first
        return colors_from_bits(bits_from_bytes(page))


def encode_payload(
    data: bytes,
    geometry: FrameGeometry,
    algo: AlgoFrame,
    show_progress: bool = False
) -> List[VideoFrame]:
    """
    Encode a payload into transport frames.

    Args:
        data: Payload bytes
        geometry: Frame geometry
        algo: Content encoding mode
        show_progress: Display a progress bar

    Returns:
        frames: Starting frame then data frames in page order

    Raises:
        InjectionConfigurationError: If the geometry cannot carry the layout
        InjectionEncodingError: If the payload is not bytes, or an RGB page would
            read as the starting frame (mostly bytes close to ff 00 00)
    """
    encoder = FrameEncoder(geometry, algo, show_progress=show_progress)
    return encoder.encode(data)


def _as_bytes(data) -> bytes:
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    if not isinstance(data, bytes):
        raise InjectionEncodingError(f"Payload must be bytes, got {type(data)}")
    return data
