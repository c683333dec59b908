"""
Frame geometry and layout constants.

A frame is a width x height pixel grid addressed as a row-major sequence of
size x size cells. Only the regular part of the grid (a multiple of size in
each direction) carries cells.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple
import numpy as np

from module2_bit_codec import HEADER_BITS, Color
from .errors import GeometryError


# Reserved colour of the starting frame; never used for header bits
MARKER_COLOR: Color = (255, 0, 0)
DEFAULT_MARKER_TOLERANCE = 64
DEFAULT_MARKER_THRESHOLD = 0.9


class AlgoFrame(Enum):
    """How payload bytes are laid into content cells."""
    RGB = "rgb"  # 3 bytes per cell, one per channel
    BW = "bw"    # 1 bit per cell, 8 cells per byte

    @classmethod
    def parse(cls, value) -> "AlgoFrame":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown algo: {value}") from None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FrameGeometry:
    """Pixel geometry of every frame of a transfer."""
    width: int
    height: int
    size: int = 1

    def __post_init__(self):
        for name in ("width", "height", "size"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise GeometryError(f"Invalid {name}: {value}. Must be a positive integer.")

    @property
    def columns(self) -> int:
        return self.width // self.size

    @property
    def rows(self) -> int:
        return self.height // self.size

    @property
    def cell_count(self) -> int:
        return self.columns * self.rows

    @property
    def content_cells(self) -> int:
        """Cells left after the 64 header cells (never negative)."""
        return max(self.cell_count - HEADER_BITS, 0)

    @property
    def actual_size(self) -> Tuple[int, int]:
        """(width, height) in pixels of the regular cell grid."""
        return self.columns * self.size, self.rows * self.size

    def cell_origin(self, index: int) -> Tuple[int, int]:
        """Pixel (x, y) of the top-left corner of cell `index`."""
        return (index % self.columns) * self.size, (index // self.columns) * self.size

    def page_capacity(self, algo: AlgoFrame) -> int:
        """Payload bytes carried by one data frame."""
        if AlgoFrame.parse(algo) == AlgoFrame.RGB:
            return self.content_cells * 3
        return self.content_cells // 8

    def validate_for(self, algo: AlgoFrame) -> None:
        """
        Check the geometry can carry headers and payload for `algo`.

        Raises:
            GeometryError: If the header does not fit, no content cell is
                left, or (BW) the grid is not byte aligned
        """
        algo = AlgoFrame.parse(algo)

        if self.cell_count < HEADER_BITS:
            raise GeometryError(
                f"Frame of {self.width}x{self.height} with size {self.size} has "
                f"{self.cell_count} cells, the header needs {HEADER_BITS}"
            )

        if self.content_cells == 0:
            raise GeometryError(
                f"Frame of {self.width}x{self.height} with size {self.size} has no "
                f"cell left for payload after the header"
            )

        # The header check above already guarantees at least 8 cells
        if algo == AlgoFrame.BW and self.cell_count % 8 != 0:
            raise GeometryError(
                f"BW mode needs a cell count multiple of 8, got {self.cell_count}"
            )


def is_marker_color(
    cells: np.ndarray,
    tolerance: int = DEFAULT_MARKER_TOLERANCE
) -> np.ndarray:
    """
    Test which cells carry the reserved marker colour.

    Args:
        cells: Averaged cell colours (N, 3), RGB
        tolerance: Maximum per-channel distance to the marker colour

    Returns:
        matches: Boolean array (N,)
    """
    cells = np.asarray(cells, dtype=np.int16)
    if cells.size == 0:
        return np.zeros((0,), dtype=bool)

    marker = np.array(MARKER_COLOR, dtype=np.int16)
    return np.all(np.abs(cells - marker) <= tolerance, axis=1)


def is_marker_region(
    cells: np.ndarray,
    threshold: float = DEFAULT_MARKER_THRESHOLD,
    tolerance: int = DEFAULT_MARKER_TOLERANCE
) -> bool:
    """
    Tell whether a run of cells reads as the starting frame content.

    Returns:
        True if strictly more than `threshold` of the cells carry the marker
        colour; an empty run never does
    """
    if len(cells) == 0:
        return False

    matches = is_marker_color(cells, tolerance)
    return float(np.count_nonzero(matches)) / len(cells) > threshold
