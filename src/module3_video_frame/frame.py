"""
Video frame cell grid.

A VideoFrame owns one RGB image and exposes cell-granular writes and
averaged reads at a given redundancy size. Writing a cell paints a solid
size x size block; reading a cell averages every pixel of the block so the
colour survives capture and compression noise.
"""

from typing import Sequence, Tuple
import numpy as np

from module2_bit_codec import HEADER_BITS, Color, colors_from_bits
from .errors import FrameBoundsError, FrameError


# Type alias for Frame image
Frame = np.ndarray  # Shape: (H, W, 3), dtype: uint8, range: [0, 255]


class VideoFrame:
    """
    A single frame of the transport video.

    E.g. on a 30fps video, there are 30 VideoFrame every second.
    """

    def __init__(self, image: Frame):
        if image.ndim != 3 or image.shape[2] != 3:
            raise FrameError(f"Invalid frame shape: {image.shape}. Expected (H, W, 3).")
        if image.dtype != np.uint8:
            raise FrameError(f"Invalid frame dtype: {image.dtype}. Expected uint8.")
        self.image = image

    @classmethod
    def create(cls, width: int, height: int) -> "VideoFrame":
        """Allocate a black frame; every cell is overwritten before emission."""
        if width <= 0 or height <= 0:
            raise FrameError(f"Invalid frame resolution: {width}x{height}")
        return cls(np.zeros((height, width, 3), dtype=np.uint8))

    @classmethod
    def from_image(cls, image: Frame) -> "VideoFrame":
        """Wrap a decoded RGB image without copying it."""
        return cls(image)

    @property
    def width(self) -> int:
        return self.image.shape[1]

    @property
    def height(self) -> int:
        return self.image.shape[0]

    def copy(self) -> "VideoFrame":
        return VideoFrame(self.image.copy())

    def __eq__(self, other) -> bool:
        if not isinstance(other, VideoFrame):
            return NotImplemented
        return np.array_equal(self.image, other.image)

    def __repr__(self) -> str:
        return f"VideoFrame(width={self.width}, height={self.height})"

    # =========================================================================
    # Single cell access
    # =========================================================================

    def _check_block(self, x: int, y: int, size: int) -> None:
        if size <= 0:
            raise FrameBoundsError(f"Invalid cell size: {size}")
        if x < 0 or y < 0 or x + size > self.width or y + size > self.height:
            raise FrameBoundsError(
                f"Cell block of size {size} at ({x}, {y}) exceeds frame "
                f"{self.width}x{self.height}"
            )

    def write_cell(self, color: Color, x: int, y: int, size: int) -> None:
        """Fill the size x size block anchored at pixel (x, y)."""
        self._check_block(x, y, size)
        self.image[y:y + size, x:x + size] = color

    def read_cell_averaged(self, x: int, y: int, size: int) -> Color:
        """
        Per-channel mean of the size x size block anchored at (x, y).

        The mean is rounded down, matching read_cells.
        """
        self._check_block(x, y, size)
        block = self.image[y:y + size, x:x + size].reshape(-1, 3).astype(np.uint32)
        mean = block.sum(axis=0) // (size * size)
        return int(mean[0]), int(mean[1]), int(mean[2])

    def write_header(self, bits: Sequence[bool], size: int) -> Tuple[int, int]:
        """
        Write 64 header bits as black/white cells from the frame origin.

        Cells are laid row-major and wrap to the next row at the end of the
        regular grid.

        Returns:
            (next_x, next_y): Pixel coordinate of the next free cell
        """
        if len(bits) != HEADER_BITS:
            raise FrameError(f"Expected {HEADER_BITS} header bits, got {len(bits)}")

        columns = self.width // size if size > 0 else 0
        rows = self.height // size if size > 0 else 0
        if columns * rows < HEADER_BITS:
            raise FrameBoundsError(
                f"Frame {self.width}x{self.height} with size {size} cannot hold "
                f"a {HEADER_BITS} cells header"
            )

        self.write_cells(colors_from_bits(np.asarray(bits, dtype=bool)), 0, size)

        next_x = (HEADER_BITS % columns) * size
        next_y = (HEADER_BITS // columns) * size
        return next_x, next_y

    # =========================================================================
    # Bulk cell access
    # =========================================================================

    def write_cells(self, colors: np.ndarray, start_cell: int, size: int) -> None:
        """
        Write a run of consecutive cells in row-major order.

        Args:
            colors: uint8 array (N, 3)
            start_cell: Index of the first cell to write
            size: Cell size in pixels
        """
        colors = np.asarray(colors, dtype=np.uint8)
        if colors.ndim != 2 or colors.shape[1] != 3:
            raise FrameError(f"Invalid colors shape: {colors.shape}. Expected (N, 3).")
        if size <= 0:
            raise FrameBoundsError(f"Invalid cell size: {size}")

        columns = self.width // size
        cell_count = columns * (self.height // size)
        count = colors.shape[0]

        if start_cell < 0 or start_cell + count > cell_count:
            raise FrameBoundsError(
                f"Cells {start_cell}..{start_cell + count} exceed the {cell_count} "
                f"cells of the frame"
            )
        if count == 0:
            return

        index = np.arange(start_cell, start_cell + count)
        ys = (index // columns) * size
        xs = (index % columns) * size

        for dy in range(size):
            for dx in range(size):
                self.image[ys + dy, xs + dx] = colors

    def read_cells(self, size: int) -> np.ndarray:
        """
        Averaged colour of every cell of the regular grid, row-major.

        Returns:
            cells: uint8 array (rows * columns, 3)
        """
        if size <= 0:
            raise FrameBoundsError(f"Invalid cell size: {size}")

        columns = self.width // size
        rows = self.height // size
        region = self.image[:rows * size, :columns * size].astype(np.uint32)

        blocks = region.reshape(rows, size, columns, size, 3).sum(axis=(1, 3))
        cells = blocks // (size * size)

        return cells.reshape(-1, 3).astype(np.uint8)

    def fill(self, color: Color, size: int) -> None:
        """Paint every cell of the regular grid with one colour."""
        if size <= 0:
            raise FrameBoundsError(f"Invalid cell size: {size}")
        columns = self.width // size
        rows = self.height // size
        self.image[:rows * size, :columns * size] = color
