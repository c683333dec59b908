# file: src/module2_bit_codec/bits.py

"""
Bit and colour primitives.

Scalar helpers convert single bits to and from cell colours. The vectorised
helpers operate on whole frames worth of cells at once and are what the
injection and extraction modules use on the hot path.
"""

from typing import Sequence, Tuple
import numpy as np

from .errors import BitRangeError


# Type alias for Color
Color = Tuple[int, int, int]  # (R, G, B), each in [0, 255]

WHITE: Color = (255, 255, 255)
BLACK: Color = (0, 0, 0)

BITS_PER_BYTE = 8
CHANNEL_MAX = 255


def bit_at(value: int, n: int) -> bool:
    """
    Get bit n of an 8-bit value.

    Args:
        value: Byte value
        n: Bit position, 0 = least significant, 7 = most significant

    Returns:
        True if the bit is set

    Raises:
        BitRangeError: If n is not in [0, 7]
    """
    if not 0 <= n < 8:
        raise BitRangeError(
            f"The bit position must be between 0 and 7 inclusively on a 8 bits number, got {n}"
        )
    return value & (1 << n) != 0


def bit_at64(value: int, n: int) -> bool:
    """
    Get bit n of a 64-bit value.

    Raises:
        BitRangeError: If n is not in [0, 63]
    """
    if not 0 <= n < 64:
        raise BitRangeError(
            f"The bit position must be between 0 and 63 inclusively on a 64 bits number, got {n}"
        )
    return value & (1 << n) != 0


def color_for_bit(bit: bool) -> Color:
    """White for a set bit, black otherwise."""
    return WHITE if bit else BLACK


def bit_from_color(samples: Sequence[int]) -> bool:
    """
    Decide a bit from averaged channel samples.

    The colour does not need to be perfect white or black: the bit is set when
    the samples are, in sum, at least half way to full intensity.

    Args:
        samples: One or more channel values (already averaged per cell)

    Returns:
        True if closer to white, False if closer to black

    Example:
        >>> bit_from_color([255, 255, 255, 0, 0, 0, 0, 0])
        False
    """
    if len(samples) == 0:
        raise BitRangeError("At least one channel sample is required")
    total = sum(int(s) for s in samples)
    return total >= CHANNEL_MAX * len(samples) // 2


def set_bit(byte: int, bit: bool, position: int) -> int:
    """Return byte with bit `position` forced to `bit`, other bits unchanged."""
    if not 0 <= position < 8:
        raise BitRangeError(f"Bit position {position} outside of a byte")
    value = 1 if bit else 0
    return (byte & ~(1 << position) | (value << position)) & 0xFF


def byte_from_bits(bits: Sequence[bool]) -> int:
    """
    Assemble 8 ordered bits into a byte.

    Args:
        bits: 8 booleans, index 0 = most significant bit

    Example:
        >>> byte_from_bits([True, False, False, True, True, False, True, True])
        155
    """
    if len(bits) != BITS_PER_BYTE:
        raise BitRangeError(f"Expected exactly 8 bits, got {len(bits)}")
    result = 0
    for bit in bits:
        result = (result << 1) | (1 if bit else 0)
    return result


# =============================================================================
# Vectorised helpers
# =============================================================================

def bits_from_cells(cells: np.ndarray) -> np.ndarray:
    """
    Majority decision for every cell of an (N, C) array of averaged colours.

    Same rule as bit_from_color, applied row by row.

    Returns:
        bits: Boolean array (N,)
    """
    cells = np.asarray(cells)
    if cells.ndim != 2:
        raise BitRangeError(f"Expected (N, C) cell array, got shape {cells.shape}")

    channels = cells.shape[1]
    sums = cells.astype(np.int64).sum(axis=1)
    return sums >= CHANNEL_MAX * channels // 2


def colors_from_bits(bits: np.ndarray) -> np.ndarray:
    """
    Map bits to black/white colours.

    Returns:
        colors: uint8 array (N, 3)
    """
    bits = np.asarray(bits, dtype=bool)
    values = np.where(bits, CHANNEL_MAX, 0).astype(np.uint8)
    return np.repeat(values[:, None], 3, axis=1)


def bits_from_bytes(data: bytes) -> np.ndarray:
    """Unpack bytes to a boolean array, most significant bit first."""
    if len(data) == 0:
        return np.array([], dtype=bool)

    return np.unpackbits(np.frombuffer(data, dtype=np.uint8), bitorder='big').astype(bool)


def bytes_from_bits(bits: np.ndarray) -> bytes:
    """
    Pack bits into bytes, most significant bit first.

    Raises:
        BitRangeError: If the number of bits is not a multiple of 8
    """
    bits = np.asarray(bits, dtype=np.uint8)

    if len(bits) % BITS_PER_BYTE != 0:
        raise BitRangeError(
            f"Bit count {len(bits)} is not a multiple of {BITS_PER_BYTE}"
        )

    if len(bits) == 0:
        return b''

    return np.packbits(bits.reshape(-1, BITS_PER_BYTE), axis=1, bitorder='big').tobytes()
