# file: src/module2_bit_codec/header.py

"""
64-bit header codec.

A header value is an unsigned 64-bit integer written as 64 monochrome cells,
most significant bit first. The same codec carries two headers:

    - Instruction: total payload length in bytes, on the starting frame only
    - Pagination: zero-based page index, on every data frame
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from .bits import bit_at64, byte_from_bits
from .errors import HeaderValueError


HEADER_BITS = 64
HEADER_BYTES = 8
MAX_HEADER_VALUE = (1 << HEADER_BITS) - 1


def encode_header(value: int) -> Tuple[bool, ...]:
    """
    Encode an unsigned 64-bit value into 64 bits.

    Bit i of the result is bit (63 - i) of the value.

    Raises:
        HeaderValueError: If value does not fit in an unsigned 64-bit integer
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise HeaderValueError(f"Header value must be an int, got {type(value)}")

    if not 0 <= value <= MAX_HEADER_VALUE:
        raise HeaderValueError(f"Header value {value} does not fit in 64 unsigned bits")

    return tuple(bit_at64(value, HEADER_BITS - i - 1) for i in range(HEADER_BITS))


def decode_header(bits: Sequence[bool]) -> int:
    """Exact inverse of encode_header."""
    if len(bits) != HEADER_BITS:
        raise HeaderValueError(f"Expected {HEADER_BITS} header bits, got {len(bits)}")

    result = 0
    for bit in bits:
        result = (result << 1) | (1 if bit else 0)
    return result


def header_byte_at(bits: Sequence[bool], position: int) -> int:
    """
    Get one of the 8 bytes of a header.

    Position 0 is the most significant (left-most) byte.
    """
    if len(bits) != HEADER_BITS:
        raise HeaderValueError(f"Expected {HEADER_BITS} header bits, got {len(bits)}")

    if not 0 <= position < HEADER_BYTES:
        raise HeaderValueError(
            f"Only position of 0 to 7 inclusively exist in a 64 bits, got {position}"
        )

    start = position * 8
    return byte_from_bits(list(bits[start:start + 8]))


def header_bytes(bits: Sequence[bool]) -> bytes:
    """All 8 header bytes, big-endian."""
    return bytes(header_byte_at(bits, i) for i in range(HEADER_BYTES))


@dataclass(frozen=True)
class HeaderValue:
    """Immutable 64-bit header as written into a frame."""
    bits: Tuple[bool, ...]

    def __post_init__(self):
        if len(self.bits) != HEADER_BITS:
            raise HeaderValueError(
                f"Expected {HEADER_BITS} header bits, got {len(self.bits)}"
            )

    @classmethod
    def from_value(cls, value: int) -> "HeaderValue":
        return cls(encode_header(value))

    @classmethod
    def instruction(cls, payload_length: int) -> "HeaderValue":
        """Header of the starting frame: the payload length in bytes."""
        return cls.from_value(payload_length)

    @classmethod
    def pagination(cls, page_index: int) -> "HeaderValue":
        """Header of a data frame: its page index."""
        return cls.from_value(page_index)

    @property
    def value(self) -> int:
        return decode_header(self.bits)

    def byte_at(self, position: int) -> int:
        return header_byte_at(self.bits, position)

    def to_bytes(self) -> bytes:
        return header_bytes(self.bits)
