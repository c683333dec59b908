# file: src/module2_bit_codec/__init__.py

"""
Module 2: Bit Codec

Primitive bit <-> colour conversions and the 64-bit header codec shared by
the Instruction (payload length) and Pagination (page index) headers.

Public API:
    - bit_at / bit_at64 / set_bit / byte_from_bits
    - color_for_bit / bit_from_color
    - encode_header / decode_header / header_byte_at / header_bytes
    - HeaderValue
"""

from .bits import (
    Color,
    WHITE,
    BLACK,
    bit_at,
    bit_at64,
    color_for_bit,
    bit_from_color,
    set_bit,
    byte_from_bits,
    bits_from_cells,
    colors_from_bits,
    bits_from_bytes,
    bytes_from_bits,
)
from .header import (
    HEADER_BITS,
    HEADER_BYTES,
    MAX_HEADER_VALUE,
    HeaderValue,
    encode_header,
    decode_header,
    header_byte_at,
    header_bytes,
)
from .errors import BitCodecError, BitRangeError, HeaderValueError

__version__ = "1.0.0"

__all__ = [
    "Color",
    "WHITE",
    "BLACK",
    "bit_at",
    "bit_at64",
    "color_for_bit",
    "bit_from_color",
    "set_bit",
    "byte_from_bits",
    "bits_from_cells",
    "colors_from_bits",
    "bits_from_bytes",
    "bytes_from_bits",
    "HEADER_BITS",
    "HEADER_BYTES",
    "MAX_HEADER_VALUE",
    "HeaderValue",
    "encode_header",
    "decode_header",
    "header_byte_at",
    "header_bytes",
    "BitCodecError",
    "BitRangeError",
    "HeaderValueError",
]
