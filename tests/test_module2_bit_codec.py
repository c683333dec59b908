# file: tests/test_module2_bit_codec.py

"""
Unit tests for Module 2: Bit Codec.

Test coverage:
    - Bit extraction on 8 and 64 bit values
    - Bit <-> colour conversion and majority decision
    - Byte assembly
    - 64-bit header encode/decode and byte access
    - Vectorised helpers
"""

import numpy as np
import pytest

from module2_bit_codec import (
    WHITE,
    BLACK,
    MAX_HEADER_VALUE,
    HeaderValue,
    bit_at,
    bit_at64,
    bit_from_color,
    bits_from_bytes,
    bits_from_cells,
    byte_from_bits,
    bytes_from_bits,
    color_for_bit,
    colors_from_bits,
    decode_header,
    encode_header,
    header_byte_at,
    header_bytes,
    set_bit,
    BitCodecError,
    BitRangeError,
    HeaderValueError,
)


class TestBitAt:
    """Test single bit extraction."""

    def test_bit_at_54(self):
        """54 = 00110110"""
        expected = [False, True, True, False, True, True, False, False]
        assert [bit_at(54, n) for n in range(8)] == expected

    def test_bit_at_out_of_range(self):
        with pytest.raises(BitRangeError):
            bit_at(54, 8)
        with pytest.raises(BitRangeError):
            bit_at(54, -1)

    def test_bit_at64_high_bit(self):
        assert bit_at64(1 << 63, 63) is True
        assert bit_at64(1 << 63, 0) is False

    def test_bit_at64_out_of_range(self):
        with pytest.raises(BitRangeError, match="0 and 63"):
            bit_at64(1, 64)

    def test_errors_share_base(self):
        """Range errors are both codec errors and ValueErrors."""
        assert issubclass(BitRangeError, BitCodecError)
        assert issubclass(BitRangeError, ValueError)
        assert issubclass(HeaderValueError, BitCodecError)


class TestColors:
    """Test bit <-> colour conversion."""

    def test_color_for_bit(self):
        assert color_for_bit(True) == WHITE
        assert color_for_bit(False) == BLACK

    def test_bit_from_pure_colors(self):
        assert bit_from_color(list(WHITE)) is True
        assert bit_from_color(list(BLACK)) is False

    def test_bit_from_mostly_black(self):
        assert bit_from_color([255, 255, 255, 0, 0, 0, 0, 0]) is False

    def test_bit_from_mostly_white(self):
        assert bit_from_color([255, 255, 255, 255, 255, 0, 0, 0]) is True

    def test_bit_from_grey_threshold(self):
        """Half intensity, rounded down, counts as white."""
        assert bit_from_color([127]) is True
        assert bit_from_color([126]) is False

    def test_bit_from_noisy_white(self):
        assert bit_from_color([200, 190, 230]) is True

    def test_bit_from_empty_samples(self):
        with pytest.raises(BitRangeError):
            bit_from_color([])


class TestByteAssembly:
    """Test set_bit and byte_from_bits."""

    def test_set_bit(self):
        assert set_bit(0, True, 7) == 128
        assert set_bit(255, False, 0) == 254
        assert set_bit(0b1010, True, 1) == 0b1010

    def test_set_bit_out_of_range(self):
        with pytest.raises(BitRangeError):
            set_bit(0, True, 8)

    def test_byte_from_bits(self):
        bits = [True, False, False, True, True, False, True, True]
        assert byte_from_bits(bits) == 155

    def test_byte_from_bits_wrong_length(self):
        with pytest.raises(BitRangeError):
            byte_from_bits([True] * 7)


class TestHeader:
    """Test the 64-bit header codec."""

    def test_encode_100(self):
        bits = encode_header(100)
        assert len(bits) == 64
        # 100 = 1100100, written most significant bit first
        assert list(bits[57:]) == [True, True, False, False, True, False, False]
        assert not any(bits[:57])

    def test_encode_389657(self):
        bits = encode_header(389657)
        # 389657 = 1011111001000011001
        expected = [c == '1' for c in '1011111001000011001']
        assert list(bits[45:]) == expected
        assert not any(bits[:45])

    def test_byte_access(self):
        header = HeaderValue.instruction(3465345363523452834)
        expected = [48, 23, 97, 63, 120, 220, 191, 162]
        assert [header.byte_at(i) for i in range(8)] == expected
        assert header.to_bytes() == bytes(expected)
        assert header_bytes(header.bits) == bytes(expected)

    def test_value_roundtrip(self):
        for value in [0, 1, 75, 3465345363523452834, MAX_HEADER_VALUE]:
            assert decode_header(encode_header(value)) == value
            assert HeaderValue.pagination(value).value == value

    def test_zero_is_all_black(self):
        assert not any(HeaderValue.pagination(0).bits)

    def test_max_is_all_white(self):
        assert all(HeaderValue.from_value(MAX_HEADER_VALUE).bits)

    def test_value_out_of_range(self):
        with pytest.raises(HeaderValueError):
            encode_header(MAX_HEADER_VALUE + 1)
        with pytest.raises(HeaderValueError):
            encode_header(-1)

    def test_value_not_int(self):
        with pytest.raises(HeaderValueError):
            encode_header(1.5)
        with pytest.raises(HeaderValueError):
            encode_header(True)

    def test_wrong_bit_count(self):
        with pytest.raises(HeaderValueError):
            decode_header([True] * 63)
        with pytest.raises(HeaderValueError):
            HeaderValue((False,) * 65)

    def test_byte_position_out_of_range(self):
        bits = encode_header(1)
        with pytest.raises(HeaderValueError, match="0 to 7"):
            header_byte_at(bits, 8)

    def test_header_is_hashable(self):
        assert HeaderValue.from_value(7) == HeaderValue.from_value(7)
        assert len({HeaderValue.from_value(7), HeaderValue.from_value(7)}) == 1


class TestVectorised:
    """Test the numpy helpers used on whole frames."""

    def test_bits_from_bytes(self):
        bits = bits_from_bytes(bytes([155]))
        assert bits.tolist() == [True, False, False, True, True, False, True, True]

    def test_bits_from_empty_bytes(self):
        assert len(bits_from_bytes(b'')) == 0
        assert bytes_from_bits(np.array([], dtype=bool)) == b''

    def test_bytes_from_bits(self):
        data = bytes(range(0, 256, 17))
        assert bytes_from_bits(bits_from_bytes(data)) == data

    def test_bytes_from_bits_not_aligned(self):
        with pytest.raises(BitRangeError):
            bytes_from_bits(np.ones(9, dtype=bool))

    def test_colors_from_bits(self):
        colors = colors_from_bits(np.array([True, False]))
        assert colors.dtype == np.uint8
        assert colors.tolist() == [[255, 255, 255], [0, 0, 0]]

    def test_bits_from_cells_matches_scalar_rule(self):
        cells = np.array([
            [255, 255, 255],
            [0, 0, 0],
            [127, 127, 128],
            [126, 127, 127],
            [255, 0, 0],
        ], dtype=np.uint8)
        expected = [bit_from_color(row.tolist()) for row in cells]
        assert bits_from_cells(cells).tolist() == expected

    def test_bits_from_cells_wrong_shape(self):
        with pytest.raises(BitRangeError):
            bits_from_cells(np.zeros(3, dtype=np.uint8))
