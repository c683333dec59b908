# file: src/module2_bit_codec/errors.py

"""
Bit codec exception hierarchy.

All exceptions inherit from BitCodecError for unified handling.
"""


class BitCodecError(Exception):
    """Base exception for all bit codec errors."""
    pass


class BitRangeError(BitCodecError, ValueError):
    """Raised when a bit or byte position is outside the value width."""
    pass


class HeaderValueError(BitCodecError, ValueError):
    """Raised when a header value or header bit sequence is malformed."""
    pass
