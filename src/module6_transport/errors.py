# file: module6_transport/errors.py
"""
Transport tooling error types for Module 6.
"""


class TransportError(Exception):
    """Base exception for Module 6 transport operations."""
    pass


class OptionsError(TransportError):
    """Raised when command line options or configuration are invalid."""
    pass


class TransportIOError(TransportError):
    """Raised when the source file cannot be read or the target file written."""
    pass
