# file: src/module5_extraction/errors.py

"""
Extraction-specific exception hierarchy.

All exceptions inherit from ExtractionError for unified handling. Every
extraction error is terminal for the run: no partial payload is returned.
"""

from typing import Optional


class ExtractionError(Exception):
    """Base exception for all extraction errors."""
    pass


class InstructionNotFoundError(ExtractionError):
    """Raised when no starting frame was recognised among the frames."""

    def __init__(self, message: str = "Instruction not found while extracting data from video"):
        super().__init__(message)


class IncompleteTransferError(ExtractionError):
    """Raised when the contiguous pages are shorter than the declared payload."""

    def __init__(
        self,
        message: str,
        expected_length: Optional[int] = None,
        recovered_length: Optional[int] = None,
        missing_page: Optional[int] = None
    ):
        super().__init__(message)
        self.expected_length = expected_length
        self.recovered_length = recovered_length
        self.missing_page = missing_page


class GeometryMismatchError(ExtractionError):
    """Raised when a frame does not match the configured extraction geometry."""
    pass


class ConflictingInstructionError(ExtractionError):
    """Raised when two starting frames declare different payload lengths."""

    def __init__(
        self,
        message: str,
        first_length: Optional[int] = None,
        other_length: Optional[int] = None
    ):
        super().__init__(message)
        self.first_length = first_length
        self.other_length = other_length
