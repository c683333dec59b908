# file: src/module4_injection/errors.py

"""
Injection-specific exception hierarchy.

All exceptions inherit from InjectionError for unified handling.
"""


class InjectionError(Exception):
    """Base exception for all injection errors."""
    pass


class InjectionConfigurationError(InjectionError):
    """Raised when the frame geometry cannot carry the payload layout."""
    pass


class InjectionEncodingError(InjectionError):
    """Raised when the payload cannot be encoded."""
    pass
