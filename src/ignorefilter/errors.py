"""
Exception types raised by the ignore filter
"""

from typing import Optional


class IgnoreFilterError(Exception):
    """Base class for all ignore filter errors"""
    pass


class ConfigError(IgnoreFilterError):
    """Raised when configuration values are missing or invalid."""
    pass


class ReadError(IgnoreFilterError):
    """Raised when an existing ignore file cannot be read or decoded."""
    pass


class PatternError(IgnoreFilterError, ValueError):
    """Raised when an ignore pattern cannot be compiled."""

    def __init__(self, message: str, pattern: str, line: Optional[int] = None):
        self.message = message
        self.pattern = pattern
        self.line = line
        location = f" (pattern {line})" if line is not None else ""
        super().__init__(f"{message}: {pattern!r}{location}")


class FilterError(IgnoreFilterError):
    """Raised when filtering aborts on an unexpected I/O failure."""
    pass
