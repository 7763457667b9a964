"""Exception hierarchy for bfset.

Validation errors describe bad input (peer payloads, configuration); the
remaining errors describe misuse of the API by the caller.
"""

from __future__ import annotations

from typing import Any


class BFSetError(Exception):
    """Base exception for all bfset errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize bfset error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ValidationError(BFSetError):
    """Data validation errors."""


class SizeTooSmallError(ValidationError):
    """Bitfield size is too small for the given payload."""


class OutOfBoundsError(ValidationError):
    """Bitfield payload has the wrong length or nonzero padding bits."""


class ConfigurationError(ValidationError):
    """Configuration validation errors."""


class CapacityMismatchError(BFSetError, ValueError):
    """Two bitfields of different size were combined."""


class IndexOutOfRangeError(BFSetError, IndexError):
    """Piece index outside the bitfield's capacity."""
