"""Shared utilities and infrastructure.

The bitfield helpers live in :mod:`bfset.utils.bitfield` and are imported
from there directly, since they depend on :mod:`bfset.core`.
"""

from __future__ import annotations

from bfset.utils.exceptions import (
    BFSetError,
    CapacityMismatchError,
    ConfigurationError,
    IndexOutOfRangeError,
    OutOfBoundsError,
    SizeTooSmallError,
    ValidationError,
)
from bfset.utils.logging_config import LoggingContext, get_logger, setup_logging

__all__ = [
    # Exceptions
    "BFSetError",
    "CapacityMismatchError",
    "ConfigurationError",
    "IndexOutOfRangeError",
    "OutOfBoundsError",
    "SizeTooSmallError",
    "ValidationError",
    # Logging
    "LoggingContext",
    "get_logger",
    "setup_logging",
]
