"""bfset - bit-packed piece sets for BitTorrent bitfields."""

from __future__ import annotations

__version__ = "0.1.0"

from bfset.core.bit_field_set import DEFAULT_CHUNK_BITS, BitFieldSet, CreateResult
from bfset.utils.bitfield import build_bitfield, count_bits, parse_bitfield
from bfset.utils.exceptions import (
    BFSetError,
    CapacityMismatchError,
    ConfigurationError,
    IndexOutOfRangeError,
    OutOfBoundsError,
    SizeTooSmallError,
    ValidationError,
)

__all__ = [
    "DEFAULT_CHUNK_BITS",
    "BFSetError",
    "BitFieldSet",
    "CapacityMismatchError",
    "ConfigurationError",
    "CreateResult",
    "IndexOutOfRangeError",
    "OutOfBoundsError",
    "SizeTooSmallError",
    "ValidationError",
    "__version__",
    "build_bitfield",
    "count_bits",
    "parse_bitfield",
]
