"""Core bitfield value types."""

from __future__ import annotations

from bfset.core.bit_field_set import DEFAULT_CHUNK_BITS, BitFieldSet, CreateResult

__all__ = [
    "DEFAULT_CHUNK_BITS",
    "BitFieldSet",
    "CreateResult",
]
