"""Bitfield parsing and utilities for BitTorrent piece availability."""

from __future__ import annotations

import logging
from typing import Iterable

from bfset.core.bit_field_set import BitFieldSet

logger = logging.getLogger(__name__)


def parse_bitfield(bitfield: bytes, num_pieces: int) -> set[int]:
    """Parse a bitfield into a set of piece indices (bits set to 1).

    Bits are numbered big-endian within each byte per BitTorrent spec. The
    payload must be exactly ``ceil(num_pieces / 8)`` bytes with the spare
    trailing bits cleared.

    Raises:
        SizeTooSmallError: If the payload is non-empty and ``num_pieces <= 0``.
        OutOfBoundsError: If the length is wrong or spare bits are set.

    """
    result = BitFieldSet.create(bitfield, num_pieces)
    if not result.ok:
        logger.warning(
            "Invalid bitfield for %d pieces: %s payload=%s",
            num_pieces,
            result.error,
            bytes(bitfield).hex(),
        )
    return set(result.unwrap())


def build_bitfield(indices: Iterable[int], num_pieces: int) -> bytes:
    """Build the wire bitfield announcing ``indices`` out of ``num_pieces``."""
    return BitFieldSet.from_indices(indices, num_pieces).to_binary()


def count_bits(bitfield: bytes) -> int:
    """Count the number of set bits in a bitfield."""
    if not bitfield:
        return 0
    return int.from_bytes(bitfield, "big").bit_count()
