"""Bit-packed piece set.

Stores membership of indices in ``[0, size)`` as the bits of a single integer,
most significant bit first: index 0 is the highest of the ``size`` bits. The
wire form is the same bit string padded with zeros up to a whole number of
bytes, which is what a BitTorrent BITFIELD message carries.

Values are immutable; every mutating operation returns a new set.
"""

from __future__ import annotations

import logging
import operator
from dataclasses import dataclass
from typing import Iterable, Iterator

from bfset.utils.exceptions import (
    CapacityMismatchError,
    IndexOutOfRangeError,
    OutOfBoundsError,
    SizeTooSmallError,
    ValidationError,
)

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_BITS = 1024


def _byte_length(size: int) -> int:
    return (size + 7) // 8


def _padding_bits(size: int) -> int:
    return (8 - size % 8) % 8


def _as_size(size: int, name: str = "size") -> int:
    if isinstance(size, bool):
        msg = f"{name} must be an integer, got {size!r}"
        raise TypeError(msg)
    return operator.index(size)


@dataclass(frozen=True)
class CreateResult:
    """Outcome of :meth:`BitFieldSet.create`.

    Exactly one of ``value`` and ``error`` is set.
    """

    value: BitFieldSet | None = None
    error: ValidationError | None = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            msg = "CreateResult needs exactly one of value and error"
            raise ValueError(msg)

    @property
    def ok(self) -> bool:
        """Return True if construction succeeded."""
        return self.error is None

    def unwrap(self) -> BitFieldSet:
        """Return the constructed set or raise the construction error."""
        if self.error is not None:
            raise self.error
        assert self.value is not None
        return self.value


class BitFieldSet:
    """Fixed-capacity set of piece indices backed by one integer.

    Args:
        size: Capacity in bits. Valid members are ``0 <= index < size``.
        pieces: Raw bitfield value, ``0 <= pieces < 2**size``. Index ``i`` is
            bit ``size - 1 - i`` counted from the least significant end.

    Most callers want :meth:`create`, :meth:`new` or :meth:`empty` instead of
    building from a raw integer.

    """

    __slots__ = ("_pieces", "_size")

    def __init__(self, size: int = 0, pieces: int = 0):
        """Initialize from a capacity and a raw bitfield integer."""
        size = _as_size(size)
        if size < 0:
            msg = f"Bitfield size must not be negative, got {size}"
            raise SizeTooSmallError(msg, {"size": size})
        pieces = operator.index(pieces)
        if pieces < 0 or pieces.bit_length() > size:
            msg = f"Bitfield value does not fit in {size} bits"
            raise OutOfBoundsError(msg, {"size": size})
        self._size = size
        self._pieces = pieces

    # Construction

    @classmethod
    def create(cls, content: bytes, size: int) -> CreateResult:
        """Build a set from a wire payload without raising on bad input.

        Args:
            content: Big-endian bitfield, ``ceil(size / 8)`` bytes, or empty
                for an all-zero set.
            size: Number of meaningful bits.

        Returns:
            CreateResult holding either the set or a ValidationError.

        """
        size = _as_size(size)
        if not isinstance(content, (bytes, bytearray, memoryview)):
            msg = f"Bitfield content must be bytes, got {type(content).__name__}"
            raise TypeError(msg)
        content = bytes(content)

        if not content:
            if size < 0:
                return cls._rejected(
                    SizeTooSmallError(
                        f"Bitfield size must not be negative, got {size}",
                        {"size": size},
                    )
                )
            return CreateResult(value=cls(size, 0))

        if size <= 0:
            return cls._rejected(
                SizeTooSmallError(
                    f"Bitfield payload of {len(content)} bytes needs a positive size, got {size}",
                    {"size": size, "length": len(content)},
                )
            )

        expected = _byte_length(size)
        if len(content) != expected:
            return cls._rejected(
                OutOfBoundsError(
                    f"Bitfield payload is {len(content)} bytes, expected {expected} for {size} bits",
                    {"size": size, "length": len(content), "expected": expected},
                )
            )

        raw = int.from_bytes(content, "big")
        padding = _padding_bits(size)
        if padding:
            if raw & ((1 << padding) - 1):
                return cls._rejected(
                    OutOfBoundsError(
                        f"Bitfield padding bits are set beyond bit {size}",
                        {"size": size, "padding": padding},
                    )
                )
            raw >>= padding

        return CreateResult(value=cls(size, raw))

    @staticmethod
    def _rejected(error: ValidationError) -> CreateResult:
        logger.debug("Rejected bitfield payload: %s", error)
        return CreateResult(error=error)

    @classmethod
    def new(cls, content: bytes, size: int) -> BitFieldSet:
        """Build a set from a wire payload, raising on invalid input."""
        return cls.create(content, size).unwrap()

    @classmethod
    def empty(cls, size: int) -> BitFieldSet:
        """Return a set of ``size`` bits with no members."""
        return cls(size, 0)

    @classmethod
    def from_indices(cls, indices: Iterable[int], size: int) -> BitFieldSet:
        """Return a set of ``size`` bits holding ``indices``."""
        return cls.empty(size).insert_all(indices)

    # Accessors

    @property
    def size(self) -> int:
        """Capacity in bits (not the number of members, see :meth:`count`)."""
        return self._size

    @property
    def pieces(self) -> int:
        """Raw bitfield integer."""
        return self._pieces

    def _mask(self, index: int) -> int:
        if isinstance(index, bool):
            msg = f"piece index must be an integer, got {index!r}"
            raise TypeError(msg)
        index = operator.index(index)
        if not 0 <= index < self._size:
            msg = f"Piece index {index} out of range for bitfield of size {self._size}"
            raise IndexOutOfRangeError(msg, {"index": index, "size": self._size})
        return 1 << (self._size - 1 - index)

    def _check_capacity(self, other: BitFieldSet, operation: str) -> None:
        if self._size != other._size:
            msg = f"Cannot compute {operation} of bitfields with sizes {self._size} and {other._size}"
            raise CapacityMismatchError(
                msg, {"left": self._size, "right": other._size}
            )

    # Membership and mutation

    def member(self, index: int) -> bool:
        """Return True if ``index`` is in the set.

        Raises:
            IndexOutOfRangeError: If ``index`` is outside ``[0, size)``.

        """
        return bool(self._pieces & self._mask(index))

    def __contains__(self, index: object) -> bool:
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        if not 0 <= index < self._size:
            return False
        return bool(self._pieces & (1 << (self._size - 1 - index)))

    def insert(self, index: int) -> BitFieldSet:
        """Return a copy with ``index`` added."""
        return BitFieldSet(self._size, self._pieces | self._mask(index))

    def delete(self, index: int) -> BitFieldSet:
        """Return a copy with ``index`` removed. Absent indices are a no-op."""
        return BitFieldSet(self._size, self._pieces & ~self._mask(index))

    def insert_all(self, indices: Iterable[int]) -> BitFieldSet:
        """Return a copy with every index in ``indices`` added."""
        pieces = self._pieces
        for index in indices:
            pieces |= self._mask(index)
        return BitFieldSet(self._size, pieces)

    def fill(self) -> BitFieldSet:
        """Return the set holding every index in ``[0, size)``."""
        return BitFieldSet(self._size, (1 << self._size) - 1)

    def is_empty(self) -> bool:
        return self._pieces == 0

    def is_full(self) -> bool:
        return self._pieces == (1 << self._size) - 1

    # Set algebra

    def union(self, other: BitFieldSet) -> BitFieldSet:
        self._check_capacity(other, "union")
        return BitFieldSet(self._size, self._pieces | other._pieces)

    def intersection(self, other: BitFieldSet) -> BitFieldSet:
        self._check_capacity(other, "intersection")
        return BitFieldSet(self._size, self._pieces & other._pieces)

    def difference(self, other: BitFieldSet) -> BitFieldSet:
        """Return the members of this set that are not in ``other``."""
        self._check_capacity(other, "difference")
        return BitFieldSet(self._size, self._pieces & ~other._pieces)

    def issubset(self, other: BitFieldSet) -> bool:
        """Return True if every member of this set is in ``other``."""
        self._check_capacity(other, "subset")
        return (other._pieces & self._pieces) == self._pieces

    def issuperset(self, other: BitFieldSet) -> bool:
        return other.issubset(self)

    def isdisjoint(self, other: BitFieldSet) -> bool:
        """Return True if the two sets share no members."""
        self._check_capacity(other, "disjoint")
        return (self._pieces & other._pieces) == 0

    def equal(self, other: BitFieldSet) -> bool:
        """Strict equality: sets of different capacity are an error here.

        Use ``==`` for the lenient form, where they simply compare unequal.
        """
        self._check_capacity(other, "equality")
        return self._pieces == other._pieces

    def __or__(self, other: object) -> BitFieldSet:
        if not isinstance(other, BitFieldSet):
            return NotImplemented
        return self.union(other)

    def __and__(self, other: object) -> BitFieldSet:
        if not isinstance(other, BitFieldSet):
            return NotImplemented
        return self.intersection(other)

    def __sub__(self, other: object) -> BitFieldSet:
        if not isinstance(other, BitFieldSet):
            return NotImplemented
        return self.difference(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, BitFieldSet):
            return NotImplemented
        return self.issubset(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, BitFieldSet):
            return NotImplemented
        return self.issuperset(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitFieldSet):
            return NotImplemented
        return self._size == other._size and self._pieces == other._pieces

    def __hash__(self) -> int:
        return hash((self._size, self._pieces))

    # Cardinality and enumeration

    def count(self) -> int:
        """Return the number of members."""
        return self._pieces.bit_count()

    def __len__(self) -> int:
        return self.count()

    def __bool__(self) -> bool:
        return self._pieces != 0

    def iter_indices(self, chunk_bits: int = DEFAULT_CHUNK_BITS) -> Iterator[int]:
        """Yield member indices in ascending order.

        The wire form is scanned ``chunk_bits`` at a time so each bit search
        only touches a bounded slice of the whole integer.

        Args:
            chunk_bits: Slice width, a positive multiple of 8.

        """
        chunk_bits = _as_size(chunk_bits, "chunk_bits")
        if chunk_bits <= 0 or chunk_bits % 8:
            msg = f"chunk_bits must be a positive multiple of 8, got {chunk_bits}"
            raise ValueError(msg)
        return self._iter_chunks(chunk_bits // 8)

    def _iter_chunks(self, chunk_bytes: int) -> Iterator[int]:
        data = self.to_binary()
        for start in range(0, len(data), chunk_bytes):
            block = data[start : start + chunk_bytes]
            chunk = int.from_bytes(block, "big")
            if not chunk:
                continue
            top = start * 8 + len(block) * 8 - 1
            while chunk:
                position = chunk.bit_length() - 1
                yield top - position
                chunk ^= 1 << position

    def __iter__(self) -> Iterator[int]:
        return self.iter_indices()

    def to_list(self) -> list[int]:
        """Return the members as an ascending list."""
        return list(self.iter_indices())

    # Serialization

    def to_binary(self) -> bytes:
        """Return the big-endian wire form, zero padded to whole bytes."""
        return (self._pieces << _padding_bits(self._size)).to_bytes(
            _byte_length(self._size), "big"
        )

    def __bytes__(self) -> bytes:
        return self.to_binary()

    def to_hex(self) -> str:
        return self.to_binary().hex()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self._size}, members={self.to_list()})"
