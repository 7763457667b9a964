from __future__ import annotations

import logging

import pytest

from bfset.utils.bitfield import build_bitfield, count_bits, parse_bitfield
from bfset.utils.exceptions import OutOfBoundsError, SizeTooSmallError


def test_parse_bitfield_basic() -> None:
    # 1010 0000 -> pieces {0,2} for first byte (bit 7 and bit 5)
    data = bytes([0b10100000])
    pieces = parse_bitfield(data, num_pieces=8)
    assert 0 in pieces
    assert 2 in pieces
    assert len(pieces) == 2


def test_parse_bitfield_spare_bits() -> None:
    # 10 pieces: two bytes, the last 6 bits are spare
    data = bytes([0b00000001, 0b11000000])
    assert parse_bitfield(data, num_pieces=10) == {7, 8, 9}


def test_parse_bitfield_empty_payload() -> None:
    assert parse_bitfield(b"", num_pieces=10) == set()


def test_parse_bitfield_rejects_spare_bits(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="bfset.utils.bitfield")
    with pytest.raises(OutOfBoundsError):
        parse_bitfield(bytes([0x80, 0x01]), num_pieces=15)
    assert "payload=8001" in caplog.text


def test_parse_bitfield_rejects_wrong_length() -> None:
    with pytest.raises(OutOfBoundsError):
        parse_bitfield(bytes([0xFF, 0xFF]), num_pieces=8)


def test_parse_bitfield_rejects_missing_piece_count() -> None:
    with pytest.raises(SizeTooSmallError):
        parse_bitfield(bytes([0xFF]), num_pieces=0)


def test_build_bitfield() -> None:
    assert build_bitfield([0, 2], num_pieces=8) == bytes([0b10100000])
    assert build_bitfield([9], num_pieces=10) == bytes([0x00, 0b01000000])
    assert build_bitfield([], num_pieces=0) == b""


def test_build_then_parse() -> None:
    pieces = {1, 5, 13, 21}
    assert parse_bitfield(build_bitfield(pieces, 22), 22) == pieces


def test_count_bits() -> None:
    data = bytes([0b11110000, 0b00001111])
    assert count_bits(data) == 8
    assert count_bits(b"") == 0
