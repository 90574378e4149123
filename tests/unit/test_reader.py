"""Unit tests for the bounds-checked byte reader."""

from __future__ import annotations

from scel_convert.scel.reader import ByteReader


def test_read_u16_is_little_endian_and_advances() -> None:
    reader = ByteReader(b"\x34\x12\xff")

    assert reader.read_u16() == 0x1234
    assert reader.position == 2


def test_truncated_reads_return_none_without_moving() -> None:
    reader = ByteReader(b"\x01\x02\x03", position=2)

    assert reader.read_u16() is None
    assert reader.read_bytes(2) is None
    assert reader.position == 2
    assert reader.read_bytes(1) == b"\x03"
    assert not reader.has(1)


def test_span_is_clamped_to_buffer() -> None:
    reader = ByteReader(b"abcdef")

    assert reader.span(4, 10) == b"ef"
    assert reader.span(6, 2) == b""
    assert reader.span(1, 0) == b""
    assert reader.u16_at(5) is None
