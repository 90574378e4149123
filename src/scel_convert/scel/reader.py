"""Bounds-checked access to an in-memory ``.scel`` buffer."""

from __future__ import annotations

import struct

_U16 = struct.Struct("<H")


class ByteReader:
    """Cursor over an immutable byte buffer with little-endian ``u16`` reads.

    Reads never raise on truncation: ``read_u16`` and ``read_bytes`` return
    ``None`` without moving the cursor when the buffer is too short, leaving
    the caller to decide whether that ends the current loop.
    """

    def __init__(self, data: bytes, position: int = 0) -> None:
        self.data = data
        self.position = position

    def has(self, count: int) -> bool:
        """Return whether ``count`` bytes are available at the cursor."""

        return 0 <= self.position and self.position + count <= len(self.data)

    def u16_at(self, offset: int) -> int | None:
        """Return the ``u16`` at an absolute offset, or ``None`` when out of range."""

        if offset < 0 or offset + 2 > len(self.data):
            return None
        return _U16.unpack_from(self.data, offset)[0]

    def read_u16(self) -> int | None:
        value = self.u16_at(self.position)
        if value is not None:
            self.position += 2
        return value

    def read_bytes(self, count: int) -> bytes | None:
        if count < 0 or not self.has(count):
            return None
        chunk = self.data[self.position : self.position + count]
        self.position += count
        return chunk

    def span(self, start: int, length: int) -> bytes:
        """Return ``data[start:start + length]`` clamped to the buffer.

        Args:
            start: Absolute start offset.
            length: Requested byte count.

        Returns:
            The available bytes, possibly shorter than requested or empty.
        """

        if start < 0 or length <= 0 or start >= len(self.data):
            return b""
        return self.data[start : min(start + length, len(self.data))]
