"""Shared builders for synthetic ``.scel`` buffers."""

from __future__ import annotations

import struct
from typing import Callable, Sequence

import pytest

SIGNATURE = b"\x40\x15\x00\x00"
NAME_OFFSET = 0x130
PINYIN_OFFSET = 0x1540
VOCAB_OFFSET = 0x2628

PinyinEntry = tuple[int, str]
WordEntry = tuple[str, int | None]
Group = tuple[Sequence[int], Sequence[WordEntry]]


def pack_pinyin_entries(entries: Sequence[PinyinEntry]) -> bytes:
    """Encode pinyin table entries (without the 4-byte sub-header)."""

    out = bytearray()
    for index, syllable in entries:
        payload = syllable.encode("utf-16-le")
        out += struct.pack("<HH", index, len(payload)) + payload
    return bytes(out)


def pack_group(indices: Sequence[int], words: Sequence[WordEntry]) -> bytes:
    """Encode one homophone group; ``None`` frequency means an empty extension."""

    out = bytearray(struct.pack("<HH", len(words), len(indices) * 2))
    out += struct.pack(f"<{len(indices)}H", *indices)
    for word, frequency in words:
        payload = word.encode("utf-16-le")
        out += struct.pack("<H", len(payload)) + payload
        if frequency is None:
            out += struct.pack("<H", 0)
        else:
            out += struct.pack("<HH", 10, frequency) + bytes(8)
    return bytes(out)


def build_scel_bytes(
    pinyin: Sequence[PinyinEntry] = ((1, "wo"),),
    groups: Sequence[Group] = (),
    vocabulary: bytes | None = None,
    name: str = "测试词库",
    signature: bytes = SIGNATURE,
) -> bytes:
    """Assemble a minimal dictionary with the standard fixed layout.

    Args:
        pinyin: ``(index, syllable)`` table entries.
        groups: Homophone groups encoded at the vocabulary offset.
        vocabulary: Raw vocabulary bytes used instead of ``groups``.
        name: Dictionary name written at the metadata offset.
        signature: First four header bytes.
    """

    data = bytearray(VOCAB_OFFSET)
    data[:4] = signature
    encoded_name = name.encode("utf-16-le")
    data[NAME_OFFSET : NAME_OFFSET + len(encoded_name)] = encoded_name

    table = b"\x9d\x01\x00\x00" + pack_pinyin_entries(pinyin)
    assert PINYIN_OFFSET + len(table) <= VOCAB_OFFSET
    data[PINYIN_OFFSET : PINYIN_OFFSET + len(table)] = table

    if vocabulary is None:
        vocabulary = b"".join(pack_group(indices, words) for indices, words in groups)
    return bytes(data) + vocabulary


@pytest.fixture
def scel_bytes() -> Callable[..., bytes]:
    return build_scel_bytes


@pytest.fixture
def group_bytes() -> Callable[..., bytes]:
    return pack_group


@pytest.fixture
def pinyin_bytes() -> Callable[..., bytes]:
    return pack_pinyin_entries
