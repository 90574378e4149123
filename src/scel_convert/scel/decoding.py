"""Ordered text-decoding strategies for pinyin and word payloads.

Dictionary files in the wild were written with different encodings and carry
no encoding tag. Each strategy returns decoded text or ``None``; the chain
returns the first accepted result and ends with the hex placeholder, which
always succeeds, so decoding a span never fails.
"""

from __future__ import annotations

import unicodedata
from typing import Callable, Sequence

Decoder = Callable[[bytes], "str | None"]
Predicate = Callable[[str], bool]

PINYIN_EXTRA_CHARS = frozenset("'- :.")
HEX_PLACEHOLDER_BYTES = 8


def _codec(encoding: str) -> Decoder:
    def decode(payload: bytes) -> str | None:
        try:
            return payload.decode(encoding)
        except UnicodeDecodeError:
            return None

    decode.__name__ = f"decode_{encoding.replace('-', '_')}"
    return decode


decode_utf16le = _codec("utf-16-le")
decode_gb18030 = _codec("gb18030")
decode_utf8 = _codec("utf-8")


def hex_placeholder(payload: bytes) -> str:
    """Render up to the first eight bytes as ``0x`` followed by uppercase hex."""

    return "0x" + payload[:HEX_PLACEHOLDER_BYTES].hex().upper()


def is_valid_pinyin(text: str) -> bool:
    """Return whether ``text`` looks like a pinyin syllable.

    Accepted characters are letters, digits, and ``' - : .`` plus space.
    Blank strings are rejected.
    """

    if not text or not text.strip():
        return False
    return all(ch.isalnum() or ch in PINYIN_EXTRA_CHARS for ch in text)


def is_valid_word(text: str) -> bool:
    """Return whether decoded word text can be written as a TSV field."""

    if not text:
        return False
    return not any(unicodedata.category(ch) == "Cc" for ch in text)


PINYIN_DECODERS: tuple[Decoder, ...] = (decode_utf16le, decode_gb18030, decode_utf8)
WORD_DECODERS: tuple[Decoder, ...] = (decode_utf16le, decode_gb18030)


def decode_with_fallback(
    payload: bytes,
    decoders: Sequence[Decoder],
    accept: Predicate,
) -> str:
    """Decode ``payload`` with the first strategy whose output passes ``accept``.

    Args:
        payload: Raw bytes of one string field.
        decoders: Strategies tried in order.
        accept: Validity predicate applied to each decoded candidate.

    Returns:
        The first accepted text, or the hex placeholder for ``payload``.
    """

    for decoder in decoders:
        text = decoder(payload)
        if text is not None and accept(text):
            return text
    return hex_placeholder(payload)


def decode_pinyin(payload: bytes) -> str:
    """Decode a pinyin-table payload (UTF-16LE, then GB18030, then UTF-8)."""

    return decode_with_fallback(payload, PINYIN_DECODERS, is_valid_pinyin)


def decode_word(payload: bytes) -> str:
    """Decode a vocabulary word (UTF-16LE, then GB18030)."""

    return decode_with_fallback(payload, WORD_DECODERS, is_valid_word)


def is_placeholder_word(word: str) -> bool:
    """Return whether ``word`` is a hex placeholder produced by :func:`hex_placeholder`."""

    if not word.startswith("0x"):
        return False
    digits = word[2:]
    return len(digits) % 2 == 0 and all(ch in "0123456789ABCDEF" for ch in digits)
