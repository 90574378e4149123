"""Unit tests for the ordered string-decoding strategies."""

from __future__ import annotations

from scel_convert.scel.decoding import (
    decode_pinyin,
    decode_word,
    hex_placeholder,
    is_placeholder_word,
    is_valid_pinyin,
)


def test_decode_pinyin_prefers_utf16le() -> None:
    assert decode_pinyin("zhong".encode("utf-16-le")) == "zhong"


def test_decode_pinyin_falls_back_to_gb18030_when_utf16_fails() -> None:
    # Three bytes cannot be UTF-16LE; the legacy decoder reads them as ASCII.
    assert decode_pinyin(b"wo'") == "wo'"


def test_decode_pinyin_rejects_utf16_text_with_invalid_characters() -> None:
    # "a!" is valid UTF-16LE, but "!" is not a pinyin character, and the raw
    # bytes are not valid pinyin under the other encodings either.
    assert decode_pinyin("a!".encode("utf-16-le")) == "0x61002100"


def test_decode_pinyin_returns_hex_placeholder_when_all_decoders_fail() -> None:
    assert decode_pinyin(b"\xff\xfe\xfd") == "0xFFFEFD"


def test_hex_placeholder_uses_at_most_eight_bytes() -> None:
    assert hex_placeholder(bytes(range(1, 12))) == "0x0102030405060708"


def test_is_valid_pinyin_character_set() -> None:
    assert is_valid_pinyin("lv'e")
    assert is_valid_pinyin("a-b c:d.e1")
    assert not is_valid_pinyin("")
    assert not is_valid_pinyin("  ")
    assert not is_valid_pinyin("wo!")


def test_decode_word_reads_utf16le_chinese() -> None:
    assert decode_word("银行".encode("utf-16-le")) == "银行"


def test_decode_word_uses_gb18030_for_legacy_payloads() -> None:
    # Odd length rules out UTF-16LE.
    assert decode_word("中文".encode("gb18030") + b"a") == "中文a"


def test_decode_word_never_returns_control_characters_or_empty_text() -> None:
    assert decode_word(b"\t\x00") == "0x0900"
    assert decode_word(b"") == "0x"


def test_is_placeholder_word() -> None:
    assert is_placeholder_word("0x0900")
    assert not is_placeholder_word("银行")
    assert not is_placeholder_word("0xZZ")
