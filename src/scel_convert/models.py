"""Data models shared by the decoder, merge stage, and writers.

Rows are immutable so a decoded record can be passed between the parser,
the merge stage, and the TSV writer without defensive copies.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

PinyinTable = dict[int, str]
"""Lookup from a 16-bit pinyin index to its decoded syllable."""


@dataclass(frozen=True)
class VocabularyItem:
    """One output record: a word, its apostrophe-joined pinyin, and a frequency.

    Undecodable words are carried as ``0x...`` placeholders and unresolved
    pinyin indices as ``[0xNNNN]`` tokens, so a record is never dropped just
    because part of it could not be decoded.
    """

    word: str
    pinyin: str
    frequency: int = 1

    @property
    def key(self) -> tuple[str, str]:
        """Return the ``(word, pinyin)`` deduplication key."""

        return self.word, self.pinyin


@dataclass(frozen=True)
class DictionaryMetadata:
    """Descriptive strings stored at fixed offsets in the ``.scel`` header."""

    name: str = ""
    category: str = ""
    description: str = ""
    sample: str = ""


@dataclass(frozen=True)
class ParsedDictionary:
    """Everything decoded from one ``.scel`` buffer."""

    metadata: DictionaryMetadata
    pinyin_table: PinyinTable
    items: tuple[VocabularyItem, ...]


@dataclass(frozen=True)
class SourceResult:
    """Decoded output of one source file."""

    path: Path
    metadata: DictionaryMetadata
    pinyin_table: PinyinTable
    items: tuple[VocabularyItem, ...]


@dataclass(frozen=True)
class SourceFailure:
    """A source file that could not be converted, with the reason shown to the user."""

    path: Path
    reason: str
