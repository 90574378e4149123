"""Path-scoped access to one decoded ``.scel`` dictionary."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path

from scel_convert.diagnostics import DiagnosticLog
from scel_convert.models import DictionaryMetadata, ParsedDictionary, PinyinTable, VocabularyItem
from scel_convert.scel.header import ensure_valid_header, read_metadata
from scel_convert.scel.pinyin_table import parse_pinyin_table
from scel_convert.scel.vocabulary import parse_vocabulary


def parse_scel_bytes(data: bytes, diagnostics: DiagnosticLog | None = None) -> ParsedDictionary:
    """Decode a whole ``.scel`` buffer.

    Args:
        data: File contents.
        diagnostics: Optional sink shared by every decoding step.

    Returns:
        Metadata, pinyin table, and vocabulary items.

    Raises:
        ScelFormatError: If the header is too short or carries no known signature.
    """

    ensure_valid_header(data, diagnostics)
    metadata = read_metadata(data, diagnostics)
    pinyin_table = parse_pinyin_table(data, diagnostics)
    items = parse_vocabulary(data, pinyin_table, diagnostics)
    return ParsedDictionary(metadata=metadata, pinyin_table=pinyin_table, items=tuple(items))


@dataclass(frozen=True)
class ScelDictionary:
    """Read-only view of one ``.scel`` file, decoded once on first access.

    The file is read and parsed lazily; later property reads reuse the cached
    result. Diagnostics from the parse go to ``diagnostics``.
    """

    path: Path
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog, compare=False)

    @cached_property
    def parsed(self) -> ParsedDictionary:
        """Load and cache the decoded dictionary.

        Raises:
            FileNotFoundError: If the configured path does not exist.
            ScelFormatError: If the file header is not recognized.
        """

        if not self.path.exists():
            raise FileNotFoundError(f"Dictionary file not found: {self.path}")
        return parse_scel_bytes(self.path.read_bytes(), self.diagnostics)

    @property
    def metadata(self) -> DictionaryMetadata:
        return self.parsed.metadata

    @property
    def pinyin_table(self) -> PinyinTable:
        return self.parsed.pinyin_table

    @property
    def items(self) -> tuple[VocabularyItem, ...]:
        return self.parsed.items
