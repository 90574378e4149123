"""TSV writer for the ibus-libpinyin text import format."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from scel_convert.models import VocabularyItem


def format_line(item: VocabularyItem) -> str:
    """Render one item as ``word<TAB>pinyin<TAB>frequency`` plus newline."""

    return "\t".join([item.word, item.pinyin, str(item.frequency)]) + "\n"


def write_tsv(items: Sequence[VocabularyItem], output_path: Path) -> int:
    """Write items to ``output_path`` as UTF-8 (no BOM), one record per line.

    No header row is written. Line endings are always ``\\n``.

    Args:
        items: Records to serialize in the given order.
        output_path: Destination file path; parent directories are created.

    Returns:
        Number of lines written.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8", newline="\n") as handle:
        for item in items:
            handle.write(format_line(item))
    return len(items)
