"""Stage 2: Merge vocabulary from several sources into one sorted list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from scel_convert.models import VocabularyItem


@dataclass(frozen=True)
class MergeResult:
    """Merged items plus how many input items were folded into others."""

    items: tuple[VocabularyItem, ...]
    duplicate_count: int


def deduplicate(items: Iterable[VocabularyItem]) -> tuple[list[VocabularyItem], int]:
    """Collapse items sharing ``(word, pinyin)``, keeping the highest frequency.

    The same word with different pinyin is a heteronym and stays as separate
    entries. On equal frequency the first occurrence wins.

    Returns:
        ``(unique_items, duplicate_count)`` with unique items in first-seen order.
    """

    best: dict[tuple[str, str], VocabularyItem] = {}
    total = 0
    for item in items:
        total += 1
        current = best.get(item.key)
        if current is None or item.frequency > current.frequency:
            best[item.key] = item
    return list(best.values()), total - len(best)


def sort_items(items: Iterable[VocabularyItem]) -> list[VocabularyItem]:
    """Sort by pinyin, then word, using code-point order (same as UTF-8 byte order)."""

    return sorted(items, key=lambda item: (item.pinyin, item.word))


def merge_items(items: Iterable[VocabularyItem]) -> MergeResult:
    """Deduplicate and sort vocabulary gathered from any number of sources."""

    unique, duplicate_count = deduplicate(items)
    return MergeResult(items=tuple(sort_items(unique)), duplicate_count=duplicate_count)
