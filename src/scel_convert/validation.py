"""Integrity checks and statistics for decoded vocabulary."""

from __future__ import annotations

from collections import Counter
import functools
import re
from typing import Iterable, Sequence

from pypinyin import constants as pypinyin_constants
from pypinyin.contrib.tone_convert import to_normal

from scel_convert.models import PinyinTable, VocabularyItem
from scel_convert.scel.decoding import is_placeholder_word

UNRESOLVED_TOKEN_RE = re.compile(r"\[0x[0-9A-F]{4}\]")
FORBIDDEN_FIELD_CHARS = ("\t", "\n", "\r")
EXTRA_VALID_SYLLABLES = {"m", "n", "ng", "hm", "hng", "r", "lue", "nue"}


def validate_items(items: Sequence[VocabularyItem]) -> None:
    """Validate that every item can be written as one well-formed TSV line.

    Args:
        items: Items about to be written.

    Raises:
        ValueError: If the word is empty, a field contains a tab or line
            break, or the frequency is negative. Empty pinyin is accepted;
            groups without pinyin indices decode to it.
    """

    errors: list[str] = []
    for idx, item in enumerate(items, start=1):
        if not item.word:
            errors.append(f"Row {idx}: empty word")
        for name, value in (("word", item.word), ("pinyin", item.pinyin)):
            if any(ch in value for ch in FORBIDDEN_FIELD_CHARS):
                errors.append(f"Row {idx}: {name} {value!r} contains a tab or line break")
        if item.frequency < 0:
            errors.append(f"Row {idx}: negative frequency {item.frequency}")

    if errors:
        preview = "\n".join(f"- {item}" for item in errors[:25])
        rest = len(errors) - min(25, len(errors))
        more = f"\n- ... and {rest} more" if rest > 0 else ""
        raise ValueError(f"Output validation failed with {len(errors)} errors:\n{preview}{more}")


def collect_placeholder_counts(items: Iterable[VocabularyItem]) -> dict[str, int]:
    """Count degraded fields in decoded items.

    Returns:
        Mapping with ``unresolved_pinyin_tokens`` (``[0xNNNN]`` tokens across
        all items), ``items_with_unresolved_pinyin``, and ``placeholder_words``.
    """

    counter: Counter[str] = Counter(
        unresolved_pinyin_tokens=0,
        items_with_unresolved_pinyin=0,
        placeholder_words=0,
    )
    for item in items:
        tokens = len(UNRESOLVED_TOKEN_RE.findall(item.pinyin))
        if tokens:
            counter["unresolved_pinyin_tokens"] += tokens
            counter["items_with_unresolved_pinyin"] += 1
        if is_placeholder_word(item.word):
            counter["placeholder_words"] += 1
    return dict(counter)


@functools.lru_cache(maxsize=1)
def known_syllables() -> frozenset[str]:
    """Collect tone-free Mandarin syllables from pypinyin's character dictionary.

    ``ü`` is spelled ``v`` to match the spelling used in dictionary files.
    """

    syllables: set[str] = set()
    for value in pypinyin_constants.PINYIN_DICT.values():
        for item in str(value).split(","):
            base = to_normal(item.strip())
            if base:
                syllables.add(base.lower())
    syllables.update(EXTRA_VALID_SYLLABLES)
    return frozenset(syllables)


def find_unknown_syllables(pinyin_table: PinyinTable) -> list[str]:
    """Return table syllables that are not standard Mandarin syllables.

    Hex placeholders from undecodable table entries are included, since they
    are by definition not syllables.

    Returns:
        Sorted, de-duplicated syllables.
    """

    known = known_syllables()
    return sorted({syllable for syllable in pinyin_table.values() if syllable.lower() not in known})
