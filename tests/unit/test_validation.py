"""Unit tests for output validation and placeholder statistics."""

from __future__ import annotations

import pytest

from scel_convert.models import VocabularyItem
from scel_convert.validation import (
    collect_placeholder_counts,
    find_unknown_syllables,
    validate_items,
)


def test_validate_items_accepts_placeholders() -> None:
    validate_items(
        [
            VocabularyItem("我", "wo", 1),
            VocabularyItem("0xFFFE", "[0x0001]'wo", 0),
        ]
    )


def test_validate_items_rejects_tabs_and_empty_fields() -> None:
    with pytest.raises(ValueError, match="contains a tab or line break"):
        validate_items([VocabularyItem("我\t们", "wo'men", 1)])

    with pytest.raises(ValueError, match="empty word"):
        validate_items([VocabularyItem("", "wo", 1)])


def test_validate_items_accepts_empty_pinyin() -> None:
    validate_items([VocabularyItem("我", "", 1)])


def test_validate_items_reports_count_and_preview() -> None:
    items = [VocabularyItem("", "", -1)] * 30

    with pytest.raises(ValueError, match=r"failed with 60 errors") as excinfo:
        validate_items(items)
    assert "... and 35 more" in str(excinfo.value)


def test_collect_placeholder_counts() -> None:
    counts = collect_placeholder_counts(
        [
            VocabularyItem("我", "wo", 1),
            VocabularyItem("0x0900", "[0x0001]'[0x0002]", 1),
            VocabularyItem("你", "[0x0003]", 1),
        ]
    )

    assert counts == {
        "unresolved_pinyin_tokens": 3,
        "items_with_unresolved_pinyin": 2,
        "placeholder_words": 1,
    }


def test_find_unknown_syllables_flags_non_mandarin_entries() -> None:
    table = {1: "wo", 2: "lve", 3: "xyzq", 4: "0xFFFE", 5: "zhuang"}

    assert find_unknown_syllables(table) == ["0xFFFE", "xyzq"]
