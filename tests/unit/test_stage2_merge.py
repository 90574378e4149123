"""Unit tests for Stage 2 deduplication and ordering."""

from __future__ import annotations

from scel_convert.models import VocabularyItem
from scel_convert.stages.stage2_merge import deduplicate, merge_items, sort_items


def test_deduplicate_keeps_highest_frequency() -> None:
    items = [
        VocabularyItem("银行", "yin'hang", 3),
        VocabularyItem("银行", "yin'hang", 9),
        VocabularyItem("银行", "yin'hang", 5),
    ]

    unique, duplicates = deduplicate(items)

    assert unique == [VocabularyItem("银行", "yin'hang", 9)]
    assert duplicates == 2


def test_deduplicate_keeps_heteronyms_apart() -> None:
    items = [
        VocabularyItem("银行", "yin'hang", 3),
        VocabularyItem("银行", "yin'xing", 3),
    ]

    unique, duplicates = deduplicate(items)

    assert len(unique) == 2
    assert duplicates == 0


def test_sort_items_orders_by_pinyin_then_word() -> None:
    items = [
        VocabularyItem("中", "zhong", 1),
        VocabularyItem("阿", "a", 1),
        VocabularyItem("钟", "zhong", 1),
        VocabularyItem("啊", "a", 1),
        VocabularyItem("重", "[0x0001]", 1),
    ]

    ordered = sort_items(items)

    assert [item.pinyin for item in ordered] == ["[0x0001]", "a", "a", "zhong", "zhong"]
    assert [item.word for item in ordered[1:3]] == sorted(["阿", "啊"])
    assert [item.word for item in ordered[3:]] == sorted(["中", "钟"])


def test_merge_items_combines_dedup_and_sort() -> None:
    result = merge_items(
        [
            VocabularyItem("我们", "wo'men", 2),
            VocabularyItem("爱", "ai", 1),
            VocabularyItem("我们", "wo'men", 8),
        ]
    )

    assert result.items == (
        VocabularyItem("爱", "ai", 1),
        VocabularyItem("我们", "wo'men", 8),
    )
    assert result.duplicate_count == 1
