"""Unit tests for markdown report generation."""

from __future__ import annotations

from pathlib import Path

from scel_convert.models import DictionaryMetadata, SourceFailure, SourceResult, VocabularyItem
from scel_convert.pipeline import PipelineResult
from scel_convert.reporting.report_md import build_report_md


def test_build_report_md_contains_required_sections() -> None:
    """Report output should include all summary sections."""

    items = (
        VocabularyItem("我", "wo", 1),
        VocabularyItem("0x0900", "[0x0002]", 1),
    )
    result = PipelineResult(
        sources=(
            SourceResult(
                path=Path("dicts/base.scel"),
                metadata=DictionaryMetadata(name="基础|词库", category="常用"),
                pinyin_table={1: "wo", 2: "qqq"},
                items=items,
            ),
        ),
        failures=(SourceFailure(Path("dicts/bad.scel"), "Unrecognized .scel header signature"),),
        items=items,
        raw_item_count=3,
        duplicate_count=1,
    )

    markdown = build_report_md(result)

    assert "## Summary" in markdown
    assert "## Sources" in markdown
    assert "## Failed sources" in markdown
    assert "## Placeholders in output" in markdown
    assert "## Non-standard pinyin syllables" in markdown
    assert "| duplicates_removed | 1 |" in markdown
    assert "| base.scel | 基础\\|词库 | 常用 | 2 | 2 |" in markdown
    assert "| bad.scel | Unrecognized .scel header signature |" in markdown
    assert "| base.scel | qqq |" in markdown
    assert "| placeholder_words | 1 |" in markdown
