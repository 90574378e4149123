"""Markdown report generation for conversion runs."""

from __future__ import annotations

from typing import Iterable, Sequence

from scel_convert.pipeline import PipelineResult
from scel_convert.validation import collect_placeholder_counts, find_unknown_syllables


def _markdown_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render a deterministic GitHub-flavored markdown table.

    Args:
        headers: Table header labels.
        rows: Table body rows as string sequences.

    Returns:
        Markdown table text.
    """

    line_header = "| " + " | ".join(headers) + " |"
    line_sep = "| " + " | ".join("---" for _ in headers) + " |"
    body = ["| " + " | ".join(_escape_cell(cell) for cell in row) + " |" for row in rows]
    return "\n".join([line_header, line_sep, *body])


def _escape_cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", " ")


def build_report_md(result: PipelineResult) -> str:
    """Build the conversion markdown report for one pipeline run.

    Args:
        result: Output of :func:`run_single` or :func:`run_batch`.

    Returns:
        Full markdown content with summary tables.
    """

    source_rows = [
        (
            source.path.name,
            source.metadata.name,
            source.metadata.category,
            str(len(source.pinyin_table)),
            str(len(source.items)),
        )
        for source in result.sources
    ]

    failure_rows = [(failure.path.name, failure.reason) for failure in result.failures]

    summary_rows = [
        ("sources_converted", str(len(result.sources))),
        ("sources_failed", str(len(result.failures))),
        ("items_decoded", str(result.raw_item_count)),
        ("duplicates_removed", str(result.duplicate_count)),
        ("items_written", str(len(result.items))),
    ]

    placeholder_counts = collect_placeholder_counts(result.items)
    placeholder_rows = [(name, str(placeholder_counts[name])) for name in sorted(placeholder_counts)]

    unknown_rows = [
        (source.path.name, syllable)
        for source in result.sources
        for syllable in find_unknown_syllables(source.pinyin_table)
    ]

    sections = [
        "# Conversion Report",
        "",
        "## Summary",
        _markdown_table(["metric", "value"], summary_rows),
        "",
        "## Sources",
        _markdown_table(["file", "name", "category", "pinyin_syllables", "items"], source_rows),
        "",
        "## Failed sources",
        _markdown_table(["file", "reason"], failure_rows),
        "",
        "## Placeholders in output",
        _markdown_table(["placeholder", "count"], placeholder_rows),
        "",
        "## Non-standard pinyin syllables",
        _markdown_table(["file", "syllable"], unknown_rows),
    ]

    return "\n".join(sections) + "\n"
