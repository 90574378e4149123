"""Top-level orchestration for single-file and batch conversion."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from scel_convert.diagnostics import DiagnosticLog
from scel_convert.models import SourceFailure, SourceResult, VocabularyItem
from scel_convert.stages.stage1_decode import decode_source, decode_sources, discover_scel_files
from scel_convert.stages.stage2_merge import merge_items
from scel_convert.validation import validate_items


@dataclass(frozen=True)
class PipelineResult:
    """Result bundle returned by :func:`run_single` and :func:`run_batch`.

    Attributes:
        sources: Successfully decoded sources in processing order.
        failures: Sources that could not be converted.
        items: Final items to write.
        raw_item_count: Items decoded before merging.
        duplicate_count: Items folded away by deduplication (0 in single mode).
    """

    sources: tuple[SourceResult, ...]
    failures: tuple[SourceFailure, ...]
    items: tuple[VocabularyItem, ...]
    raw_item_count: int
    duplicate_count: int = 0


def run_single(input_path: Path, diagnostics: DiagnosticLog | None = None) -> PipelineResult:
    """Convert one file, keeping items in file order without merging.

    Args:
        input_path: ``.scel`` file to convert.
        diagnostics: Optional sink for decoding messages.

    Returns:
        ``PipelineResult`` with one source.

    Raises:
        FileNotFoundError: If ``input_path`` does not exist.
        ScelFormatError: If the header is not recognized.
        ValueError: If decoded items cannot be written as TSV.
    """

    source = decode_source(input_path, diagnostics)
    validate_items(source.items)
    return PipelineResult(
        sources=(source,),
        failures=(),
        items=source.items,
        raw_item_count=len(source.items),
    )


def run_batch(
    directory: Path,
    diagnostics: DiagnosticLog | None = None,
    on_source: Callable[[int, int, Path], None] | None = None,
) -> PipelineResult:
    """Convert every ``.scel`` file below ``directory`` into one merged list.

    Per-file failures are collected rather than raised. Items from all
    successful sources are deduplicated by ``(word, pinyin)`` and sorted.

    Args:
        directory: Root directory searched recursively.
        diagnostics: Optional sink shared by every file.
        on_source: Optional progress callback, see :func:`decode_sources`.

    Returns:
        ``PipelineResult`` with merged items and per-source details.

    Raises:
        FileNotFoundError: If ``directory`` does not exist.
    """

    paths = discover_scel_files(directory)
    sources, failures = decode_sources(paths, diagnostics=diagnostics, on_source=on_source)
    raw_items = [item for source in sources for item in source.items]
    merged = merge_items(raw_items)
    validate_items(merged.items)
    return PipelineResult(
        sources=tuple(sources),
        failures=tuple(failures),
        items=merged.items,
        raw_item_count=len(raw_items),
        duplicate_count=merged.duplicate_count,
    )
