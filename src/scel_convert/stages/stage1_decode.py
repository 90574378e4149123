"""Stage 1: Discover ``.scel`` files and decode each into vocabulary items.

Files are processed one at a time in sorted path order. A file that cannot be
read or has an unrecognized header is recorded as a ``SourceFailure`` and the
remaining files are still decoded.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

from scel_convert.diagnostics import DiagnosticLog, ensure_log
from scel_convert.errors import ScelFormatError
from scel_convert.models import SourceFailure, SourceResult
from scel_convert.scel.repository import ScelDictionary

SCEL_SUFFIX = ".scel"


def discover_scel_files(directory: Path) -> list[Path]:
    """Recursively list ``.scel`` files below ``directory``.

    Args:
        directory: Root directory to walk.

    Returns:
        Sorted file paths; the suffix match ignores case.

    Raises:
        FileNotFoundError: If ``directory`` does not exist or is not a directory.
    """

    if not directory.is_dir():
        raise FileNotFoundError(f"Directory not found: {directory}")
    return sorted(
        path for path in directory.rglob("*") if path.is_file() and path.suffix.lower() == SCEL_SUFFIX
    )


def decode_source(path: Path, diagnostics: DiagnosticLog | None = None) -> SourceResult:
    """Decode a single dictionary file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ScelFormatError: If the header is not recognized.
        OSError: If the file cannot be read.
    """

    dictionary = ScelDictionary(path, ensure_log(diagnostics))
    return SourceResult(
        path=path,
        metadata=dictionary.metadata,
        pinyin_table=dictionary.pinyin_table,
        items=dictionary.items,
    )


def decode_sources(
    paths: Sequence[Path],
    diagnostics: DiagnosticLog | None = None,
    on_source: Callable[[int, int, Path], None] | None = None,
) -> tuple[list[SourceResult], list[SourceFailure]]:
    """Decode every path, capturing per-file failures instead of raising.

    Args:
        paths: Files to decode, in processing order.
        diagnostics: Sink shared by all files.
        on_source: Optional progress callback receiving
            ``(position, total, path)`` before each file is decoded;
            positions start at 1.

    Returns:
        ``(results, failures)`` in processing order.
    """

    log = ensure_log(diagnostics)
    results: list[SourceResult] = []
    failures: list[SourceFailure] = []

    for position, path in enumerate(paths, start=1):
        if on_source is not None:
            on_source(position, len(paths), path)
        try:
            results.append(decode_source(path, log))
        except (ScelFormatError, OSError) as exc:
            log.warning(f"Failed to convert {path}: {exc}")
            failures.append(SourceFailure(path=path, reason=str(exc)))

    return results, failures
