"""CLI entrypoint for converting Sogou ``.scel`` dictionaries to ibus-libpinyin text."""

from __future__ import annotations

import argparse
import time
from pathlib import Path
from typing import Sequence

from scel_convert.diagnostics import DiagnosticLog
from scel_convert.errors import ScelFormatError
from scel_convert.io.tsv_io import write_tsv
from scel_convert.models import DictionaryMetadata, VocabularyItem
from scel_convert.pipeline import PipelineResult, run_batch, run_single
from scel_convert.reporting.report_md import build_report_md

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_PARTIAL = 3
DEFAULT_BATCH_OUTPUT = Path("all.txt")
PREVIEW_ROWS = 3
IMPORT_COMMAND = "ibus-libpinyin-import-text-db"


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Configured parser for the conversion command.
    """

    parser = argparse.ArgumentParser(
        description="Convert Sogou .scel dictionaries into ibus-libpinyin text format.",
    )
    parser.add_argument("input", type=Path, help="Source .scel file, or a directory with -R.")
    parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        default=None,
        help="Destination text file (default: input with .txt suffix, or all.txt with -R).",
    )
    parser.add_argument(
        "-R",
        "--recursive",
        action="store_true",
        help="Convert every .scel file below INPUT and merge them into one sorted file.",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Also write a markdown conversion report to this path.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not print decoder diagnostics.",
    )
    return parser


def _print_metadata(metadata: DictionaryMetadata) -> None:
    print(f"Dictionary name: {metadata.name}")
    print(f"Dictionary type: {metadata.category}")
    print(f"Description: {metadata.description}")
    print(f"Sample: {metadata.sample}")


def _print_preview(items: Sequence[VocabularyItem]) -> None:
    """Print the first few converted rows as aligned columns."""

    if not items:
        print("WARNING: no vocabulary items decoded")
        return
    print("Preview:")
    for item in items[:PREVIEW_ROWS]:
        print(f"  {item.word.ljust(10)} {item.pinyin.ljust(30)} {item.frequency}")


def _write_outputs(result: PipelineResult, output: Path, report: Path | None) -> None:
    written = write_tsv(result.items, output)
    print(f"Wrote {written} rows to {output}")
    if report is not None:
        report.write_text(build_report_md(result), encoding="utf-8")
        print(f"Wrote report to {report}")
    print(f"\nImport into ibus-libpinyin with:\n{IMPORT_COMMAND} \"{output.resolve()}\"")


def _convert_single(args: argparse.Namespace, diagnostics: DiagnosticLog) -> int:
    if not args.input.is_file():
        print(f"ERROR: file not found: {args.input}")
        return EXIT_FAILURE

    output = args.output if args.output is not None else args.input.with_suffix(".txt")
    print(f"Converting {args.input}")
    started = time.perf_counter()
    try:
        result = run_single(args.input, diagnostics=diagnostics)
    except (ScelFormatError, OSError, ValueError) as exc:
        print(f"ERROR: conversion failed: {exc}")
        return EXIT_FAILURE

    source = result.sources[0]
    _print_metadata(source.metadata)
    print(f"Pinyin table: {len(source.pinyin_table)} syllables")
    print(f"Decoded {len(result.items)} items in {time.perf_counter() - started:.2f}s")
    _print_preview(result.items)

    try:
        _write_outputs(result, output, args.report)
    except OSError as exc:
        print(f"ERROR: could not write output: {exc}")
        return EXIT_FAILURE
    return EXIT_OK


def _convert_directory(args: argparse.Namespace, diagnostics: DiagnosticLog) -> int:
    if not args.input.is_dir():
        print(f"ERROR: directory not found: {args.input}")
        return EXIT_FAILURE

    output = args.output if args.output is not None else DEFAULT_BATCH_OUTPUT
    print(f"Converting directory {args.input.resolve()}")

    def on_source(position: int, total: int, path: Path) -> None:
        print(f"\n[{position}/{total}] {path.name}")

    started = time.perf_counter()
    try:
        result = run_batch(args.input, diagnostics=diagnostics, on_source=on_source)
    except (OSError, ValueError) as exc:
        print(f"ERROR: conversion failed: {exc}")
        return EXIT_FAILURE

    total_files = len(result.sources) + len(result.failures)
    if total_files == 0:
        print("ERROR: no .scel files found")
        return EXIT_FAILURE

    print(
        f"\nConverted {len(result.sources)}/{total_files} files in "
        f"{time.perf_counter() - started:.2f}s"
    )
    for failure in result.failures:
        print(f"WARNING: {failure.path}: {failure.reason}")
    if not result.items:
        print("ERROR: no vocabulary items decoded")
        return EXIT_FAILURE

    print(
        f"Items decoded: {result.raw_item_count}, after dedup: {len(result.items)}, "
        f"duplicates: {result.duplicate_count}"
    )
    _print_preview(result.items)

    try:
        _write_outputs(result, output, args.report)
    except OSError as exc:
        print(f"ERROR: could not write output: {exc}")
        return EXIT_FAILURE
    return EXIT_PARTIAL if result.failures else EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Run CLI workflow from arguments through output writing.

    Returns:
        ``0`` on success, ``1`` on failure, ``3`` when a batch run converted
        some files but not all.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    diagnostics = DiagnosticLog(echo=None if args.quiet else print)

    if args.recursive:
        return _convert_directory(args, diagnostics)
    return _convert_single(args, diagnostics)


if __name__ == "__main__":
    raise SystemExit(main())
