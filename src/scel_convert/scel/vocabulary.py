"""Decode the vocabulary section of a ``.scel`` buffer.

The section is a run of homophone groups. Each group is::

    same_count  u16   number of words sharing the pinyin below
    py_length   u16   byte length of the index list
    indices     u16 * (py_length / 2)
    same_count * (word_length u16, word bytes, ext_length u16, ext bytes)

The first two bytes of the extension block hold the word frequency; the rest
of the block is skipped without interpretation.
"""

from __future__ import annotations

from typing import Sequence

from scel_convert.diagnostics import DiagnosticLog, ensure_log
from scel_convert.models import PinyinTable, VocabularyItem
from scel_convert.scel.decoding import decode_word
from scel_convert.scel.reader import ByteReader

VOCABULARY_OFFSET = 0x2628
START_SCAN_START = 0x2000
START_SCAN_END = 0x3000

MAX_SAME_COUNT = 1000
MAX_PY_TABLE_BYTES = 200
MAX_WORD_BYTES = 500
MAX_VOCABULARY_ITEMS = 100_000
MAX_CORRUPT_SKIPS = 10
RESYNC_STEP = 2
DEFAULT_FREQUENCY = 1
PINYIN_SEPARATOR = "'"


def find_vocabulary_start(
    data: bytes,
    start: int = START_SCAN_START,
    end: int = START_SCAN_END,
) -> int | None:
    """Guess where the first homophone group begins.

    Looks for a 4-byte window shaped like a group header: a small homophone
    count (1-10) in byte 0 and a small little-endian index-list length (1-49)
    in bytes 2-3. This is a heuristic and can match unrelated bytes.

    Returns:
        First matching offset in ``[start, end)``, or ``None``.
    """

    limit = min(end, len(data) - 3)
    for offset in range(max(start, 0), limit):
        if (
            1 <= data[offset] <= 10
            and 1 <= data[offset + 2] <= 49
            and data[offset + 3] == 0
        ):
            return offset
    return None


def format_pinyin(indices: Sequence[int], pinyin_table: PinyinTable) -> str:
    """Join the syllables for ``indices``, rendering unknown ones as ``[0xNNNN]``."""

    parts = []
    for index in indices:
        syllable = pinyin_table.get(index)
        parts.append(syllable if syllable else f"[0x{index:04X}]")
    return PINYIN_SEPARATOR.join(parts)


def _resolve_start(data: bytes, start: int, log: DiagnosticLog) -> int:
    if start + 4 <= len(data):
        return start
    log.warning("Default vocabulary offset is past end of buffer; scanning for start", start)
    found = find_vocabulary_start(data)
    if found is None:
        log.warning(f"No vocabulary start found; using default 0x{VOCABULARY_OFFSET:04X}")
        return VOCABULARY_OFFSET
    log.info("Found probable vocabulary start", found)
    return found


def parse_vocabulary(
    data: bytes,
    pinyin_table: PinyinTable,
    diagnostics: DiagnosticLog | None = None,
    start: int = VOCABULARY_OFFSET,
    max_items: int = MAX_VOCABULARY_ITEMS,
    max_corrupt_skips: int = MAX_CORRUPT_SKIPS,
) -> list[VocabularyItem]:
    """Decode homophone groups into flat vocabulary items.

    A group header with an implausible homophone count or index-list length
    counts as one corrupt strike; scanning resumes ``RESYNC_STEP`` bytes after
    the start of that header. Strikes reset after every well-formed header and
    parsing ends once more than ``max_corrupt_skips`` happen in a row. A word
    or extension block that is oversized or runs past the buffer ends parsing.

    Args:
        data: Whole file buffer.
        pinyin_table: Index-to-syllable lookup from :func:`parse_pinyin_table`.
        diagnostics: Optional sink for anomaly messages.
        start: Offset of the first group.
        max_items: Ceiling on emitted items.
        max_corrupt_skips: Consecutive corrupt headers tolerated.

    Returns:
        Items in file order, at most ``max_items`` long.
    """

    log = ensure_log(diagnostics)
    reader = ByteReader(data, _resolve_start(data, start, log))
    items: list[VocabularyItem] = []
    strikes = 0
    skipped = 0
    halted = False

    while not halted and reader.has(4) and len(items) < max_items:
        group_start = reader.position
        same_count = reader.read_u16()
        py_length = reader.read_u16()

        problem = None
        if same_count > MAX_SAME_COUNT:
            problem = f"Implausible homophone count {same_count}"
        elif py_length > MAX_PY_TABLE_BYTES or py_length % 2:
            problem = f"Implausible pinyin index length {py_length}"
        if problem is not None:
            log.warning(problem, group_start)
            strikes += 1
            skipped += 1
            if strikes > max_corrupt_skips:
                log.warning("Too many consecutive corrupt groups; stopping", group_start)
                break
            reader.position = group_start + RESYNC_STEP
            continue
        strikes = 0

        indices = []
        for _ in range(py_length // 2):
            index = reader.read_u16()
            if index is None:
                log.warning("Pinyin index list runs past end of buffer", reader.position)
                break
            indices.append(index)
        pinyin = format_pinyin(indices, pinyin_table)

        for _ in range(same_count):
            if len(items) >= max_items or not reader.has(4):
                break
            word_start = reader.position
            word_length = reader.read_u16()
            if word_length > MAX_WORD_BYTES:
                log.warning(f"Implausible word length {word_length}", word_start)
                halted = True
                break
            payload = reader.read_bytes(word_length)
            if payload is None:
                log.warning("Word runs past end of buffer", reader.position)
                halted = True
                break

            ext_length = reader.read_u16()
            if ext_length is None:
                log.warning("Extension length runs past end of buffer", reader.position)
                halted = True
                break
            ext = reader.read_bytes(ext_length)
            if ext is None:
                log.warning("Extension block runs past end of buffer", reader.position)
                halted = True
                break

            frequency = int.from_bytes(ext[:2], "little") if ext_length >= 2 else DEFAULT_FREQUENCY
            items.append(VocabularyItem(decode_word(payload), pinyin, frequency))

    if len(items) >= max_items and reader.has(4):
        log.warning(f"Stopped at the {max_items} item ceiling", reader.position)
    if skipped:
        log.warning(f"Skipped {skipped} corrupt group header(s)")
    return items
