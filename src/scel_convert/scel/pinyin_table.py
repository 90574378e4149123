"""Locate and decode the pinyin index table of a ``.scel`` buffer.

The table is a 4-byte sub-header followed by ``(index, length, payload)``
entries. Its usual home is ``0x1540``, but some dictionary revisions move it,
so the ``9D 01`` marker that starts the sub-header is searched for first.
"""

from __future__ import annotations

from scel_convert.diagnostics import DiagnosticLog, ensure_log
from scel_convert.models import PinyinTable
from scel_convert.scel.decoding import decode_pinyin
from scel_convert.scel.reader import ByteReader

PINYIN_TABLE_OFFSET = 0x1540
PINYIN_TABLE_MARKER = b"\x9d\x01"
MARKER_SCAN_START = 0x1300
MARKER_SCAN_END = 0x2600
SUB_HEADER_SIZE = 4
MAX_SYLLABLE_BYTES = 100
MAX_PINYIN_ENTRIES = 500


def find_pinyin_table_marker(
    data: bytes,
    start: int = MARKER_SCAN_START,
    end: int = MARKER_SCAN_END,
) -> int | None:
    """Return the first offset in ``[start, end)`` holding the table marker.

    Args:
        data: Whole file buffer.
        start: First offset to test.
        end: Exclusive scan limit, additionally capped so both marker bytes fit.

    Returns:
        Marker offset, or ``None`` when the window does not contain it.
    """

    # Matches may start anywhere below ``end`` but must end inside the buffer.
    stop = min(end + len(PINYIN_TABLE_MARKER) - 1, len(data))
    offset = data.find(PINYIN_TABLE_MARKER, max(start, 0), stop)
    return offset if offset >= 0 else None


def locate_pinyin_table(data: bytes, diagnostics: DiagnosticLog | None = None) -> int | None:
    """Choose the offset of the table sub-header.

    A marker found by scanning wins over the fixed offset. Without a marker the
    fixed offset is used when it still leaves room for the sub-header.

    Returns:
        Sub-header offset, or ``None`` when neither location is usable.
    """

    log = ensure_log(diagnostics)
    found = find_pinyin_table_marker(data)
    if found is not None:
        log.info("Found pinyin table marker", found)
        return found

    log.warning(f"Pinyin table marker not found; using default offset 0x{PINYIN_TABLE_OFFSET:04X}")
    if PINYIN_TABLE_OFFSET + SUB_HEADER_SIZE > len(data):
        log.warning("Default pinyin table offset is past end of buffer")
        return None
    return PINYIN_TABLE_OFFSET


def parse_pinyin_table(
    data: bytes,
    diagnostics: DiagnosticLog | None = None,
    offset: int | None = None,
    max_entries: int = MAX_PINYIN_ENTRIES,
) -> PinyinTable:
    """Decode the index-to-syllable table.

    Reading stops quietly (with a warning) at a zero or oversized length, a
    payload running past the buffer, or after ``max_entries`` distinct indices.
    Repeated indices keep their first syllable.

    Args:
        data: Whole file buffer.
        diagnostics: Optional sink for location and anomaly messages.
        offset: Sub-header offset; located automatically when ``None``.
        max_entries: Ceiling on stored entries.

    Returns:
        Mapping of pinyin index to syllable, possibly empty.
    """

    log = ensure_log(diagnostics)
    table: PinyinTable = {}
    if offset is None:
        offset = locate_pinyin_table(data, log)
        if offset is None:
            return table

    reader = ByteReader(data, offset + SUB_HEADER_SIZE)
    while reader.has(4) and len(table) < max_entries:
        index = reader.read_u16()
        length = reader.read_u16()
        if length == 0:
            log.warning("Zero-length pinyin entry", reader.position)
            break
        if length > MAX_SYLLABLE_BYTES:
            log.warning(f"Implausible pinyin length {length}", reader.position)
            break
        payload = reader.read_bytes(length)
        if payload is None:
            log.warning("Pinyin entry runs past end of buffer", reader.position)
            break

        if index in table:
            log.warning(f"Duplicate pinyin index 0x{index:04X}", reader.position)
            continue
        table[index] = decode_pinyin(payload)

    return table
