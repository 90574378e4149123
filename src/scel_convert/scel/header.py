"""Header signature checks and fixed-offset metadata strings."""

from __future__ import annotations

from scel_convert.diagnostics import DiagnosticLog, ensure_log
from scel_convert.errors import FormatErrorKind, ScelFormatError
from scel_convert.models import DictionaryMetadata
from scel_convert.scel.reader import ByteReader

MIN_HEADER_SIZE = 16
SIGNATURE = b"\x40\x15\x00\x00"
MARKER = b"DCS"
MARKER_OFFSET = 4

NAME_RANGE = (0x130, 0x338)
CATEGORY_RANGE = (0x338, 0x540)
DESCRIPTION_RANGE = (0x540, 0xD40)
SAMPLE_RANGE = (0xD40, 0x1540)

DECODE_ERROR_TEXT = "<decode error>"


def check_header(data: bytes) -> FormatErrorKind | None:
    """Classify the header of ``data``.

    Either signature is enough: the 4-byte magic at offset 0 or the ``DCS``
    marker at offset 4. Several on-disk variants carry only one of them.

    Returns:
        ``None`` for an acceptable header, otherwise the rejection reason.
    """

    if len(data) < MIN_HEADER_SIZE:
        return FormatErrorKind.TOO_SMALL
    if data[:4] == SIGNATURE or data[MARKER_OFFSET : MARKER_OFFSET + len(MARKER)] == MARKER:
        return None
    return FormatErrorKind.BAD_SIGNATURE


def validate_header(data: bytes, diagnostics: DiagnosticLog | None = None) -> bool:
    """Return whether ``data`` starts with a recognized ``.scel`` header.

    A rejected header is reported to ``diagnostics`` (file size, or a hex dump
    of the first 16 bytes).
    """

    kind = check_header(data)
    _report_rejection(data, kind, ensure_log(diagnostics))
    return kind is None


def _report_rejection(data: bytes, kind: FormatErrorKind | None, log: DiagnosticLog) -> None:
    if kind is FormatErrorKind.TOO_SMALL:
        log.warning(f"File too small ({len(data)} bytes)")
    elif kind is FormatErrorKind.BAD_SIGNATURE:
        log.warning(f"Header signature mismatch: {data[:MIN_HEADER_SIZE].hex(' ').upper()}")


def ensure_valid_header(data: bytes, diagnostics: DiagnosticLog | None = None) -> None:
    """Raise :class:`ScelFormatError` unless ``data`` has a recognized header."""

    kind = check_header(data)
    if kind is None:
        return
    _report_rejection(data, kind, ensure_log(diagnostics))
    if kind is FormatErrorKind.TOO_SMALL:
        raise ScelFormatError(kind, f"File too small to be a .scel dictionary ({len(data)} bytes)")
    raise ScelFormatError(kind, "Unrecognized .scel header signature")


def read_utf16_string(
    data: bytes,
    start: int,
    length: int,
    diagnostics: DiagnosticLog | None = None,
) -> str:
    """Read a NUL-terminated UTF-16LE string from a fixed byte range.

    The range is clamped to the buffer, cut at the first ``00 00`` pair on an
    even offset from ``start``, and shortened by one byte when odd.

    Args:
        data: Whole file buffer.
        start: Absolute start offset of the range.
        length: Nominal byte length of the range.
        diagnostics: Optional sink for range and decoding warnings.

    Returns:
        Decoded text with trailing NULs removed; ``""`` for empty or
        out-of-range spans.
    """

    log = ensure_log(diagnostics)
    if start >= len(data):
        log.warning("String range starts past end of buffer", start)
        return ""
    raw = ByteReader(data).span(start, length)
    if len(raw) < length:
        log.warning(f"String range clamped to {len(raw)} bytes", start)

    length = len(raw)
    for idx in range(0, len(raw) - 1, 2):
        if raw[idx] == 0 and raw[idx + 1] == 0:
            length = idx
            break

    if length % 2:
        length -= 1
    if length <= 0:
        return ""

    try:
        return raw[:length].decode("utf-16-le").rstrip("\0")
    except UnicodeDecodeError as exc:
        log.warning(f"String decoding failed: {exc.reason}", start)
        return DECODE_ERROR_TEXT


def _read_range(data: bytes, bounds: tuple[int, int], log: DiagnosticLog) -> str:
    start, end = bounds
    return read_utf16_string(data, start, end - start, log)


def read_metadata(data: bytes, diagnostics: DiagnosticLog | None = None) -> DictionaryMetadata:
    """Extract the name, category, description, and sample strings.

    The values are informational only; missing or damaged ranges produce
    empty strings rather than errors.
    """

    log = ensure_log(diagnostics)
    return DictionaryMetadata(
        name=_read_range(data, NAME_RANGE, log),
        category=_read_range(data, CATEGORY_RANGE, log),
        description=_read_range(data, DESCRIPTION_RANGE, log),
        sample=_read_range(data, SAMPLE_RANGE, log),
    )
