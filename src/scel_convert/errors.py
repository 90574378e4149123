"""File-level errors raised while decoding ``.scel`` buffers."""

from __future__ import annotations

import enum


class FormatErrorKind(enum.Enum):
    """Reason a buffer was rejected before any parsing took place."""

    TOO_SMALL = "too_small"
    BAD_SIGNATURE = "bad_signature"


class ScelFormatError(ValueError):
    """Raised when a buffer is not a recognizable ``.scel`` dictionary.

    Only header-level problems surface as this error; anomalies inside the
    pinyin table or vocabulary section degrade to placeholders instead.
    """

    def __init__(self, kind: FormatErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
