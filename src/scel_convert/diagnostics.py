"""Diagnostics sink passed into decoder components.

Parsing code never prints. Each component appends ``DiagnosticEvent`` items to
the ``DiagnosticLog`` it was given; the CLI decides whether to echo them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

INFO = "info"
WARNING = "warning"


@dataclass(frozen=True)
class DiagnosticEvent:
    """One message emitted while decoding.

    Attributes:
        level: ``info`` or ``warning``.
        message: Human-readable description.
        offset: Byte offset the message refers to, when there is one.
    """

    level: str
    message: str
    offset: int | None = None

    def render(self) -> str:
        """Format the event as a single console line."""

        prefix = "WARNING: " if self.level == WARNING else ""
        location = f" @ 0x{self.offset:04X}" if self.offset is not None else ""
        return f"{prefix}{self.message}{location}"


@dataclass
class DiagnosticLog:
    """Append-only collection of diagnostic events.

    Attributes:
        echo: Optional callable invoked with each rendered event as it arrives.
        events: Events recorded so far, in emission order.
    """

    echo: Callable[[str], None] | None = None
    events: list[DiagnosticEvent] = field(default_factory=list)

    def emit(self, level: str, message: str, offset: int | None = None) -> None:
        event = DiagnosticEvent(level=level, message=message, offset=offset)
        self.events.append(event)
        if self.echo is not None:
            self.echo(event.render())

    def info(self, message: str, offset: int | None = None) -> None:
        self.emit(INFO, message, offset)

    def warning(self, message: str, offset: int | None = None) -> None:
        self.emit(WARNING, message, offset)

    @property
    def warnings(self) -> list[DiagnosticEvent]:
        """Return only warning-level events."""

        return [event for event in self.events if event.level == WARNING]


def ensure_log(diagnostics: DiagnosticLog | None) -> DiagnosticLog:
    """Return ``diagnostics`` or a fresh silent log when none was supplied."""

    return diagnostics if diagnostics is not None else DiagnosticLog()
