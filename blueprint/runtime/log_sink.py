"""
Run log - The user-visible output panel of a blueprint run.

Behaviors write here (a Print node logs its text with ``success``); the
coordinator writes run lifecycle lines with ``system``. Every entry is also
forwarded to the ``blueprint.run`` Python logger so it shows up in the
structured logs with the current trace context attached.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

run_logger = logging.getLogger("blueprint.run")


class LogSeverity(StrEnum):
    """Style/category of a log entry."""

    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
    ERROR = "error"
    SYSTEM = "system"


_LEVELS = {
    LogSeverity.INFO: logging.INFO,
    LogSeverity.WARNING: logging.WARNING,
    LogSeverity.SUCCESS: logging.INFO,
    LogSeverity.ERROR: logging.ERROR,
    LogSeverity.SYSTEM: logging.INFO,
}


@dataclass
class LogEntry:
    """A single line in the run log."""

    message: str
    severity: LogSeverity = LogSeverity.INFO
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def formatted(self) -> str:
        """``[HH:MM:SS.mmm] message``, as shown in the output panel."""
        ts = self.timestamp.strftime("%H:%M:%S") + f".{self.timestamp.microsecond // 1000:03d}"
        return f"[{ts}] {self.message}"

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
        }


class LogSink:
    """
    One-way notification channel for run output.

    Subclasses override ``emit`` to display or store entries. ``log`` never
    returns anything and never affects control flow.
    """

    def log(self, message: str, severity: LogSeverity | str = LogSeverity.INFO) -> None:
        entry = LogEntry(message=str(message), severity=LogSeverity(severity))
        run_logger.log(_LEVELS[entry.severity], entry.message, extra={"event": entry.severity.value})
        self.emit(entry)

    def emit(self, entry: LogEntry) -> None:
        pass


class MemoryLogSink(LogSink):
    """Keeps every entry in order."""

    def __init__(self) -> None:
        self.entries: list[LogEntry] = []

    def emit(self, entry: LogEntry) -> None:
        self.entries.append(entry)

    def messages(self, severity: LogSeverity | str | None = None) -> list[str]:
        """Messages in log order, optionally only those of one severity."""
        if severity is None:
            return [e.message for e in self.entries]
        wanted = LogSeverity(severity)
        return [e.message for e in self.entries if e.severity == wanted]

    def clear(self) -> None:
        self.entries.clear()

