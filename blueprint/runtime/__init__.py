"""Runtime collaborators of the engine: visit timing, run log, event bus."""

from blueprint.runtime.event_bus import EventBus, EventType, ExecutionEvent
from blueprint.runtime.log_sink import (
    LogEntry,
    LogSeverity,
    LogSink,
    MemoryLogSink,
)
from blueprint.runtime.visitor import NullVisitor, TimedVisitor, Visitor

__all__ = [
    "EventBus",
    "EventType",
    "ExecutionEvent",
    "LogEntry",
    "LogSeverity",
    "LogSink",
    "MemoryLogSink",
    "Visitor",
    "NullVisitor",
    "TimedVisitor",
]
