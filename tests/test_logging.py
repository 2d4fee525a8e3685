"""
Tests for structured logging and the run log sink.
"""

import json
import logging

from blueprint.observability import get_trace_context, set_trace_context
from blueprint.observability.logging import (
    HumanReadableFormatter,
    StructuredFormatter,
    strip_ansi_codes,
)
from blueprint.runtime import LogEntry, LogSeverity, MemoryLogSink


def _record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("blueprint.run", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_structured_formatter_includes_trace_context():
    set_trace_context(run_id="run-123", node_id="node-abc")

    line = json.loads(StructuredFormatter().format(_record("Hello World", event="success")))

    assert line["message"] == "Hello World"
    assert line["level"] == "info"
    assert line["logger"] == "blueprint.run"
    assert line["run_id"] == "run-123"
    assert line["node_id"] == "node-abc"
    assert line["event"] == "success"


def test_human_formatter_prefixes_run_and_node():
    set_trace_context(run_id="0123456789abcdef", node_id="node-0123456789")

    line = strip_ansi_codes(HumanReadableFormatter().format(_record("Hello")))

    assert "run:01234567" in line
    assert "node:23456789" in line
    assert line.endswith("Hello")


def test_trace_context_merges():
    set_trace_context(run_id="run-1")
    set_trace_context(node_id="node-1")

    assert get_trace_context() == {"run_id": "run-1", "node_id": "node-1"}


def test_sink_keeps_order_and_forwards_to_logging(caplog):
    sink = MemoryLogSink()

    with caplog.at_level(logging.INFO, logger="blueprint.run"):
        sink.log("Starting simulation...", LogSeverity.SYSTEM)
        sink.log("careful", "warning")

    assert sink.messages() == ["Starting simulation...", "careful"]
    assert sink.messages("warning") == ["careful"]
    assert [(r.levelno, r.event) for r in caplog.records] == [
        (logging.INFO, "system"),
        (logging.WARNING, "warning"),
    ]

    sink.clear()
    assert sink.entries == []


def test_log_entry_formatting():
    entry = LogEntry(message="Hello World", severity=LogSeverity.SUCCESS)

    assert entry.formatted.endswith("] Hello World")
    assert entry.formatted.startswith("[")
    assert entry.to_dict()["severity"] == "success"
