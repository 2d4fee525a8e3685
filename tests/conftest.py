"""Shared fixtures for blueprint tests."""

import pytest

from blueprint.config import DEFAULT_MAX_EXEC_DEPTH, DEFAULT_MAX_RESOLVE_DEPTH, EngineConfig
from blueprint.graph import Graph
from blueprint.nodes import NodeLibrary
from blueprint.observability import clear_trace_context
from blueprint.runtime import MemoryLogSink, NullVisitor


@pytest.fixture(autouse=True)
def _clean_trace_context():
    clear_trace_context()
    yield
    clear_trace_context()


@pytest.fixture
def library() -> NodeLibrary:
    return NodeLibrary.with_builtins()


@pytest.fixture
def graph() -> Graph:
    return Graph()


@pytest.fixture
def sink() -> MemoryLogSink:
    return MemoryLogSink()


@pytest.fixture
def visitor() -> NullVisitor:
    return NullVisitor()


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig(
        node_visit_seconds=0.0,
        edge_visit_seconds=0.0,
        max_resolve_depth=DEFAULT_MAX_RESOLVE_DEPTH,
        max_exec_depth=DEFAULT_MAX_EXEC_DEPTH,
    )

