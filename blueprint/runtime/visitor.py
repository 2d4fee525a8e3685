"""
Visitors - The timing contract of node and edge visits.

Before the engine runs a node (or resolves one of its outputs) it awaits a
*node visit*; before it crosses an edge it awaits an *edge visit*. A visit
takes a fixed time and nothing downstream starts until it has finished. What
the visit looks like (a highlighted node, a pulsing wire) is the renderer's
business; the engine only waits for it.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from blueprint.config import EDGE_VISIT_SECONDS, NODE_VISIT_SECONDS
from blueprint.observability import get_trace_context
from blueprint.runtime.event_bus import EventBus

if TYPE_CHECKING:
    from blueprint.graph.edge import Edge
    from blueprint.graph.node import Node


class Visitor:
    """Base visitor: both visits complete immediately."""

    async def visit_node(self, node: Node) -> None:
        return None

    async def visit_edge(self, edge: Edge) -> None:
        return None


class NullVisitor(Visitor):
    """Zero-duration visits, for tests and headless runs."""

    pass


class TimedVisitor(Visitor):
    """
    Visits that last a fixed time and are announced on an event bus.

    Args:
        node_seconds: Duration of a node visit
        edge_seconds: Duration of an edge visit
        event_bus: Optional bus receiving NODE_VISITED / EDGE_TRAVERSED events
    """

    def __init__(
        self,
        node_seconds: float = NODE_VISIT_SECONDS,
        edge_seconds: float = EDGE_VISIT_SECONDS,
        event_bus: EventBus | None = None,
    ):
        self.node_seconds = node_seconds
        self.edge_seconds = edge_seconds
        self._event_bus = event_bus

    async def visit_node(self, node: Node) -> None:
        if self._event_bus:
            await self._event_bus.emit_node_visited(
                node_id=node.id,
                duration=self.node_seconds,
                run_id=get_trace_context().get("run_id"),
            )
        await asyncio.sleep(self.node_seconds)

    async def visit_edge(self, edge: Edge) -> None:
        if self._event_bus:
            await self._event_bus.emit_edge_traversed(
                edge_id=edge.id,
                source_node=edge.from_pin.node_id,
                target_node=edge.to_pin.node_id if edge.to_pin else "",
                duration=self.edge_seconds,
                run_id=get_trace_context().get("run_id"),
            )
        await asyncio.sleep(self.edge_seconds)
