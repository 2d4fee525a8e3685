"""
Execution Engine - Walks a blueprint graph.

Two kinds of traversal:

1. Control flow (push): ``execute_node`` runs a node's behavior, which fires
   EXEC outputs through ``trigger_output``; each fired output crosses its edge
   and executes the next node. The whole chain is one awaited continuation,
   never forked.
2. Data flow (pull): ``resolve_input`` follows the data edge into an input
   backwards and asks the upstream node to ``resolve_output``. Nothing is
   cached; reading a value twice walks the upstream chain twice.

Missing targets are normal design-time states and degrade to neutral
defaults: an unconnected EXEC output ends the branch, an unconnected input
falls back to the node's default value (or 0), a node without a resolver
yields None.

The graph is never checked for cycles up front. The engine keeps the stack of
nodes currently executing and of outputs currently resolving; re-entering one
of them raises CycleDetectedError. Nesting deeper than the configured limits
raises DepthLimitError.
"""

import logging
from typing import Any

from blueprint.config import EngineConfig
from blueprint.graph.edge import Edge
from blueprint.graph.errors import CycleDetectedError, DepthLimitError
from blueprint.graph.graph import Graph
from blueprint.graph.node import Node, NodeContext
from blueprint.graph.pin import Pin, PinDirection, PinType
from blueprint.observability import get_trace_context, set_trace_context
from blueprint.runtime.log_sink import LogSink, MemoryLogSink
from blueprint.runtime.visitor import TimedVisitor, Visitor

logger = logging.getLogger(__name__)

NEUTRAL_DEFAULT = 0


class ExecutionEngine:
    """
    Executes and resolves nodes of one graph.

    Example:
        engine = ExecutionEngine(graph, visitor=NullVisitor(), log_sink=sink)
        await engine.execute_node(event_node)
        total = await engine.resolve_output(add_node, "Result")
    """

    def __init__(
        self,
        graph: Graph,
        visitor: Visitor | None = None,
        log_sink: LogSink | None = None,
        config: EngineConfig | None = None,
    ):
        """
        Initialize the engine.

        Args:
            graph: Graph whose topology is read during execution
            visitor: Node/edge visit timing; defaults to a TimedVisitor using
                the configured durations
            log_sink: Where behaviors write user-visible output
            config: Engine settings (visit durations, depth limits)
        """
        self.graph = graph
        self.config = config or EngineConfig()
        self.visitor = visitor or TimedVisitor(
            node_seconds=self.config.node_visit_seconds,
            edge_seconds=self.config.edge_visit_seconds,
        )
        self.log_sink = log_sink or MemoryLogSink()

        # Node IDs in the order execute_node visited them
        self.path: list[str] = []

        # Nodes whose execution has not returned yet, outermost first
        self._executing: list[str] = []
        # (node id, output pin name) pairs being resolved, outermost first
        self._resolving: list[tuple[str, str]] = []

    def reset(self) -> None:
        """Forget the executed path and active stacks before a new run."""
        self.path = []
        self._executing = []
        self._resolving = []

    # === CONTROL FLOW ===

    async def execute_node(self, node: Node, triggering_pin: Pin | None = None) -> None:
        """
        Visit ``node`` and run its behavior.

        Executable behaviors decide which outputs to fire. Anything else is a
        pass-through that fires the unnamed EXEC output.
        """
        if node.id in self._executing:
            raise CycleDetectedError("Execution", node.id)
        if len(self._executing) >= self.config.max_exec_depth:
            raise DepthLimitError("Execution", node.id, self.config.max_exec_depth)

        self._executing.append(node.id)
        previous_node_id = get_trace_context().get("node_id")
        set_trace_context(node_id=node.id)
        try:
            await self.visitor.visit_node(node)
            self.path.append(node.id)
            logger.debug(f"▶ Executing {node.title} ({node.behavior.kind})")

            if node.behavior.can_execute:
                await node.behavior.on_execute(NodeContext(node=node, engine=self), triggering_pin)
            else:
                await self.trigger_output(node, "")
        finally:
            set_trace_context(node_id=previous_node_id)
            self._executing.pop()

    async def trigger_output(self, node: Node, pin_name: str) -> None:
        """
        Fire the EXEC output ``pin_name`` of ``node``.

        Only the first edge leaving the pin (insertion order) is followed, even
        when the pin fans out to several edges.
        """
        pin = node.find_pin(PinDirection.OUTPUT, pin_name, PinType.EXEC)
        if pin is None:
            logger.debug(f"{node.title} has no EXEC output {pin_name!r}")
            return

        edge = self.graph.find_edge_by_source(pin)
        target = self._target_node(edge)
        if target is None:
            logger.debug(f"   → {node.title}.{pin_name!r} is not connected, branch ends")
            return

        await self.visitor.visit_edge(edge)
        await self.execute_node(target, edge.to_pin)

    # === DATA FLOW ===

    async def resolve_input(self, node: Node, pin_name: str) -> Any:
        """
        Value arriving at the INPUT pin ``pin_name``.

        Connected inputs pull from the upstream node; unconnected inputs use
        the node's default value, or 0 when it has none. Unknown pins give 0.
        """
        pin = node.find_pin(PinDirection.INPUT, pin_name)
        if pin is None:
            return NEUTRAL_DEFAULT

        edge = self.graph.find_edge_by_target(pin)
        if edge is not None:
            source = self.graph.get_node(edge.from_pin.node_id)
            if source is not None:
                await self.visitor.visit_edge(edge)
                return await self.resolve_output(source, edge.from_pin.name)

        value = node.default_values.get(pin_name)
        return NEUTRAL_DEFAULT if value is None else value

    async def resolve_output(self, node: Node, pin_name: str) -> Any:
        """Visit ``node`` and compute the value of its output ``pin_name``."""
        key = (node.id, pin_name)
        if key in self._resolving:
            raise CycleDetectedError("Resolution", node.id, pin_name)
        if len(self._resolving) >= self.config.max_resolve_depth:
            raise DepthLimitError("Resolution", node.id, self.config.max_resolve_depth)

        self._resolving.append(key)
        try:
            await self.visitor.visit_node(node)
            if not node.behavior.can_resolve:
                return None
            return await node.behavior.resolve_output(NodeContext(node=node, engine=self), pin_name)
        finally:
            self._resolving.pop()

    def _target_node(self, edge: Edge | None) -> Node | None:
        if edge is None or edge.to_pin is None:
            return None
        return self.graph.get_node(edge.to_pin.node_id)
