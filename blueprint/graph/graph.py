"""
Graph - The owned aggregate of nodes and edges.

The graph is the only place where topology lives. The engine and the run
coordinator receive it explicitly and query it through the lookup methods
below; nothing is kept in module-level registries, so independent graphs can
coexist (handy in tests).

Edges are stored in insertion order. When an OUTPUT pin fans out to several
edges, ``find_edge_by_source`` returns the oldest one.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from blueprint.graph.edge import Edge
from blueprint.graph.errors import GraphError, IncompatiblePinsError
from blueprint.graph.node import Node
from blueprint.graph.pin import Pin, PinDirection, PinType, can_connect
from blueprint.runtime.log_sink import LogSeverity, LogSink

if TYPE_CHECKING:
    from blueprint.nodes.library import NodeTemplate

logger = logging.getLogger(__name__)


class Graph:
    """
    Nodes plus committed edges.

    Example:
        graph = Graph()
        event = graph.add_node(library.create("EVENT"))
        printer = graph.add_node(library.create("PRINT"))
        graph.connect(event.outputs[0], printer.inputs[0])

    Args:
        log_sink: Optional run log that receives editing notices such as
            deleted nodes
    """

    def __init__(self, log_sink: LogSink | None = None) -> None:
        self.log_sink = log_sink
        self._nodes: dict[str, Node] = {}
        self._edges: list[Edge] = []

    # === NODES ===

    @property
    def nodes(self) -> list[Node]:
        return list(self._nodes.values())

    @property
    def edges(self) -> list[Edge]:
        return list(self._edges)

    def add_node(self, node: Node | NodeTemplate) -> Node:
        """Add a node, or a fresh instance of a template. Returns the added node."""
        if not isinstance(node, Node):
            node = node.instantiate()
        if node.id in self._nodes:
            raise GraphError(f"Node '{node.id}' is already part of the graph")
        self._nodes[node.id] = node
        logger.debug(f"Added node {node.title} ({node.id})")
        return node

    def get_node(self, node_id: str) -> Node | None:
        return self._nodes.get(node_id)

    def owner_of(self, pin: Pin) -> Node:
        """The node that owns ``pin``; raises GraphError for a foreign pin."""
        node = self._nodes.get(pin.node_id)
        if node is None:
            raise GraphError(f"Pin '{pin.name}' belongs to node '{pin.node_id}' outside this graph")
        return node

    def remove_node(self, node: Node) -> None:
        """Delete a node together with every edge touching it."""
        if node.id not in self._nodes:
            return
        before = len(self._edges)
        self._edges = [e for e in self._edges if not e.touches(node.id)]
        del self._nodes[node.id]
        logger.debug(f"Removed node {node.title} and {before - len(self._edges)} edge(s)")
        if self.log_sink is not None:
            self.log_sink.log(f"Deleted node: {node.title}", LogSeverity.INFO)

    # === EDGES ===

    def connect(self, pin_a: Pin, pin_b: Pin) -> Edge:
        """
        Commit an edge between two pins, in either order.

        The OUTPUT pin becomes the source. Any edge already targeting the
        INPUT pin is dropped first, so an input never has two drivers.

        Raises:
            GraphError: if either pin's node is not in this graph
            IncompatiblePinsError: if the pins cannot be connected
        """
        self.owner_of(pin_a)
        self.owner_of(pin_b)
        if not can_connect(pin_a, pin_b):
            raise IncompatiblePinsError(pin_a, pin_b)

        source, target = (pin_a, pin_b) if pin_a.is_output else (pin_b, pin_a)
        self._edges = [e for e in self._edges if e.to_pin is None or e.to_pin.id != target.id]

        edge = Edge(from_pin=source, to_pin=target)
        self._edges.append(edge)
        return edge

    def disconnect(self, edge: Edge) -> bool:
        """Remove an edge. Returns True if it was part of the graph."""
        remaining = [e for e in self._edges if e.id != edge.id]
        removed = len(remaining) != len(self._edges)
        self._edges = remaining
        return removed

    def begin_connection(self, pin: Pin) -> Edge:
        """Start a draft edge from ``pin``. The draft is not stored in the graph."""
        self.owner_of(pin)
        return Edge(from_pin=pin)

    def complete_connection(self, draft: Edge, target: Pin) -> Edge:
        """Turn a draft into a committed edge ending at ``target``."""
        return self.connect(draft.from_pin, target)

    # === QUERIES ===

    def find_edge_by_source(self, pin: Pin) -> Edge | None:
        """First committed edge (insertion order) leaving ``pin``."""
        for edge in self._edges:
            if edge.from_pin.id == pin.id:
                return edge
        return None

    def find_edge_by_target(self, pin: Pin) -> Edge | None:
        """The committed edge entering ``pin``, if any."""
        for edge in self._edges:
            if edge.to_pin is not None and edge.to_pin.id == pin.id:
                return edge
        return None

    def find_edges_by_source(self, pin: Pin) -> list[Edge]:
        return [e for e in self._edges if e.from_pin.id == pin.id]

    def find_pin(
        self,
        node: Node,
        direction: PinDirection,
        type: PinType | None,
        name: str,
    ) -> Pin | None:
        return node.find_pin(direction, name, type)

    def list_source_nodes(self) -> list[Node]:
        """Event nodes, in the order they were added."""
        return [n for n in self._nodes.values() if n.is_event]

    def stats(self) -> dict[str, Any]:
        return {"nodes": len(self._nodes), "links": len(self._edges)}

    def validate(self) -> list[str]:
        """
        Check the structural invariants of the committed edges.

        Cycles are not looked for.
        """
        errors = []
        targeted: dict[str, str] = {}

        for edge in self._edges:
            if edge.to_pin is None:
                errors.append(f"Edge '{edge.id}' is a draft but was committed")
                continue
            for pin in (edge.from_pin, edge.to_pin):
                if pin.node_id not in self._nodes:
                    errors.append(f"Edge '{edge.id}' references missing node '{pin.node_id}'")
            if not can_connect(edge.from_pin, edge.to_pin):
                errors.append(
                    f"Edge '{edge.id}' joins incompatible pins "
                    f"'{edge.from_pin.name}' and '{edge.to_pin.name}'"
                )
            if edge.to_pin.id in targeted:
                errors.append(
                    f"Input pin '{edge.to_pin.name}' on node '{edge.to_pin.node_id}' is targeted "
                    f"by edges '{targeted[edge.to_pin.id]}' and '{edge.id}'"
                )
            else:
                targeted[edge.to_pin.id] = edge.id

        return errors
