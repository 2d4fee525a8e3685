"""Graph structures: Pins, Nodes, Edges, the Graph aggregate and the Execution Engine."""

from blueprint.graph.edge import ConnectionFeedback, Edge, connection_feedback
from blueprint.graph.engine import ExecutionEngine
from blueprint.graph.errors import (
    BlueprintError,
    CycleDetectedError,
    DepthLimitError,
    GraphError,
    IncompatiblePinsError,
    UnknownNodeTypeError,
)
from blueprint.graph.graph import Graph
from blueprint.graph.node import BehaviorKind, Node, NodeBehavior, NodeContext
from blueprint.graph.pin import Pin, PinConfig, PinDirection, PinType, can_connect

__all__ = [
    # Pin
    "Pin",
    "PinConfig",
    "PinDirection",
    "PinType",
    "can_connect",
    # Edge
    "Edge",
    "ConnectionFeedback",
    "connection_feedback",
    # Node
    "Node",
    "NodeBehavior",
    "NodeContext",
    "BehaviorKind",
    # Graph
    "Graph",
    # Engine
    "ExecutionEngine",
    # Errors
    "BlueprintError",
    "GraphError",
    "IncompatiblePinsError",
    "UnknownNodeTypeError",
    "CycleDetectedError",
    "DepthLimitError",
]
