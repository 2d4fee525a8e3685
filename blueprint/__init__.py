"""
Blueprint - Execution engine for visual node graphs.

Nodes are wired together through typed pins. EXEC edges sequence side
effects; data edges are pulled on demand when a node reads an input.
"""

__version__ = "0.1.0"

from blueprint.graph import (
    BehaviorKind,
    BlueprintError,
    CycleDetectedError,
    DepthLimitError,
    Edge,
    ExecutionEngine,
    Graph,
    GraphError,
    IncompatiblePinsError,
    Node,
    NodeBehavior,
    NodeContext,
    Pin,
    PinConfig,
    PinDirection,
    PinType,
    UnknownNodeTypeError,
    can_connect,
)
from blueprint.nodes import NodeLibrary, NodeTemplate
from blueprint.runtime import (
    EventBus,
    EventType,
    LogSeverity,
    MemoryLogSink,
    NullVisitor,
    TimedVisitor,
)
from blueprint.runtime.coordinator import RunCoordinator, RunResult

__all__ = [
    "__version__",
    "Pin",
    "PinConfig",
    "PinDirection",
    "PinType",
    "can_connect",
    "Edge",
    "Node",
    "NodeBehavior",
    "NodeContext",
    "BehaviorKind",
    "Graph",
    "ExecutionEngine",
    "RunCoordinator",
    "RunResult",
    "NodeLibrary",
    "NodeTemplate",
    "EventBus",
    "EventType",
    "LogSeverity",
    "MemoryLogSink",
    "NullVisitor",
    "TimedVisitor",
    "BlueprintError",
    "GraphError",
    "IncompatiblePinsError",
    "UnknownNodeTypeError",
    "CycleDetectedError",
    "DepthLimitError",
]
