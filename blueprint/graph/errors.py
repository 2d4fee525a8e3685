"""Exceptions raised by the blueprint graph and engine."""


class BlueprintError(Exception):
    """Base class for all blueprint errors."""

    pass


class GraphError(BlueprintError):
    """Raised when the graph editing API is misused (unknown node, foreign pin)."""

    pass


class IncompatiblePinsError(GraphError):
    """Raised when two pins cannot be joined by an edge."""

    def __init__(self, source, target):
        self.source = source
        self.target = target
        super().__init__(
            f"Cannot connect {source.direction} {source.type} pin '{source.name}' "
            f"to {target.direction} {target.type} pin '{target.name}'"
        )


class UnknownNodeTypeError(BlueprintError, KeyError):
    """Raised when a node library has no template under the requested key."""

    def __init__(self, key: str, available: list[str]):
        self.key = key
        self.available = available
        super().__init__(f"Unknown node type: {key!r}. Registered: {', '.join(available)}")

    def __str__(self) -> str:
        return self.args[0]


class CycleDetectedError(BlueprintError):
    """
    Raised when a run re-enters a node that is still active.

    The graph itself is never checked for cycles. A control-flow cycle shows up
    as a node being executed again before its own execution has returned; a
    data cycle as an output being resolved again while its resolution is still
    pending.
    """

    def __init__(self, kind: str, node_id: str, pin_name: str | None = None):
        self.kind = kind
        self.node_id = node_id
        self.pin_name = pin_name
        target = f"node '{node_id}'"
        if pin_name is not None:
            target = f"output '{pin_name}' of {target}"
        super().__init__(f"{kind} cycle detected: {target} was re-entered while still active")


class DepthLimitError(BlueprintError):
    """Raised when execution or resolution nests deeper than the configured limit."""

    def __init__(self, kind: str, node_id: str, depth: int):
        self.kind = kind
        self.node_id = node_id
        self.depth = depth
        super().__init__(f"{kind} depth limit ({depth}) exceeded at node '{node_id}'")
