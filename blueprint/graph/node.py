"""
Node Protocol - Units of computation in a blueprint graph.

A node owns an ordered list of pins, a behavior, editable default values for
its inputs and a private scratch ``state`` that only its own behavior touches
(a loop keeps its current index there).

Behaviors are capability-tagged:

- PASSIVE: no handlers; executing the node just fires its unnamed EXEC output
- EXECUTABLE: has ``on_execute`` (control-flow side effect)
- RESOLVABLE: has ``resolve_output`` (computes data pin values)
- BOTH: has both handlers

The engine dispatches on ``NodeBehavior.kind``.
"""

from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from blueprint.graph.pin import Pin, PinConfig, PinDirection, PinType

if TYPE_CHECKING:
    from blueprint.graph.engine import ExecutionEngine
    from blueprint.runtime.log_sink import LogSeverity

EVENT_CATEGORY = "Events"

ExecuteHandler = Callable[["NodeContext", Pin | None], Awaitable[None]]
ResolveHandler = Callable[["NodeContext", str], Awaitable[Any]]
InitHandler = Callable[["Node"], None]


class BehaviorKind(StrEnum):
    """Which capabilities a node behavior provides."""

    PASSIVE = "passive"
    EXECUTABLE = "executable"
    RESOLVABLE = "resolvable"
    BOTH = "both"


@dataclass
class NodeBehavior:
    """Handlers supplied by a node type, tagged with the capabilities present."""

    on_execute: ExecuteHandler | None = None
    resolve_output: ResolveHandler | None = None
    on_init: InitHandler | None = None
    kind: BehaviorKind = field(init=False)

    def __post_init__(self) -> None:
        if self.on_execute and self.resolve_output:
            self.kind = BehaviorKind.BOTH
        elif self.on_execute:
            self.kind = BehaviorKind.EXECUTABLE
        elif self.resolve_output:
            self.kind = BehaviorKind.RESOLVABLE
        else:
            self.kind = BehaviorKind.PASSIVE

    @property
    def can_execute(self) -> bool:
        return self.kind in (BehaviorKind.EXECUTABLE, BehaviorKind.BOTH)

    @property
    def can_resolve(self) -> bool:
        return self.kind in (BehaviorKind.RESOLVABLE, BehaviorKind.BOTH)


def _new_node_id() -> str:
    return f"node-{uuid.uuid4().hex}"


@dataclass
class Node:
    """A placed node instance."""

    title: str
    category: str = ""
    behavior: NodeBehavior = field(default_factory=NodeBehavior)
    id: str = field(default_factory=_new_node_id)
    pins: list[Pin] = field(default_factory=list)
    default_values: dict[str, Any] = field(default_factory=dict)
    state: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        title: str,
        inputs: list[PinConfig] | None = None,
        outputs: list[PinConfig] | None = None,
        *,
        category: str = "",
        behavior: NodeBehavior | None = None,
        default_values: dict[str, Any] | None = None,
    ) -> Node:
        """Create a node and its pins (inputs first, then outputs), then run ``on_init``."""
        node = cls(
            title=title,
            category=category,
            behavior=behavior or NodeBehavior(),
            default_values=dict(default_values or {}),
        )
        for config in inputs or []:
            node.pins.append(
                Pin(name=config.name, type=config.type, direction=PinDirection.INPUT, node_id=node.id)
            )
        for config in outputs or []:
            node.pins.append(
                Pin(name=config.name, type=config.type, direction=PinDirection.OUTPUT, node_id=node.id)
            )
        if node.behavior.on_init:
            node.behavior.on_init(node)
        return node

    @property
    def is_event(self) -> bool:
        """Event nodes have no driving control input and start a run."""
        return self.category == EVENT_CATEGORY

    @property
    def inputs(self) -> list[Pin]:
        return [p for p in self.pins if p.is_input]

    @property
    def outputs(self) -> list[Pin]:
        return [p for p in self.pins if p.is_output]

    def find_pin(
        self,
        direction: PinDirection,
        name: str,
        type: PinType | None = None,
    ) -> Pin | None:
        """First pin matching direction and name (and type, when given)."""
        for pin in self.pins:
            if pin.direction != direction or pin.name != name:
                continue
            if type is not None and pin.type != type:
                continue
            return pin
        return None

    def __repr__(self) -> str:
        return f"Node(id={self.id!r}, title={self.title!r}, kind={self.behavior.kind.value})"


@dataclass
class NodeContext:
    """
    What a behavior handler sees while it runs.

    Bound to one node and the engine executing it, so handlers can pull
    inputs, fire outputs and write to the run log without touching the graph.
    """

    node: Node
    engine: ExecutionEngine

    @property
    def state(self) -> dict[str, Any]:
        return self.node.state

    @property
    def default_values(self) -> dict[str, Any]:
        return self.node.default_values

    async def get_input(self, pin_name: str) -> Any:
        return await self.engine.resolve_input(self.node, pin_name)

    async def trigger_output(self, pin_name: str = "") -> None:
        await self.engine.trigger_output(self.node, pin_name)

    def log(self, message: str, severity: LogSeverity | str = "info") -> None:
        self.engine.log_sink.log(message, severity)
