"""
Pins - Typed terminals on a node.

A pin has a direction (INPUT or OUTPUT) and a type. EXEC pins carry control
flow; every other type carries data. Two pins can be joined by an edge only
when they sit on different nodes, point in opposite directions and share the
same type.
"""

import uuid
from enum import StrEnum

from pydantic import BaseModel, Field


class PinType(StrEnum):
    """What travels through a pin."""

    EXEC = "EXEC"  # Execution flow
    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    ANY = "ANY"


class PinDirection(StrEnum):
    """Direction of data or control flow."""

    INPUT = "INPUT"
    OUTPUT = "OUTPUT"


def _new_pin_id() -> str:
    return f"pin-{uuid.uuid4().hex}"


class PinConfig(BaseModel):
    """Pin declaration inside a node template (name and type only)."""

    name: str = ""
    type: PinType

    model_config = {"frozen": True}


class Pin(BaseModel):
    """
    A concrete pin owned by one node.

    Immutable after creation. Identity is the process-wide unique ``id``;
    the owning node is referenced by ``node_id``.
    """

    id: str = Field(default_factory=_new_pin_id)
    name: str = ""
    type: PinType
    direction: PinDirection
    node_id: str = Field(description="ID of the node that owns this pin")

    model_config = {"frozen": True}

    @property
    def is_input(self) -> bool:
        return self.direction == PinDirection.INPUT

    @property
    def is_output(self) -> bool:
        return self.direction == PinDirection.OUTPUT

    @property
    def is_exec(self) -> bool:
        return self.type == PinType.EXEC

    def __repr__(self) -> str:
        return (
            f"Pin(name={self.name!r}, type={self.type.value}, "
            f"direction={self.direction.value}, node_id={self.node_id!r})"
        )


def can_connect(a: Pin, b: Pin) -> bool:
    """
    Check whether an edge between two pins is legal.

    Used both when committing an edge and for drag-hover feedback.
    """
    return a.node_id != b.node_id and a.direction != b.direction and a.type == b.type
