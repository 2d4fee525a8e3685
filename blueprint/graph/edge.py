"""
Edges - Directed links between pins.

A committed edge always runs from an OUTPUT pin to an INPUT pin. An edge whose
``to_pin`` is still missing is a *draft*: the line the user drags around while
choosing a target. Drafts live only in the editing surface; the graph never
stores them and the engine never sees them.
"""

import uuid
from enum import StrEnum

from pydantic import BaseModel, Field, model_validator

from blueprint.graph.pin import Pin, PinDirection, can_connect


def _new_edge_id() -> str:
    return f"conn-{uuid.uuid4().hex}"


class ConnectionFeedback(StrEnum):
    """Hover feedback shown on a pin while a draft edge is dragged over it."""

    VALID = "valid"
    INVALID = "invalid"


class Edge(BaseModel):
    """
    A link from one OUTPUT pin to one INPUT pin.

    Examples:
        # Committed edge
        Edge(from_pin=event_out, to_pin=print_in)

        # Draft edge under construction
        Edge(from_pin=event_out)
    """

    id: str = Field(default_factory=_new_edge_id)
    from_pin: Pin = Field(description="Source pin the edge was dragged from")
    to_pin: Pin | None = Field(default=None, description="Target pin, None while drafting")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_directions(self) -> "Edge":
        if self.to_pin is None:
            return self
        if self.from_pin.direction != PinDirection.OUTPUT:
            raise ValueError(f"Edge '{self.id}' must start at an OUTPUT pin")
        if self.to_pin.direction != PinDirection.INPUT:
            raise ValueError(f"Edge '{self.id}' must end at an INPUT pin")
        return self

    @property
    def is_draft(self) -> bool:
        return self.to_pin is None

    def touches(self, node_id: str) -> bool:
        """True if either end of the edge belongs to the given node."""
        if self.from_pin.node_id == node_id:
            return True
        return self.to_pin is not None and self.to_pin.node_id == node_id


def connection_feedback(draft: Edge, target: Pin) -> ConnectionFeedback:
    """Feedback for hovering a draft edge over ``target``."""
    if can_connect(draft.from_pin, target):
        return ConnectionFeedback.VALID
    return ConnectionFeedback.INVALID
