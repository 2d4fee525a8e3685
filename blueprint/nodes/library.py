"""
Node Library - Catalog of node templates.

A template describes a node type: its title and category, its pins, the
default values of its inputs and the behavior handlers. ``NodeLibrary.create``
turns a template into a fresh Node with its own pins, its own copy of the
default values and empty scratch state.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, Field

from blueprint.graph.errors import UnknownNodeTypeError
from blueprint.graph.node import Node, NodeBehavior
from blueprint.graph.pin import PinConfig

logger = logging.getLogger(__name__)


class NodeTemplate(BaseModel):
    """
    Specification of a node type.

    Example:
        NodeTemplate(
            title="Add",
            category="Math",
            inputs=[PinConfig(name="A", type=PinType.NUMBER),
                    PinConfig(name="B", type=PinType.NUMBER)],
            outputs=[PinConfig(name="Result", type=PinType.NUMBER)],
            default_values={"A": 0, "B": 0},
            resolve_output=add_numbers,
        )
    """

    title: str
    category: str = ""
    inputs: list[PinConfig] = Field(default_factory=list)
    outputs: list[PinConfig] = Field(default_factory=list)
    default_values: dict[str, Any] = Field(default_factory=dict)

    # Behavior handlers
    on_execute: Callable[..., Any] | None = Field(default=None, exclude=True)
    resolve_output: Callable[..., Any] | None = Field(default=None, exclude=True)
    on_init: Callable[..., Any] | None = Field(default=None, exclude=True)

    def behavior(self) -> NodeBehavior:
        return NodeBehavior(
            on_execute=self.on_execute,
            resolve_output=self.resolve_output,
            on_init=self.on_init,
        )

    def instantiate(self) -> Node:
        """Build a new node of this type."""
        return Node.build(
            self.title,
            inputs=self.inputs,
            outputs=self.outputs,
            category=self.category,
            behavior=self.behavior(),
            default_values=copy.deepcopy(self.default_values),
        )


class NodeLibrary:
    """Maps node-type keys (e.g. "PRINT") to templates."""

    def __init__(self) -> None:
        self._templates: dict[str, NodeTemplate] = {}

    @classmethod
    def with_builtins(cls, extra: dict[str, NodeTemplate] | None = None) -> NodeLibrary:
        """
        A library preloaded with the built-in node set and the custom nodes.

        Args:
            extra: Custom node templates to register instead of the default
                custom set. Keys shared with a built-in replace it.
        """
        from blueprint.nodes.builtin import register_builtin_nodes
        from blueprint.nodes.custom import register_custom_nodes

        library = cls()
        register_builtin_nodes(library)
        register_custom_nodes(library, extra)
        return library

    def register(self, key: str, template: NodeTemplate) -> None:
        if not key or not key.strip():
            raise ValueError("Node type key must be non-empty")
        key = key.strip()
        if key in self._templates:
            logger.warning(f"Node type {key!r} re-registered, replacing {self._templates[key].title!r}")
        self._templates[key] = template

    def get(self, key: str) -> NodeTemplate | None:
        return self._templates.get(key)

    def create(self, key: str) -> Node:
        """Instantiate a node of type ``key``."""
        template = self._templates.get(key)
        if template is None:
            raise UnknownNodeTypeError(key, sorted(self._templates))
        return template.instantiate()

    def keys(self) -> list[str]:
        return list(self._templates)

    def categories(self) -> dict[str, list[str]]:
        """Node-type keys grouped by category, in registration order."""
        grouped: dict[str, list[str]] = {}
        for key, template in self._templates.items():
            grouped.setdefault(template.category or "Uncategorized", []).append(key)
        return grouped

    def __contains__(self, key: str) -> bool:
        return key in self._templates

    def __len__(self) -> int:
        return len(self._templates)
