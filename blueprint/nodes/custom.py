"""
User-defined node types.

Nodes defined at runtime by the user live here, next to the built-in set.
They start out as plain declarations: pins and a category, no behavior, so
executing one only passes control through and resolving one yields None.
"""

from blueprint.graph.pin import PinConfig, PinType
from blueprint.nodes.library import NodeLibrary, NodeTemplate

CUSTOM_CATEGORY = "Custom"

CUSTOM_NODES: dict[str, NodeTemplate] = {
    "MY_MACRO": NodeTemplate(
        title="My Custom Function",
        category=CUSTOM_CATEGORY,
        inputs=[PinConfig(name="Input A", type=PinType.STRING)],
        outputs=[PinConfig(name="Output", type=PinType.STRING)],
    ),
}


def register_custom_nodes(
    library: NodeLibrary, nodes: dict[str, NodeTemplate] | None = None
) -> None:
    """Register ``nodes`` (the default custom set when omitted) after the built-ins."""
    for key, template in (CUSTOM_NODES if nodes is None else nodes).items():
        library.register(key, template)
