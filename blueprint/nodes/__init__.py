"""Node-type catalog: the built-in node set and user-defined custom nodes."""

from blueprint.nodes.builtin import BUILTIN_NODES, register_builtin_nodes
from blueprint.nodes.custom import CUSTOM_NODES, register_custom_nodes
from blueprint.nodes.library import NodeLibrary, NodeTemplate

__all__ = [
    "BUILTIN_NODES",
    "CUSTOM_NODES",
    "NodeLibrary",
    "NodeTemplate",
    "register_builtin_nodes",
    "register_custom_nodes",
]
