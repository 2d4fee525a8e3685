"""Graph-building helpers for blueprint tests."""

from blueprint.graph import Node, NodeBehavior, Pin, PinConfig, PinDirection, PinType


def pin(node: Node, direction: str, name: str = "") -> Pin:
    """Look up a pin by direction and name, failing loudly in tests."""
    found = node.find_pin(PinDirection(direction), name)
    assert found is not None, f"{node.title} has no {direction} pin {name!r}"
    return found


def make_node(
    title: str,
    inputs: list[tuple[str, PinType]] | None = None,
    outputs: list[tuple[str, PinType]] | None = None,
    *,
    on_execute=None,
    resolve_output=None,
    category: str = "",
    default_values: dict | None = None,
) -> Node:
    """Build an ad-hoc node for a test."""
    return Node.build(
        title,
        inputs=[PinConfig(name=n, type=t) for n, t in inputs or []],
        outputs=[PinConfig(name=n, type=t) for n, t in outputs or []],
        category=category,
        behavior=NodeBehavior(on_execute=on_execute, resolve_output=resolve_output),
        default_values=default_values,
    )


def printer(library, graph, text: str) -> Node:
    """Add a Print String node with the given text."""
    node = graph.add_node(library.create("PRINT"))
    node.default_values["In String"] = text
    return node


def chain(graph, *nodes: Node) -> None:
    """Wire the unnamed EXEC output of each node to the EXEC input of the next."""
    for upstream, downstream in zip(nodes, nodes[1:], strict=False):
        graph.connect(pin(upstream, "OUTPUT"), pin(downstream, "INPUT"))
