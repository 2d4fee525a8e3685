"""
Tests for the node library and the built-in node set.
"""

import math

import pytest

from blueprint.graph import BehaviorKind, ExecutionEngine, PinConfig, PinType, UnknownNodeTypeError
from blueprint.nodes import BUILTIN_NODES, CUSTOM_NODES, NodeLibrary, NodeTemplate
from blueprint.nodes.builtin import to_int, to_number, to_text
from blueprint.runtime import LogSeverity
from tests.helpers import chain, pin, printer

# ---------------------------------------------------------------------------
# Library
# ---------------------------------------------------------------------------


class TestNodeLibrary:
    def test_builtins_are_registered(self, library):
        assert len(library) == len(BUILTIN_NODES) + len(CUSTOM_NODES)
        for key in ("EVENT", "PRINT", "FOR_LOOP", "ADD", "BRANCH"):
            assert key in library

    def test_custom_nodes_sit_next_to_builtins(self, library):
        node = library.create("MY_MACRO")

        assert node.title == "My Custom Function"
        assert node.category == "Custom"
        assert node.behavior.kind == BehaviorKind.PASSIVE
        assert library.categories()["Custom"] == ["MY_MACRO"]

    def test_with_builtins_takes_its_own_custom_set(self):
        extra = {
            "GREETING": NodeTemplate(
                title="Greeting",
                category="Custom",
                outputs=[PinConfig(name="Text", type=PinType.STRING)],
            )
        }

        library = NodeLibrary.with_builtins(extra)

        assert "GREETING" in library
        assert "MY_MACRO" not in library
        assert len(library) == len(BUILTIN_NODES) + 1

    def test_unknown_key_raises_key_error(self, library):
        with pytest.raises(KeyError):
            library.create("TELEPORT")
        with pytest.raises(UnknownNodeTypeError, match="TELEPORT"):
            library.create("TELEPORT")

    def test_nodes_get_independent_defaults(self, library):
        a = library.create("PRINT")
        b = library.create("PRINT")
        a.default_values["In String"] = "changed"

        assert b.default_values["In String"] == "Hello World"
        assert library.get("PRINT").default_values["In String"] == "Hello World"
        assert a.id != b.id

    def test_pins_follow_template_order(self, library):
        loop = library.create("FOR_LOOP")
        assert [(p.direction.value, p.name) for p in loop.pins] == [
            ("INPUT", ""),
            ("INPUT", "First Index"),
            ("INPUT", "Last Index"),
            ("OUTPUT", "Loop Body"),
            ("OUTPUT", "Index"),
            ("OUTPUT", "Completed"),
        ]

    def test_register_rejects_empty_key(self):
        with pytest.raises(ValueError):
            NodeLibrary().register("  ", NodeTemplate(title="Nothing"))

    def test_on_init_runs_once_per_instance(self):
        library = NodeLibrary()
        library.register(
            "COUNTER",
            NodeTemplate(
                title="Counter",
                outputs=[PinConfig(name="Count", type=PinType.NUMBER)],
                on_init=lambda node: node.state.setdefault("count", 0),
            ),
        )

        assert library.create("COUNTER").state == {"count": 0}

    def test_categories(self, library):
        categories = library.categories()
        assert categories["Events"] == ["EVENT"]
        assert set(categories["Math"]) == {"ADD", "SUBTRACT", "MULTIPLY"}

    @pytest.mark.parametrize(
        "key,kind",
        [
            ("EVENT", BehaviorKind.EXECUTABLE),
            ("PRINT", BehaviorKind.EXECUTABLE),
            ("FOR_LOOP", BehaviorKind.BOTH),
            ("ADD", BehaviorKind.RESOLVABLE),
            ("INTEGER_LITERAL", BehaviorKind.RESOLVABLE),
        ],
    )
    def test_behavior_kinds(self, library, key, kind):
        assert library.create(key).behavior.kind == kind


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


def test_coercion_helpers():
    assert to_number("2.5") == 2.5
    assert to_number("abc") == 0.0
    assert to_number(None) == 0.0
    assert to_int("4") == 4
    assert to_int("x", default=None) is None
    assert to_text(None) == ""
    assert to_text(True) == "true"
    assert to_text(3.0) == "3"
    assert to_text(2.5) == "2.5"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("3abc", 3),
        ("  -2.5e1x", -25),
        (".5", 0.5),
        ("Infinity", math.inf),
        ("1e", 1),
        (True, 0),
        ("", 0),
    ],
)
def test_to_number_reads_leading_number(value, expected):
    assert to_number(value) == expected


def test_to_int_reads_leading_integer():
    assert to_int("3.7") == 3
    assert to_int("12px") == 12
    assert to_int(-2.9) == -2
    assert to_int(True) == 0
    assert to_int(math.inf, default=None) is None


# ---------------------------------------------------------------------------
# Behaviors
# ---------------------------------------------------------------------------


@pytest.fixture
def engine(graph, visitor, sink, config):
    return ExecutionEngine(graph, visitor=visitor, log_sink=sink, config=config)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "key,a,b,expected",
    [
        ("ADD", 2, 3, 5),
        ("SUBTRACT", 2, 3, -1),
        ("MULTIPLY", 2.5, 4, 10),
        ("ADD", "x", 1, 1),
        ("ADD", "3abc", True, 3),
    ],
)
async def test_math_nodes(graph, library, engine, key, a, b, expected):
    node = graph.add_node(library.create(key))
    node.default_values.update({"A": a, "B": b})

    assert await engine.resolve_output(node, "Result") == expected


@pytest.mark.asyncio
async def test_append_and_multi_line_string(graph, library, engine):
    text = graph.add_node(library.create("MULTI_LINE_STRING"))
    text.default_values["Value"] = "line one\nline two"
    append = graph.add_node(library.create("APPEND"))
    append.default_values["B"] = "!"
    graph.connect(pin(text, "OUTPUT", "Value"), pin(append, "INPUT", "A"))

    assert await engine.resolve_output(append, "Result") == "line one\nline two!"


@pytest.mark.asyncio
async def test_number_to_string(graph, library, engine):
    literal = graph.add_node(library.create("INTEGER_LITERAL"))
    literal.default_values["Value"] = 42
    convert = graph.add_node(library.create("NUMBER_TO_STRING"))
    graph.connect(pin(literal, "OUTPUT", "Value"), pin(convert, "INPUT", "Value"))

    assert await engine.resolve_output(convert, "Result") == "42"


@pytest.mark.asyncio
@pytest.mark.parametrize("condition,expected", [(True, ["yes"]), (False, ["no"])])
async def test_branch(graph, library, engine, sink, condition, expected):
    event = graph.add_node(library.create("EVENT"))
    branch = graph.add_node(library.create("BRANCH"))
    branch.default_values["Condition"] = condition
    chain(graph, event, branch)
    graph.connect(pin(branch, "OUTPUT", "True"), pin(printer(library, graph, "yes"), "INPUT"))
    graph.connect(pin(branch, "OUTPUT", "False"), pin(printer(library, graph, "no"), "INPUT"))

    await engine.execute_node(event)

    assert sink.messages(LogSeverity.SUCCESS) == expected


@pytest.mark.asyncio
async def test_delay_waits_then_completes(graph, library, engine, sink):
    delay = graph.add_node(library.create("DELAY"))
    delay.default_values["Duration"] = 0
    graph.connect(pin(delay, "OUTPUT", "Completed"), pin(printer(library, graph, "later"), "INPUT"))

    await engine.execute_node(delay)

    assert sink.messages(LogSeverity.SUCCESS) == ["later"]


@pytest.mark.asyncio
async def test_for_loop_index_outside_the_loop(graph, library, engine):
    loop = graph.add_node(library.create("FOR_LOOP"))

    assert await engine.resolve_output(loop, "Index") == 0

    loop.default_values.update({"First Index": 1, "Last Index": 3})
    await engine.execute_node(loop)

    assert await engine.resolve_output(loop, "Index") == 3


@pytest.mark.asyncio
async def test_for_loop_with_unparsable_bounds_skips_body(graph, library, engine, sink):
    loop = graph.add_node(library.create("FOR_LOOP"))
    loop.default_values["Last Index"] = "many"
    graph.connect(pin(loop, "OUTPUT", "Loop Body"), pin(printer(library, graph, "body"), "INPUT"))
    graph.connect(pin(loop, "OUTPUT", "Completed"), pin(printer(library, graph, "done"), "INPUT"))

    await engine.execute_node(loop)

    assert sink.messages(LogSeverity.SUCCESS) == ["done"]


@pytest.mark.asyncio
async def test_print_renders_numbers_without_trailing_zero(graph, library, engine, sink):
    add = graph.add_node(library.create("ADD"))
    add.default_values.update({"A": 1.5, "B": 1.5})
    convert = graph.add_node(library.create("NUMBER_TO_STRING"))
    graph.connect(pin(add, "OUTPUT", "Result"), pin(convert, "INPUT", "Value"))
    node = printer(library, graph, "unused")
    graph.connect(pin(convert, "OUTPUT", "Result"), pin(node, "INPUT", "In String"))

    await engine.execute_node(node)

    assert sink.messages(LogSeverity.SUCCESS) == ["3"]
