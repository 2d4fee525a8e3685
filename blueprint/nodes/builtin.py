"""
Built-in node types.

Events:       EVENT (On Begin Play)
Flow Control: DELAY, FOR_LOOP, BRANCH
Utilities:    PRINT
Constants:    INTEGER_LITERAL
String:       APPEND, MULTI_LINE_STRING, NUMBER_TO_STRING
Math:         ADD, SUBTRACT, MULTIPLY

Values coming out of unconnected inputs are whatever the user typed into the
node, so numeric nodes coerce loosely: text is read up to the first character
that cannot continue a number ("3abc" is 3), booleans and None are not
numbers, and anything without a numeric prefix counts as 0.
"""

import asyncio
import math
import re
from collections.abc import Callable
from typing import Any

from blueprint.graph.node import EVENT_CATEGORY, NodeContext
from blueprint.graph.pin import Pin, PinConfig, PinType
from blueprint.nodes.library import NodeLibrary, NodeTemplate
from blueprint.runtime.log_sink import LogSeverity

# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def to_number(value: Any) -> float:
    """Leading decimal number of ``value``, 0.0 when there is none."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        number = float(value)
    else:
        match = _FLOAT_PREFIX.match(str(value))
        if match is None:
            return 0.0
        number = float(match.group(1).replace("Infinity", "inf"))
    return 0.0 if math.isnan(number) else number


def to_int(value: Any, default: int | None = 0) -> int | None:
    """Leading integer of ``value`` (truncating numbers), ``default`` when there is none."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int | float):
        return int(value) if math.isfinite(value) else default
    match = _INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else default


def to_text(value: Any) -> str:
    """Render a pin value the way the output log shows it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _tidy(number: float) -> int | float:
    return int(number) if number.is_integer() else number


# ---------------------------------------------------------------------------
# Behaviors
# ---------------------------------------------------------------------------


async def _begin_play(ctx: NodeContext, pin: Pin | None) -> None:
    await ctx.trigger_output("")


async def _delay(ctx: NodeContext, pin: Pin | None) -> None:
    duration = to_number(await ctx.get_input("Duration"))
    await asyncio.sleep(max(duration, 0.0))
    await ctx.trigger_output("Completed")


async def _print_string(ctx: NodeContext, pin: Pin | None) -> None:
    message = await ctx.get_input("In String")
    ctx.log(to_text(message), LogSeverity.SUCCESS)
    await ctx.trigger_output("")


async def _for_loop(ctx: NodeContext, pin: Pin | None) -> None:
    first = to_int(await ctx.get_input("First Index"), default=None)
    last = to_int(await ctx.get_input("Last Index"), default=None)

    if first is not None and last is not None:
        for i in range(first, last + 1):
            ctx.state["current_index"] = i
            await ctx.trigger_output("Loop Body")

    await ctx.trigger_output("Completed")


async def _loop_index(ctx: NodeContext, pin_name: str) -> Any:
    if pin_name == "Index":
        return ctx.state.get("current_index", 0)
    return 0


async def _branch(ctx: NodeContext, pin: Pin | None) -> None:
    condition = bool(await ctx.get_input("Condition"))
    await ctx.trigger_output("True" if condition else "False")


async def _integer_value(ctx: NodeContext, pin_name: str) -> int:
    return to_int(ctx.default_values.get("Value"), default=0)


async def _string_value(ctx: NodeContext, pin_name: str) -> str:
    return ctx.default_values.get("Value") or ""


async def _number_to_string(ctx: NodeContext, pin_name: str) -> str:
    return to_text(_tidy(to_number(await ctx.get_input("Value"))))


async def _append(ctx: NodeContext, pin_name: str) -> str:
    a = await ctx.get_input("A")
    b = await ctx.get_input("B")
    return to_text(a) + to_text(b)


def _binary_math(op: Callable[[float, float], float]):
    async def resolve(ctx: NodeContext, pin_name: str) -> int | float:
        a = to_number(await ctx.get_input("A"))
        b = to_number(await ctx.get_input("B"))
        return _tidy(op(a, b))

    return resolve


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

EXEC_IN = PinConfig(name="", type=PinType.EXEC)
EXEC_OUT = PinConfig(name="", type=PinType.EXEC)


def _math_template(title: str, op: Callable[[float, float], float]) -> NodeTemplate:
    return NodeTemplate(
        title=title,
        category="Math",
        inputs=[PinConfig(name="A", type=PinType.NUMBER), PinConfig(name="B", type=PinType.NUMBER)],
        outputs=[PinConfig(name="Result", type=PinType.NUMBER)],
        default_values={"A": 0, "B": 0},
        resolve_output=_binary_math(op),
    )


BUILTIN_NODES: dict[str, NodeTemplate] = {
    "EVENT": NodeTemplate(
        title="On Begin Play",
        category=EVENT_CATEGORY,
        outputs=[EXEC_OUT],
        on_execute=_begin_play,
    ),
    "DELAY": NodeTemplate(
        title="Delay",
        category="Flow Control",
        inputs=[EXEC_IN, PinConfig(name="Duration", type=PinType.NUMBER)],
        outputs=[PinConfig(name="Completed", type=PinType.EXEC)],
        default_values={"Duration": 1.0},
        on_execute=_delay,
    ),
    "PRINT": NodeTemplate(
        title="Print String",
        category="Utilities",
        inputs=[EXEC_IN, PinConfig(name="In String", type=PinType.STRING)],
        outputs=[EXEC_OUT],
        default_values={"In String": "Hello World"},
        on_execute=_print_string,
    ),
    "FOR_LOOP": NodeTemplate(
        title="For Loop",
        category="Flow Control",
        inputs=[
            EXEC_IN,
            PinConfig(name="First Index", type=PinType.NUMBER),
            PinConfig(name="Last Index", type=PinType.NUMBER),
        ],
        outputs=[
            PinConfig(name="Loop Body", type=PinType.EXEC),
            PinConfig(name="Index", type=PinType.NUMBER),
            PinConfig(name="Completed", type=PinType.EXEC),
        ],
        default_values={"First Index": 0, "Last Index": 5},
        on_execute=_for_loop,
        resolve_output=_loop_index,
    ),
    "INTEGER_LITERAL": NodeTemplate(
        title="Integer",
        category="Constants",
        outputs=[PinConfig(name="Value", type=PinType.NUMBER)],
        default_values={"Value": 0},
        resolve_output=_integer_value,
    ),
    "APPEND": NodeTemplate(
        title="Append Strings",
        category="String",
        inputs=[PinConfig(name="A", type=PinType.STRING), PinConfig(name="B", type=PinType.STRING)],
        outputs=[PinConfig(name="Result", type=PinType.STRING)],
        default_values={"A": "", "B": ""},
        resolve_output=_append,
    ),
    "MULTI_LINE_STRING": NodeTemplate(
        title="String (Multi-line)",
        category="String",
        outputs=[PinConfig(name="Value", type=PinType.STRING)],
        default_values={"Value": ""},
        resolve_output=_string_value,
    ),
    "NUMBER_TO_STRING": NodeTemplate(
        title="Number To String",
        category="String",
        inputs=[PinConfig(name="Value", type=PinType.NUMBER)],
        outputs=[PinConfig(name="Result", type=PinType.STRING)],
        default_values={"Value": 0},
        resolve_output=_number_to_string,
    ),
    "ADD": _math_template("Add", lambda a, b: a + b),
    "SUBTRACT": _math_template("Subtract", lambda a, b: a - b),
    "MULTIPLY": _math_template("Multiply", lambda a, b: a * b),
    "BRANCH": NodeTemplate(
        title="Branch",
        category="Flow Control",
        inputs=[EXEC_IN, PinConfig(name="Condition", type=PinType.BOOLEAN)],
        outputs=[PinConfig(name="True", type=PinType.EXEC), PinConfig(name="False", type=PinType.EXEC)],
        on_execute=_branch,
    ),
}


def register_builtin_nodes(library: NodeLibrary) -> None:
    for key, template in BUILTIN_NODES.items():
        library.register(key, template)
