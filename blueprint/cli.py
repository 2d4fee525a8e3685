"""
Command-line interface for the blueprint engine.

Usage:
    blueprint nodes
    blueprint demo [--fast]
    blueprint loop --first 0 --last 2 [--fast]
"""

import argparse
import asyncio
import sys

from blueprint.config import EngineConfig, get_logging_settings
from blueprint.graph import Graph, PinDirection
from blueprint.nodes import NodeLibrary
from blueprint.observability import configure_logging
from blueprint.runtime import LogSeverity, MemoryLogSink, NullVisitor
from blueprint.runtime.coordinator import RunCoordinator, RunResult


def build_demo_graph(library: NodeLibrary) -> Graph:
    """The editor's starting graph: On Begin Play → Print String."""
    graph = Graph()
    event = graph.add_node(library.create("EVENT"))
    printer = graph.add_node(library.create("PRINT"))
    graph.connect(event.outputs[0], printer.inputs[0])
    return graph


def build_loop_graph(library: NodeLibrary, first: int, last: int) -> Graph:
    """On Begin Play → For Loop, printing each Index, then "Done" on Completed."""
    graph = Graph()
    event = graph.add_node(library.create("EVENT"))
    loop = graph.add_node(library.create("FOR_LOOP"))
    to_string = graph.add_node(library.create("NUMBER_TO_STRING"))
    body = graph.add_node(library.create("PRINT"))
    done = graph.add_node(library.create("PRINT"))

    loop.default_values["First Index"] = first
    loop.default_values["Last Index"] = last
    done.default_values["In String"] = "Done"

    out, into = PinDirection.OUTPUT, PinDirection.INPUT
    graph.connect(event.find_pin(out, ""), loop.find_pin(into, ""))
    graph.connect(loop.find_pin(out, "Loop Body"), body.find_pin(into, ""))
    graph.connect(loop.find_pin(out, "Index"), to_string.find_pin(into, "Value"))
    graph.connect(to_string.find_pin(out, "Result"), body.find_pin(into, "In String"))
    graph.connect(loop.find_pin(out, "Completed"), done.find_pin(into, ""))
    return graph


def _run(graph: Graph, fast: bool) -> int:
    sink = MemoryLogSink()
    sink.log("Blueprint Engine initialized.", LogSeverity.SYSTEM)
    coordinator = RunCoordinator(
        visitor=NullVisitor() if fast else None,
        log_sink=sink,
        config=EngineConfig(),
    )
    result: RunResult = asyncio.run(coordinator.run(graph))
    return 0 if result.success else 1


def cmd_nodes(args: argparse.Namespace) -> int:
    library = NodeLibrary.with_builtins()
    for category, keys in library.categories().items():
        print(category)
        for key in keys:
            print(f"  {key:<20} {library.get(key).title}")
    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    return _run(build_demo_graph(NodeLibrary.with_builtins()), args.fast)


def cmd_loop(args: argparse.Namespace) -> int:
    return _run(build_loop_graph(NodeLibrary.with_builtins(), args.first, args.last), args.fast)


def main(argv: list[str] | None = None) -> None:
    settings = get_logging_settings()

    parser = argparse.ArgumentParser(
        prog="blueprint",
        description="Blueprint - run visual node graphs",
    )
    parser.add_argument("--log-level", default=settings["level"], help="Python log level")
    parser.add_argument(
        "--log-format",
        default=settings["format"],
        choices=["auto", "json", "human"],
        help="Log output format",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    nodes_parser = subparsers.add_parser("nodes", help="List the built-in node types")
    nodes_parser.set_defaults(func=cmd_nodes)

    demo_parser = subparsers.add_parser("demo", help="Run On Begin Play → Print String")
    demo_parser.add_argument("--fast", action="store_true", help="Skip visit delays")
    demo_parser.set_defaults(func=cmd_demo)

    loop_parser = subparsers.add_parser("loop", help="Run a For Loop printing each index")
    loop_parser.add_argument("--first", type=int, default=0, help="First index")
    loop_parser.add_argument("--last", type=int, default=2, help="Last index (inclusive)")
    loop_parser.add_argument("--fast", action="store_true", help="Skip visit delays")
    loop_parser.set_defaults(func=cmd_loop)

    args = parser.parse_args(argv)
    configure_logging(level=args.log_level, format=args.log_format)

    if hasattr(args, "func"):
        sys.exit(args.func(args))


if __name__ == "__main__":
    main()
