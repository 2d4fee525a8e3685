"""
Run Coordinator - Starts a blueprint run.

The coordinator:
1. Finds the source (event) nodes of the graph
2. Executes each one to completion, strictly one after another
3. Reports lifecycle lines to the run log and events to the bus
4. Returns a RunResult

A run never raises. Faults inside a source's subtree (including a detected
cycle or an exceeded depth limit) are logged with severity ``error``, that
subtree is abandoned and the next source starts.
"""

import logging
import time
import uuid
from dataclasses import dataclass, field

from blueprint.config import EngineConfig
from blueprint.graph.engine import ExecutionEngine
from blueprint.graph.errors import CycleDetectedError, DepthLimitError
from blueprint.graph.graph import Graph
from blueprint.observability import set_trace_context
from blueprint.runtime.event_bus import EventBus
from blueprint.runtime.log_sink import LogSeverity, LogSink, MemoryLogSink
from blueprint.runtime.visitor import TimedVisitor, Visitor

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Result of running a graph."""

    run_id: str
    success: bool
    sources_run: list[str] = field(default_factory=list)  # Source node IDs, in order
    nodes_executed: list[str] = field(default_factory=list)  # Node IDs passed to execute_node
    errors: list[str] = field(default_factory=list)
    duration_ms: int = 0

    @property
    def error(self) -> str | None:
        return "; ".join(self.errors) if self.errors else None


class RunCoordinator:
    """
    Runs every event node of a graph, in discovery order.

    Example:
        sink = MemoryLogSink()
        coordinator = RunCoordinator(visitor=NullVisitor(), log_sink=sink)
        result = await coordinator.run(graph)
        print(sink.messages("success"))
    """

    def __init__(
        self,
        visitor: Visitor | None = None,
        log_sink: LogSink | None = None,
        config: EngineConfig | None = None,
        event_bus: EventBus | None = None,
    ):
        self.config = config or EngineConfig()
        self.log_sink = log_sink or MemoryLogSink()
        self._event_bus = event_bus
        self.visitor = visitor or TimedVisitor(
            node_seconds=self.config.node_visit_seconds,
            edge_seconds=self.config.edge_visit_seconds,
            event_bus=event_bus,
        )
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def run(self, graph: Graph) -> RunResult:
        """Execute all source nodes of ``graph`` sequentially."""
        run_id = uuid.uuid4().hex
        result = RunResult(run_id=run_id, success=False)

        if self._running:
            self.log_sink.log("A simulation is already running.", LogSeverity.WARNING)
            result.errors.append("run already in progress")
            return result

        self._running = True
        started = time.perf_counter()
        set_trace_context(run_id=run_id, source_id=None, node_id=None)
        try:
            self.log_sink.log("Starting simulation...", LogSeverity.SYSTEM)

            sources = graph.list_source_nodes()
            if not sources:
                self.log_sink.log("No event nodes found to start from.", LogSeverity.WARNING)
                result.errors.append("no event nodes")
                return result

            logger.info(f"🚀 Starting run with {len(sources)} source node(s)")
            engine = ExecutionEngine(
                graph, visitor=self.visitor, log_sink=self.log_sink, config=self.config
            )
            if self._event_bus:
                await self._event_bus.emit_run_started(run_id, source_count=len(sources))

            for source in sources:
                set_trace_context(source_id=source.id)
                if self._event_bus:
                    await self._event_bus.emit_source_started(run_id, source.id)
                await self._run_source(engine, source, result)
                result.sources_run.append(source.id)

            result.nodes_executed = list(engine.path)
            result.success = not result.errors
            self.log_sink.log("Simulation finished.", LogSeverity.SYSTEM)
            logger.info(f"✓ Run complete: {len(engine.path)} node execution(s)")

            if self._event_bus:
                await self._event_bus.emit_run_completed(run_id, result.success, result.error)
            return result
        finally:
            result.duration_ms = int((time.perf_counter() - started) * 1000)
            set_trace_context(source_id=None, node_id=None)
            self._running = False

    async def _run_source(self, engine: ExecutionEngine, source, result: RunResult) -> None:
        try:
            await engine.execute_node(source)
        except (CycleDetectedError, DepthLimitError) as e:
            logger.error(f"✗ {e}")
            self.log_sink.log(str(e), LogSeverity.ERROR)
            result.errors.append(str(e))
        except Exception as e:
            logger.exception(f"✗ Source '{source.title}' failed")
            self.log_sink.log(f"{source.title} failed: {e}", LogSeverity.ERROR)
            result.errors.append(f"{source.id}: {e}")
