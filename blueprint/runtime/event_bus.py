"""
Event Bus - Pub/sub channel between the engine and a renderer.

The engine publishes what it is doing (run started, node visited, edge
traversed, run completed); a renderer subscribes and highlights the matching
node or edge. Publishing awaits every matching handler, so events are observed
in the same order the engine produced them.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class EventType(StrEnum):
    """Types of events that can be published."""

    # Run lifecycle
    RUN_STARTED = "run_started"
    RUN_COMPLETED = "run_completed"
    SOURCE_STARTED = "source_started"

    # Visits
    NODE_VISITED = "node_visited"
    EDGE_TRAVERSED = "edge_traversed"


@dataclass
class ExecutionEvent:
    """An event emitted during a blueprint run."""

    type: EventType
    run_id: str | None = None
    node_id: str | None = None
    edge_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "type": self.type.value,
            "run_id": self.run_id,
            "node_id": self.node_id,
            "edge_id": self.edge_id,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
        }


# Type for event handlers
EventHandler = Callable[[ExecutionEvent], Awaitable[None]]


@dataclass
class Subscription:
    """A subscription to events."""

    id: str
    event_types: set[EventType]
    handler: EventHandler
    filter_node: str | None = None  # Only receive events for this node
    filter_run: str | None = None  # Only receive events from this run


class EventBus:
    """
    Async pub/sub bus with type-based subscriptions and a bounded history.

    Example:
        bus = EventBus()

        async def highlight(event: ExecutionEvent):
            canvas.flash(event.node_id)

        bus.subscribe(event_types=[EventType.NODE_VISITED], handler=highlight)
    """

    def __init__(self, max_history: int = 1000):
        self._subscriptions: dict[str, Subscription] = {}
        self._event_history: list[ExecutionEvent] = []
        self._max_history = max_history
        self._subscription_counter = 0

    def subscribe(
        self,
        event_types: list[EventType],
        handler: EventHandler,
        filter_node: str | None = None,
        filter_run: str | None = None,
    ) -> str:
        """
        Subscribe to events.

        Args:
            event_types: Types of events to receive
            handler: Async function to call when event occurs
            filter_node: Only receive events about this node
            filter_run: Only receive events from this run

        Returns:
            Subscription ID (use to unsubscribe)
        """
        self._subscription_counter += 1
        sub_id = f"sub_{self._subscription_counter}"

        self._subscriptions[sub_id] = Subscription(
            id=sub_id,
            event_types=set(event_types),
            handler=handler,
            filter_node=filter_node,
            filter_run=filter_run,
        )
        logger.debug(f"Subscription {sub_id} registered for {event_types}")

        return sub_id

    def unsubscribe(self, subscription_id: str) -> bool:
        """Remove a subscription. Returns True if it existed."""
        if subscription_id in self._subscriptions:
            del self._subscriptions[subscription_id]
            logger.debug(f"Subscription {subscription_id} removed")
            return True
        return False

    async def publish(self, event: ExecutionEvent) -> None:
        """Publish an event to all matching subscribers and wait for them."""
        self._event_history.append(event)
        if len(self._event_history) > self._max_history:
            self._event_history = self._event_history[-self._max_history :]

        handlers = [s.handler for s in self._subscriptions.values() if self._matches(s, event)]
        if handlers:
            await asyncio.gather(*[self._run_handler(h, event) for h in handlers])

    def _matches(self, subscription: Subscription, event: ExecutionEvent) -> bool:
        if event.type not in subscription.event_types:
            return False
        if subscription.filter_node and subscription.filter_node != event.node_id:
            return False
        if subscription.filter_run and subscription.filter_run != event.run_id:
            return False
        return True

    async def _run_handler(self, handler: EventHandler, event: ExecutionEvent) -> None:
        # Handler failures are logged, never raised to the publisher
        try:
            await handler(event)
        except Exception as e:
            logger.error(f"Handler error for {event.type}: {e}")

    # === CONVENIENCE PUBLISHERS ===

    async def emit_run_started(self, run_id: str, source_count: int) -> None:
        await self.publish(
            ExecutionEvent(
                type=EventType.RUN_STARTED,
                run_id=run_id,
                data={"source_count": source_count},
            )
        )

    async def emit_run_completed(self, run_id: str, success: bool, error: str | None = None) -> None:
        await self.publish(
            ExecutionEvent(
                type=EventType.RUN_COMPLETED,
                run_id=run_id,
                data={"success": success, "error": error},
            )
        )

    async def emit_source_started(self, run_id: str, node_id: str) -> None:
        await self.publish(
            ExecutionEvent(type=EventType.SOURCE_STARTED, run_id=run_id, node_id=node_id)
        )

    async def emit_node_visited(
        self, node_id: str, duration: float, run_id: str | None = None
    ) -> None:
        await self.publish(
            ExecutionEvent(
                type=EventType.NODE_VISITED,
                run_id=run_id,
                node_id=node_id,
                data={"duration": duration},
            )
        )

    async def emit_edge_traversed(
        self,
        edge_id: str,
        source_node: str,
        target_node: str,
        duration: float,
        run_id: str | None = None,
    ) -> None:
        await self.publish(
            ExecutionEvent(
                type=EventType.EDGE_TRAVERSED,
                run_id=run_id,
                edge_id=edge_id,
                data={
                    "source_node": source_node,
                    "target_node": target_node,
                    "duration": duration,
                },
            )
        )

    # === QUERY OPERATIONS ===

    def get_history(
        self,
        event_type: EventType | None = None,
        run_id: str | None = None,
        limit: int = 100,
    ) -> list[ExecutionEvent]:
        """
        Get event history with optional filtering.

        Returns:
            List of matching events (most recent first)
        """
        events = self._event_history[::-1]

        if event_type:
            events = [e for e in events if e.type == event_type]
        if run_id:
            events = [e for e in events if e.run_id == run_id]

        return events[:limit]

    def get_stats(self) -> dict:
        """Get event bus statistics."""
        type_counts: dict[str, int] = {}
        for event in self._event_history:
            type_counts[event.type.value] = type_counts.get(event.type.value, 0) + 1

        return {
            "total_events": len(self._event_history),
            "subscriptions": len(self._subscriptions),
            "events_by_type": type_counts,
        }
