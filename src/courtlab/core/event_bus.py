"""In-memory event bus for streaming play-by-play to async consumers.

Pub/sub: the step loop publishes synchronously (it never awaits), async
consumers subscribe and read from an asyncio.Queue. Events are
fire-and-forget; with no subscribers they are silently dropped.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections import defaultdict
from typing import Any

from courtlab.models.events import EventType

logger = logging.getLogger(__name__)

Envelope = dict[str, Any]


class EventBus:
    """Pub/sub event bus.

    Usage:
        bus = EventBus()
        sim.add_sink(EventBusSink(bus))

        async with bus.subscribe("madeShot") as sub:
            async for envelope in sub:
                ...
    """

    def __init__(self) -> None:
        # Keyed by event type; None holds the wildcard queues.
        self._queues: dict[str | None, list[asyncio.Queue[Envelope]]] = defaultdict(list)

    def publish(self, event_type: str, data: dict[str, Any]) -> int:
        """Deliver to typed and wildcard subscribers without blocking.

        Returns the number of subscribers that received the event.
        """
        envelope: Envelope = {"type": event_type, "data": data}
        count = 0
        for queue in [*self._queues.get(event_type, ()), *self._queues.get(None, ())]:
            try:
                queue.put_nowait(envelope)
                count += 1
            except asyncio.QueueFull:
                logger.warning("Dropping event %s for slow subscriber", event_type)
        return count

    def subscribe(self, event_type: str | None = None, max_size: int = 1000) -> Subscription:
        """Subscribe to one event type, or to everything when ``event_type`` is None."""
        queue: asyncio.Queue[Envelope] = asyncio.Queue(maxsize=max_size)
        return Subscription(self, queue, event_type)

    def _register(self, queue: asyncio.Queue[Envelope], event_type: str | None) -> None:
        self._queues[event_type].append(queue)

    def _unregister(self, queue: asyncio.Queue[Envelope], event_type: str | None) -> None:
        with contextlib.suppress(ValueError):
            self._queues[event_type].remove(queue)

    @property
    def subscriber_count(self) -> int:
        return sum(len(queues) for queues in self._queues.values())


class Subscription:
    """Active subscription. Use as async context manager + async iterator."""

    def __init__(
        self,
        bus: EventBus,
        queue: asyncio.Queue[Envelope],
        event_type: str | None,
    ) -> None:
        self._bus = bus
        self._queue = queue
        self._event_type = event_type
        self._active = False

    async def __aenter__(self) -> Subscription:
        self._bus._register(self._queue, self._event_type)
        self._active = True
        return self

    async def __aexit__(self, *args: object) -> None:
        self._active = False
        self._bus._unregister(self._queue, self._event_type)

    def __aiter__(self) -> Subscription:
        return self

    async def __anext__(self) -> Envelope:
        if not self._active:
            raise StopAsyncIteration
        try:
            return await self._queue.get()
        except asyncio.CancelledError:
            raise StopAsyncIteration from None

    async def get(self, timeout: float | None = None) -> Envelope | None:
        """Next envelope, or None on timeout."""
        try:
            return await asyncio.wait_for(self._queue.get(), timeout=timeout)
        except TimeoutError:
            return None

    def drain(self) -> list[Envelope]:
        """Everything queued right now, without waiting."""
        items: list[Envelope] = []
        while True:
            try:
                items.append(self._queue.get_nowait())
            except asyncio.QueueEmpty:
                return items


class EventBusSink:
    """EventSink that republishes play-by-play onto an EventBus."""

    def __init__(self, bus: EventBus) -> None:
        self.bus = bus

    def add_event(
        self,
        event_type: EventType,
        payload: dict[str, Any],
        clock: dict[str, int],
    ) -> None:
        self.bus.publish(event_type, {**payload, "clock": clock})
