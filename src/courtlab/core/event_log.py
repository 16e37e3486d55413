"""Append-only play-by-play log.

Every entry is also forwarded to registered sinks (the court visualizer,
the event bus). Sinks are fire-and-forget: they cannot change the outcome
of the simulation, and a failing sink never interrupts a tick.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any, Protocol, overload

from courtlab.models.events import EventPayload, EventType, GameEvent

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    """Notification surface for consumers of the event stream."""

    def add_event(
        self,
        event_type: EventType,
        payload: dict[str, Any],
        clock: dict[str, int],
    ) -> None: ...


class EventLog:
    """Time-ordered record of everything that happened in a game."""

    def __init__(self, sinks: list[EventSink] | None = None) -> None:
        self._events: list[GameEvent] = []
        # Shared by reference so sinks added later still see new events.
        self._sinks: list[EventSink] = sinks if sinks is not None else []

    def append(
        self,
        payload: EventPayload,
        time: int,
        quarter: int,
        shot_clock: int,
    ) -> GameEvent:
        """Record an event and notify sinks.

        Raises ValueError if the event would precede the last one in
        (quarter, time) order. The log is never reordered.
        """
        if self._events:
            last = self._events[-1]
            if (quarter, time) < (last.quarter, last.time):
                msg = (
                    f"Event at Q{quarter} {time}s precedes last event at "
                    f"Q{last.quarter} {last.time}s"
                )
                raise ValueError(msg)
        event = GameEvent(time=time, quarter=quarter, shot_clock=shot_clock, payload=payload)
        self._events.append(event)
        logger.debug(
            "event type=%s quarter=%d time=%d shot_clock=%d",
            event.event_type,
            quarter,
            time,
            shot_clock,
        )
        self._notify(event)
        return event

    def _notify(self, event: GameEvent) -> None:
        if not self._sinks:
            return
        data = event.data()
        clock = {"game_time": event.time, "quarter": event.quarter, "shot_clock": event.shot_clock}
        for sink in self._sinks:
            try:
                sink.add_event(event.event_type, dict(data), dict(clock))
            except Exception:
                logger.exception("event sink %r failed on %s", sink, event.event_type)

    def of_type(self, event_type: EventType) -> list[GameEvent]:
        """All events of one type, in log order."""
        return [e for e in self._events if e.event_type == event_type]

    @property
    def last(self) -> GameEvent | None:
        return self._events[-1] if self._events else None

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[GameEvent]:
        return iter(self._events)

    @overload
    def __getitem__(self, index: int) -> GameEvent: ...

    @overload
    def __getitem__(self, index: slice) -> list[GameEvent]: ...

    def __getitem__(self, index: int | slice) -> GameEvent | list[GameEvent]:
        return self._events[index]


class RecordingSink:
    """Sink that keeps every notification in memory.

    Useful for headless runs and tests that want exactly what a visualizer
    would have received.
    """

    def __init__(self) -> None:
        self.received: list[tuple[EventType, dict[str, Any], dict[str, int]]] = []

    def add_event(
        self,
        event_type: EventType,
        payload: dict[str, Any],
        clock: dict[str, int],
    ) -> None:
        self.received.append((event_type, payload, clock))
