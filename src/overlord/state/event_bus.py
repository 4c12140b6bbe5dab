"""
Notifications for Duck Overlord.

The store announces what each action changed; a front end listens for the
moments it cares about (a visitor walking in, a planet falling, the end of
a day) and never has to diff snapshots itself.

Usage:
    from overlord.state.event_bus import get_event_bus, EventType

    def greet(event):
        print("Now entering:", event.data["name"])

    get_event_bus().on(EventType.VISITOR_ARRIVED, greet)
"""

import logging
from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 100


class EventType(Enum):
    # Lifecycle
    GAME_STARTED = "game.started"
    GAME_RESET = "game.reset"
    GAME_OVER = "game.over"

    # Throne room
    VISITOR_ARRIVED = "visitor.arrived"
    OPTION_CHOSEN = "option.chosen"
    OPTION_REJECTED = "option.rejected"

    # Day cycle
    DAY_ENDED = "day.ended"
    DAY_SUMMARY_SHOWN = "day.summary_shown"
    DAY_STARTED = "day.started"

    # Empire
    PLANET_GAINED = "planet.gained"
    PLANET_LOST = "planet.lost"

    # After every action that produced a new snapshot
    STATE_CHANGED = "state.changed"


@dataclass
class GameEvent:
    """One notification: what happened, on which day, with what details."""
    type: EventType
    data: dict = field(default_factory=dict)
    day: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"day {self.day} {self.type.value}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventBus:
    """
    In-process, synchronous publish/subscribe.

    Handlers run inside emit() in the order they subscribed. A handler that
    raises is logged and skipped; the rest still run. The last
    HISTORY_LIMIT events are kept for inspection.
    """

    def __init__(self):
        self._handlers: defaultdict[EventType, list[EventHandler]] = defaultdict(list)
        self._recent: deque[GameEvent] = deque(maxlen=HISTORY_LIMIT)

    def on(self, event_type: EventType, handler: EventHandler) -> None:
        handlers = self._handlers[event_type]
        if handler not in handlers:
            handlers.append(handler)

    def off(self, event_type: EventType, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def emit(self, event_type: EventType, day: int = 0, **data) -> GameEvent:
        """Record an event and deliver it. Returns the event."""
        event = GameEvent(type=event_type, data=data, day=day)
        self._recent.append(event)

        # Copy so handlers may unsubscribe while being called
        for handler in tuple(self._handlers.get(event_type, ())):
            try:
                handler(event)
            except Exception:
                logger.exception("Handler %r failed on %s", handler, event_type.value)
        return event

    def clear(self) -> None:
        """Drop every subscription (history is kept)."""
        self._handlers.clear()

    def get_history(self, event_type: EventType | None = None) -> list[GameEvent]:
        return [e for e in self._recent if event_type is None or e.type == event_type]

    def listener_count(self, event_type: EventType) -> int:
        return len(self._handlers.get(event_type, ()))


_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Process-wide bus, created on first use."""
    global _bus
    if _bus is None:
        _bus = EventBus()
    return _bus


def reset_event_bus() -> None:
    """Forget the process-wide bus so the next get_event_bus() starts clean."""
    global _bus
    _bus = None
