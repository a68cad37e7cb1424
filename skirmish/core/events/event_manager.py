"""
Event bus shared by the game managers.

Managers never call each other for notifications: they publish frozen event
records here and whoever cares (the log manager, tests, a front end)
subscribes by event type.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .events import GameEvent, EventType


class EventPriority(Enum):
    """Delivery order for events queued at the same time."""
    CRITICAL = auto()
    HIGH = auto()
    NORMAL = auto()
    LOW = auto()


@dataclass
class QueuedEvent:
    event: "GameEvent"
    priority: EventPriority = EventPriority.NORMAL
    timestamp: datetime = field(default_factory=datetime.now)
    source: Optional[str] = None

    def __lt__(self, other: "QueuedEvent") -> bool:
        if self.priority.value != other.priority.value:
            return self.priority.value < other.priority.value
        return self.timestamp < other.timestamp


EventSubscriber = Callable[["GameEvent"], None]


class EventManager:
    """Single-threaded publish/subscribe bus.

    Events published from inside a subscriber are queued and delivered
    after the current one, so a subscriber never re-enters the bus.
    """

    def __init__(self, history_size: int = 500):
        self._subscribers: dict["EventType", list[EventSubscriber]] = defaultdict(list)
        self._universal_subscribers: list[EventSubscriber] = []
        self._queue: list[QueuedEvent] = []
        self._history: deque[QueuedEvent] = deque(maxlen=history_size)
        self._published = 0
        self._delivered = 0
        self._delivering = False

    def subscribe(self, event_type: "EventType", subscriber: EventSubscriber) -> None:
        self._subscribers[event_type].append(subscriber)

    def subscribe_all(self, subscriber: EventSubscriber) -> None:
        """Receive every event regardless of type."""
        self._universal_subscribers.append(subscriber)

    def unsubscribe(self, event_type: "EventType", subscriber: EventSubscriber) -> bool:
        """Returns True if the subscriber was registered for ``event_type``."""
        try:
            self._subscribers[event_type].remove(subscriber)
        except ValueError:
            return False
        return True

    def unsubscribe_all(self, subscriber: EventSubscriber) -> bool:
        try:
            self._universal_subscribers.remove(subscriber)
        except ValueError:
            return False
        return True

    def publish(
        self,
        event: "GameEvent",
        priority: EventPriority = EventPriority.NORMAL,
        source: Optional[str] = None,
    ) -> None:
        """Queue ``event`` and deliver it unless a delivery is already running."""
        self._queue.append(QueuedEvent(event=event, priority=priority, source=source or "unknown"))
        self._published += 1
        if not self._delivering:
            self.process_events()

    def process_events(self) -> int:
        """Deliver queued events by priority, then publication time.

        Returns:
            Number of events delivered
        """
        delivered = 0
        self._delivering = True
        try:
            while self._queue:
                self._queue.sort()
                self._deliver(self._queue.pop(0))
                delivered += 1
        finally:
            self._delivering = False
        return delivered

    def _deliver(self, queued: QueuedEvent) -> None:
        event = queued.event
        self._history.append(queued)
        self._delivered += 1
        # Copy so subscribers may unsubscribe while being notified
        for subscriber in list(self._subscribers.get(event.event_type, [])):
            subscriber(event)
        for subscriber in list(self._universal_subscribers):
            subscriber(event)

    def has_queued_events(self) -> bool:
        return bool(self._queue)

    def get_statistics(self) -> dict[str, Any]:
        return {
            "events_published": self._published,
            "events_processed": self._delivered,
            "events_queued": len(self._queue),
            "subscribers_count": sum(len(subs) for subs in self._subscribers.values()),
            "universal_subscribers_count": len(self._universal_subscribers),
        }

    def get_recent_events(self, count: int = 10) -> list[dict[str, Any]]:
        """Summaries of the last ``count`` delivered events, oldest first."""
        return [
            {
                "event_type": queued.event.__class__.__name__,
                "level": queued.event.level,
                "source": queued.source,
                "timestamp": queued.timestamp.isoformat(),
            }
            for queued in list(self._history)[-count:]
        ]

    def shutdown(self) -> None:
        """Drop all subscribers, queued events and history."""
        self._subscribers.clear()
        self._universal_subscribers.clear()
        self._queue.clear()
        self._history.clear()
