"""In-process event dispatcher.

Delivers domain events to handlers subscribed per event type. Handler
errors are logged and do not interrupt the proxied call that emitted them.
"""

import logging
from collections import defaultdict
from typing import Callable, DefaultDict, List, Type

from memoproxy.domain.events.cache_events import DomainEvent
from memoproxy.domain.interfaces.event_publisher import EventPublisher

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]

class EventDispatcher(EventPublisher):
    """Synchronous publish/subscribe dispatcher for domain events."""

    def __init__(self):
        self._handlers: DefaultDict[Type[DomainEvent], List[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """Registers a handler for an event type and its subclasses.

        Subscribing to DomainEvent receives every event.
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Subscribed {getattr(handler, '__name__', handler)!s} to {event_type.__name__}")

    def unsubscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: DomainEvent) -> None:
        for event_type, handlers in list(self._handlers.items()):
            if not isinstance(event, event_type):
                continue
            for handler in list(handlers):
                try:
                    handler(event)
                except Exception as e:
                    logger.error(f"Event handler {handler!r} failed for {type(event).__name__}: {e}", exc_info=True)


class EventRecorder:
    """Handler that keeps every event it receives, in order."""

    def __init__(self):
        self.events: List[DomainEvent] = []

    def __call__(self, event: DomainEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: Type[DomainEvent]) -> List[DomainEvent]:
        return [e for e in self.events if isinstance(e, event_type)]
