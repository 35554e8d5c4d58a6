"""Interface for publishing domain events."""

import abc

from ..events.cache_events import DomainEvent


class EventPublisher(abc.ABC):
    """Abstract Base Class for delivering domain events to interested parties."""

    @abc.abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """Delivers an event synchronously.

        Args:
            event: The event to deliver.
        """
        pass
