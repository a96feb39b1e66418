"""Event publisher port."""

from abc import ABC, abstractmethod
from typing import Callable

from app.domain.events.listing_events import ListingEvent

EventHandler = Callable[[ListingEvent], None]


class EventPublisher(ABC):
    """Port interface for publishing listing events to listeners."""

    @abstractmethod
    def subscribe(self, event_type: type[ListingEvent], handler: EventHandler) -> None:
        """
        Register a handler for exactly one event type.

        Args:
            event_type: Event class the handler listens to
            handler: Callable invoked with each published event of that type
        """
        pass

    @abstractmethod
    def publish(self, event: ListingEvent) -> None:
        """
        Publish an event without waiting for listeners.

        Listener failures never propagate back to the publisher.

        Args:
            event: Event to dispatch
        """
        pass
