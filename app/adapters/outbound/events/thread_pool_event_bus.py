"""Thread pool event bus adapter."""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_for_futures
from typing import Optional

from app.application.ports.event_publisher import EventHandler, EventPublisher
from app.domain.events.listing_events import ListingEvent
from app.infrastructure.logging.logger import log_listener_failure, logger

THREAD_NAME_PREFIX = "listing-events"


def _handler_name(handler: EventHandler) -> str:
    owner = getattr(handler, "__self__", None)
    if owner is not None:
        return f"{type(owner).__name__}.{handler.__name__}"
    return getattr(handler, "__qualname__", None) or repr(handler)


class ThreadPoolEventBus(EventPublisher):
    """
    In-process event bus dispatching handlers on a bounded thread pool.

    Handlers are keyed by exact event type. publish() returns as soon as the
    handler tasks are submitted; handler exceptions are logged and never
    reach the publisher. There is no ordering guarantee between handlers.
    """

    def __init__(self, max_workers: int = 10) -> None:
        """
        Initialize event bus.

        Args:
            max_workers: Size of the dispatch thread pool
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._handlers: dict[type[ListingEvent], list[EventHandler]] = {}
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix=THREAD_NAME_PREFIX,
        )
        self._pending: set[Future] = set()
        self._lock = threading.RLock()
        self._closed = False

    def subscribe(self, event_type: type[ListingEvent], handler: EventHandler) -> None:
        """
        Register a handler for an event type.

        Args:
            event_type: Event class (subclasses are not matched)
            handler: Callable invoked with the event
        """
        with self._lock:
            self._handlers.setdefault(event_type, []).append(handler)

    def handlers_for(self, event_type: type[ListingEvent]) -> list[EventHandler]:
        """Get a copy of the handlers registered for an event type."""
        with self._lock:
            return list(self._handlers.get(event_type, []))

    def publish(self, event: ListingEvent) -> None:
        """
        Submit one dispatch task per registered handler.

        Args:
            event: Event to dispatch
        """
        handlers = self.handlers_for(type(event))
        if not handlers:
            return

        with self._lock:
            if self._closed:
                logger.warning(f"Event bus is shut down, dropping {event.summary()}")
                return
            for handler in handlers:
                future = self._executor.submit(self._dispatch, handler, event)
                self._pending.add(future)
                future.add_done_callback(self._discard)

    def wait_until_idle(self, timeout: Optional[float] = None) -> bool:
        """
        Block until every submitted dispatch task has finished.

        Args:
            timeout: Maximum seconds to wait (None waits forever)

        Returns:
            True if all tasks finished, False on timeout
        """
        with self._lock:
            pending = list(self._pending)
        if not pending:
            return True
        _, not_done = wait_for_futures(pending, timeout=timeout)
        return not not_done

    def shutdown(self, wait: bool = True) -> None:
        """
        Stop accepting events and release the thread pool.

        Args:
            wait: Whether to wait for in-flight dispatch tasks
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=wait)
        logger.info("Listing event bus shut down")

    def _discard(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    @staticmethod
    def _dispatch(handler: EventHandler, event: ListingEvent) -> None:
        try:
            handler(event)
        except Exception as e:
            # No retries: the failure is logged and the event is done for this handler
            log_listener_failure(event.summary(), _handler_name(handler), e)
