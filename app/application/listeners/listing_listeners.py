"""Listeners reacting to listing lifecycle events.

Each listener handles exactly one event type and runs its work inside its own
transaction, so a failing listener never affects the transition that raised
the event or the other listeners. Listeners only read, so receiving the same
event twice is harmless.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from app.application.listeners.listing_event_formatter import ListingEventFormatter
from app.application.ports.event_publisher import EventPublisher
from app.application.ports.transaction_runner import TransactionRunner
from app.domain.events.listing_events import (
    ListingApprovedEvent,
    ListingArchivedEvent,
    ListingEvent,
    ListingExpiredEvent,
    ListingMarkedAsSoldEvent,
    ListingPausedEvent,
    ListingRenewalInitiatedEvent,
    ListingResumedEvent,
)
from app.infrastructure.logging.logger import logger


class ListingEventListener:
    """Base listener: runs process() for one event type in a new transaction."""

    event_type: type[ListingEvent] = ListingEvent

    def __init__(
        self,
        tx_runner: TransactionRunner,
        formatter: Optional[ListingEventFormatter] = None,
    ) -> None:
        """
        Initialize listener.

        Args:
            tx_runner: Runner giving each handled event its own transaction
            formatter: Listing formatter for log messages
        """
        self._tx_runner = tx_runner
        self._formatter = formatter or ListingEventFormatter()

    def handle(self, event: ListingEvent) -> None:
        """
        Handle an event.

        Args:
            event: Event of this listener's event_type

        Raises:
            ValueError: If event is None
        """
        if event is None:
            raise ValueError(f"{self.event_type.__name__} cannot be None")
        self._tx_runner.run_in_new_transaction(lambda: self.process(event))

    def process(self, event: ListingEvent) -> None:
        raise NotImplementedError


class ListingApprovedListener(ListingEventListener):
    event_type = ListingApprovedEvent

    def process(self, event: ListingApprovedEvent) -> None:
        listing = event.listing
        logger.info(f"Listing approved event received for {self._formatter.listing_info(listing)}")

        seller = listing.seller
        username = seller.username if seller and seller.username is not None else "N/A"
        seller_id = seller.id if seller and seller.id is not None else "N/A"
        logger.debug(
            f"Approved listing details - ID: {listing.id}, Seller: {username} (ID: {seller_id}), "
            f"Brand: {listing.brand_name_en}, Model: {listing.model_name_en}, "
            f"Year: {listing.model_year}, Price: {listing.price}"
        )


class ListingArchivedListener(ListingEventListener):
    event_type = ListingArchivedEvent

    def process(self, event: ListingArchivedEvent) -> None:
        listing = event.listing
        action_by = "admin" if event.is_admin_action else "seller"
        logger.info(
            f"Listing archived event received for {self._formatter.listing_info(listing)} by {action_by}"
        )

        if event.is_admin_action:
            logger.info(f"Admin archived {self._formatter.listing_info(listing)}")
        else:
            seller_name = (
                listing.seller.username
                if listing.seller and listing.seller.username is not None
                else "unknown seller"
            )
            logger.info(f"Seller '{seller_name}' archived their own listing ID: {listing.id}")


class ListingExpiredListener(ListingEventListener):
    event_type = ListingExpiredEvent

    def process(self, event: ListingExpiredEvent) -> None:
        listing = event.listing
        action_by = "admin" if event.is_admin_action else "system"
        logger.info(
            f"Listing expired event received for {self._formatter.listing_info(listing)} by {action_by}"
        )

        if listing.seller is not None:
            logger.info(
                f"Preparing renewal options for seller {listing.seller.username} for listing ID {listing.id}"
            )


class ListingMarkedAsSoldListener(ListingEventListener):
    event_type = ListingMarkedAsSoldEvent

    def process(self, event: ListingMarkedAsSoldEvent) -> None:
        listing = event.listing
        action_by = "admin" if event.is_admin_action else "seller"
        logger.info(
            f"Listing marked as sold event received for {self._formatter.listing_info(listing)} by {action_by}"
        )
        logger.debug(
            f"Sold listing details - ID: {listing.id}, Title: {listing.title}, "
            f"Price: {listing.price}, Seller: {self._formatter.seller_info(listing)}"
        )


class ListingPausedListener(ListingEventListener):
    event_type = ListingPausedEvent

    def process(self, event: ListingPausedEvent) -> None:
        logger.info(f"Listing paused event received for {self._formatter.listing_info(event.listing)}")


class ListingResumedListener(ListingEventListener):
    event_type = ListingResumedEvent

    def process(self, event: ListingResumedEvent) -> None:
        logger.info(f"Listing resumed event received for {self._formatter.listing_info(event.listing)}")


class ListingRenewalInitiatedListener(ListingEventListener):
    event_type = ListingRenewalInitiatedEvent

    def process(self, event: ListingRenewalInitiatedEvent) -> None:
        listing = event.listing
        renewal_days = event.duration_days
        logger.info(
            f"Listing renewal initiated event received for {self._formatter.listing_info(listing)} "
            f"for {renewal_days} days"
        )

        # Estimate only; the saved expiration_date is authoritative
        estimated_expiration = datetime.now(timezone.utc) + timedelta(days=renewal_days)
        logger.debug(
            f"Listing ID: {listing.id} renewed for {renewal_days} days, "
            f"estimated new expiration: {estimated_expiration.isoformat()}"
        )


LISTENER_TYPES: tuple[type[ListingEventListener], ...] = (
    ListingApprovedListener,
    ListingArchivedListener,
    ListingExpiredListener,
    ListingMarkedAsSoldListener,
    ListingPausedListener,
    ListingResumedListener,
    ListingRenewalInitiatedListener,
)


def register_listing_listeners(
    publisher: EventPublisher,
    tx_runner: TransactionRunner,
) -> list[ListingEventListener]:
    """
    Create one listener per event type and subscribe it to the publisher.

    Args:
        publisher: Event publisher to subscribe to
        tx_runner: Transaction runner shared by all listeners

    Returns:
        The registered listeners
    """
    formatter = ListingEventFormatter()
    listeners = [listener_type(tx_runner, formatter) for listener_type in LISTENER_TYPES]
    for listener in listeners:
        publisher.subscribe(listener.event_type, listener.handle)
    return listeners
