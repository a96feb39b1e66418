"""Listing lifecycle (status transition) use case."""

from datetime import datetime, timedelta, timezone

from app.application.dtos.listing import ListingSummary
from app.application.ports.car_listing_repository import CarListingRepository
from app.application.ports.event_publisher import EventPublisher
from app.domain.entities.car_listing import CarListing
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
from app.domain.exceptions import (
    ListingNotFoundError,
    ListingPermissionError,
    ListingStateError,
)
from app.domain.value_objects.renewal_duration_days import RenewalDurationDays
from app.infrastructure.logging.logger import log_listing_transition, logger

ADMIN_ACTOR = "admin"
SYSTEM_ACTOR = "system"


class ListingStatusUseCase:
    """
    Use case for listing lifecycle transitions.

    Every transition is saved first; only then is exactly one event built and
    published. Transitions that change nothing publish nothing.
    """

    def __init__(
        self,
        listing_repository: CarListingRepository,
        event_publisher: EventPublisher,
    ) -> None:
        """
        Initialize use case.

        Args:
            listing_repository: Car listing repository
            event_publisher: Publisher for listing lifecycle events
        """
        self._listing_repository = listing_repository
        self._event_publisher = event_publisher

    # --- Seller actions ---

    async def mark_as_sold(self, listing_id: int, username: str) -> ListingSummary:
        """Mark the seller's own listing as sold."""
        listing = await self._find_and_authorize(listing_id, username, "mark as sold")

        if listing.archived:
            logger.warning(f"Attempt to mark archived listing ID {listing_id} as sold by user {username}")
            raise ListingStateError("Cannot mark an archived listing as sold. Please unarchive first.")
        if listing.sold:
            logger.warning(f"Listing ID {listing_id} is already marked as sold. No action taken by user {username}.")
            return ListingSummary.from_entity(listing)

        status_before = listing.status
        listing.sold = True
        saved = await self._save(listing)
        self._publish(ListingMarkedAsSoldEvent(self, saved, is_admin_action=False))
        log_listing_transition(saved.id, "mark_as_sold", username, status_before, saved.status)
        return ListingSummary.from_entity(saved)

    async def archive(self, listing_id: int, username: str) -> ListingSummary:
        """Archive the seller's own listing."""
        listing = await self._find_and_authorize(listing_id, username, "archive")

        if listing.archived:
            logger.warning(f"Listing ID {listing_id} is already archived. No action taken by user {username}.")
            return ListingSummary.from_entity(listing)

        status_before = listing.status
        listing.archived = True
        saved = await self._save(listing)
        self._publish(ListingArchivedEvent(self, saved, is_admin_action=False))
        log_listing_transition(saved.id, "archive", username, status_before, saved.status)
        return ListingSummary.from_entity(saved)

    async def unarchive(self, listing_id: int, username: str) -> ListingSummary:
        """Unarchive the seller's own listing. Publishes no event."""
        listing = await self._find_and_authorize(listing_id, username, "unarchive")
        return await self._unarchive(listing, username)

    async def pause(self, listing_id: int, username: str) -> ListingSummary:
        """Pause the seller's own approved listing."""
        listing = await self._find_and_authorize(listing_id, username, "pause")

        if not listing.approved:
            raise ListingStateError("Cannot pause a listing that is not yet approved.")
        if listing.sold:
            raise ListingStateError("Cannot pause a listing that has been marked as sold.")
        if listing.archived:
            raise ListingStateError("Cannot pause a listing that has been archived.")
        if listing.expired:
            raise ListingStateError("Cannot pause an expired listing. Please renew it.")
        if not listing.is_user_active:
            logger.info(f"Listing ID {listing_id} is already paused by user {username}. No action needed.")
            return ListingSummary.from_entity(listing)

        status_before = listing.status
        listing.is_user_active = False
        saved = await self._save(listing)
        self._publish(ListingPausedEvent(self, saved))
        log_listing_transition(saved.id, "pause", username, status_before, saved.status)
        return ListingSummary.from_entity(saved)

    async def resume(self, listing_id: int, username: str) -> ListingSummary:
        """Resume the seller's own paused listing."""
        listing = await self._find_and_authorize(listing_id, username, "resume")

        if listing.sold:
            raise ListingStateError("Cannot resume a listing that has been marked as sold.")
        if listing.archived:
            raise ListingStateError(
                "Cannot resume a listing that has been archived. Please contact support or renew if applicable."
            )
        if listing.expired:
            raise ListingStateError("Cannot resume an expired listing. Please renew it.")
        if listing.is_user_active:
            logger.info(f"Listing ID {listing_id} is already active for user {username}. No action needed.")
            return ListingSummary.from_entity(listing)

        status_before = listing.status
        listing.is_user_active = True
        saved = await self._save(listing)
        self._publish(ListingResumedEvent(self, saved))
        log_listing_transition(saved.id, "resume", username, status_before, saved.status)
        return ListingSummary.from_entity(saved)

    async def renew(self, listing_id: int, username: str, duration_days: int) -> ListingSummary:
        """
        Renew the seller's own listing for a number of days.

        Clears the expired flag, reactivates the listing and extends its
        expiration date from max(now, current expiration).

        Raises:
            InvalidListingInputError: If duration_days is outside 1-365 (checked before any change)
        """
        duration = RenewalDurationDays(duration_days)
        listing = await self._find_and_authorize(listing_id, username, "renew")

        if listing.archived:
            raise ListingStateError("Cannot renew an archived listing.")
        if listing.sold:
            raise ListingStateError("Cannot renew a listing that has been marked as sold.")

        status_before = listing.status
        now = datetime.now(timezone.utc)
        current_expiration = listing.expiration_date
        if current_expiration is not None and current_expiration.tzinfo is None:
            current_expiration = current_expiration.replace(tzinfo=timezone.utc)
        start = max(now, current_expiration) if current_expiration else now

        listing.expired = False
        listing.is_user_active = True
        listing.expiration_date = start + timedelta(days=duration.days)
        saved = await self._save(listing)
        self._publish(ListingRenewalInitiatedEvent(self, saved, duration_days=duration.days))
        log_listing_transition(
            saved.id, "renew", username, status_before, saved.status, duration_days=duration.days
        )
        return ListingSummary.from_entity(saved)

    # --- Admin actions ---

    async def approve(self, listing_id: int) -> ListingSummary:
        """Approve a pending listing (admin)."""
        listing = await self._find(listing_id)

        if listing.archived:
            raise ListingStateError("Cannot approve an archived listing.")
        if listing.sold:
            raise ListingStateError("Cannot approve a listing that has been marked as sold.")
        if listing.approved:
            logger.warning(f"Listing ID {listing_id} is already approved. Admin operation aborted.")
            raise ListingStateError(f"Listing with ID {listing_id} is already approved.")

        status_before = listing.status
        listing.approved = True
        saved = await self._save(listing)
        self._publish(ListingApprovedEvent(self, saved))
        log_listing_transition(saved.id, "approve", ADMIN_ACTOR, status_before, saved.status)
        return ListingSummary.from_entity(saved)

    async def mark_as_sold_by_admin(self, listing_id: int) -> ListingSummary:
        """Mark any listing as sold (admin)."""
        listing = await self._find(listing_id)

        if listing.archived:
            raise ListingStateError("Cannot mark an archived listing as sold. Please unarchive first.")
        if listing.sold:
            raise ListingStateError(f"Listing with ID {listing_id} is already marked as sold.")

        status_before = listing.status
        listing.sold = True
        saved = await self._save(listing)
        self._publish(ListingMarkedAsSoldEvent(self, saved, is_admin_action=True))
        log_listing_transition(saved.id, "mark_as_sold", ADMIN_ACTOR, status_before, saved.status)
        return ListingSummary.from_entity(saved)

    async def archive_by_admin(self, listing_id: int) -> ListingSummary:
        """Archive any listing (admin)."""
        listing = await self._find(listing_id)

        if listing.archived:
            raise ListingStateError(f"Listing with ID {listing_id} is already archived.")

        status_before = listing.status
        listing.archived = True
        saved = await self._save(listing)
        self._publish(ListingArchivedEvent(self, saved, is_admin_action=True))
        log_listing_transition(saved.id, "archive", ADMIN_ACTOR, status_before, saved.status)
        return ListingSummary.from_entity(saved)

    async def unarchive_by_admin(self, listing_id: int) -> ListingSummary:
        """Unarchive any listing (admin). Publishes no event."""
        listing = await self._find(listing_id)
        return await self._unarchive(listing, ADMIN_ACTOR)

    async def expire(self, listing_id: int, actor: str = ADMIN_ACTOR) -> ListingSummary:
        """
        Expire a listing and deactivate it.

        Args:
            listing_id: Listing identifier
            actor: 'admin' for admin requests, 'system' for scheduled expiry
        """
        listing = await self._find(listing_id)

        if listing.expired:
            raise ListingStateError("Listing is already expired")
        if listing.archived:
            raise ListingStateError("Cannot expire an archived listing")
        if listing.sold:
            raise ListingStateError("Cannot expire a sold listing")

        status_before = listing.status
        listing.expired = True
        listing.is_user_active = False
        saved = await self._save(listing)
        self._publish(ListingExpiredEvent(self, saved, is_admin_action=actor == ADMIN_ACTOR))
        log_listing_transition(saved.id, "expire", actor, status_before, saved.status)
        return ListingSummary.from_entity(saved)

    # --- Helper methods ---

    async def _unarchive(self, listing: CarListing, actor: str) -> ListingSummary:
        if not listing.archived:
            raise ListingStateError(f"Listing with ID {listing.id} is not currently archived.")

        status_before = listing.status
        listing.archived = False
        saved = await self._save(listing)
        log_listing_transition(saved.id, "unarchive", actor, status_before, saved.status)
        return ListingSummary.from_entity(saved)

    async def _find(self, listing_id: int) -> CarListing:
        listing = await self._listing_repository.get(listing_id)
        if listing is None:
            logger.warning(f"CarListing lookup failed for ID: {listing_id}")
            raise ListingNotFoundError(listing_id)
        return listing

    async def _find_and_authorize(self, listing_id: int, username: str, action: str) -> CarListing:
        listing = await self._find(listing_id)
        if not listing.is_owned_by(username):
            owner = listing.seller.username if listing.seller else "unknown"
            logger.warning(
                f"Authorization failed: User '{username}' attempted to {action} "
                f"listing ID {listing_id} owned by '{owner}'"
            )
            raise ListingPermissionError()
        return listing

    async def _save(self, listing: CarListing) -> CarListing:
        listing.touch()
        return await self._listing_repository.save(listing)

    def _publish(self, event: ListingEvent) -> None:
        # The transition is already saved; a publishing failure must not undo it.
        try:
            self._event_publisher.publish(event)
        except Exception as e:
            logger.error(f"Failed to publish {event.summary()}: {e}")
