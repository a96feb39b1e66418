"""Listing lifecycle events.

Each event is constructed right after a listing state transition has been
saved, and carries a reference to that listing. Events are not persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID, uuid4

from app.domain.entities.car_listing import CarListing
from app.domain.exceptions import InvalidListingInputError
from app.domain.value_objects.renewal_duration_days import (
    MAX_RENEWAL_DAYS,
    RenewalDurationDays,
)

UNKNOWN_SELLER = "unknown"
NULL_LISTING_ID = "null"


@dataclass(frozen=True)
class ListingEvent:
    """Base class for listing lifecycle events."""

    source: Any
    listing: CarListing
    event_id: UUID = field(default_factory=uuid4, kw_only=True, compare=False)
    occurred_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc), kw_only=True, compare=False
    )

    def __post_init__(self) -> None:
        """Validate source and listing."""
        if self.source is None:
            raise InvalidListingInputError("Source cannot be None")
        if self.listing is None:
            raise InvalidListingInputError("CarListing cannot be None")

    @property
    def listing_id(self) -> Optional[int]:
        """Get the id of the listing this event concerns."""
        return getattr(self.listing, "id", None)

    def _summary_fields(self) -> list[tuple[str, str]]:
        return []

    def summary(self) -> str:
        """
        Render a human-readable summary for logs and audits.

        Missing listing id renders as 'null' and a missing seller as 'unknown'.

        Returns:
            Summary string, e.g. ListingArchivedEvent[listingId=1, isAdminAction=true, seller=unknown]
        """
        listing_id = self.listing_id
        parts = [("listingId", NULL_LISTING_ID if listing_id is None else str(listing_id))]
        parts.extend(self._summary_fields())
        parts.append(("seller", _seller_username(self.listing)))
        rendered = ", ".join(f"{key}={value}" for key, value in parts)
        return f"{type(self).__name__}[{rendered}]"

    def __str__(self) -> str:
        return self.summary()


def _seller_username(listing: Optional[CarListing]) -> str:
    seller = getattr(listing, "seller", None)
    username = getattr(seller, "username", None)
    return UNKNOWN_SELLER if username is None else str(username)


@dataclass(frozen=True)
class AdminActionListingEvent(ListingEvent):
    """Listing event that may be triggered by either an admin or the seller."""

    is_admin_action: bool = False

    def _summary_fields(self) -> list[tuple[str, str]]:
        return [("isAdminAction", str(bool(self.is_admin_action)).lower())]


@dataclass(frozen=True)
class ListingApprovedEvent(ListingEvent):
    """Published when an admin approves a pending listing."""


@dataclass(frozen=True)
class ListingArchivedEvent(AdminActionListingEvent):
    """Published when a listing is archived by the seller or an admin."""


@dataclass(frozen=True)
class ListingExpiredEvent(AdminActionListingEvent):
    """Published when a listing expires (system/admin) or is expired by an admin."""


@dataclass(frozen=True)
class ListingMarkedAsSoldEvent(AdminActionListingEvent):
    """Published when a listing is marked as sold by the seller or an admin."""


@dataclass(frozen=True)
class ListingPausedEvent(ListingEvent):
    """Published when the seller pauses an approved listing."""


@dataclass(frozen=True)
class ListingResumedEvent(ListingEvent):
    """Published when the seller resumes a paused listing."""


@dataclass(frozen=True)
class ListingRenewalInitiatedEvent(ListingEvent):
    """
    Published when the seller renews a listing.

    The duration drives expiry math downstream, so it is validated here:
    it must be between 1 and 365 days inclusive.
    """

    MAX_DURATION_DAYS = MAX_RENEWAL_DAYS

    duration_days: int = 0

    def __post_init__(self) -> None:
        """Validate source, listing and renewal duration."""
        super().__post_init__()
        RenewalDurationDays(self.duration_days)

    def _summary_fields(self) -> list[tuple[str, str]]:
        return [("durationDays", str(self.duration_days))]


LISTING_EVENT_TYPES: tuple[type[ListingEvent], ...] = (
    ListingApprovedEvent,
    ListingArchivedEvent,
    ListingExpiredEvent,
    ListingMarkedAsSoldEvent,
    ListingPausedEvent,
    ListingResumedEvent,
    ListingRenewalInitiatedEvent,
)
