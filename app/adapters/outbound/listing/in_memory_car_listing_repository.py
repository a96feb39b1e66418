"""In-memory car listing repository adapter."""

import copy
import threading
from typing import Iterable, Optional

from app.adapters.outbound.listing.predicate_evaluator import matches_all
from app.application.dtos.listing import ListingPage, ListingSummary
from app.application.ports.car_listing_repository import CarListingRepository
from app.domain.entities.car_listing import CarListing
from app.domain.value_objects.predicate import PredicateSet


class InMemoryCarListingRepository(CarListingRepository):
    """
    In-memory implementation of car listing repository.

    - Stores copies, so callers never share state with the store
    - Assigns incremental ids on first save
    - Filters with the predicate set, then sorts, then pages
    """

    def __init__(self, listings: Optional[Iterable[CarListing]] = None) -> None:
        """
        Initialize in-memory repository.

        Args:
            listings: Optional listings to seed the store with
        """
        self._storage: dict[int, CarListing] = {}
        self._next_id = 1
        self._lock = threading.Lock()
        for listing in listings or []:
            self._store(listing)

    def _store(self, listing: CarListing) -> CarListing:
        with self._lock:
            if listing.id is None:
                listing.id = self._next_id
            self._next_id = max(self._next_id, listing.id + 1)
            self._storage[listing.id] = copy.deepcopy(listing)
            return copy.deepcopy(self._storage[listing.id])

    async def get(self, listing_id: int) -> Optional[CarListing]:
        """
        Get a listing by id.

        Args:
            listing_id: Listing identifier

        Returns:
            Copy of the stored listing, or None if not found
        """
        with self._lock:
            listing = self._storage.get(listing_id)
            return copy.deepcopy(listing) if listing is not None else None

    async def save(self, listing: CarListing) -> CarListing:
        """
        Insert or replace a listing.

        Args:
            listing: Listing to save (its id is set when missing)

        Returns:
            Copy of the saved listing
        """
        return self._store(listing)

    async def search(
        self,
        predicates: PredicateSet,
        page: int,
        size: int,
        sort_by: str = "created_at",
        sort_direction: str = "desc",
    ) -> ListingPage:
        """
        Search listings matching every predicate.

        Args:
            predicates: Predicate set (AND)
            page: Zero-based page index
            size: Page size
            sort_by: Listing attribute to sort by
            sort_direction: 'asc' or 'desc'

        Returns:
            Page of listing summaries
        """
        with self._lock:
            matches = [listing for listing in self._storage.values() if matches_all(listing, predicates)]

        # Stable sorts: id ascending breaks ties in either direction
        matches.sort(key=lambda listing: listing.id)
        matches.sort(key=lambda listing: getattr(listing, sort_by), reverse=sort_direction == "desc")

        start = page * size
        items = [ListingSummary.from_entity(listing) for listing in matches[start : start + size]]
        return ListingPage.build(items, page=page, size=size, total_elements=len(matches))

    def all(self) -> list[CarListing]:
        """Get copies of every stored listing, ordered by id."""
        with self._lock:
            return [copy.deepcopy(self._storage[key]) for key in sorted(self._storage)]
