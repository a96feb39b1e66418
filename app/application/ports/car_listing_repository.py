"""Car listing repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from app.application.dtos.listing import ListingPage
from app.domain.entities.car_listing import CarListing
from app.domain.value_objects.predicate import PredicateSet


class CarListingRepository(ABC):
    """Port interface for car listing repository."""

    @abstractmethod
    async def get(self, listing_id: int) -> Optional[CarListing]:
        """
        Get a listing by id, regardless of its lifecycle state.

        Args:
            listing_id: Listing identifier

        Returns:
            Car listing entity, or None if not found
        """
        pass

    @abstractmethod
    async def save(self, listing: CarListing) -> CarListing:
        """
        Save a listing (insert when it has no id, update otherwise).

        Args:
            listing: Car listing entity to save

        Returns:
            The saved listing, with its id assigned
        """
        pass

    @abstractmethod
    async def search(
        self,
        predicates: PredicateSet,
        page: int,
        size: int,
        sort_by: str,
        sort_direction: str,
    ) -> ListingPage:
        """
        Find listings matching every predicate.

        Args:
            predicates: Conjunction of predicates (empty matches everything)
            page: Zero-based page index
            size: Page size
            sort_by: Listing attribute to sort by (already whitelisted)
            sort_direction: 'asc' or 'desc'

        Returns:
            Page of matching listings with total-count metadata
        """
        pass
