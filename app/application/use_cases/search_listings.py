"""Search listings use case."""

from typing import Callable, Optional

from app.application.dtos.listing import ListingPage, ListingSummary
from app.application.dtos.listing_filter import ListingFilter
from app.application.ports.car_listing_repository import CarListingRepository
from app.application.use_cases.build_listing_predicates import (
    build_listing_predicates,
    public_visibility_predicates,
)
from app.domain.exceptions import InvalidSortFieldError, ListingNotFoundError

# Public sort names mapped to listing attributes
SORTABLE_FIELDS: dict[str, str] = {
    "createdAt": "created_at",
    "price": "price",
    "modelYear": "model_year",
    "mileage": "mileage",
    "title": "title",
}


class SearchListings:
    """Use case for searching publicly visible listings."""

    def __init__(
        self,
        listing_repository: CarListingRepository,
        logger: Optional[Callable] = None,
    ) -> None:
        """
        Initialize use case.

        Args:
            listing_repository: Car listing repository
            logger: Optional search logger function (filters, results_count, **fields)
        """
        self._listing_repository = listing_repository
        self._logger = logger

    async def execute(self, listing_filter: ListingFilter) -> ListingPage:
        """
        Search approved, unsold, unarchived, active listings.

        Args:
            listing_filter: Search filter with pagination and sorting

        Returns:
            Page of matching listing summaries

        Raises:
            InvalidSortFieldError: If sort_by is not a whitelisted field
        """
        sort_attribute = SORTABLE_FIELDS.get(listing_filter.sort_by)
        if sort_attribute is None:
            raise InvalidSortFieldError(listing_filter.sort_by)

        predicates = public_visibility_predicates() + build_listing_predicates(listing_filter)
        result = await self._listing_repository.search(
            predicates,
            page=listing_filter.page,
            size=listing_filter.size,
            sort_by=sort_attribute,
            sort_direction=listing_filter.sort_direction,
        )

        if self._logger:
            self._logger(
                filters=listing_filter.model_dump(exclude_none=True, mode="json"),
                predicate_count=len(predicates),
                results_count=len(result.items),
                total_elements=result.total_elements,
            )

        return result

    async def get_listing(self, listing_id: int) -> ListingSummary:
        """
        Get a single approved listing.

        Args:
            listing_id: Listing identifier

        Returns:
            Listing summary

        Raises:
            ListingNotFoundError: If the listing does not exist or is not approved
        """
        listing = await self._listing_repository.get(listing_id)
        if listing is None or not listing.approved:
            raise ListingNotFoundError(listing_id)
        return ListingSummary.from_entity(listing)
