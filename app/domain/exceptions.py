"""Domain exceptions."""

from typing import Any


class MarketplaceError(Exception):
    """Base class for marketplace domain errors."""


class ListingNotFoundError(MarketplaceError):
    """Raised when a listing does not exist (or is not visible to the caller)."""

    def __init__(self, listing_id: Any) -> None:
        self.listing_id = listing_id
        super().__init__(f"Car listing not found with id: {listing_id}")


class ListingPermissionError(MarketplaceError):
    """Raised when a user tries to modify a listing they do not own."""

    def __init__(self, message: str = "User does not have permission to modify this listing.") -> None:
        super().__init__(message)


class ListingStateError(MarketplaceError):
    """Raised when a lifecycle transition is not allowed from the current state."""


class InvalidSortFieldError(MarketplaceError):
    """Raised when listings are sorted by a field that is not whitelisted."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Sorting by field '{field_name}' is not allowed.")


class InvalidListingInputError(MarketplaceError, ValueError):
    """Raised when a listing value or event argument is invalid."""
