"""Listing renewal duration value object."""

from dataclasses import dataclass

from app.domain.exceptions import InvalidListingInputError

MAX_RENEWAL_DAYS = 365


@dataclass(frozen=True)
class RenewalDurationDays:
    """Number of days a listing renewal extends its expiry by."""

    days: int

    def __post_init__(self) -> None:
        """Validate renewal duration."""
        if isinstance(self.days, bool) or not isinstance(self.days, int):
            raise InvalidListingInputError("Duration must be a whole number of days")
        if self.days <= 0:
            raise InvalidListingInputError("Duration must be greater than 0 days")
        if self.days > MAX_RENEWAL_DAYS:
            raise InvalidListingInputError(f"Duration cannot exceed {MAX_RENEWAL_DAYS} days")
