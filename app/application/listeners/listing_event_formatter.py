"""Null-safe formatting of listings for listener log messages."""

from typing import Optional

from app.domain.entities.car_listing import CarListing


class ListingEventFormatter:
    """Formats listing and seller details for log output."""

    @staticmethod
    def seller_info(listing: Optional[CarListing]) -> str:
        """
        Describe the seller of a listing.

        Returns:
            "'name' (ID: id)", "unknown seller" when the listing has no
            seller, or "unknown" when there is no listing
        """
        if listing is None:
            return "unknown"
        seller = listing.seller
        if seller is None:
            return "unknown seller"
        username = seller.username if seller.username is not None else "unnamed"
        seller_id = seller.id if seller.id is not None else "unknown"
        return f"'{username}' (ID: {seller_id})"

    @classmethod
    def listing_info(cls, listing: Optional[CarListing]) -> str:
        """Describe a listing as 'listing ID <id> by <seller>'."""
        if listing is None:
            return "unknown listing"
        listing_id = listing.id if listing.id is not None else "unknown"
        return f"listing ID {listing_id} by {cls.seller_info(listing)}"
