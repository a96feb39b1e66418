"""Listing DTOs."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import ConfigDict

from app.application.dtos.base import DTO
from app.domain.entities.car_listing import CarListing


class ListingSummary(DTO):
    """Listing summary DTO returned by search and lifecycle endpoints."""

    id: int
    title: str
    brand: str
    model: str
    model_year: int
    price: Decimal
    mileage: int
    governorate: Optional[str] = None
    status: str
    seller_username: Optional[str] = None
    expiration_date: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 42,
                "title": "2019 Toyota Camry SE",
                "brand": "Toyota",
                "model": "Camry",
                "model_year": 2019,
                "price": "15500.00",
                "mileage": 64000,
                "governorate": "Damascus",
                "status": "approved",
                "seller_username": "seller1",
                "created_at": "2024-01-15T10:30:00Z",
            }
        }
    )

    @classmethod
    def from_entity(cls, listing: CarListing) -> "ListingSummary":
        """
        Map a CarListing entity to its summary.

        Args:
            listing: Car listing entity (must have an id)

        Returns:
            ListingSummary DTO
        """
        return cls(
            id=listing.id,
            title=listing.title,
            brand=listing.brand_name_en,
            model=listing.model_name_en,
            model_year=listing.model_year,
            price=listing.price,
            mileage=listing.mileage,
            governorate=listing.governorate_name_en,
            status=listing.status,
            seller_username=listing.seller.username if listing.seller else None,
            expiration_date=listing.expiration_date,
            created_at=listing.created_at,
        )


class ListingPage(DTO):
    """One page of listing search results."""

    items: list[ListingSummary]
    page: int
    size: int
    total_elements: int
    total_pages: int

    @classmethod
    def build(cls, items: list[ListingSummary], page: int, size: int, total_elements: int) -> "ListingPage":
        """
        Build a page computing total_pages from the total element count.

        Args:
            items: Summaries on this page
            page: Zero-based page index
            size: Page size
            total_elements: Number of matching listings across all pages

        Returns:
            ListingPage DTO
        """
        total_pages = (total_elements + size - 1) // size if size > 0 else 0
        return cls(
            items=items,
            page=page,
            size=size,
            total_elements=total_elements,
            total_pages=total_pages,
        )
