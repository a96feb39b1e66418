"""Car listing repository adapters."""

from app.adapters.outbound.listing.in_memory_car_listing_repository import (
    InMemoryCarListingRepository,
)
from app.adapters.outbound.listing.postgres_car_listing_repository import (
    PostgresCarListingRepository,
)

__all__ = [
    "InMemoryCarListingRepository",
    "PostgresCarListingRepository",
]
