"""Car listing entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional


@dataclass
class Seller:
    """Seller (listing owner) entity."""

    id: Optional[int] = None
    username: Optional[str] = None
    email: Optional[str] = None


@dataclass
class CarListing:
    """Car listing entity with its lifecycle flags."""

    title: str
    brand_name_en: str
    model_name_en: str
    model_year: int
    price: Decimal
    mileage: int
    id: Optional[int] = None
    description: Optional[str] = None
    brand_name_ar: Optional[str] = None
    model_name_ar: Optional[str] = None
    governorate_name_en: Optional[str] = None
    governorate_name_ar: Optional[str] = None
    location: Optional[str] = None
    transmission_id: Optional[int] = None
    fuel_type_id: Optional[int] = None
    body_style_id: Optional[int] = None
    seller_type_id: Optional[int] = None
    # Lifecycle flags
    approved: bool = False
    sold: bool = False
    archived: bool = False
    expired: bool = False
    is_user_active: bool = True
    expiration_date: Optional[datetime] = None
    seller: Optional[Seller] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.now(timezone.utc)

    @property
    def status(self) -> str:
        """
        Get the lifecycle status derived from the flags.

        Returns:
            One of pending, approved, paused, sold, expired, archived
        """
        if self.archived:
            return "archived"
        if self.sold:
            return "sold"
        if self.expired:
            return "expired"
        if not self.approved:
            return "pending"
        if not self.is_user_active:
            return "paused"
        return "approved"

    def is_owned_by(self, username: str) -> bool:
        """
        Check whether the given username owns this listing.

        Args:
            username: Username to check

        Returns:
            True if the listing has a seller with that username
        """
        return self.seller is not None and self.seller.username == username
