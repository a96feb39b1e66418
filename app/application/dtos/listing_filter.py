"""Listing filter DTO."""

from decimal import Decimal
from typing import Literal, Optional

from pydantic import ConfigDict, Field

from app.application.dtos.base import DTO


class ListingFilter(DTO):
    """
    Listing search filter.

    Every field is optional; absent fields impose no constraint. Bounds are
    inclusive. Only per-field validation lives here: a min bound greater than
    its max bound is accepted and simply matches nothing.
    """

    brand: Optional[str] = None
    model: Optional[str] = None
    min_year: Optional[int] = Field(default=None, ge=0)
    max_year: Optional[int] = Field(default=None, ge=0)
    min_price: Optional[Decimal] = Field(default=None, ge=0)
    max_price: Optional[Decimal] = Field(default=None, ge=0)
    min_mileage: Optional[int] = Field(default=None, ge=0)
    max_mileage: Optional[int] = Field(default=None, ge=0)
    location: Optional[str] = None
    transmission_ids: Optional[frozenset[int]] = None
    fuel_type_ids: Optional[frozenset[int]] = None
    body_style_ids: Optional[frozenset[int]] = None
    search_query: Optional[str] = None
    page: int = Field(default=0, ge=0)
    size: int = Field(default=10, ge=1, le=100)
    sort_by: str = "createdAt"
    sort_direction: Literal["asc", "desc"] = "desc"

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "brand": "Toyota",
                "min_price": 10000,
                "max_price": 20000,
                "fuel_type_ids": [1, 2],
                "search_query": "camry",
                "page": 0,
                "size": 10,
                "sort_by": "price",
                "sort_direction": "asc",
            }
        }
    )
