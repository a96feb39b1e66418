"""HTTP routes."""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.adapters.inbound.http.auth import AuthenticatedUser, get_current_user, require_admin
from app.adapters.inbound.http.schemas import RenewListingRequest
from app.application.dtos.listing import ListingPage, ListingSummary
from app.application.dtos.listing_filter import ListingFilter
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import log_event
from app.infrastructure.wiring.dependencies import (
    create_car_listing_repository,
    create_event_bus,
    create_listing_status_use_case,
    create_search_listings_use_case,
)

router = APIRouter()

# Create use case instances (wired with dependencies)
_listing_repository = create_car_listing_repository()
event_bus = create_event_bus()
_search_listings = create_search_listings_use_case(_listing_repository)
_listing_status = create_listing_status_use_case(_listing_repository, event_bus)


def _ids(values: Optional[list[int]]) -> Optional[frozenset[int]]:
    return frozenset(values) if values else None


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict[str, str]:
    """
    Health check endpoint for liveness/readiness.

    Returns:
        Health status
    """
    return {"status": "ok"}


# --- Public listing endpoints ---


@router.get("/api/listings/filter", status_code=status.HTTP_200_OK, response_model=ListingPage)
async def filter_listings(
    brand: Optional[str] = None,
    model: Optional[str] = None,
    min_year: Optional[int] = Query(None, alias="minYear"),
    max_year: Optional[int] = Query(None, alias="maxYear"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice"),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice"),
    min_mileage: Optional[int] = Query(None, alias="minMileage"),
    max_mileage: Optional[int] = Query(None, alias="maxMileage"),
    location: Optional[str] = None,
    transmission_ids: Optional[list[int]] = Query(None, alias="transmissionIds"),
    fuel_type_ids: Optional[list[int]] = Query(None, alias="fuelTypeIds"),
    body_style_ids: Optional[list[int]] = Query(None, alias="bodyStyleIds"),
    search_query: Optional[str] = Query(None, alias="searchQuery"),
    page: int = 0,
    size: int = 10,
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_direction: str = Query("desc", alias="sortDirection"),
) -> ListingPage:
    """
    Search approved, publicly visible listings.

    Returns:
        Page of listing summaries
    """
    listing_filter = ListingFilter(
        brand=brand,
        model=model,
        min_year=min_year,
        max_year=max_year,
        min_price=min_price,
        max_price=max_price,
        min_mileage=min_mileage,
        max_mileage=max_mileage,
        location=location,
        transmission_ids=_ids(transmission_ids),
        fuel_type_ids=_ids(fuel_type_ids),
        body_style_ids=_ids(body_style_ids),
        search_query=search_query,
        page=page,
        size=size,
        sort_by=sort_by,
        sort_direction=sort_direction.lower(),
    )
    return await _search_listings.execute(listing_filter)


@router.get("/api/listings/{listing_id}", status_code=status.HTTP_200_OK, response_model=ListingSummary)
async def get_listing(listing_id: int) -> ListingSummary:
    """Get one approved listing."""
    return await _search_listings.get_listing(listing_id)


# --- Seller endpoints ---


@router.post("/api/listings/{listing_id}/mark-sold", response_model=ListingSummary)
async def mark_listing_as_sold(
    listing_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
) -> ListingSummary:
    """Mark the caller's listing as sold."""
    log_event("http", action="mark_as_sold", listing_id=listing_id, user=user.username)
    return await _listing_status.mark_as_sold(listing_id, user.username)


@router.post("/api/listings/{listing_id}/archive", response_model=ListingSummary)
async def archive_listing(
    listing_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
) -> ListingSummary:
    """Archive the caller's listing."""
    log_event("http", action="archive", listing_id=listing_id, user=user.username)
    return await _listing_status.archive(listing_id, user.username)


@router.post("/api/listings/{listing_id}/unarchive", response_model=ListingSummary)
async def unarchive_listing(
    listing_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
) -> ListingSummary:
    """Unarchive the caller's listing."""
    log_event("http", action="unarchive", listing_id=listing_id, user=user.username)
    return await _listing_status.unarchive(listing_id, user.username)


@router.post("/api/listings/{listing_id}/pause", response_model=ListingSummary)
async def pause_listing(
    listing_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
) -> ListingSummary:
    """Pause the caller's listing."""
    log_event("http", action="pause", listing_id=listing_id, user=user.username)
    return await _listing_status.pause(listing_id, user.username)


@router.post("/api/listings/{listing_id}/resume", response_model=ListingSummary)
async def resume_listing(
    listing_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
) -> ListingSummary:
    """Resume the caller's paused listing."""
    log_event("http", action="resume", listing_id=listing_id, user=user.username)
    return await _listing_status.resume(listing_id, user.username)


@router.post("/api/listings/{listing_id}/renew", response_model=ListingSummary)
async def renew_listing(
    listing_id: int,
    request: Optional[RenewListingRequest] = None,
    user: AuthenticatedUser = Depends(get_current_user),
) -> ListingSummary:
    """
    Renew the caller's listing.

    Args:
        listing_id: Listing identifier
        request: Optional body; duration_days defaults to DEFAULT_RENEWAL_DAYS
        user: Authenticated caller

    Returns:
        Renewed listing summary
    """
    duration_days = settings.default_renewal_days
    if request is not None and request.duration_days is not None:
        duration_days = request.duration_days

    log_event("http", action="renew", listing_id=listing_id, user=user.username, duration_days=duration_days)
    return await _listing_status.renew(listing_id, user.username, duration_days)


# --- Admin endpoints ---


@router.post("/api/admin/listings/{listing_id}/approve", response_model=ListingSummary)
async def approve_listing(
    listing_id: int,
    admin: AuthenticatedUser = Depends(require_admin),
) -> ListingSummary:
    """Approve a pending listing."""
    log_event("http", action="approve", listing_id=listing_id, user=admin.username)
    return await _listing_status.approve(listing_id)


@router.post("/api/admin/listings/{listing_id}/mark-sold", response_model=ListingSummary)
async def admin_mark_listing_as_sold(
    listing_id: int,
    admin: AuthenticatedUser = Depends(require_admin),
) -> ListingSummary:
    """Mark any listing as sold."""
    log_event("http", action="mark_as_sold", listing_id=listing_id, user=admin.username)
    return await _listing_status.mark_as_sold_by_admin(listing_id)


@router.post("/api/admin/listings/{listing_id}/archive", response_model=ListingSummary)
async def admin_archive_listing(
    listing_id: int,
    admin: AuthenticatedUser = Depends(require_admin),
) -> ListingSummary:
    """Archive any listing."""
    log_event("http", action="archive", listing_id=listing_id, user=admin.username)
    return await _listing_status.archive_by_admin(listing_id)


@router.post("/api/admin/listings/{listing_id}/unarchive", response_model=ListingSummary)
async def admin_unarchive_listing(
    listing_id: int,
    admin: AuthenticatedUser = Depends(require_admin),
) -> ListingSummary:
    """Unarchive any listing."""
    log_event("http", action="unarchive", listing_id=listing_id, user=admin.username)
    return await _listing_status.unarchive_by_admin(listing_id)


@router.post("/api/admin/listings/{listing_id}/expire", response_model=ListingSummary)
async def admin_expire_listing(
    listing_id: int,
    admin: AuthenticatedUser = Depends(require_admin),
) -> ListingSummary:
    """Expire any listing."""
    log_event("http", action="expire", listing_id=listing_id, user=admin.username)
    return await _listing_status.expire(listing_id)
