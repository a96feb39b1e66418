"""Unit tests for HTTP routes."""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from app.adapters.inbound.http.auth import create_access_token
from app.adapters.inbound.http.error_handlers import register_exception_handlers
from app.adapters.inbound.http.routes import router
from app.adapters.outbound.listing.in_memory_car_listing_repository import (
    InMemoryCarListingRepository,
)
from app.application.ports.event_publisher import EventPublisher
from app.application.use_cases.listing_status import ListingStatusUseCase
from app.application.use_cases.search_listings import SearchListings
from app.domain.entities.car_listing import CarListing, Seller
from app.domain.events.listing_events import ListingArchivedEvent, ListingRenewalInitiatedEvent
from app.infrastructure.config.settings import settings


def _listing(title, brand, price, **flags) -> CarListing:
    values = {
        "title": title,
        "brand_name_en": brand,
        "model_name_en": title.split()[1],
        "model_year": 2019,
        "price": Decimal(price),
        "mileage": 50000,
        "approved": True,
        "seller": Seller(id=1, username="seller1"),
    }
    values.update(flags)
    return CarListing(**values)


@pytest.fixture
def repository():
    """Create seeded in-memory repository."""
    return InMemoryCarListingRepository(
        [
            _listing("Toyota Camry", "Toyota", "15000"),
            _listing("Toyota Corolla", "Toyota", "25000"),
            _listing("Honda Civic", "Honda", "12000"),
            _listing("Kia Rio", "Kia", "7000", approved=False),
        ]
    )


@pytest.fixture
def publisher():
    """Create a recording event publisher."""
    return MagicMock(spec=EventPublisher)


@pytest.fixture
def app(repository, publisher):
    """Create FastAPI app with router, exception handlers and patched use cases."""
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(router)
    with patch("app.adapters.inbound.http.routes._search_listings", SearchListings(repository)), patch(
        "app.adapters.inbound.http.routes._listing_status", ListingStatusUseCase(repository, publisher)
    ):
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


def _auth(username="seller1", roles=()) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(username, roles)}"}


def _admin() -> dict[str, str]:
    return _auth("admin1", ("admin",))


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


# --- Search ---


def test_filter_listings_by_brand_and_price(client):
    """Test the filter endpoint maps camelCase query params."""
    response = client.get("/api/listings/filter", params={"brand": "toyota", "minPrice": 10000, "maxPrice": 20000})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [item["title"] for item in data["items"]] == ["Toyota Camry"]
    assert data["total_elements"] == 1


def test_filter_listings_hides_unapproved(client):
    """Test that pending listings are not searchable."""
    response = client.get("/api/listings/filter", params={"searchQuery": "rio"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["items"] == []


def test_filter_listings_sorting_and_paging(client):
    """Test sortBy/sortDirection and page/size."""
    response = client.get(
        "/api/listings/filter",
        params={"sortBy": "price", "sortDirection": "ASC", "size": 2, "page": 0},
    )

    data = response.json()
    assert [item["title"] for item in data["items"]] == ["Honda Civic", "Toyota Camry"]
    assert data["total_pages"] == 2


def test_filter_listings_invalid_sort_field_is_400(client):
    """Test that non-whitelisted sort fields are rejected."""
    response = client.get("/api/listings/filter", params={"sortBy": "seller"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "seller" in response.json()["message"]


@pytest.mark.parametrize(
    "params",
    [{"minPrice": -1}, {"page": -1}, {"size": 0}, {"size": 101}, {"sortDirection": "sideways"}],
)
def test_filter_listings_invalid_params_are_422(client, params):
    """Test request-level validation of filter parameters."""
    response = client.get("/api/listings/filter", params=params)

    assert response.status_code == 422


def test_get_listing(client):
    """Test single listing lookup."""
    assert client.get("/api/listings/1").json()["title"] == "Toyota Camry"
    assert client.get("/api/listings/4").status_code == status.HTTP_404_NOT_FOUND


# --- Authentication ---


def test_seller_endpoint_requires_token(client):
    """Test missing and invalid tokens are 401."""
    assert client.post("/api/listings/1/archive").status_code == status.HTTP_401_UNAUTHORIZED
    response = client.post("/api/listings/1/archive", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_expired_token_is_401(client):
    """Test that expired tokens are rejected."""
    token = create_access_token("seller1", expires_delta=timedelta(seconds=-10))

    response = client.post("/api/listings/1/archive", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_admin_endpoint_requires_admin_role(client):
    """Test that non-admin users get 403 on admin routes."""
    response = client.post("/api/admin/listings/4/approve", headers=_auth())

    assert response.status_code == status.HTTP_403_FORBIDDEN


# --- Lifecycle ---


def test_seller_archive_publishes_event(client, publisher):
    """Test archiving own listing."""
    response = client.post("/api/listings/1/archive", headers=_auth())

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "archived"
    event = publisher.publish.call_args.args[0]
    assert isinstance(event, ListingArchivedEvent)
    assert event.is_admin_action is False


def test_non_owner_gets_403(client, publisher):
    """Test that another user cannot change the listing."""
    response = client.post("/api/listings/1/mark-sold", headers=_auth("intruder"))

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["error"] == "Forbidden"
    publisher.publish.assert_not_called()


def test_unknown_listing_is_404(client):
    """Test lifecycle call on missing listing."""
    response = client.post("/api/listings/999/pause", headers=_auth())

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "Car listing not found with id: 999"


def test_state_conflict_is_409(client):
    """Test that a disallowed transition maps to 409."""
    response = client.post("/api/admin/listings/1/approve", headers=_admin())

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["path"] == "/api/admin/listings/1/approve"


def test_pause_then_resume(client, publisher):
    """Test seller pause and resume endpoints."""
    assert client.post("/api/listings/2/pause", headers=_auth()).json()["status"] == "paused"
    assert client.post("/api/listings/2/resume", headers=_auth()).json()["status"] == "approved"
    assert publisher.publish.call_count == 2


def test_renew_with_explicit_and_default_duration(client, publisher):
    """Test renew body and default duration."""
    response = client.post("/api/listings/1/renew", json={"duration_days": 90}, headers=_auth())
    assert response.status_code == status.HTTP_200_OK
    assert publisher.publish.call_args.args[0].duration_days == 90

    response = client.post("/api/listings/1/renew", headers=_auth())
    assert response.status_code == status.HTTP_200_OK
    event = publisher.publish.call_args.args[0]
    assert isinstance(event, ListingRenewalInitiatedEvent)
    assert event.duration_days == settings.default_renewal_days


@pytest.mark.parametrize("duration_days", [0, 366, 400])
def test_renew_with_invalid_duration_is_400(client, publisher, duration_days):
    """Test that out-of-range renewal durations are rejected before any change."""
    response = client.post("/api/listings/1/renew", json={"duration_days": duration_days}, headers=_auth())

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    publisher.publish.assert_not_called()


def test_admin_lifecycle_endpoints(client, publisher):
    """Test approve, mark-sold, archive, unarchive and expire as admin."""
    assert client.post("/api/admin/listings/4/approve", headers=_admin()).json()["status"] == "approved"
    assert client.post("/api/admin/listings/4/expire", headers=_admin()).json()["status"] == "expired"
    assert client.post("/api/admin/listings/3/mark-sold", headers=_admin()).json()["status"] == "sold"
    assert client.post("/api/admin/listings/2/archive", headers=_admin()).json()["status"] == "archived"
    assert client.post("/api/admin/listings/2/unarchive", headers=_admin()).json()["status"] == "approved"

    # unarchive publishes nothing
    assert publisher.publish.call_count == 4


def test_internal_value_error_is_not_a_client_error(app):
    """Test that a ValueError from outside the domain stays a 500."""
    failing = MagicMock(spec=ListingStatusUseCase)
    failing.archive.side_effect = ValueError("DATABASE_URL is required for database operations")
    client = TestClient(app, raise_server_exceptions=False)

    with patch("app.adapters.inbound.http.routes._listing_status", failing):
        response = client.post("/api/listings/1/archive", headers=_auth())

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
