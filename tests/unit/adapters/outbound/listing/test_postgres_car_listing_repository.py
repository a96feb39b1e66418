"""Unit tests for Postgres car listing repository using SQLite in-memory."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.adapters.outbound.listing.in_memory_car_listing_repository import (
    InMemoryCarListingRepository,
)
from app.adapters.outbound.listing.models import Base, CarListingModel
from app.adapters.outbound.listing.postgres_car_listing_repository import (
    PostgresCarListingRepository,
)
from app.adapters.outbound.listing.predicate_compiler import compile_predicates
from app.application.dtos.listing_filter import ListingFilter
from app.application.use_cases.build_listing_predicates import (
    build_listing_predicates,
    public_visibility_predicates,
)
from app.domain.entities.car_listing import CarListing, Seller
from app.domain.value_objects.predicate import Operator, Predicate


def _listings() -> list[CarListing]:
    seller = Seller(username="seller1", email="seller1@example.com")
    return [
        CarListing(
            title="Toyota Camry 2018",
            description="Family sedan, one owner",
            brand_name_en="Toyota",
            brand_name_ar="تويوتا",
            model_name_en="Camry",
            model_year=2018,
            price=Decimal("15000.00"),
            mileage=90000,
            governorate_name_en="Damascus",
            location="Mazzeh, Damascus",
            transmission_id=1,
            fuel_type_id=1,
            approved=True,
            seller=seller,
        ),
        CarListing(
            title="Toyota Corolla 2021",
            brand_name_en="Toyota",
            model_name_en="Corolla",
            model_year=2021,
            price=Decimal("19000.00"),
            mileage=20000,
            governorate_name_en="Aleppo",
            transmission_id=2,
            fuel_type_id=2,
            approved=True,
            seller=seller,
        ),
        CarListing(
            title="Honda Civic 2020",
            brand_name_en="Honda",
            model_name_en="Civic",
            model_year=2020,
            price=Decimal("17000.00"),
            mileage=40000,
            governorate_name_en="Homs",
            transmission_id=1,
            approved=True,
            sold=True,
        ),
        CarListing(
            title="Kia Rio 2015",
            brand_name_en="Kia",
            model_name_en="Rio",
            model_year=2015,
            price=Decimal("6000.00"),
            mileage=150000,
            approved=False,
        ),
    ]


@pytest.fixture
def sqlite_engine():
    """Create SQLite in-memory engine for testing."""
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def repository(sqlite_engine, monkeypatch):
    """Create Postgres repository with SQLite in-memory database for testing."""
    # Patch get_db_session to use our test session
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=sqlite_engine)

    def get_test_db_session():
        return SessionLocal()

    monkeypatch.setattr(
        "app.adapters.outbound.listing.postgres_car_listing_repository.get_db_session",
        get_test_db_session,
    )

    return PostgresCarListingRepository()


async def _seed(repository) -> list[CarListing]:
    return [await repository.save(listing) for listing in _listings()]


@pytest.mark.asyncio
async def test_save_and_get_round_trip(repository):
    """Test that saving assigns an id and get returns the stored listing."""
    expiration = datetime.now(timezone.utc) + timedelta(days=30)
    listing = _listings()[0]
    listing.expiration_date = expiration

    saved = await repository.save(listing)
    fetched = await repository.get(saved.id)

    assert saved.id is not None
    assert fetched.title == "Toyota Camry 2018"
    assert fetched.brand_name_ar == "تويوتا"
    assert fetched.price == Decimal("15000.00")
    assert fetched.seller.username == "seller1"
    assert fetched.seller.id is not None
    assert fetched.expiration_date.tzinfo is not None
    assert fetched.status == "approved"


@pytest.mark.asyncio
async def test_get_missing_returns_none(repository):
    """Test get for an unknown id."""
    assert await repository.get(12345) is None


@pytest.mark.asyncio
async def test_save_updates_existing_row_and_reuses_seller(repository, sqlite_engine):
    """Test update-by-id and seller lookup by username."""
    first, second, *_ = await _seed(repository)

    first.archived = True
    updated = await repository.save(first)

    assert updated.id == first.id
    assert (await repository.get(first.id)).status == "archived"
    assert second.seller.id == first.seller.id

    db = sessionmaker(bind=sqlite_engine)()
    try:
        assert db.query(CarListingModel).count() == 4
    finally:
        db.close()


@pytest.mark.asyncio
async def test_search_applies_visibility_and_filters(repository):
    """Test search with visibility, range and text predicates."""
    await _seed(repository)
    predicates = public_visibility_predicates() + build_listing_predicates(
        ListingFilter(brand="toyota", max_price=Decimal("16000"))
    )

    page = await repository.search(predicates, page=0, size=10)

    assert [item.title for item in page.items] == ["Toyota Camry 2018"]
    assert page.total_elements == 1


@pytest.mark.asyncio
async def test_search_sorts_and_pages(repository):
    """Test ordering, offset/limit and totals."""
    await _seed(repository)

    page = await repository.search((), page=1, size=2, sort_by="model_year", sort_direction="desc")

    assert page.total_elements == 4
    assert page.total_pages == 2
    assert [item.model_year for item in page.items] == [2018, 2015]


@pytest.mark.parametrize(
    "listing_filter",
    [
        ListingFilter(),
        ListingFilter(search_query="DAMASCUS"),
        ListingFilter(search_query="تويوتا"),
        ListingFilter(search_query="one owner"),
        ListingFilter(location="mazzeh"),
        ListingFilter(min_year=2016, max_mileage=95000),
        ListingFilter(transmission_ids=frozenset({1}), fuel_type_ids=frozenset({1, 2})),
        ListingFilter(min_price=Decimal("20000"), max_price=Decimal("10000")),
    ],
)
@pytest.mark.asyncio
async def test_sql_and_in_memory_return_same_listings(repository, listing_filter):
    """Test that compiled SQL and the in-memory evaluator agree."""
    saved = await _seed(repository)
    in_memory = InMemoryCarListingRepository(saved)
    predicates = build_listing_predicates(listing_filter)

    sql_page = await repository.search(predicates, page=0, size=50, sort_by="title", sort_direction="asc")
    memory_page = await in_memory.search(predicates, page=0, size=50, sort_by="title", sort_direction="asc")

    assert [item.id for item in sql_page.items] == [item.id for item in memory_page.items]
    assert sql_page.total_elements == memory_page.total_elements


def test_compile_rejects_unknown_field():
    """Test that predicates on unknown columns are rejected."""
    with pytest.raises(ValueError, match="Unknown listing field"):
        compile_predicates((Predicate("password", Operator.EQ, "x"),))
