"""Dependency injection factory functions."""

from app.adapters.outbound.events.thread_pool_event_bus import ThreadPoolEventBus
from app.adapters.outbound.listing import (
    InMemoryCarListingRepository,
    PostgresCarListingRepository,
)
from app.adapters.outbound.transactions.noop_transaction_runner import NoOpTransactionRunner
from app.adapters.outbound.transactions.sqlalchemy_transaction_runner import (
    SQLAlchemyTransactionRunner,
)
from app.application.listeners.listing_listeners import register_listing_listeners
from app.application.ports.car_listing_repository import CarListingRepository
from app.application.ports.event_publisher import EventPublisher
from app.application.ports.transaction_runner import TransactionRunner
from app.application.use_cases.listing_status import ListingStatusUseCase
from app.application.use_cases.search_listings import SearchListings
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import log_listing_search


def _uses_postgres() -> bool:
    if settings.listing_repository == "postgres":
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required when LISTING_REPOSITORY=postgres")
        return True
    return False


def create_car_listing_repository() -> CarListingRepository:
    """
    Factory function to create car listing repository.

    Returns:
        CarListingRepository instance
    """
    if _uses_postgres():
        return PostgresCarListingRepository()
    else:
        return InMemoryCarListingRepository()


def create_transaction_runner() -> TransactionRunner:
    """
    Factory function to create the transaction runner used by listeners.

    Returns:
        TransactionRunner instance (SQLAlchemy or NoOp)
    """
    if _uses_postgres():
        from app.infrastructure.db import get_session_factory

        return SQLAlchemyTransactionRunner(get_session_factory())
    return NoOpTransactionRunner()


def create_event_bus() -> ThreadPoolEventBus:
    """
    Factory function to create the event bus with all listing listeners.

    Returns:
        ThreadPoolEventBus instance
    """
    event_bus = ThreadPoolEventBus(max_workers=settings.event_worker_pool_size)
    register_listing_listeners(event_bus, create_transaction_runner())
    return event_bus


def create_search_listings_use_case(listing_repository: CarListingRepository) -> SearchListings:
    """
    Factory function to create SearchListings with dependencies.

    Args:
        listing_repository: Car listing repository

    Returns:
        SearchListings instance
    """

    # Wire logger function
    def _logger_func(filters, results_count, **kwargs):
        log_listing_search(filters, results_count, **kwargs)

    return SearchListings(listing_repository, logger=_logger_func)


def create_listing_status_use_case(
    listing_repository: CarListingRepository,
    event_publisher: EventPublisher,
) -> ListingStatusUseCase:
    """
    Factory function to create ListingStatusUseCase with dependencies.

    Args:
        listing_repository: Car listing repository
        event_publisher: Event publisher for lifecycle events

    Returns:
        ListingStatusUseCase instance
    """
    return ListingStatusUseCase(listing_repository, event_publisher)
