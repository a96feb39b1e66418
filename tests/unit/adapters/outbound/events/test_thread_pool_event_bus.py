"""Unit tests for ThreadPoolEventBus."""

import threading
from decimal import Decimal

import pytest

from app.adapters.outbound.events.thread_pool_event_bus import ThreadPoolEventBus
from app.domain.entities.car_listing import CarListing
from app.domain.events.listing_events import (
    AdminActionListingEvent,
    ListingApprovedEvent,
    ListingArchivedEvent,
)

SOURCE = object()


def _listing() -> CarListing:
    return CarListing(
        id=1,
        title="2017 Hyundai Elantra",
        brand_name_en="Hyundai",
        model_name_en="Elantra",
        model_year=2017,
        price=Decimal("9000.00"),
        mileage=110000,
    )


@pytest.fixture
def bus():
    """Create event bus and shut it down after the test."""
    event_bus = ThreadPoolEventBus(max_workers=4)
    yield event_bus
    event_bus.shutdown(wait=True)


def test_publish_dispatches_to_registered_handlers_on_worker_threads(bus):
    """Test that handlers run on the pool, not the publishing thread."""
    received = []
    lock = threading.Lock()

    def handler(event):
        with lock:
            received.append((event, threading.current_thread().name))

    bus.subscribe(ListingApprovedEvent, handler)
    event = ListingApprovedEvent(SOURCE, _listing())

    bus.publish(event)
    assert bus.wait_until_idle(timeout=5)

    assert len(received) == 1
    assert received[0][0] is event
    assert received[0][1].startswith("listing-events")
    assert received[0][1] != threading.current_thread().name


def test_publish_returns_without_waiting_for_handlers(bus):
    """Test that publish is fire-and-forget."""
    release = threading.Event()
    finished = threading.Event()

    def slow_handler(event):
        release.wait(timeout=5)
        finished.set()

    bus.subscribe(ListingApprovedEvent, slow_handler)

    bus.publish(ListingApprovedEvent(SOURCE, _listing()))
    assert not finished.is_set()

    release.set()
    assert bus.wait_until_idle(timeout=5)
    assert finished.is_set()


def test_handlers_are_keyed_by_exact_event_type(bus):
    """Test that only handlers for the published type run."""
    calls = []
    bus.subscribe(ListingArchivedEvent, lambda event: calls.append("archived"))
    bus.subscribe(AdminActionListingEvent, lambda event: calls.append("base"))

    bus.publish(ListingApprovedEvent(SOURCE, _listing()))
    bus.publish(ListingArchivedEvent(SOURCE, _listing(), is_admin_action=True))
    assert bus.wait_until_idle(timeout=5)

    assert calls == ["archived"]


def test_publish_without_handlers_is_noop(bus):
    """Test publishing an event nobody listens to."""
    bus.publish(ListingApprovedEvent(SOURCE, _listing()))

    assert bus.wait_until_idle(timeout=1)
    assert bus.handlers_for(ListingApprovedEvent) == []


def test_failing_handler_is_logged_and_isolated(bus, caplog):
    """Test that one handler failing neither reaches the publisher nor stops others."""
    calls = []

    def failing_handler(event):
        raise RuntimeError("listener exploded")

    bus.subscribe(ListingArchivedEvent, failing_handler)
    bus.subscribe(ListingArchivedEvent, lambda event: calls.append(event.listing_id))

    bus.publish(ListingArchivedEvent(SOURCE, _listing(), is_admin_action=True))
    assert bus.wait_until_idle(timeout=5)

    assert calls == [1]
    assert "listener exploded" in caplog.text
    assert "ListingArchivedEvent[listingId=1, isAdminAction=true, seller=unknown]" in caplog.text
    assert "failing_handler" in caplog.text


def test_failed_handler_is_not_retried(bus):
    """Test that a failing handler runs exactly once per publish."""
    attempts = []

    def failing_handler(event):
        attempts.append(1)
        raise RuntimeError("boom")

    bus.subscribe(ListingApprovedEvent, failing_handler)

    bus.publish(ListingApprovedEvent(SOURCE, _listing()))
    assert bus.wait_until_idle(timeout=5)

    assert len(attempts) == 1


def test_publish_after_shutdown_drops_event(caplog):
    """Test that publishing after shutdown logs a warning instead of raising."""
    bus = ThreadPoolEventBus(max_workers=1)
    calls = []
    bus.subscribe(ListingApprovedEvent, calls.append)
    bus.shutdown(wait=True)

    bus.publish(ListingApprovedEvent(SOURCE, _listing()))

    assert calls == []
    assert "dropping ListingApprovedEvent" in caplog.text


def test_invalid_pool_size_is_rejected():
    """Test that a pool needs at least one worker."""
    with pytest.raises(ValueError):
        ThreadPoolEventBus(max_workers=0)
