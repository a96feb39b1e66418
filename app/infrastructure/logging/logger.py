"""Structured logger for observability."""

import logging
from typing import Any, Optional

# Configure root logger with JSON-like structured format
_logger = logging.getLogger("car_marketplace")
_logger.setLevel(logging.INFO)

# Create console handler if not exists
if not _logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(threadName)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def log_event(
    component: str,
    level: int = logging.INFO,
    exc_info: Any = None,
    **kwargs: Any,
) -> None:
    """
    Log a structured event.

    Args:
        component: Component name (e.g., 'http', 'search', 'status', 'event_bus')
        level: Log level (default: INFO)
        exc_info: Optional exception info passed through to the logging call
        **kwargs: Additional structured fields to log
    """
    fields = {"component": component}
    fields.update(kwargs)

    # Format as key=value pairs for readability
    log_parts = [f"{k}={v!r}" for k, v in fields.items()]
    log_message = " | ".join(log_parts)

    _logger.log(level, log_message, exc_info=exc_info)


def log_listing_transition(
    listing_id: Optional[int],
    action: str,
    actor: str,
    status_before: Optional[str] = None,
    status_after: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """
    Log a listing lifecycle transition.

    Args:
        listing_id: Listing identifier
        action: Transition name (e.g., 'archive', 'mark_as_sold')
        actor: Username, or 'admin' / 'system'
        status_before: Status before the transition
        status_after: Status after the transition
        **kwargs: Additional fields
    """
    fields = {}
    if status_before is not None:
        fields["status_before"] = status_before
    if status_after is not None:
        fields["status_after"] = status_after
    fields.update(kwargs)

    log_event(
        "status",
        listing_id=listing_id,
        action=action,
        actor=actor,
        **fields,
    )


def log_listing_search(
    filters: dict[str, Any],
    results_count: int,
    **kwargs: Any,
) -> None:
    """
    Log listing search event.

    Args:
        filters: Search filters applied
        results_count: Number of results on the returned page
        **kwargs: Additional fields
    """
    log_event(
        "search",
        search_filters=filters,
        search_results_count=results_count,
        **kwargs,
    )


def log_listener_failure(
    event_summary: str,
    handler_name: str,
    error: BaseException,
) -> None:
    """
    Log an exception raised by an event listener.

    Args:
        event_summary: Summary of the event being handled
        handler_name: Qualified name of the failing handler
        error: The exception raised
    """
    log_event(
        "event_bus",
        level=logging.ERROR,
        exc_info=error,
        event=event_summary,
        handler=handler_name,
        error=str(error),
    )


# Logger instance for free-form messages
logger = _logger
