"""Build listing query predicates from a search filter."""

from typing import Iterable, Optional

from app.application.dtos.listing_filter import ListingFilter
from app.domain.value_objects.predicate import (
    AnyOf,
    Operator,
    Predicate,
    PredicateNode,
    PredicateSet,
)

# Attributes matched by free-text search (English and Arabic names)
SEARCH_QUERY_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "brand_name_en",
    "brand_name_ar",
    "model_name_en",
    "model_name_ar",
    "governorate_name_en",
    "governorate_name_ar",
)


def _has_text(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


def _add_range(predicates: list[PredicateNode], field: str, minimum, maximum) -> None:
    if minimum is not None:
        predicates.append(Predicate(field, Operator.GTE, minimum))
    if maximum is not None:
        predicates.append(Predicate(field, Operator.LTE, maximum))


def _add_contains(predicates: list[PredicateNode], field: str, term: Optional[str]) -> None:
    if _has_text(term):
        predicates.append(Predicate.contains_ignore_case(field, term))


def _add_membership(predicates: list[PredicateNode], field: str, ids: Optional[Iterable[int]]) -> None:
    if ids:
        predicates.append(Predicate(field, Operator.IN, tuple(sorted(ids))))


def build_listing_predicates(listing_filter: ListingFilter) -> PredicateSet:
    """
    Translate a listing filter into the predicates a repository must apply.

    Pure function: absent and blank fields add nothing, so an empty filter
    yields an empty set. Range bounds are emitted independently and are not
    cross-checked (min > max passes through). Visibility rules (approved,
    not sold, ...) are NOT applied here; callers add them separately.

    Args:
        listing_filter: Search filter

    Returns:
        Tuple of predicates to be ANDed together
    """
    predicates: list[PredicateNode] = []

    _add_contains(predicates, "brand_name_en", listing_filter.brand)
    _add_contains(predicates, "model_name_en", listing_filter.model)

    _add_range(predicates, "model_year", listing_filter.min_year, listing_filter.max_year)
    _add_range(predicates, "price", listing_filter.min_price, listing_filter.max_price)
    _add_range(predicates, "mileage", listing_filter.min_mileage, listing_filter.max_mileage)

    _add_contains(predicates, "location", listing_filter.location)

    _add_membership(predicates, "transmission_id", listing_filter.transmission_ids)
    _add_membership(predicates, "fuel_type_id", listing_filter.fuel_type_ids)
    _add_membership(predicates, "body_style_id", listing_filter.body_style_ids)

    if _has_text(listing_filter.search_query):
        predicates.append(
            AnyOf(
                tuple(
                    Predicate.contains_ignore_case(field, listing_filter.search_query)
                    for field in SEARCH_QUERY_FIELDS
                )
            )
        )

    return tuple(predicates)


def public_visibility_predicates() -> PredicateSet:
    """
    Base predicates for listings visible to the public.

    Returns:
        approved, not sold, not archived and seller-active predicates
    """
    return (
        Predicate("approved", Operator.IS_TRUE),
        Predicate("sold", Operator.IS_FALSE),
        Predicate("archived", Operator.IS_FALSE),
        Predicate("is_user_active", Operator.IS_TRUE),
    )
