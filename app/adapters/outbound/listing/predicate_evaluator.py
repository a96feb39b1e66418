"""Evaluate predicate descriptors against listings in memory."""

import re
from functools import lru_cache
from typing import Any

from app.domain.value_objects.predicate import (
    AnyOf,
    Operator,
    Predicate,
    PredicateNode,
    PredicateSet,
)


@lru_cache(maxsize=256)
def _like_regex(pattern: str) -> "re.Pattern[str]":
    """Translate a SQL LIKE pattern ('%' and '_' wildcards) to a regex."""
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


def _matches_predicate(item: Any, predicate: Predicate) -> bool:
    value = getattr(item, predicate.field)
    operator = predicate.operator

    if operator is Operator.IS_TRUE:
        return value is True
    if operator is Operator.IS_FALSE:
        return value is False
    # Like SQL, comparisons against a missing value never match
    if value is None:
        return False
    if operator is Operator.EQ:
        return value == predicate.value
    if operator is Operator.GTE:
        return value >= predicate.value
    if operator is Operator.LTE:
        return value <= predicate.value
    if operator is Operator.IN:
        return value in predicate.value
    if operator is Operator.CONTAINS_IGNORE_CASE:
        return _like_regex(predicate.value).fullmatch(str(value).lower()) is not None
    raise ValueError(f"Unsupported operator: {operator}")


def matches_node(item: Any, node: PredicateNode) -> bool:
    """
    Check whether an item satisfies one predicate node.

    Args:
        item: Object exposing the predicate fields as attributes
        node: Single predicate or AnyOf disjunction

    Returns:
        True if the item matches
    """
    if isinstance(node, AnyOf):
        return any(matches_node(item, child) for child in node.predicates)
    return _matches_predicate(item, node)


def matches_all(item: Any, predicates: PredicateSet) -> bool:
    """Check an item against a predicate set (AND; empty set matches all)."""
    return all(matches_node(item, node) for node in predicates)
