"""Compile predicate descriptors into SQLAlchemy expressions."""

from sqlalchemy import and_, false, func, or_, true
from sqlalchemy.sql.elements import ColumnElement

from app.adapters.outbound.listing.models import CarListingModel
from app.domain.value_objects.predicate import (
    AnyOf,
    Operator,
    Predicate,
    PredicateNode,
    PredicateSet,
)


def _column(field: str):
    column = getattr(CarListingModel, field, None)
    if column is None:
        raise ValueError(f"Unknown listing field: {field}")
    return column


def _compile_predicate(predicate: Predicate) -> ColumnElement:
    column = _column(predicate.field)
    operator = predicate.operator

    if operator is Operator.EQ:
        return column == predicate.value
    if operator is Operator.GTE:
        return column >= predicate.value
    if operator is Operator.LTE:
        return column <= predicate.value
    if operator is Operator.IN:
        return column.in_(list(predicate.value))
    if operator is Operator.CONTAINS_IGNORE_CASE:
        return func.lower(column).like(predicate.value)
    if operator is Operator.IS_TRUE:
        return column.is_(True)
    if operator is Operator.IS_FALSE:
        return column.is_(False)
    raise ValueError(f"Unsupported operator: {operator}")


def compile_node(node: PredicateNode) -> ColumnElement:
    """
    Compile one predicate node.

    Args:
        node: Single predicate or AnyOf disjunction

    Returns:
        SQLAlchemy boolean expression
    """
    if isinstance(node, AnyOf):
        if not node.predicates:
            return false()
        return or_(*(compile_node(child) for child in node.predicates))
    return _compile_predicate(node)


def compile_predicates(predicates: PredicateSet) -> ColumnElement:
    """
    Compile a predicate set into a single WHERE clause.

    Args:
        predicates: Predicate set (AND)

    Returns:
        SQLAlchemy expression; an empty set compiles to TRUE
    """
    if not predicates:
        return true()
    return and_(*(compile_node(node) for node in predicates))
