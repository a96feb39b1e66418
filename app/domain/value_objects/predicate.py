"""Listing query predicate descriptors.

Predicates are plain (field, operator, value) triples. Persistence adapters
interpret them; nothing here depends on an ORM.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class Operator(str, Enum):
    """Comparison operators understood by listing repositories."""

    EQ = "eq"
    GTE = "gte"
    LTE = "lte"
    IN = "in"
    CONTAINS_IGNORE_CASE = "contains_ignore_case"
    IS_TRUE = "is_true"
    IS_FALSE = "is_false"


@dataclass(frozen=True)
class Predicate:
    """A single comparison against a listing attribute."""

    field: str
    operator: Operator
    value: Any = None

    @classmethod
    def contains_ignore_case(cls, field: str, term: str) -> "Predicate":
        """
        Build a case-insensitive substring predicate.

        Args:
            field: Listing attribute name
            term: Text to look for (trimmed and lower-cased here)

        Returns:
            Predicate whose value is the lower-cased wildcard pattern '%term%'
        """
        return cls(field, Operator.CONTAINS_IGNORE_CASE, f"%{term.strip().lower()}%")


@dataclass(frozen=True)
class AnyOf:
    """OR-group of predicates."""

    predicates: tuple[Predicate, ...]

    def __len__(self) -> int:
        return len(self.predicates)


PredicateNode = Union[Predicate, AnyOf]

# Conjunction of nodes; an empty tuple matches every listing.
PredicateSet = tuple[PredicateNode, ...]
