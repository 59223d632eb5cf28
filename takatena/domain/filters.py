"""
Explicit listing filter.

One optional field per criterion, each carrying its comparison operator.
The persistence layer translates a ListingFilter into its own query
language; ``matches`` evaluates the same predicate against an entity.
"""
from dataclasses import dataclass, fields
from enum import Enum

from takatena.domain.entities.listing import Listing


class MatchOp(str, Enum):
    EQUALS = "equals"
    IEQUALS = "iequals"  # case-insensitive equality
    ICONTAINS = "icontains"  # case-insensitive substring


FILTERABLE_FIELDS = frozenset(
    {"title", "description", "location", "material_type", "status", "user_id"}
)


@dataclass(frozen=True)
class FieldMatch:
    field: str
    op: MatchOp
    value: str

    def __post_init__(self) -> None:
        if self.field not in FILTERABLE_FIELDS:
            raise ValueError(f"Listings cannot be filtered on {self.field!r}")

    def matches(self, listing: Listing) -> bool:
        actual = getattr(listing, self.field)
        if isinstance(actual, Enum):
            actual = actual.value
        if self.op is MatchOp.EQUALS:
            return actual == self.value
        if self.op is MatchOp.IEQUALS:
            return actual.lower() == self.value.lower()
        return self.value.lower() in actual.lower()


@dataclass(frozen=True)
class AnyOf:
    """OR group: satisfied when at least one clause matches."""

    clauses: tuple[FieldMatch, ...]

    def matches(self, listing: Listing) -> bool:
        return any(clause.matches(listing) for clause in self.clauses)


@dataclass(frozen=True)
class ListingFilter:
    """AND of every criterion that is set. An empty filter matches everything."""

    material_type: FieldMatch | None = None
    status: FieldMatch | None = None
    location: FieldMatch | None = None
    user_id: FieldMatch | None = None
    title: FieldMatch | None = None
    text: AnyOf | None = None

    def criteria(self) -> list[FieldMatch | AnyOf]:
        return [
            value
            for value in (getattr(self, f.name) for f in fields(self))
            if value is not None
        ]

    def matches(self, listing: Listing) -> bool:
        return all(criterion.matches(listing) for criterion in self.criteria())
