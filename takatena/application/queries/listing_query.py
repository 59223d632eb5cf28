"""
Translate browse and search criteria into ListingFilter values.

Absent or empty criteria impose no constraint.
"""
from dataclasses import dataclass

from takatena.domain.enums.listing_status import ListingStatus
from takatena.domain.enums.material import MaterialType
from takatena.domain.filters import AnyOf, FieldMatch, ListingFilter, MatchOp


@dataclass(frozen=True)
class ListingCriteria:
    material_type: MaterialType | None = None
    status: ListingStatus | None = None
    location: str | None = None
    search: str | None = None
    user_id: str | None = None


def build_listing_filter(criteria: ListingCriteria) -> ListingFilter:
    """AND every supplied criterion; ``search`` ORs title and description."""
    return ListingFilter(
        material_type=(
            FieldMatch("material_type", MatchOp.EQUALS, criteria.material_type.value)
            if criteria.material_type
            else None
        ),
        status=(
            FieldMatch("status", MatchOp.EQUALS, criteria.status.value)
            if criteria.status
            else None
        ),
        location=(
            FieldMatch("location", MatchOp.ICONTAINS, criteria.location)
            if criteria.location
            else None
        ),
        user_id=(
            FieldMatch("user_id", MatchOp.EQUALS, criteria.user_id)
            if criteria.user_id
            else None
        ),
        text=(
            _contains_any(criteria.search, ("title", "description"))
            if criteria.search
            else None
        ),
    )


def _contains_any(value: str, field_names: tuple[str, ...]) -> AnyOf:
    return AnyOf(tuple(FieldMatch(name, MatchOp.ICONTAINS, value) for name in field_names))


_AVAILABLE = FieldMatch("status", MatchOp.EQUALS, ListingStatus.AVAILABLE.value)


def exact_title_filter(query: str) -> ListingFilter:
    """AVAILABLE listings titled exactly ``query``, ignoring case."""
    return ListingFilter(
        status=_AVAILABLE,
        title=FieldMatch("title", MatchOp.IEQUALS, query),
    )


def partial_text_filter(query: str) -> ListingFilter:
    """AVAILABLE listings mentioning ``query`` in title, description or location."""
    return ListingFilter(
        status=_AVAILABLE,
        text=_contains_any(query, ("title", "description", "location")),
    )


def available_by_user_filter(user_id: str) -> ListingFilter:
    return ListingFilter(
        status=_AVAILABLE,
        user_id=FieldMatch("user_id", MatchOp.EQUALS, user_id),
    )
