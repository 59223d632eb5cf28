"""Unit tests for translating ListingFilter into SQL clauses."""
from sqlalchemy import and_
from sqlalchemy.dialects import postgresql

from takatena.application.queries.listing_query import (
    ListingCriteria,
    build_listing_filter,
    exact_title_filter,
)
from takatena.domain.enums.material import MaterialType
from takatena.domain.filters import ListingFilter
from takatena.infrastructure.database.repositories.listing_repository import to_where_clause


def _compile(listing_filter: ListingFilter):  # type: ignore[no-untyped-def]
    return and_(*to_where_clause(listing_filter)).compile(dialect=postgresql.dialect())


class TestToWhereClause:
    def test_empty_filter_has_no_clauses(self) -> None:
        assert to_where_clause(ListingFilter()) == []

    def test_one_clause_per_criterion(self) -> None:
        listing_filter = build_listing_filter(
            ListingCriteria(material_type=MaterialType.ORGANIC, location="nai", search="peel")
        )
        assert len(to_where_clause(listing_filter)) == 3

    def test_location_uses_ilike(self) -> None:
        compiled = _compile(build_listing_filter(ListingCriteria(location="Nairobi")))
        assert "ILIKE" in str(compiled)
        assert "%Nairobi%" in compiled.params.values()

    def test_like_wildcards_are_escaped(self) -> None:
        compiled = _compile(build_listing_filter(ListingCriteria(location="50%_off")))
        assert "%50\\%\\_off%" in compiled.params.values()

    def test_search_ors_title_and_description(self) -> None:
        sql = str(_compile(build_listing_filter(ListingCriteria(search="tin"))))
        assert " OR " in sql
        assert "listings.title" in sql
        assert "listings.description" in sql

    def test_exact_title_lowercases_both_sides(self) -> None:
        compiled = _compile(exact_title_filter("Plastic Bottles"))
        assert "lower(listings.title)" in str(compiled)
        assert "plastic bottles" in compiled.params.values()
