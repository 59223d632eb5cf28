"""Unit tests for listing filters, the query builder and pagination."""
import pytest

from takatena.application.queries.listing_query import (
    ListingCriteria,
    available_by_user_filter,
    build_listing_filter,
    exact_title_filter,
    partial_text_filter,
)
from takatena.domain.enums.listing_status import ListingStatus
from takatena.domain.enums.material import MaterialType
from takatena.domain.filters import AnyOf, FieldMatch, ListingFilter, MatchOp
from takatena.domain.pagination import Page, PageRequest, total_pages
from takatena.domain.validation import ValidationError

from takatena_fakes import make_listing


class TestFieldMatch:
    def test_rejects_unknown_field(self) -> None:
        with pytest.raises(ValueError):
            FieldMatch("password", MatchOp.EQUALS, "x")

    def test_equals_compares_enum_value(self) -> None:
        match = FieldMatch("material_type", MatchOp.EQUALS, "PLASTIC")
        assert match.matches(make_listing()) is True
        assert match.matches(make_listing(material_type=MaterialType.ORGANIC)) is False

    def test_iequals_ignores_case(self) -> None:
        match = FieldMatch("title", MatchOp.IEQUALS, "PLASTIC BOTTLES")
        assert match.matches(make_listing()) is True
        assert match.matches(make_listing(title="Plastic bottles x")) is False

    def test_icontains_is_substring(self) -> None:
        match = FieldMatch("location", MatchOp.ICONTAINS, "westl")
        assert match.matches(make_listing(location="Westlands, Nairobi")) is True
        assert match.matches(make_listing(location="Kilimani")) is False


class TestListingFilter:
    def test_empty_filter_matches_everything(self) -> None:
        assert ListingFilter().criteria() == []
        assert ListingFilter().matches(make_listing()) is True

    def test_criteria_are_anded(self) -> None:
        listing_filter = ListingFilter(
            material_type=FieldMatch("material_type", MatchOp.EQUALS, "PLASTIC"),
            location=FieldMatch("location", MatchOp.ICONTAINS, "kili"),
        )
        assert listing_filter.matches(make_listing(location="Kilimani")) is True
        assert listing_filter.matches(make_listing(location="Westlands")) is False

    def test_any_of_is_ored(self) -> None:
        text = AnyOf(
            (
                FieldMatch("title", MatchOp.ICONTAINS, "metal"),
                FieldMatch("description", MatchOp.ICONTAINS, "metal"),
            )
        )
        assert text.matches(make_listing(description="Scrap metal offcuts")) is True
        assert text.matches(make_listing()) is False


class TestBuildListingFilter:
    def test_no_criteria_gives_empty_filter(self) -> None:
        assert build_listing_filter(ListingCriteria()).criteria() == []

    def test_empty_strings_are_ignored(self) -> None:
        assert build_listing_filter(ListingCriteria(location="", search="")).criteria() == []

    def test_all_criteria(self) -> None:
        listing_filter = build_listing_filter(
            ListingCriteria(
                material_type=MaterialType.PLASTIC,
                status=ListingStatus.AVAILABLE,
                location="westlands",
                search="bottle",
                user_id="owner-1",
            )
        )
        assert listing_filter.material_type == FieldMatch("material_type", MatchOp.EQUALS, "PLASTIC")
        assert listing_filter.status == FieldMatch("status", MatchOp.EQUALS, "AVAILABLE")
        assert listing_filter.location == FieldMatch("location", MatchOp.ICONTAINS, "westlands")
        assert listing_filter.user_id == FieldMatch("user_id", MatchOp.EQUALS, "owner-1")
        assert listing_filter.text is not None
        assert {c.field for c in listing_filter.text.clauses} == {"title", "description"}

    def test_search_does_not_look_at_location(self) -> None:
        listing_filter = build_listing_filter(ListingCriteria(search="westlands"))
        assert listing_filter.matches(make_listing(location="Westlands")) is False


class TestSearchFilters:
    def test_exact_title_excludes_completed(self) -> None:
        listing_filter = exact_title_filter("plastic bottles")
        assert listing_filter.matches(make_listing()) is True
        assert listing_filter.matches(make_listing(status=ListingStatus.COMPLETED)) is False

    def test_partial_text_covers_location(self) -> None:
        listing_filter = partial_text_filter("westl")
        assert listing_filter.matches(make_listing(location="Westlands")) is True

    def test_available_by_user(self) -> None:
        listing_filter = available_by_user_filter("owner-1")
        assert listing_filter.matches(make_listing()) is True
        assert listing_filter.matches(make_listing(user_id="owner-2")) is False


class TestPagination:
    def test_defaults(self) -> None:
        request = PageRequest()
        assert (request.page, request.limit, request.skip) == (1, 20, 0)

    def test_skip(self) -> None:
        assert PageRequest(page=3, limit=10).skip == 20

    @pytest.mark.parametrize("page,limit", [(0, 20), (1, 0), (-1, -1)])
    def test_rejects_out_of_range(self, page: int, limit: int) -> None:
        with pytest.raises(ValidationError):
            PageRequest(page=page, limit=limit)

    @pytest.mark.parametrize("total,limit,expected", [(0, 20, 0), (20, 20, 1), (21, 20, 2), (45, 20, 3)])
    def test_total_pages(self, total: int, limit: int, expected: int) -> None:
        assert total_pages(total, limit) == expected

    def test_page_beyond_end_is_empty_but_counts(self) -> None:
        page = Page.build([], 45, PageRequest(page=5, limit=20))
        assert page.items == []
        assert page.total == 45
        assert page.page == 5
        assert page.total_pages == 3
