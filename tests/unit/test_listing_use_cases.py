"""Unit tests for the listing lifecycle use cases."""
from dataclasses import replace
from unittest.mock import AsyncMock, MagicMock

import pytest

from takatena.application.errors import ForbiddenError, ListingNotFoundError, StoreError
from takatena.application.queries.listing_query import ListingCriteria
from takatena.application.use_cases.browse_listings import BrowseListings, BrowseListingsInput
from takatena.application.use_cases.create_listing import CreateListing, CreateListingInput
from takatena.application.use_cases.delete_listing import DeleteListing, DeleteListingInput
from takatena.application.use_cases.get_listing import GetListing, GetListingInput
from takatena.application.use_cases.update_listing import UpdateListing, UpdateListingInput
from takatena.domain.entities.listing import Listing
from takatena.domain.enums.listing_status import ListingStatus
from takatena.domain.enums.material import MaterialType
from takatena.domain.pagination import PageRequest
from takatena.domain.state_machine.listing_status_machine import InvalidStatusTransitionError
from takatena.domain.validation import ValidationError

from takatena_fakes import (
    InMemoryListingRepository,
    InMemoryStore,
    make_listing,
    make_user,
    valid_listing_fields,
)


def _make_repo(listing: Listing | None = None) -> MagicMock:
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=listing)
    repo.add = AsyncMock(side_effect=lambda l: l)
    repo.update = AsyncMock(side_effect=lambda l: l)
    repo.delete = AsyncMock(return_value=True)
    repo.increment_views = AsyncMock(return_value=True)
    return repo


@pytest.fixture()
def store() -> InMemoryStore:
    store = InMemoryStore()
    store.seed(make_user(id="owner-1"), make_user(id="owner-2", email="baraka@example.com"))
    return store


class TestBrowseListings:
    @pytest.mark.asyncio
    async def test_newest_first_with_totals(self, store: InMemoryStore) -> None:
        store.seed(*(make_listing(minutes=i, title=f"Lot {i}") for i in range(45)))
        use_case = BrowseListings(InMemoryListingRepository(store))

        page = await use_case.execute(BrowseListingsInput(page_request=PageRequest(page=2, limit=20)))

        assert [l.title for l in page.items][:2] == ["Lot 24", "Lot 23"]
        assert len(page.items) == 20
        assert page.total == 45
        assert page.total_pages == 3
        assert page.page == 2

    @pytest.mark.asyncio
    async def test_page_past_end(self, store: InMemoryStore) -> None:
        store.seed(*(make_listing(minutes=i) for i in range(45)))
        use_case = BrowseListings(InMemoryListingRepository(store))

        page = await use_case.execute(BrowseListingsInput(page_request=PageRequest(page=5, limit=20)))

        assert page.items == []
        assert page.total == 45

    @pytest.mark.asyncio
    async def test_filters_by_material_and_location(self, store: InMemoryStore) -> None:
        store.seed(
            make_listing(minutes=1, location="Westlands"),
            make_listing(minutes=2, location="Kilimani"),
            make_listing(minutes=3, location="westlands", material_type=MaterialType.ORGANIC),
        )
        use_case = BrowseListings(InMemoryListingRepository(store))

        page = await use_case.execute(
            BrowseListingsInput(
                criteria=ListingCriteria(material_type=MaterialType.PLASTIC, location="WESTL")
            )
        )

        assert page.total == 1
        assert page.items[0].location == "Westlands"

    @pytest.mark.asyncio
    async def test_includes_completed_without_status_filter(self, store: InMemoryStore) -> None:
        store.seed(make_listing(), make_listing(minutes=1, status=ListingStatus.COMPLETED))
        use_case = BrowseListings(InMemoryListingRepository(store))

        page = await use_case.execute(BrowseListingsInput())

        assert page.total == 2

    @pytest.mark.asyncio
    async def test_empty_store(self, store: InMemoryStore) -> None:
        page = await BrowseListings(InMemoryListingRepository(store)).execute(BrowseListingsInput())
        assert (page.items, page.total, page.total_pages) == ([], 0, 0)


class TestCreateListing:
    @pytest.mark.asyncio
    async def test_creates_with_owner_attached(self, store: InMemoryStore) -> None:
        use_case = CreateListing(InMemoryListingRepository(store))

        listing = await use_case.execute(
            CreateListingInput(owner_id="owner-1", fields=valid_listing_fields())
        )

        assert listing.status == ListingStatus.AVAILABLE
        assert listing.views == 0
        assert listing.owner is not None
        assert listing.owner.email == "amina@example.com"
        assert listing.id in store.listings

    @pytest.mark.asyncio
    async def test_invalid_fields_never_reach_store(self) -> None:
        repo = _make_repo()
        use_case = CreateListing(repo)

        with pytest.raises(ValidationError):
            await use_case.execute(
                CreateListingInput(owner_id="owner-1", fields=valid_listing_fields(title=""))
            )

        repo.add.assert_not_awaited()


class TestGetListing:
    @pytest.mark.asyncio
    async def test_each_read_counts_a_view(self, store: InMemoryStore) -> None:
        listing = make_listing(views=7)
        store.seed(listing)
        use_case = GetListing(InMemoryListingRepository(store))

        first = await use_case.execute(GetListingInput(listing.id))
        second = await use_case.execute(GetListingInput(listing.id))

        assert first.views == 8
        assert second.views == 9
        assert store.listings[listing.id].views == 9

    @pytest.mark.asyncio
    async def test_reads_leave_other_listings_untouched(self, store: InMemoryStore) -> None:
        read, other = make_listing(views=2), make_listing(minutes=1, views=5)
        store.seed(read, other)
        use_case = GetListing(InMemoryListingRepository(store))

        for _ in range(4):
            await use_case.execute(GetListingInput(read.id))

        assert store.listings[read.id].views == 6
        assert store.listings[other.id].views == 5

    @pytest.mark.asyncio
    async def test_completed_listing_still_readable(self, store: InMemoryStore) -> None:
        listing = make_listing(status=ListingStatus.COMPLETED)
        store.seed(listing)

        result = await GetListing(InMemoryListingRepository(store)).execute(GetListingInput(listing.id))

        assert result.status == ListingStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_raises_not_found(self) -> None:
        repo = _make_repo(listing=None)

        with pytest.raises(ListingNotFoundError):
            await GetListing(repo).execute(GetListingInput("missing"))

        repo.increment_views.assert_not_awaited()


class TestUpdateListing:
    @pytest.mark.asyncio
    async def test_empty_update_only_refreshes_updated_at(self, store: InMemoryStore) -> None:
        listing = make_listing(
            views=3,
            status=ListingStatus.COMPLETED,
            images=["https://img.example.com/1.jpg"],
        )
        store.seed(listing)
        before = replace(store.listings[listing.id])

        await UpdateListing(InMemoryListingRepository(store)).execute(
            UpdateListingInput(listing.id, "owner-1", {})
        )

        after = store.listings[listing.id]
        assert after.updated_at > before.updated_at
        assert replace(after, updated_at=before.updated_at) == before

    @pytest.mark.asyncio
    async def test_owner_updates_quantity(self) -> None:
        listing = make_listing(user_id="owner-1")
        repo = _make_repo(listing)

        result = await UpdateListing(repo).execute(
            UpdateListingInput(listing.id, "owner-1", {"quantity": 42})
        )

        assert result.quantity == 42.0
        repo.update.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_non_owner_is_forbidden_before_validation(self) -> None:
        listing = make_listing(user_id="owner-1")
        repo = _make_repo(listing)

        with pytest.raises(ForbiddenError, match="edit your own"):
            await UpdateListing(repo).execute(
                UpdateListingInput(listing.id, "owner-2", {"quantity": -1})
            )

        repo.update.assert_not_awaited()
        assert listing.quantity == 10.0

    @pytest.mark.asyncio
    async def test_raises_not_found(self) -> None:
        with pytest.raises(ListingNotFoundError):
            await UpdateListing(_make_repo(None)).execute(UpdateListingInput("missing", "owner-1"))

    @pytest.mark.asyncio
    async def test_reopen_rejected(self) -> None:
        listing = make_listing(status=ListingStatus.COMPLETED)
        repo = _make_repo(listing)

        with pytest.raises(InvalidStatusTransitionError):
            await UpdateListing(repo).execute(
                UpdateListingInput(listing.id, "owner-1", {"status": "AVAILABLE"})
            )

        repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_mark_completed_persists(self, store: InMemoryStore) -> None:
        listing = make_listing()
        store.seed(listing)

        await UpdateListing(InMemoryListingRepository(store)).execute(
            UpdateListingInput(listing.id, "owner-1", {"status": "COMPLETED"})
        )

        assert store.listings[listing.id].status == ListingStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_concurrent_delete_surfaces_store_error(self) -> None:
        listing = make_listing()
        repo = _make_repo(listing)
        repo.update = AsyncMock(side_effect=StoreError("gone"))

        with pytest.raises(StoreError):
            await UpdateListing(repo).execute(UpdateListingInput(listing.id, "owner-1", {"quantity": 1}))


class TestDeleteListing:
    @pytest.mark.asyncio
    async def test_owner_deletes(self, store: InMemoryStore) -> None:
        listing = make_listing()
        store.seed(listing)
        repo = InMemoryListingRepository(store)

        await DeleteListing(repo).execute(DeleteListingInput(listing.id, "owner-1"))

        assert await repo.get_by_id(listing.id) is None

    @pytest.mark.asyncio
    async def test_non_owner_is_forbidden(self) -> None:
        listing = make_listing(user_id="owner-1")
        repo = _make_repo(listing)

        with pytest.raises(ForbiddenError, match="delete your own"):
            await DeleteListing(repo).execute(DeleteListingInput(listing.id, "owner-2"))

        repo.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_second_delete_is_not_found(self, store: InMemoryStore) -> None:
        listing = make_listing()
        store.seed(listing)
        use_case = DeleteListing(InMemoryListingRepository(store))

        await use_case.execute(DeleteListingInput(listing.id, "owner-1"))
        with pytest.raises(ListingNotFoundError):
            await use_case.execute(DeleteListingInput(listing.id, "owner-1"))

    @pytest.mark.asyncio
    async def test_vanished_row_raises_store_error(self) -> None:
        repo = _make_repo(make_listing())
        repo.delete = AsyncMock(return_value=False)

        with pytest.raises(StoreError):
            await DeleteListing(repo).execute(DeleteListingInput("any", "owner-1"))
