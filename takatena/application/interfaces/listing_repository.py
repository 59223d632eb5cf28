from abc import ABC, abstractmethod

from takatena.domain.entities.listing import Listing
from takatena.domain.filters import ListingFilter


class ListingRepository(ABC):
    """Port for persisting and querying Listing records."""

    @abstractmethod
    async def add(self, listing: Listing) -> Listing:
        """Insert a new listing and return it with its owner attached."""
        ...

    @abstractmethod
    async def get_by_id(self, listing_id: str) -> Listing | None:
        ...

    @abstractmethod
    async def find(
        self,
        listing_filter: ListingFilter,
        *,
        limit: int,
        offset: int = 0,
    ) -> list[Listing]:
        """Return matching listings, newest first."""
        ...

    @abstractmethod
    async def count(self, listing_filter: ListingFilter) -> int:
        ...

    @abstractmethod
    async def increment_views(self, listing_id: str) -> bool:
        """Atomically add one to the view counter. False if the row is gone."""
        ...

    @abstractmethod
    async def update(self, listing: Listing) -> Listing:
        ...

    @abstractmethod
    async def delete(self, listing_id: str) -> bool:
        """Permanently remove a listing. False if it did not exist."""
        ...
