from dataclasses import dataclass

import structlog

from takatena.application.errors import ListingNotFoundError
from takatena.application.interfaces.listing_repository import ListingRepository
from takatena.domain.entities.listing import Listing

logger = structlog.get_logger(__name__)


@dataclass
class GetListingInput:
    listing_id: str


class GetListing:
    """Use case: Detail read. Each successful read counts one view."""

    def __init__(self, listing_repo: ListingRepository) -> None:
        self._listing_repo = listing_repo

    async def execute(self, input_data: GetListingInput) -> Listing:
        listing = await self._listing_repo.get_by_id(input_data.listing_id)
        if listing is None:
            raise ListingNotFoundError(input_data.listing_id)

        # The store performs the increment; mirror it on the returned copy.
        if await self._listing_repo.increment_views(listing.id):
            listing.views += 1

        return listing
