from dataclasses import dataclass

import structlog

from takatena.application.errors import ForbiddenError, ListingNotFoundError, StoreError
from takatena.application.interfaces.listing_repository import ListingRepository

logger = structlog.get_logger(__name__)


@dataclass
class DeleteListingInput:
    listing_id: str
    requester_id: str


class DeleteListing:
    """Use case: Owner-only permanent removal of a listing."""

    def __init__(self, listing_repo: ListingRepository) -> None:
        self._listing_repo = listing_repo

    async def execute(self, input_data: DeleteListingInput) -> None:
        listing = await self._listing_repo.get_by_id(input_data.listing_id)
        if listing is None:
            raise ListingNotFoundError(input_data.listing_id)

        if not listing.is_owned_by(input_data.requester_id):
            raise ForbiddenError("You can only delete your own listings")

        if not await self._listing_repo.delete(listing.id):
            # Vanished between the ownership check and the delete
            raise StoreError(f"Listing {listing.id} could not be deleted")

        logger.info("listing_deleted", listing_id=listing.id, user_id=input_data.requester_id)
