from dataclasses import dataclass
from typing import Any

import structlog

from takatena.application.interfaces.listing_repository import ListingRepository
from takatena.domain.entities.listing import Listing

logger = structlog.get_logger(__name__)


@dataclass
class CreateListingInput:
    owner_id: str
    fields: dict[str, Any]


class CreateListing:
    """
    Use case: Post a new listing for the authenticated user.

    The listing starts AVAILABLE with zero views; the returned record
    carries the owner's contact details.
    """

    def __init__(self, listing_repo: ListingRepository) -> None:
        self._listing_repo = listing_repo

    async def execute(self, input_data: CreateListingInput) -> Listing:
        # May raise ValidationError
        listing = Listing.create(user_id=input_data.owner_id, fields=input_data.fields)

        created = await self._listing_repo.add(listing)

        logger.info(
            "listing_created",
            listing_id=created.id,
            user_id=created.user_id,
            material_type=created.material_type.value,
        )
        return created
