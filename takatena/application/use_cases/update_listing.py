from dataclasses import dataclass, field
from typing import Any

import structlog

from takatena.application.errors import ForbiddenError, ListingNotFoundError
from takatena.application.interfaces.listing_repository import ListingRepository
from takatena.domain.entities.listing import Listing

logger = structlog.get_logger(__name__)


@dataclass
class UpdateListingInput:
    listing_id: str
    requester_id: str
    changes: dict[str, Any] = field(default_factory=dict)


class UpdateListing:
    """
    Use case: Owner-only partial update of a listing.

    Ownership is checked before the changes are validated, so a non-owner
    is refused regardless of what they sent. The check and the write are
    two separate store calls; a listing deleted in between surfaces as a
    store failure.
    """

    def __init__(self, listing_repo: ListingRepository) -> None:
        self._listing_repo = listing_repo

    async def execute(self, input_data: UpdateListingInput) -> Listing:
        listing = await self._listing_repo.get_by_id(input_data.listing_id)
        if listing is None:
            raise ListingNotFoundError(input_data.listing_id)

        if not listing.is_owned_by(input_data.requester_id):
            raise ForbiddenError("You can only edit your own listings")

        from_status = listing.status

        # May raise ValidationError or InvalidStatusTransitionError
        changed = listing.apply_changes(input_data.changes)

        updated = await self._listing_repo.update(listing)

        logger.info(
            "listing_updated",
            listing_id=updated.id,
            user_id=input_data.requester_id,
            fields=changed,
            from_status=from_status.value,
            to_status=updated.status.value,
        )
        return updated
