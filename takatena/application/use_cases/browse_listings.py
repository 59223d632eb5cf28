from dataclasses import dataclass, field

import structlog

from takatena.application.interfaces.listing_repository import ListingRepository
from takatena.application.queries.listing_query import ListingCriteria, build_listing_filter
from takatena.domain.entities.listing import Listing
from takatena.domain.pagination import Page, PageRequest

logger = structlog.get_logger(__name__)


@dataclass
class BrowseListingsInput:
    criteria: ListingCriteria = field(default_factory=ListingCriteria)
    page_request: PageRequest = field(default_factory=PageRequest)


class BrowseListings:
    """
    Use case: Filtered, paginated listing browse, newest first.

    No implicit status filter: completed listings show up unless the
    caller asks for a specific status.
    """

    def __init__(self, listing_repo: ListingRepository) -> None:
        self._listing_repo = listing_repo

    async def execute(self, input_data: BrowseListingsInput) -> Page[Listing]:
        listing_filter = build_listing_filter(input_data.criteria)
        request = input_data.page_request

        listings = await self._listing_repo.find(
            listing_filter, limit=request.limit, offset=request.skip
        )
        total = await self._listing_repo.count(listing_filter)

        logger.debug(
            "listings_browsed",
            page=request.page,
            limit=request.limit,
            returned=len(listings),
            total=total,
        )
        return Page.build(listings, total, request)
