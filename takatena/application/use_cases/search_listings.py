"""
Two-tier free-text search over available listings.

Tier 1 holds case-insensitive exact title matches, tier 2 substring
matches on title, description or location. Each tier is ordered newest
first; tier 1 always ranks ahead of tier 2.
"""
from dataclasses import dataclass

import structlog

from takatena.application.interfaces.listing_repository import ListingRepository
from takatena.application.queries.listing_query import exact_title_filter, partial_text_filter
from takatena.domain.entities.listing import Listing

logger = structlog.get_logger(__name__)

EXACT_MATCH_LIMIT = 5
PARTIAL_MATCH_LIMIT = 15
MAX_RESULTS = 20


@dataclass
class SearchListingsInput:
    query: str | None


@dataclass
class SearchListingsOutput:
    results: list[Listing]
    query: str

    @property
    def total(self) -> int:
        return len(self.results)


def merge_tiers(*tiers: list[Listing], limit: int = MAX_RESULTS) -> list[Listing]:
    """Concatenate tiers in order, keep the first occurrence of each id, cap at limit."""
    seen: set[str] = set()
    merged: list[Listing] = []
    for tier in tiers:
        for listing in tier:
            if listing.id in seen:
                continue
            seen.add(listing.id)
            merged.append(listing)
    return merged[:limit]


class SearchListings:
    """Use case: Rank available listings against a free-text query."""

    def __init__(self, listing_repo: ListingRepository) -> None:
        self._listing_repo = listing_repo

    async def execute(self, input_data: SearchListingsInput) -> SearchListingsOutput:
        query = (input_data.query or "").strip()
        if not query:
            return SearchListingsOutput(results=[], query="")

        exact = await self._listing_repo.find(exact_title_filter(query), limit=EXACT_MATCH_LIMIT)
        partial = await self._listing_repo.find(
            partial_text_filter(query), limit=PARTIAL_MATCH_LIMIT
        )
        results = merge_tiers(exact, partial)

        logger.info(
            "listings_searched",
            query=query,
            exact_matches=len(exact),
            partial_matches=len(partial),
            returned=len(results),
        )
        return SearchListingsOutput(results=results, query=query)
