from fastapi import APIRouter, Depends, Query

from takatena.api.dependencies import get_search_listings_use_case
from takatena.api.schemas.listing_schemas import ListingResponse, SearchResponse
from takatena.application.use_cases.search_listings import SearchListings, SearchListingsInput

router = APIRouter(prefix="/api/search", tags=["search"])


@router.get("", response_model=SearchResponse)
async def search_listings(
    q: str | None = Query(default=None),
    use_case: SearchListings = Depends(get_search_listings_use_case),
) -> SearchResponse:
    """Exact title matches first, then partial matches; available listings only."""
    result = await use_case.execute(SearchListingsInput(query=q))
    return SearchResponse(
        results=[ListingResponse.from_domain(l) for l in result.results],
        total=result.total,
        query=result.query,
    )
