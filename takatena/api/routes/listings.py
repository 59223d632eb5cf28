from enum import Enum
from typing import Any, TypeVar

from fastapi import APIRouter, Body, Depends, Query, status
from pydantic.alias_generators import to_snake

from takatena.api.dependencies import (
    get_browse_listings_use_case,
    get_create_listing_use_case,
    get_current_user_id,
    get_delete_listing_use_case,
    get_listing_use_case,
    get_update_listing_use_case,
)
from takatena.api.schemas.base import MessageResponse
from takatena.api.schemas.listing_schemas import (
    ListingCreateRequest,
    ListingEnvelope,
    ListingMutationResponse,
    ListingResponse,
    PaginatedListingsResponse,
)
from takatena.application.queries.listing_query import ListingCriteria
from takatena.application.use_cases.browse_listings import BrowseListings, BrowseListingsInput
from takatena.application.use_cases.create_listing import CreateListing, CreateListingInput
from takatena.application.use_cases.delete_listing import DeleteListing, DeleteListingInput
from takatena.application.use_cases.get_listing import GetListing, GetListingInput
from takatena.application.use_cases.update_listing import UpdateListing, UpdateListingInput
from takatena.config import settings
from takatena.domain.enums.listing_status import ListingStatus
from takatena.domain.enums.material import MaterialType
from takatena.domain.pagination import PageRequest
from takatena.domain.validation import FieldError, ValidationError

router = APIRouter(prefix="/api/listings", tags=["listings"])

E = TypeVar("E", bound=Enum)


def _optional_enum(value: str | None, enum_cls: type[E], field: str) -> E | None:
    """Empty means "no filter"; anything else must be a known member."""
    if not value:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ValidationError(
            [FieldError(field, f"Must be one of: {allowed}", "invalid_enum_value")]
        ) from None


@router.get("", response_model=PaginatedListingsResponse)
async def list_listings(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
    material_type: str | None = Query(default=None, alias="materialType"),
    listing_status: str | None = Query(default=None, alias="status"),
    location: str | None = Query(default=None),
    search: str | None = Query(default=None),
    user_id: str | None = Query(default=None, alias="userId"),
    use_case: BrowseListings = Depends(get_browse_listings_use_case),
) -> PaginatedListingsResponse:
    """Browse listings with optional filters, newest first."""
    criteria = ListingCriteria(
        material_type=_optional_enum(material_type, MaterialType, "material_type"),
        status=_optional_enum(listing_status, ListingStatus, "status"),
        location=location or None,
        search=search or None,
        user_id=user_id or None,
    )
    result = await use_case.execute(
        BrowseListingsInput(criteria=criteria, page_request=PageRequest(page=page, limit=limit))
    )
    return PaginatedListingsResponse(
        listings=[ListingResponse.from_domain(l) for l in result.items],
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ListingMutationResponse,
)
async def create_listing(
    body: ListingCreateRequest,
    user_id: str = Depends(get_current_user_id),
    use_case: CreateListing = Depends(get_create_listing_use_case),
) -> ListingMutationResponse:
    listing = await use_case.execute(
        CreateListingInput(owner_id=user_id, fields=body.model_dump())
    )
    return ListingMutationResponse(
        message="Listing created successfully",
        listing=ListingResponse.from_domain(listing),
    )


@router.get("/{listing_id}", response_model=ListingEnvelope)
async def get_listing(
    listing_id: str,
    use_case: GetListing = Depends(get_listing_use_case),
) -> ListingEnvelope:
    """Listing detail with owner contact info. Counts one view."""
    listing = await use_case.execute(GetListingInput(listing_id=listing_id))
    return ListingEnvelope(listing=ListingResponse.from_domain(listing))


@router.patch("/{listing_id}", response_model=ListingMutationResponse)
async def update_listing(
    listing_id: str,
    body: dict[str, Any] | None = Body(default=None),
    user_id: str = Depends(get_current_user_id),
    use_case: UpdateListing = Depends(get_update_listing_use_case),
) -> ListingMutationResponse:
    # Raw body: ownership is checked before the fields are validated
    changes = {to_snake(key): value for key, value in (body or {}).items()}
    listing = await use_case.execute(
        UpdateListingInput(listing_id=listing_id, requester_id=user_id, changes=changes)
    )
    return ListingMutationResponse(
        message="Listing updated successfully",
        listing=ListingResponse.from_domain(listing),
    )


@router.delete("/{listing_id}", response_model=MessageResponse)
async def delete_listing(
    listing_id: str,
    user_id: str = Depends(get_current_user_id),
    use_case: DeleteListing = Depends(get_delete_listing_use_case),
) -> MessageResponse:
    await use_case.execute(DeleteListingInput(listing_id=listing_id, requester_id=user_id))
    return MessageResponse(message="Listing deleted successfully")
