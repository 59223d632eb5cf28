from datetime import datetime

from takatena.api.schemas.base import CamelModel
from takatena.domain.entities.listing import Listing, ListingOwner
from takatena.domain.enums.listing_status import ListingStatus
from takatena.domain.enums.material import MaterialType, Unit
from takatena.domain.enums.user_type import UserType


class ListingCreateRequest(CamelModel):
    title: str
    description: str
    material_type: MaterialType
    quantity: float
    unit: Unit
    location: str
    images: list[str] = []


class OwnerResponse(CamelModel):
    id: str
    name: str
    user_type: UserType
    location: str
    phone: str | None = None
    whatsapp: str | None = None
    email: str

    @classmethod
    def from_domain(cls, owner: ListingOwner) -> "OwnerResponse":
        return cls(
            id=owner.id,
            name=owner.name,
            user_type=owner.user_type,
            location=owner.location,
            phone=owner.phone,
            whatsapp=owner.whatsapp,
            email=owner.email,
        )


class ListingSummaryResponse(CamelModel):
    id: str
    title: str
    description: str
    material_type: MaterialType
    quantity: float
    unit: Unit
    location: str
    images: list[str]
    status: ListingStatus
    views: int
    created_at: datetime

    @classmethod
    def from_domain(cls, listing: Listing) -> "ListingSummaryResponse":
        return cls(
            id=listing.id,
            title=listing.title,
            description=listing.description,
            material_type=listing.material_type,
            quantity=listing.quantity,
            unit=listing.unit,
            location=listing.location,
            images=listing.images,
            status=listing.status,
            views=listing.views,
            created_at=listing.created_at,
        )


class ListingResponse(ListingSummaryResponse):
    updated_at: datetime
    user_id: str
    user: OwnerResponse | None = None

    @classmethod
    def from_domain(cls, listing: Listing) -> "ListingResponse":
        return cls(
            **ListingSummaryResponse.from_domain(listing).model_dump(),
            updated_at=listing.updated_at,
            user_id=listing.user_id,
            user=OwnerResponse.from_domain(listing.owner) if listing.owner else None,
        )


class PaginatedListingsResponse(CamelModel):
    listings: list[ListingResponse]
    total: int
    page: int
    total_pages: int


class ListingEnvelope(CamelModel):
    listing: ListingResponse


class ListingMutationResponse(CamelModel):
    message: str
    listing: ListingResponse


class SearchResponse(CamelModel):
    results: list[ListingResponse]
    total: int
    query: str
