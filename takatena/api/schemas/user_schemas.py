from datetime import datetime

from takatena.api.schemas.base import CamelModel
from takatena.api.schemas.listing_schemas import ListingSummaryResponse
from takatena.domain.entities.user import User, UserStats
from takatena.domain.enums.user_type import UserType


class SignupRequest(CamelModel):
    email: str
    password: str
    confirm_password: str
    name: str
    user_type: UserType
    location: str
    phone: str | None = None
    whatsapp: str | None = None


class LoginRequest(CamelModel):
    email: str
    password: str


class UpdateProfileRequest(CamelModel):
    name: str | None = None
    location: str | None = None
    phone: str | None = None
    whatsapp: str | None = None


class UserStatsResponse(CamelModel):
    total_listings: int
    completed_listings: int

    @classmethod
    def from_domain(cls, stats: UserStats) -> "UserStatsResponse":
        return cls(
            total_listings=stats.total_listings,
            completed_listings=stats.completed_listings,
        )


class PublicUserResponse(CamelModel):
    id: str
    name: str
    user_type: UserType
    location: str
    phone: str | None = None
    whatsapp: str | None = None
    verified: bool
    created_at: datetime
    stats: UserStatsResponse | None = None

    @classmethod
    def from_domain(cls, user: User, stats: UserStats | None = None) -> "PublicUserResponse":
        return cls(
            id=user.id,
            name=user.name,
            user_type=user.user_type,
            location=user.location,
            phone=user.phone,
            whatsapp=user.whatsapp,
            verified=user.verified,
            created_at=user.created_at,
            stats=UserStatsResponse.from_domain(stats) if stats else None,
        )


class UserResponse(PublicUserResponse):
    email: str

    @classmethod
    def from_domain(cls, user: User, stats: UserStats | None = None) -> "UserResponse":
        return cls(
            **PublicUserResponse.from_domain(user, stats).model_dump(),
            email=user.email,
        )


class SignupResponse(CamelModel):
    message: str
    user: UserResponse


class LoginResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


class UserEnvelope(CamelModel):
    user: UserResponse


class UserMutationResponse(CamelModel):
    message: str
    user: UserResponse


class PublicProfileResponse(CamelModel):
    user: PublicUserResponse
    listings: list[ListingSummaryResponse]
