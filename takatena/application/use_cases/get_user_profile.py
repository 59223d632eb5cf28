from dataclasses import dataclass

from takatena.application.errors import UserNotFoundError
from takatena.application.interfaces.listing_repository import ListingRepository
from takatena.application.interfaces.user_repository import UserRepository
from takatena.application.queries.listing_query import (
    ListingCriteria,
    available_by_user_filter,
    build_listing_filter,
)
from takatena.domain.entities.listing import Listing
from takatena.domain.entities.user import User, UserStats
from takatena.domain.enums.listing_status import ListingStatus

PUBLIC_PROFILE_LISTING_LIMIT = 12


@dataclass
class GetUserProfileInput:
    user_id: str


@dataclass
class GetUserProfileOutput:
    user: User
    stats: UserStats
    listings: list[Listing]


async def _stats_for(listing_repo: ListingRepository, user_id: str) -> UserStats:
    total = await listing_repo.count(build_listing_filter(ListingCriteria(user_id=user_id)))
    completed = await listing_repo.count(
        build_listing_filter(ListingCriteria(user_id=user_id, status=ListingStatus.COMPLETED))
    )
    return UserStats(total_listings=total, completed_listings=completed)


class GetUserProfile:
    """
    Use case: Load a user's profile with listing stats.

    With ``include_listings`` the user's latest available listings are
    attached too, as shown on the public profile page.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        listing_repo: ListingRepository,
        *,
        include_listings: bool = False,
    ) -> None:
        self._user_repo = user_repo
        self._listing_repo = listing_repo
        self._include_listings = include_listings

    async def execute(self, input_data: GetUserProfileInput) -> GetUserProfileOutput:
        user = await self._user_repo.get_by_id(input_data.user_id)
        if user is None:
            raise UserNotFoundError(input_data.user_id)

        listings: list[Listing] = []
        if self._include_listings:
            listings = await self._listing_repo.find(
                available_by_user_filter(user.id), limit=PUBLIC_PROFILE_LISTING_LIMIT
            )

        return GetUserProfileOutput(
            user=user,
            stats=await _stats_for(self._listing_repo, user.id),
            listings=listings,
        )
