import math
from dataclasses import dataclass

from takatena.application.interfaces.listing_repository import ListingRepository
from takatena.application.interfaces.user_repository import UserRepository
from takatena.application.queries.listing_query import ListingCriteria, build_listing_filter
from takatena.domain.enums.listing_status import ListingStatus
from takatena.domain.enums.material import MaterialType

_MATERIAL_COLORS: dict[MaterialType, str] = {
    MaterialType.PLASTIC: "blue",
    MaterialType.ORGANIC: "green",
    MaterialType.CONSTRUCTION: "amber",
    MaterialType.EWASTE: "red",
}


@dataclass(frozen=True)
class MaterialShare:
    material_type: MaterialType
    count: int
    percentage: int

    @property
    def name(self) -> str:
        return self.material_type.label

    @property
    def color(self) -> str:
        return _MATERIAL_COLORS[self.material_type]


@dataclass(frozen=True)
class GlobalImpact:
    total_listings: int
    completed_listings: int
    estimated_weight: int
    active_users: int
    materials: list[MaterialShare]


class GetGlobalImpact:
    """
    Use case: Platform-wide exchange statistics.

    estimated_weight is completed listings times a fixed per-listing
    figure; it is not derived from recorded quantities.
    """

    def __init__(
        self,
        listing_repo: ListingRepository,
        user_repo: UserRepository,
        kg_per_completed_listing: int,
    ) -> None:
        self._listing_repo = listing_repo
        self._user_repo = user_repo
        self._kg_per_completed_listing = kg_per_completed_listing

    async def execute(self) -> GlobalImpact:
        total = await self._listing_repo.count(build_listing_filter(ListingCriteria()))
        completed = await self._listing_repo.count(
            build_listing_filter(ListingCriteria(status=ListingStatus.COMPLETED))
        )
        active_users = await self._user_repo.count_with_listings()

        denominator = total or 1
        materials: list[MaterialShare] = []
        for material_type in MaterialType:
            count = await self._listing_repo.count(
                build_listing_filter(ListingCriteria(material_type=material_type))
            )
            materials.append(
                MaterialShare(
                    material_type=material_type,
                    count=count,
                    percentage=math.floor(count / denominator * 100 + 0.5),
                )
            )

        return GlobalImpact(
            total_listings=total,
            completed_listings=completed,
            estimated_weight=completed * self._kg_per_completed_listing,
            active_users=active_users,
            materials=materials,
        )
