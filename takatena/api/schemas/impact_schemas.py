from pydantic import Field

from takatena.api.schemas.base import CamelModel
from takatena.application.use_cases.get_global_impact import GlobalImpact
from takatena.domain.enums.material import MaterialType


class ImpactStatsResponse(CamelModel):
    total_listings: int
    completed_listings: int
    estimated_weight: int
    active_users: int


class MaterialShareResponse(CamelModel):
    material_type: MaterialType = Field(alias="type")
    name: str
    count: int
    percentage: int
    color: str


class GlobalImpactResponse(CamelModel):
    stats: ImpactStatsResponse
    materials: list[MaterialShareResponse]

    @classmethod
    def from_domain(cls, impact: GlobalImpact) -> "GlobalImpactResponse":
        return cls(
            stats=ImpactStatsResponse(
                total_listings=impact.total_listings,
                completed_listings=impact.completed_listings,
                estimated_weight=impact.estimated_weight,
                active_users=impact.active_users,
            ),
            materials=[
                MaterialShareResponse(
                    material_type=share.material_type,
                    name=share.name,
                    count=share.count,
                    percentage=share.percentage,
                    color=share.color,
                )
                for share in impact.materials
            ],
        )
