from fastapi import APIRouter, Depends

from takatena.api.dependencies import get_global_impact_use_case
from takatena.api.schemas.impact_schemas import GlobalImpactResponse
from takatena.application.use_cases.get_global_impact import GetGlobalImpact

router = APIRouter(prefix="/api/impact", tags=["impact"])


@router.get("/global", response_model=GlobalImpactResponse)
async def global_impact(
    use_case: GetGlobalImpact = Depends(get_global_impact_use_case),
) -> GlobalImpactResponse:
    return GlobalImpactResponse.from_domain(await use_case.execute())
