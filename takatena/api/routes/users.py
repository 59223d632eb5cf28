from fastapi import APIRouter, Depends

from takatena.api.dependencies import (
    get_current_user_id,
    get_own_profile_use_case,
    get_public_profile_use_case,
    get_update_profile_use_case,
)
from takatena.api.schemas.listing_schemas import ListingSummaryResponse
from takatena.api.schemas.user_schemas import (
    PublicProfileResponse,
    PublicUserResponse,
    UpdateProfileRequest,
    UserEnvelope,
    UserMutationResponse,
    UserResponse,
)
from takatena.application.use_cases.get_user_profile import GetUserProfile, GetUserProfileInput
from takatena.application.use_cases.update_user_profile import (
    UpdateUserProfile,
    UpdateUserProfileInput,
)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me", response_model=UserEnvelope)
async def get_me(
    user_id: str = Depends(get_current_user_id),
    use_case: GetUserProfile = Depends(get_own_profile_use_case),
) -> UserEnvelope:
    result = await use_case.execute(GetUserProfileInput(user_id=user_id))
    return UserEnvelope(user=UserResponse.from_domain(result.user, result.stats))


@router.patch("/me", response_model=UserMutationResponse)
async def update_me(
    body: UpdateProfileRequest,
    user_id: str = Depends(get_current_user_id),
    use_case: UpdateUserProfile = Depends(get_update_profile_use_case),
) -> UserMutationResponse:
    user = await use_case.execute(
        UpdateUserProfileInput(user_id=user_id, changes=body.model_dump(exclude_unset=True))
    )
    return UserMutationResponse(
        message="Profile updated successfully",
        user=UserResponse.from_domain(user),
    )


@router.get("/{user_id}", response_model=PublicProfileResponse)
async def get_public_profile(
    user_id: str,
    use_case: GetUserProfile = Depends(get_public_profile_use_case),
) -> PublicProfileResponse:
    """Public profile: no email, latest available listings only."""
    result = await use_case.execute(GetUserProfileInput(user_id=user_id))
    return PublicProfileResponse(
        user=PublicUserResponse.from_domain(result.user, result.stats),
        listings=[ListingSummaryResponse.from_domain(l) for l in result.listings],
    )
