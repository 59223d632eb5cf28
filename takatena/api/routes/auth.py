from fastapi import APIRouter, Depends, status

from takatena.api.dependencies import get_authenticate_user_use_case, get_register_user_use_case
from takatena.api.schemas.user_schemas import (
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
    UserResponse,
)
from takatena.application.use_cases.authenticate_user import (
    AuthenticateUser,
    AuthenticateUserInput,
)
from takatena.application.use_cases.register_user import RegisterUser, RegisterUserInput

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=SignupResponse)
async def signup(
    body: SignupRequest,
    use_case: RegisterUser = Depends(get_register_user_use_case),
) -> SignupResponse:
    user = await use_case.execute(RegisterUserInput(fields=body.model_dump()))
    return SignupResponse(
        message="Account created successfully",
        user=UserResponse.from_domain(user),
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    use_case: AuthenticateUser = Depends(get_authenticate_user_use_case),
) -> LoginResponse:
    result = await use_case.execute(
        AuthenticateUserInput(email=body.email, password=body.password)
    )
    return LoginResponse(
        access_token=result.access_token,
        expires_in=result.expires_in,
        user=UserResponse.from_domain(result.user),
    )
