from dataclasses import dataclass

import structlog

from takatena.application.errors import UnauthorizedError
from takatena.application.interfaces.security import PasswordHasher, TokenIssuer
from takatena.application.interfaces.user_repository import UserRepository
from takatena.domain.entities.user import User

logger = structlog.get_logger(__name__)

_INVALID_CREDENTIALS = "Invalid email or password"


@dataclass
class AuthenticateUserInput:
    email: str
    password: str


@dataclass
class AuthenticateUserOutput:
    user: User
    access_token: str
    expires_in: int


class AuthenticateUser:
    """
    Use case: Exchange email + password for a session token.

    Unknown email and wrong password fail with the same message.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ) -> None:
        self._user_repo = user_repo
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer

    async def execute(self, input_data: AuthenticateUserInput) -> AuthenticateUserOutput:
        if not input_data.email or not input_data.password:
            raise UnauthorizedError("Email and password are required")

        user = await self._user_repo.get_by_email(input_data.email.lower())
        if user is None or not self._password_hasher.verify(
            input_data.password, user.password_hash
        ):
            logger.info("login_rejected")
            raise UnauthorizedError(_INVALID_CREDENTIALS)

        logger.info("user_logged_in", user_id=user.id)
        return AuthenticateUserOutput(
            user=user,
            access_token=self._token_issuer.issue(user.id),
            expires_in=self._token_issuer.ttl_seconds,
        )
