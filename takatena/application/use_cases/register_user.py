from dataclasses import dataclass
from typing import Any

import structlog

from takatena.application.errors import ConflictError
from takatena.application.interfaces.security import PasswordHasher
from takatena.application.interfaces.user_repository import UserRepository
from takatena.domain.entities.user import User
from takatena.domain.validation import validate_signup

logger = structlog.get_logger(__name__)


@dataclass
class RegisterUserInput:
    fields: dict[str, Any]


class RegisterUser:
    """Use case: Create an account with a hashed password."""

    def __init__(self, user_repo: UserRepository, password_hasher: PasswordHasher) -> None:
        self._user_repo = user_repo
        self._password_hasher = password_hasher

    async def execute(self, input_data: RegisterUserInput) -> User:
        data = validate_signup(input_data.fields)

        if await self._user_repo.get_by_email(data["email"]) is not None:
            raise ConflictError("User with this email already exists")

        user = User(
            email=data["email"],
            password_hash=self._password_hasher.hash(data["password"]),
            name=data["name"],
            user_type=data["user_type"],
            location=data["location"],
            phone=data["phone"] or None,
            whatsapp=data["whatsapp"] or None,
        )
        await self._user_repo.add(user)

        logger.info("user_registered", user_id=user.id, user_type=user.user_type.value)
        return user
