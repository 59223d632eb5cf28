from dataclasses import dataclass, field
from typing import Any

import structlog

from takatena.application.errors import UserNotFoundError
from takatena.application.interfaces.user_repository import UserRepository
from takatena.domain.entities.user import User

logger = structlog.get_logger(__name__)


@dataclass
class UpdateUserProfileInput:
    user_id: str
    changes: dict[str, Any] = field(default_factory=dict)


class UpdateUserProfile:
    """Use case: Edit own name, location and contact numbers."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def execute(self, input_data: UpdateUserProfileInput) -> User:
        user = await self._user_repo.get_by_id(input_data.user_id)
        if user is None:
            raise UserNotFoundError(input_data.user_id)

        user.update_profile(input_data.changes)
        await self._user_repo.update(user)

        logger.info("user_profile_updated", user_id=user.id)
        return user
