from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from takatena.domain.enums.user_type import UserType
from takatena.domain.validation import validate_profile_changes


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class User:
    """A marketplace member. Only the password hash is ever held."""

    id: str = field(default_factory=lambda: str(uuid4()))
    email: str = ""
    password_hash: str = field(default="", repr=False)
    name: str = ""
    user_type: UserType = UserType.INDIVIDUAL
    location: str = ""
    phone: str | None = None
    whatsapp: str | None = None
    verified: bool = False

    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def update_profile(self, changes: dict[str, Any]) -> None:
        data = validate_profile_changes(changes)
        for name, value in data.items():
            setattr(self, name, value)
        self.updated_at = _utcnow()


@dataclass(frozen=True)
class UserStats:
    total_listings: int
    completed_listings: int
