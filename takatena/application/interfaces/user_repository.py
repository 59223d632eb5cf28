from abc import ABC, abstractmethod

from takatena.domain.entities.user import User


class UserRepository(ABC):
    """Port for persisting and querying marketplace users."""

    @abstractmethod
    async def add(self, user: User) -> None:
        ...

    @abstractmethod
    async def get_by_id(self, user_id: str) -> User | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        """Lookup by the lower-cased email address."""
        ...

    @abstractmethod
    async def update(self, user: User) -> None:
        ...

    @abstractmethod
    async def count_with_listings(self) -> int:
        """Number of users who have posted at least one listing."""
        ...
