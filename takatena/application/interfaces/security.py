from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """Port for one-way password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        ...


class TokenIssuer(ABC):
    """Port for issuing and reading session tokens."""

    @abstractmethod
    def issue(self, user_id: str) -> str:
        ...

    @abstractmethod
    def read_subject(self, token: str) -> str | None:
        """Return the user id carried by a valid token, else None."""
        ...

    @property
    @abstractmethod
    def ttl_seconds(self) -> int:
        ...
