"""Application-level failures, translated to HTTP responses by the API layer."""


class NotFoundError(Exception):
    resource = "Resource"

    def __init__(self, identifier: str | None = None) -> None:
        self.identifier = identifier
        super().__init__(f"{self.resource} not found")


class ListingNotFoundError(NotFoundError):
    resource = "Listing"


class UserNotFoundError(NotFoundError):
    resource = "User"


class ForbiddenError(Exception):
    def __init__(self, message: str = "Insufficient permissions") -> None:
        super().__init__(message)


class UnauthorizedError(Exception):
    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class ConflictError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)


class StoreError(Exception):
    """The listing store failed; details are logged, never returned to callers."""
