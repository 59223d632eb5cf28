from enum import Enum


class ListingStatus(str, Enum):
    """Lifecycle states of a marketplace listing."""

    AVAILABLE = "AVAILABLE"
    COMPLETED = "COMPLETED"

    @property
    def is_terminal(self) -> bool:
        """Terminal states cannot be transitioned out of."""
        return self is ListingStatus.COMPLETED
