from takatena.domain.enums.listing_status import ListingStatus


# Mapping of valid transitions: from_status -> set of allowed to_statuses
VALID_TRANSITIONS: dict[ListingStatus, frozenset[ListingStatus]] = {
    ListingStatus.AVAILABLE: frozenset({ListingStatus.COMPLETED}),
    # Terminal: reopening a completed listing is not offered
    ListingStatus.COMPLETED: frozenset(),
}


class InvalidStatusTransitionError(Exception):
    """Raised when an owner asks for a status change the listing cannot make."""

    def __init__(
        self,
        from_status: ListingStatus,
        to_status: ListingStatus,
        allowed: frozenset[ListingStatus] = frozenset(),
    ) -> None:
        self.from_status = from_status
        self.to_status = to_status
        self.allowed = allowed
        if allowed:
            hint = "Allowed: " + ", ".join(sorted(s.value for s in allowed))
        else:
            hint = f"{from_status.value} listings cannot change status"
        super().__init__(
            f"Cannot change listing status from {from_status.value} to {to_status.value}. {hint}"
        )


class ListingStatusMachine:
    """Forward-only status rules for listings."""

    def allowed_from(self, from_status: ListingStatus) -> frozenset[ListingStatus]:
        if from_status.is_terminal:
            return frozenset()
        return VALID_TRANSITIONS.get(from_status, frozenset())

    def can_transition(self, from_status: ListingStatus, to_status: ListingStatus) -> bool:
        return to_status in self.allowed_from(from_status)

    def validate_transition(self, from_status: ListingStatus, to_status: ListingStatus) -> None:
        """Raise InvalidStatusTransitionError naming the statuses that are reachable."""
        allowed = self.allowed_from(from_status)
        if to_status not in allowed:
            raise InvalidStatusTransitionError(from_status, to_status, allowed)
