from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from takatena.domain.enums.listing_status import ListingStatus
from takatena.domain.enums.material import MaterialType, Unit
from takatena.domain.enums.user_type import UserType
from takatena.domain.state_machine.listing_status_machine import ListingStatusMachine
from takatena.domain.validation import validate_listing, validate_listing_changes

_status_machine = ListingStatusMachine()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid4())


@dataclass(frozen=True)
class ListingOwner:
    """Contact details of the user who posted a listing."""

    id: str
    name: str
    user_type: UserType
    location: str
    email: str
    phone: str | None = None
    whatsapp: str | None = None


@dataclass
class Listing:
    """
    A single posted waste-material offer.

    The owner (user_id) is fixed at creation. Status only ever moves
    forward through the ListingStatusMachine.
    """

    # Identity
    id: str = field(default_factory=_new_id)
    user_id: str = ""

    # Offer details
    title: str = ""
    description: str = ""
    material_type: MaterialType = MaterialType.PLASTIC
    quantity: float = 0.0
    unit: Unit = Unit.KG
    location: str = ""
    images: list[str] = field(default_factory=list)

    # State
    status: ListingStatus = ListingStatus.AVAILABLE
    views: int = 0

    # Timestamps
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # Populated by the repository when loading
    owner: ListingOwner | None = None

    # -------------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------------

    @classmethod
    def create(cls, *, user_id: str, fields: dict[str, Any]) -> "Listing":
        """Validate ``fields`` and build a fresh AVAILABLE listing owned by user_id."""
        data = validate_listing(fields)
        return cls(
            user_id=user_id,
            title=data["title"],
            description=data["description"],
            material_type=data["material_type"],
            quantity=data["quantity"],
            unit=data["unit"],
            location=data["location"],
            images=data["images"],
        )

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def is_owned_by(self, user_id: str | None) -> bool:
        return user_id is not None and self.user_id == user_id

    def apply_changes(self, changes: dict[str, Any]) -> list[str]:
        """
        Validate and apply a partial update, returning the names of the fields set.

        Keys that are not owner-editable (id, user_id, views, timestamps) are
        ignored. updated_at is refreshed even when nothing else changes.
        """
        data = validate_listing_changes(changes)

        new_status = data.pop("status", None)
        if new_status is not None and new_status != self.status:
            _status_machine.validate_transition(self.status, new_status)
            self.status = new_status

        for name, value in data.items():
            setattr(self, name, value)

        self.updated_at = _utcnow()
        return sorted(data) + (["status"] if new_status is not None else [])

