"""
SQLAlchemy ORM models.

These are purely infrastructure concerns; domain entities are mapped to/from
these models inside the repository implementations.
"""
from datetime import datetime

from sqlalchemy import (
    ARRAY,
    Boolean,
    CheckConstraint,
    DateTime,
    Enum as SAEnum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from takatena.domain.enums.listing_status import ListingStatus
from takatena.domain.enums.material import MaterialType, Unit
from takatena.domain.enums.user_type import UserType
from takatena.domain.validation import (
    MAX_DESCRIPTION_LENGTH,
    MAX_EMAIL_LENGTH,
    MAX_LISTING_LOCATION_LENGTH,
    MAX_TITLE_LENGTH,
)
from takatena.infrastructure.database.connection import Base


def _pg_enum(enum_cls: type, name: str) -> SAEnum:
    return SAEnum(enum_cls, name=name, values_callable=lambda obj: [e.value for e in obj])


_user_type_enum = _pg_enum(UserType, "user_type")
_material_type_enum = _pg_enum(MaterialType, "material_type")
_unit_enum = _pg_enum(Unit, "unit")
_listing_status_enum = _pg_enum(ListingStatus, "listing_status")


class UserModel(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str] = mapped_column(String(MAX_EMAIL_LENGTH), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column("password", String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    user_type: Mapped[UserType] = mapped_column(_user_type_enum, nullable=False)
    location: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    whatsapp: Mapped[str | None] = mapped_column(String(20), nullable=True)
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    listings: Mapped[list["ListingModel"]] = relationship(
        "ListingModel",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="select",
    )


class ListingModel(Base):
    __tablename__ = "listings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(String(MAX_TITLE_LENGTH), nullable=False)
    description: Mapped[str] = mapped_column(String(MAX_DESCRIPTION_LENGTH), nullable=False)
    material_type: Mapped[MaterialType] = mapped_column(_material_type_enum, nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[Unit] = mapped_column(_unit_enum, nullable=False)
    location: Mapped[str] = mapped_column(String(MAX_LISTING_LOCATION_LENGTH), nullable=False)
    images: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)

    status: Mapped[ListingStatus] = mapped_column(
        _listing_status_enum, nullable=False, default=ListingStatus.AVAILABLE
    )
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    user: Mapped[UserModel] = relationship("UserModel", back_populates="listings", lazy="joined")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_listings_quantity_positive"),
        CheckConstraint("views >= 0", name="ck_listings_views_non_negative"),
        CheckConstraint("cardinality(images) <= 2", name="ck_listings_images_max_two"),
        Index("ix_listings_material_type_status", "material_type", "status"),
        Index("ix_listings_created_at", "created_at"),
    )
