"""initial schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    user_type = sa.Enum(
        "INDIVIDUAL", "BUSINESS", "RECYCLER", "ARTISAN", "MANUFACTURER", name="user_type"
    )
    material_type = sa.Enum("PLASTIC", "ORGANIC", "CONSTRUCTION", "EWASTE", name="material_type")
    unit = sa.Enum("KG", "TONNES", "PIECES", "LITERS", "BAGS", name="unit")
    listing_status = sa.Enum("AVAILABLE", "COMPLETED", name="listing_status")
    for enum in (user_type, material_type, unit, listing_status):
        enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("user_type", user_type, nullable=False),
        sa.Column("location", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("whatsapp", sa.String(20), nullable=True),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )

    op.create_table(
        "listings",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=False),
        sa.Column("material_type", material_type, nullable=False),
        sa.Column("quantity", sa.Float(), nullable=False),
        sa.Column("unit", unit, nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column(
            "images",
            sa.ARRAY(sa.String()),
            nullable=False,
            server_default=sa.text("'{}'"),
        ),
        sa.Column(
            "status",
            listing_status,
            nullable=False,
            server_default="AVAILABLE",
        ),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.CheckConstraint("quantity > 0", name="ck_listings_quantity_positive"),
        sa.CheckConstraint("views >= 0", name="ck_listings_views_non_negative"),
        sa.CheckConstraint("cardinality(images) <= 2", name="ck_listings_images_max_two"),
    )

    op.create_index("ix_listings_user_id", "listings", ["user_id"])
    op.create_index("ix_listings_created_at", "listings", ["created_at"])
    op.create_index("ix_listings_material_type_status", "listings", ["material_type", "status"])


def downgrade() -> None:
    op.drop_table("listings")
    op.drop_table("users")
    for name in ("listing_status", "unit", "material_type", "user_type"):
        sa.Enum(name=name).drop(op.get_bind(), checkfirst=True)
