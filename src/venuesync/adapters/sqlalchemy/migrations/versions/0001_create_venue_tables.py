"""create venue tables

Revision ID: 0001
Revises:
Create Date: 2026-09-28 10:12:41.118402

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from venuesync.adapters.sqlalchemy.mappings import (
    FieldSourcesType,
    ReviewFlagSetType,
    TagSetType,
    UTCDateTime,
)

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "venue",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("tags", TagSetType(), nullable=False),
        sa.Column("review_flags", ReviewFlagSetType(), nullable=False),
        sa.Column("price_tier", sa.Integer(), nullable=True),
        sa.Column("street", sa.String(length=255), nullable=True),
        sa.Column("city", sa.String(length=128), nullable=True),
        sa.Column("region", sa.String(length=64), nullable=True),
        sa.Column("postal_code", sa.String(length=32), nullable=True),
        sa.Column("neighborhood", sa.String(length=128), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("address_key", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("website", sa.String(length=1024), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(length=1024), nullable=True),
        sa.Column("field_sources", FieldSourcesType(), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.Column("updated_at", UTCDateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_venue")),
    )
    with op.batch_alter_table("venue", schema=None) as batch_op:
        batch_op.create_index(
            "ix_venue_category_neighborhood", ["category", "neighborhood"], unique=False
        )
        batch_op.create_index("ix_venue_address_key", ["address_key"], unique=False)

    op.create_table(
        "venue_source",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("venue_id", sa.Uuid(), nullable=False),
        sa.Column("provider", sa.String(length=32), nullable=False),
        sa.Column("native_id", sa.String(length=255), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["venue_id"],
            ["venue.id"],
            name=op.f("fk_venue_source_venue_id_venue"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_venue_source")),
        sa.UniqueConstraint(
            "provider", "native_id", name=op.f("uq_venue_source_provider")
        ),
    )
    with op.batch_alter_table("venue_source", schema=None) as batch_op:
        batch_op.create_index(
            batch_op.f("ix_venue_source_venue_id"), ["venue_id"], unique=False
        )


def downgrade() -> None:
    with op.batch_alter_table("venue_source", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_venue_source_venue_id"))

    op.drop_table("venue_source")
    with op.batch_alter_table("venue", schema=None) as batch_op:
        batch_op.drop_index("ix_venue_address_key")
        batch_op.drop_index("ix_venue_category_neighborhood")

    op.drop_table("venue")
