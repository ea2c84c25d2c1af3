"""Market source and agent reference data on bookings.

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19
"""

from __future__ import annotations

import uuid

import sqlalchemy as sa
from alembic import op

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    market_sources = op.create_table(
        "market_sources",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False, unique=True),
        sa.Column(
            "category",
            sa.Enum("OTA", "HOTEL", "DIRECT", "AGENCY", name="sourcecategory"),
            nullable=False,
            server_default="DIRECT",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_table(
        "agents",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False, unique=True),
        sa.Column(
            "has_commission", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column(
            "commission_type",
            sa.Enum("PERCENTAGE", "FIXED", name="commissiontype"),
            nullable=False,
            server_default="PERCENTAGE",
        ),
        sa.Column(
            "commission_value", sa.Numeric(10, 2), nullable=False, server_default="0"
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    with op.batch_alter_table("bookings") as batch:
        batch.add_column(sa.Column("market_source_id", sa.Uuid(as_uuid=True)))
        batch.add_column(sa.Column("market_source_detail", sa.String(length=255)))
        batch.add_column(sa.Column("agent_id", sa.Uuid(as_uuid=True)))

    # Free-text sources already on bookings become reference rows.
    bind = op.get_bind()
    bookings = sa.table(
        "bookings",
        sa.column("market_source", sa.String),
        sa.column("market_source_id", sa.Uuid(as_uuid=True)),
    )
    names = bind.execute(sa.select(bookings.c.market_source).distinct()).scalars()
    source_ids: dict[str, uuid.UUID] = {}
    for name in names:
        label = name.strip() or "Unknown"
        if label not in source_ids:
            source_ids[label] = uuid.uuid4()
            bind.execute(
                market_sources.insert().values(id=source_ids[label], name=label)
            )
        bind.execute(
            bookings.update()
            .where(bookings.c.market_source == name)
            .values(market_source_id=source_ids[label])
        )

    with op.batch_alter_table("bookings") as batch:
        batch.alter_column(
            "market_source_id", existing_type=sa.Uuid(as_uuid=True), nullable=False
        )
        batch.create_foreign_key(
            "fk_bookings_market_source_id",
            "market_sources",
            ["market_source_id"],
            ["id"],
            ondelete="RESTRICT",
        )
        batch.create_foreign_key(
            "fk_bookings_agent_id",
            "agents",
            ["agent_id"],
            ["id"],
            ondelete="SET NULL",
        )
        batch.drop_column("market_source")


def downgrade() -> None:
    with op.batch_alter_table("bookings") as batch:
        batch.add_column(sa.Column("market_source", sa.String(length=120)))

    bind = op.get_bind()
    bind.execute(
        sa.text(
            "UPDATE bookings SET market_source = "
            "(SELECT name FROM market_sources "
            "WHERE market_sources.id = bookings.market_source_id)"
        )
    )

    with op.batch_alter_table("bookings") as batch:
        batch.drop_constraint("fk_bookings_agent_id", type_="foreignkey")
        batch.drop_constraint("fk_bookings_market_source_id", type_="foreignkey")
        batch.drop_column("agent_id")
        batch.drop_column("market_source_detail")
        batch.drop_column("market_source_id")
        batch.alter_column(
            "market_source", existing_type=sa.String(length=120), nullable=False
        )

    op.drop_table("agents")
    op.drop_table("market_sources")
    for name in ("commissiontype", "sourcecategory"):
        sa.Enum(name=name).drop(bind, checkfirst=True)
