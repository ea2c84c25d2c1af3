"""Initial fleet, guest and booking schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
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
    op.create_table(
        "vehicles",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("driver_name", sa.String(length=120)),
        sa.Column("seat_capacity", sa.Integer(), nullable=False, server_default="6"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    op.create_table(
        "vehicle_blocks",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "vehicle_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("vehicles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("block_date", sa.Date(), nullable=False),
        sa.Column("reason", sa.String(length=255)),
        *_timestamps(),
        sa.UniqueConstraint("vehicle_id", "block_date", name="uq_vehicle_block_date"),
    )
    op.create_index("ix_vehicle_blocks_block_date", "vehicle_blocks", ["block_date"])

    op.create_table(
        "tour_options",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False, unique=True),
        sa.Column("color", sa.String(length=16)),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    op.create_table(
        "rates",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "tour_option_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("tour_options.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("shared_price", sa.Numeric(10, 2)),
        sa.Column("private_price", sa.Numeric(10, 2)),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    op.create_table(
        "guests",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(length=16)),
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("surname", sa.String(length=120), nullable=False),
        sa.Column("phone", sa.String(length=40)),
        sa.Column("email", sa.String(length=255)),
        sa.Column("nationality", sa.String(length=80)),
        sa.Column("notes", sa.String(length=1024)),
        *_timestamps(),
    )
    op.create_index("ix_guests_phone", "guests", ["phone"])

    rate_type_enum = sa.Enum("SHARED", "PRIVATE", name="ratetype")
    booking_status_enum = sa.Enum(
        "TENTATIVE", "CONFIRMED", "DONE", "CANCELLED", name="bookingstatus"
    )
    payment_status_enum = sa.Enum(
        "PENDING",
        "CASH",
        "CARD",
        "PAYPAL",
        "BANK_TRANSFER",
        "COMPLIMENTARY",
        name="paymentstatus",
    )
    pricing_mode_enum = sa.Enum("STANDARD", "FREE", name="pricingmode")

    op.create_table(
        "bookings",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("booking_ref", sa.String(length=32), unique=True),
        sa.Column(
            "guest_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("guests.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "vehicle_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("vehicles.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "tour_option_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("tour_options.id", ondelete="SET NULL"),
        ),
        sa.Column("tour_date", sa.Date(), nullable=False),
        sa.Column("rate_type", rate_type_enum, nullable=False),
        sa.Column("seats", sa.Integer(), nullable=False),
        sa.Column("status", booking_status_enum, nullable=False),
        sa.Column("payment_status", payment_status_enum, nullable=False),
        sa.Column("pricing_mode", pricing_mode_enum, nullable=False),
        sa.Column("custom_price", sa.Numeric(10, 2)),
        sa.Column("total_price", sa.Numeric(10, 2)),
        sa.Column("price_per_person", sa.Numeric(10, 2)),
        sa.Column("private_price", sa.Numeric(10, 2)),
        sa.Column("pickup_location", sa.String(length=255), nullable=False),
        sa.Column("pickup_time", sa.String(length=5), nullable=False),
        sa.Column("market_source", sa.String(length=120), nullable=False),
        sa.Column("notes", sa.String(length=2048)),
        sa.Column("reminder_date", sa.Date()),
        sa.Column("reminder_text", sa.String(length=512)),
        *_timestamps(),
    )
    op.create_index("ix_bookings_tour_date", "bookings", ["tour_date"])


def downgrade() -> None:
    op.drop_index("ix_bookings_tour_date", table_name="bookings")
    op.drop_table("bookings")
    op.drop_index("ix_guests_phone", table_name="guests")
    op.drop_table("guests")
    op.drop_table("rates")
    op.drop_table("tour_options")
    op.drop_index("ix_vehicle_blocks_block_date", table_name="vehicle_blocks")
    op.drop_table("vehicle_blocks")
    op.drop_table("vehicles")

    bind = op.get_bind()
    for name in ("pricingmode", "paymentstatus", "bookingstatus", "ratetype"):
        sa.Enum(name=name).drop(bind, checkfirst=True)
