"""Initial schema: members, bookings and facility settings.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "facility_settings",
        sa.Column("id", sa.String(16), primary_key=True),
        sa.Column("total_seats", sa.Integer(), nullable=False),
        sa.Column("price_per_session", sa.Float(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("total_seats > 0", name="check_total_seats_positive"),
    )

    op.create_table(
        "members",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("default_price", sa.Float(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_members_name", "members", ["name"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column(
            "member_id",
            sa.String(32),
            sa.ForeignKey("members.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("member_name", sa.String(255), nullable=False),
        sa.Column("seat_number", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("days_of_week", sa.JSON(), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("paid_amount", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("fee_status", sa.String(10), nullable=False, server_default=sa.text("'Due'")),
        *_timestamps(),
        sa.CheckConstraint("seat_number > 0", name="check_booking_seat_positive"),
        sa.CheckConstraint("end_date >= start_date", name="check_booking_date_order"),
        sa.CheckConstraint("end_time > start_time", name="check_booking_time_order"),
        sa.CheckConstraint("fee_status IN ('Paid', 'Partial', 'Due')", name="check_booking_fee_status"),
    )
    op.create_index("ix_bookings_member_id", "bookings", ["member_id"])
    # Conflict checks and seat lookups read all bookings of one seat
    op.create_index("ix_bookings_seat_dates", "bookings", ["seat_number", "start_date", "end_date"])


def downgrade() -> None:
    op.drop_table("bookings")
    op.drop_table("members")
    op.drop_table("facility_settings")
