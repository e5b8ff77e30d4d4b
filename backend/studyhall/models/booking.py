"""
Booking model: one member's recurring weekly reservation of one seat.

Key design decisions:
- member_name is denormalized and rewritten on every booking write and on
  member rename, so listings never join members
- fee_status is stored for filtering but always recomputed from
  (amount, paid_amount) before a write
- Deleting a member cascades to their bookings (ON DELETE CASCADE plus an
  explicit delete in the same transaction for backends without FK support)
"""

import uuid

from sqlalchemy import JSON, CheckConstraint, Column, Date, Float, ForeignKey, Index, Integer, String, Time

from studyhall.db.base import Base, TimestampMixin
from studyhall.scheduling.pricing import due_amount


def new_booking_id() -> str:
    return uuid.uuid4().hex[:12]


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(String(32), primary_key=True, default=new_booking_id)
    member_id = Column(String(32), ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    member_name = Column(String(255), nullable=False)
    seat_number = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    days_of_week = Column(JSON, nullable=False)  # 0 (Sun) .. 6 (Sat)
    amount = Column(Float, nullable=False)
    paid_amount = Column(Float, nullable=False, default=0)
    fee_status = Column(String(10), nullable=False, default="Due")

    __table_args__ = (
        CheckConstraint("seat_number > 0", name="check_booking_seat_positive"),
        CheckConstraint("end_date >= start_date", name="check_booking_date_order"),
        CheckConstraint("end_time > start_time", name="check_booking_time_order"),
        CheckConstraint("fee_status IN ('Paid', 'Partial', 'Due')", name="check_booking_fee_status"),
        # Conflict checks read every booking of one seat
        Index("ix_bookings_seat_dates", "seat_number", "start_date", "end_date"),
    )

    @property
    def due_amount(self) -> float:
        return due_amount(self.amount, self.paid_amount)

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, seat={self.seat_number}, member={self.member_id})>"
