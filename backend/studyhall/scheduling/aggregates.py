"""
Dashboard and member-directory rollups.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from studyhall.scheduling.pricing import due_amount
from studyhall.scheduling.recurrence import is_active


@dataclass(frozen=True)
class DashboardStats:
    total_seats: int
    live_occupancy: int
    total_revenue: float
    total_dues: float


@dataclass(frozen=True)
class MemberSummary:
    member: object
    total_amount: float
    total_paid: float
    total_dues: float
    booking_count: int


def compute_dashboard_stats(bookings: Iterable, total_seats: int, now: datetime) -> DashboardStats:
    """
    Live occupancy counts bookings active at `now` (to the minute). Revenue
    and dues are cumulative over every booking, past and future.
    """
    bookings = list(bookings)
    today = now.date()
    current = now.time().replace(second=0, microsecond=0)
    return DashboardStats(
        total_seats=total_seats,
        live_occupancy=sum(1 for b in bookings if is_active(b, today, current)),
        total_revenue=sum(b.paid_amount for b in bookings),
        total_dues=sum(due_amount(b.amount, b.paid_amount) for b in bookings),
    )


def compute_member_summaries(members: Iterable, bookings: Iterable) -> list[MemberSummary]:
    """Per-member totals. Overpayment shows up as negative dues."""
    by_member: dict[str, list] = {}
    for booking in bookings:
        by_member.setdefault(booking.member_id, []).append(booking)

    summaries = []
    for member in members:
        owned = by_member.get(member.id, [])
        total_amount = sum(b.amount for b in owned)
        total_paid = sum(b.paid_amount for b in owned)
        summaries.append(
            MemberSummary(
                member=member,
                total_amount=total_amount,
                total_paid=total_paid,
                total_dues=total_amount - total_paid,
                booking_count=len(owned),
            )
        )
    return summaries
