"""
Conflict detection between recurring bookings.

Two bookings clash when they share a seat and there is at least one calendar
date both of them cover with an overlapping daily window. Intersecting date
ranges and weekday sets are not enough on their own: Mondays over
2024-01-01..01-02 and Mondays over 2024-01-02..01-31 only share 2024-01-02,
a Tuesday, so they never hold the seat at the same time.
"""

from datetime import timedelta
from typing import Iterable, Optional

from studyhall.scheduling.durations import iter_dates
from studyhall.scheduling.recurrence import weekday_index


def windows_overlap(a, b) -> bool:
    """Half-open daily windows: 09:00-12:00 and 12:00-15:00 do not overlap."""
    return a.start_time < b.end_time and b.start_time < a.end_time


def shares_a_day(a, b) -> bool:
    first = max(a.start_date, b.start_date)
    last = min(a.end_date, b.end_date)
    if first > last:
        return False
    common = set(a.days_of_week) & set(b.days_of_week)
    if not common:
        return False
    # a full week contains every weekday
    if last - first >= timedelta(days=6):
        return True
    return any(weekday_index(day) in common for day in iter_dates(first, last))


def overlaps(a, b) -> bool:
    return a.seat_number == b.seat_number and windows_overlap(a, b) and shares_a_day(a, b)


def find_conflicts(candidate, existing: Iterable, exclude_id: Optional[str] = None) -> list:
    """Bookings in `existing` that would share the candidate's seat at some instant."""
    return [
        booking
        for booking in existing
        if booking.id != exclude_id and overlaps(candidate, booking)
    ]
