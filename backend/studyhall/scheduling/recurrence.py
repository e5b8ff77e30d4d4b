"""
Recurrence matching for weekly seat bookings.

A booking is active at an instant when the date lies inside its inclusive
date range, the date's weekday is one of its selected days and the time of
day lies in the half-open window [start_time, end_time). A booking ending at
18:00 therefore leaves the 18:00 slot free, which is what the hour-bucketed
timeline and the conflict detector both rely on.
"""

from datetime import date, time


def weekday_index(day: date) -> int:
    """Weekday of `day` as 0 (Sunday) .. 6 (Saturday)."""
    return day.isoweekday() % 7


def covers_date(booking, on_date: date) -> bool:
    return booking.start_date <= on_date <= booking.end_date and weekday_index(on_date) in booking.days_of_week


def covers_time(booking, at_time: time) -> bool:
    return booking.start_time <= at_time < booking.end_time


def is_active(booking, on_date: date, at_time: time) -> bool:
    """True if `booking` occupies its seat on `on_date` at `at_time`."""
    return covers_date(booking, on_date) and covers_time(booking, at_time)
