"""
Booking validation, applied before conflict detection and before any write.
"""

import math

from studyhall.core.exceptions import ValidationError
from studyhall.scheduling.enums import DAY_NAMES
from studyhall.scheduling.recurrence import weekday_index


def validate_booking(draft, total_seats: int) -> None:
    """Raise ValidationError for the first rule `draft` breaks."""
    if not draft.member_id:
        raise ValidationError("Please select a member", field="member_id")

    if not 1 <= draft.seat_number <= total_seats:
        raise ValidationError(
            f"Seat number must be between 1 and {total_seats}",
            field="seat_number",
            details={"total_seats": total_seats},
        )

    if draft.end_date < draft.start_date:
        raise ValidationError("End date cannot be before start date", field="end_date")

    days = set(draft.days_of_week)
    if not days:
        raise ValidationError("Select at least one day of the week", field="days_of_week")
    if not days <= set(range(7)):
        raise ValidationError("Days of the week must be between 0 (Sun) and 6 (Sat)", field="days_of_week")

    anchor = weekday_index(draft.start_date)
    if anchor not in days:
        raise ValidationError(
            f"The start date falls on {DAY_NAMES[anchor]}, which must stay selected",
            field="days_of_week",
            details={"anchor_day": anchor},
        )

    if draft.end_time <= draft.start_time:
        raise ValidationError("End time must be after start time", field="end_time")

    if not math.isfinite(draft.amount) or draft.amount <= 0:
        raise ValidationError("Total amount must be greater than zero", field="amount")

    if not math.isfinite(draft.paid_amount):
        raise ValidationError("Paid amount must be a number", field="paid_amount")
    if draft.paid_amount < 0:
        raise ValidationError("Paid amount cannot be negative", field="paid_amount")
