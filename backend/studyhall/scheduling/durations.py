"""
Date-range and duration resolution for the booking form.
"""

from datetime import date, timedelta
from typing import Iterable

from dateutil.relativedelta import relativedelta

from studyhall.core.exceptions import ValidationError
from studyhall.scheduling.enums import ALL_DAYS, ActivationType, DurationUnit
from studyhall.scheduling.recurrence import weekday_index


def compute_end_date(start_date: date, duration_value: int, duration_unit: DurationUnit) -> date:
    """
    Inclusive end date of a booking lasting `duration_value` units.

    Calendar months and years come from relativedelta, which clamps the day
    to the end of a shorter target month. A clamped anniversary is already
    the last day of the span (2024-01-31 + 1 month ends 2024-02-29);
    otherwise the span ends the day before the anniversary.
    """
    if isinstance(duration_value, bool) or not isinstance(duration_value, int) or duration_value < 1:
        raise ValidationError("Duration must be a positive whole number", field="duration_value")

    unit = DurationUnit(duration_unit)
    try:
        if unit is DurationUnit.DAY:
            return start_date + timedelta(days=duration_value - 1)
        if unit is DurationUnit.WEEK:
            return start_date + timedelta(days=7 * duration_value - 1)

        if unit is DurationUnit.MONTH:
            anniversary = start_date + relativedelta(months=duration_value)
        else:
            anniversary = start_date + relativedelta(years=duration_value)
    except (OverflowError, ValueError):
        raise ValidationError(
            "Duration runs past the last supported date",
            field="duration_value",
            details={"max_date": date.max.isoformat()},
        )

    if anniversary.day != start_date.day:
        return anniversary
    return anniversary - timedelta(days=1)


def iter_dates(start_date: date, end_date: date):
    for offset in range((end_date - start_date).days + 1):
        yield start_date + timedelta(days=offset)


def count_active_days(start_date: date, end_date: date, days_of_week: Iterable[int]) -> int:
    """Number of sessions: dates in [start_date, end_date] falling on a selected weekday."""
    selected = set(days_of_week)
    total_days = (end_date - start_date).days + 1
    if total_days <= 0:
        return 0
    full_weeks, remainder = divmod(total_days, 7)
    first = weekday_index(start_date)
    tail = sum(1 for offset in range(remainder) if (first + offset) % 7 in selected)
    return full_weeks * len(selected & ALL_DAYS) + tail


def resolve_days(start_date: date, activation: ActivationType, days_of_week: Iterable[int] = ()) -> list[int]:
    """
    Weekday selection as the booking form presents it.

    DAILY selects the whole week. CUSTOM keeps the caller's selection and
    always adds the weekday of the start date; days outside 0..6 are
    rejected.
    """
    if ActivationType(activation) is ActivationType.DAILY:
        return sorted(ALL_DAYS)
    selected = set(days_of_week)
    if not selected <= ALL_DAYS:
        raise ValidationError(
            "Days of the week must be between 0 (Sun) and 6 (Sat)",
            field="days_of_week",
            details={"invalid": sorted(selected - ALL_DAYS)},
        )
    selected.add(weekday_index(start_date))
    return sorted(selected)
