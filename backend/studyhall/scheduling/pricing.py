"""
Pricing and payment status.

FLAT pricing charges per duration unit, whatever weekdays are picked.
HOURLY pricing charges every session hour and rounds the total to whole
currency units, halves rounding up.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from studyhall.core.exceptions import ValidationError
from studyhall.scheduling.durations import compute_end_date, count_active_days, resolve_days
from studyhall.scheduling.enums import ActivationType, DurationUnit, FeeStatus, PricingModel


def hours_per_session(start_time: time, end_time: time) -> float:
    """Length of the daily window in decimal hours."""
    anchor = date(1970, 1, 1)
    delta = datetime.combine(anchor, end_time) - datetime.combine(anchor, start_time)
    hours = delta.total_seconds() / 3600
    if hours <= 0:
        raise ValidationError("End time must be after start time", field="end_time")
    return hours


def round_half_up(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_price(
    model: PricingModel,
    duration_value: int,
    unit_price: float,
    active_days: int,
    session_hours: float,
    hourly_rate: float,
) -> float:
    if PricingModel(model) is PricingModel.FLAT:
        return duration_value * unit_price
    if session_hours <= 0:
        raise ValidationError("Session length must be positive", field="end_time")
    return round_half_up(active_days * session_hours * hourly_rate)


def fee_status(amount: float, paid_amount: float) -> FeeStatus:
    if amount > 0 and paid_amount >= amount:
        return FeeStatus.PAID
    if 0 < paid_amount < amount:
        return FeeStatus.PARTIAL
    return FeeStatus.DUE


def due_amount(amount: float, paid_amount: float) -> float:
    return max(0, amount - paid_amount)


@dataclass(frozen=True)
class Quote:
    end_date: date
    days_of_week: list[int]
    active_days: int
    hours_per_session: float
    amount: float
    paid_amount: float
    due_amount: float
    fee_status: FeeStatus


def quote(
    start_date: date,
    duration_value: int,
    duration_unit: DurationUnit,
    activation: ActivationType,
    days_of_week: Iterable[int],
    start_time: time,
    end_time: time,
    model: PricingModel,
    unit_price: float,
    hourly_rate: float,
    paid_amount: float = 0,
) -> Quote:
    """Everything the booking form previews before a booking is saved."""
    end_date = compute_end_date(start_date, duration_value, duration_unit)
    days = resolve_days(start_date, activation, days_of_week)
    sessions = count_active_days(start_date, end_date, days)
    session_hours = hours_per_session(start_time, end_time)
    amount = compute_price(model, duration_value, unit_price, sessions, session_hours, hourly_rate)
    return Quote(
        end_date=end_date,
        days_of_week=days,
        active_days=sessions,
        hours_per_session=session_hours,
        amount=amount,
        paid_amount=paid_amount,
        due_amount=due_amount(amount, paid_amount),
        fee_status=fee_status(amount, paid_amount),
    )
