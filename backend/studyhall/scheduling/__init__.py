"""
Recurring-booking occupancy and scheduling engine.

Pure functions over booking-like objects (anything exposing id, member_id,
seat_number, start_date, end_date, start_time, end_time, days_of_week,
amount and paid_amount). Nothing here touches the database or the clock.
"""

from .aggregates import DashboardStats, MemberSummary, compute_dashboard_stats, compute_member_summaries
from .conflicts import find_conflicts
from .durations import compute_end_date, count_active_days, resolve_days
from .enums import ActivationType, DurationUnit, FeeStatus, PricingModel
from .occupancy import OccupancyAnomaly, OccupancyIndex, build_index
from .pricing import Quote, compute_price, due_amount, fee_status, hours_per_session, quote
from .recurrence import is_active, weekday_index
from .validation import validate_booking

__all__ = [
    "ActivationType", "DurationUnit", "FeeStatus", "PricingModel",
    "is_active", "weekday_index",
    "build_index", "OccupancyIndex", "OccupancyAnomaly",
    "compute_end_date", "count_active_days", "resolve_days",
    "compute_price", "hours_per_session", "fee_status", "due_amount", "quote", "Quote",
    "find_conflicts",
    "compute_dashboard_stats", "compute_member_summaries", "DashboardStats", "MemberSummary",
    "validate_booking",
]
