"""
Closed enumerations used by the scheduling engine.
"""

from enum import Enum

# Weekday indexes run 0 (Sunday) through 6 (Saturday)
DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
ALL_DAYS = frozenset(range(7))


class DurationUnit(str, Enum):
    DAY = "DAY"
    WEEK = "WEEK"
    MONTH = "MONTH"
    YEAR = "YEAR"


class PricingModel(str, Enum):
    FLAT = "FLAT"
    HOURLY = "HOURLY"


class ActivationType(str, Enum):
    DAILY = "DAILY"
    CUSTOM = "CUSTOM"


class FeeStatus(str, Enum):
    PAID = "Paid"
    PARTIAL = "Partial"
    DUE = "Due"
