"""
Shared route dependencies.
"""

from datetime import date, datetime, time
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import Depends, Query

from studyhall.core.config import get_settings


def get_now() -> datetime:
    """Current wall-clock time at the facility, without tzinfo."""
    settings = get_settings()
    return datetime.now(ZoneInfo(settings.FACILITY_TIMEZONE)).replace(tzinfo=None)


def get_instant(
    on_date: Optional[date] = Query(None, alias="date", description="YYYY-MM-DD, defaults to today"),
    at_time: Optional[time] = Query(None, alias="time", description="HH:MM, defaults to now"),
    now: datetime = Depends(get_now),
) -> datetime:
    """The instant an occupancy view is rendered for; missing parts come from the clock."""
    current = (at_time or now.time()).replace(second=0, microsecond=0)
    return datetime.combine(on_date or now.date(), current)
