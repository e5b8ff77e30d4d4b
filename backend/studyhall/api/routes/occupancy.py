"""
Occupancy endpoints: live seat map, single-seat lookup, hourly timeline and
dashboard stats. `date` and `time` query parameters default to the
facility's current clock.
"""

from dataclasses import asdict
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from studyhall.api.deps import get_instant, get_now
from studyhall.db.session import get_db
from studyhall.schemas.booking import BookingResponse
from studyhall.schemas.occupancy import DashboardResponse, SeatMapResponse, TimelineResponse
from studyhall.services.occupancy_service import dashboard, seat_map, seat_occupant, timeline

router = APIRouter(tags=["Occupancy"])


@router.get("/occupancy/seats", response_model=SeatMapResponse)
async def seat_map_endpoint(
    instant: datetime = Depends(get_instant),
    db: AsyncSession = Depends(get_db),
):
    """Every seat with the booking holding it at the instant."""
    return await seat_map(db, instant.date(), instant.time())


@router.get("/occupancy/seats/{seat_number}", response_model=Optional[BookingResponse])
async def seat_occupant_endpoint(
    seat_number: int = Path(..., gt=0),
    instant: datetime = Depends(get_instant),
    db: AsyncSession = Depends(get_db),
):
    """The booking holding the seat at the instant, or null when it is free."""
    return await seat_occupant(db, seat_number, instant.date(), instant.time())


@router.get("/occupancy/timeline", response_model=TimelineResponse)
async def timeline_endpoint(
    on_date: Optional[date] = Query(None, alias="date"),
    now: datetime = Depends(get_now),
    db: AsyncSession = Depends(get_db),
):
    """Seat by hour grid for one day."""
    return await timeline(db, on_date or now.date())


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard_endpoint(
    instant: datetime = Depends(get_instant),
    db: AsyncSession = Depends(get_db),
):
    """Capacity, live occupancy, cumulative revenue and dues."""
    stats = await dashboard(db, instant)
    return DashboardResponse(date=instant.date(), time=instant.time(), **asdict(stats))
