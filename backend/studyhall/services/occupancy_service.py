"""
Occupancy views: seat map, seat lookup, hourly timeline and dashboard.

Each call loads a fresh snapshot of all bookings and recomputes from it;
nothing is kept between requests.
"""

from datetime import date, datetime, time

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studyhall.core.config import get_settings
from studyhall.core.logging import get_logger
from studyhall.core.metrics import record_live_occupancy
from studyhall.models.booking import Booking
from studyhall.schemas.booking import BookingResponse
from studyhall.scheduling import DashboardStats, OccupancyIndex, build_index, compute_dashboard_stats
from studyhall.scheduling.recurrence import covers_date
from studyhall.services.facility_service import get_facility_settings

logger = get_logger(__name__)
settings = get_settings()


async def _all_bookings(db: AsyncSession) -> list[Booking]:
    # oldest first, so the newest booking keeps a doubly-booked seat
    result = await db.execute(select(Booking).order_by(Booking.created_at.asc()))
    return list(result.scalars().all())


def anomaly_rows(indexes: list[OccupancyIndex]) -> list[dict]:
    return [
        {
            "seat_number": a.seat_number,
            "date": a.on_date,
            "time": a.at_time,
            "booking_ids": [b.id for b in a.bookings],
        }
        for index in indexes
        for a in index.anomalies
    ]


async def seat_map(db: AsyncSession, on_date: date, at_time: time) -> dict:
    facility = await get_facility_settings(db)
    index = build_index(await _all_bookings(db), on_date, at_time)

    seats = []
    for seat_number in range(1, facility.total_seats + 1):
        occupant = index.occupant(seat_number)
        seats.append({
            "seat_number": seat_number,
            "occupied": occupant is not None,
            "booking": BookingResponse.model_validate(occupant) if occupant else None,
        })

    return {
        "date": on_date,
        "time": at_time,
        "total_seats": facility.total_seats,
        "occupied_count": sum(1 for s in seats if s["occupied"]),
        "seats": seats,
        "anomalies": anomaly_rows([index]),
    }


async def seat_occupant(db: AsyncSession, seat_number: int, on_date: date, at_time: time):
    """The booking holding `seat_number` at the instant, or None if the seat is free."""
    index = build_index(await _all_bookings(db), on_date, at_time)
    return index.occupant(seat_number)


async def timeline(db: AsyncSession, on_date: date) -> dict:
    """
    Seat x hour grid for one day. A cell shows the booking active at the top
    of the hour; the index is built once per hour, not once per cell.
    """
    facility = await get_facility_settings(db)
    hours = list(range(settings.TIMELINE_START_HOUR, settings.TIMELINE_END_HOUR + 1))
    day_bookings = [b for b in await _all_bookings(db) if covers_date(b, on_date)]
    indexes = [build_index(day_bookings, on_date, time(hour, 0)) for hour in hours]

    rows = []
    for seat_number in range(1, facility.total_seats + 1):
        cells = []
        for hour, index in zip(hours, indexes):
            occupant = index.occupant(seat_number)
            cells.append({
                "hour": hour,
                "booking_id": occupant.id if occupant else None,
                "member_name": occupant.member_name if occupant else None,
            })
        rows.append({"seat_number": seat_number, "cells": cells})

    return {"date": on_date, "hours": hours, "rows": rows, "anomalies": anomaly_rows(indexes)}


async def dashboard(db: AsyncSession, now: datetime) -> DashboardStats:
    facility = await get_facility_settings(db)
    stats = compute_dashboard_stats(await _all_bookings(db), facility.total_seats, now)
    record_live_occupancy(stats.live_occupancy)
    logger.debug("dashboard_computed", live_occupancy=stats.live_occupancy)
    return stats
