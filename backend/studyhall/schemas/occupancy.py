"""
Response schemas for the seat map, timeline and dashboard views.
"""

import datetime
from typing import Optional
from pydantic import BaseModel

from studyhall.schemas.booking import BookingResponse, ClockTime


class AnomalyResponse(BaseModel):
    seat_number: int
    date: datetime.date
    time: ClockTime
    booking_ids: list[str]


class SeatStatus(BaseModel):
    seat_number: int
    occupied: bool
    booking: Optional[BookingResponse] = None


class SeatMapResponse(BaseModel):
    date: datetime.date
    time: ClockTime
    total_seats: int
    occupied_count: int
    seats: list[SeatStatus]
    anomalies: list[AnomalyResponse]


class TimelineCell(BaseModel):
    hour: int
    booking_id: Optional[str] = None
    member_name: Optional[str] = None


class TimelineRow(BaseModel):
    seat_number: int
    cells: list[TimelineCell]


class TimelineResponse(BaseModel):
    date: datetime.date
    hours: list[int]
    rows: list[TimelineRow]
    anomalies: list[AnomalyResponse]


class DashboardResponse(BaseModel):
    date: datetime.date
    time: ClockTime
    total_seats: int
    live_occupancy: int
    total_revenue: float
    total_dues: float
