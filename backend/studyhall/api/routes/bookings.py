"""
Booking endpoints. Every create and edit passes validation and the conflict
check before anything is written.
"""

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from studyhall.db.session import get_db
from studyhall.schemas.booking import BookingCreate, BookingResponse, BookingUpdate, QuoteRequest, QuoteResponse
from studyhall.scheduling.enums import FeeStatus
from studyhall.services.booking_service import (
    create_booking,
    delete_booking,
    get_booking,
    list_bookings,
    quote_booking,
    update_booking,
)
from studyhall.services.cache_service import invalidate_member_cache

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("/quote", response_model=QuoteResponse)
async def quote_endpoint(quote_data: QuoteRequest, db: AsyncSession = Depends(get_db)):
    """
    Preview end date, session count and price for a duration and pricing
    model, as the booking form shows before saving.
    """
    preview = await quote_booking(db, quote_data)
    return QuoteResponse(
        start_date=quote_data.start_date,
        pricing_model=quote_data.pricing_model,
        **asdict(preview),
    )


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking_endpoint(booking_data: BookingCreate, db: AsyncSession = Depends(get_db)):
    """
    Reserve a seat on a recurring schedule.
    Returns 409 with the clashing bookings if the seat is taken at any
    instant of the requested schedule.
    """
    booking = await create_booking(db, booking_data)
    await invalidate_member_cache()
    return booking


@router.get("/", response_model=list[BookingResponse])
async def list_bookings_endpoint(
    q: Optional[str] = Query(None, description="Member name, booking id or seat number"),
    fee_status: Optional[FeeStatus] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """All bookings, newest first."""
    return await list_bookings(db, q=q, status=fee_status)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking_endpoint(booking_id: str, db: AsyncSession = Depends(get_db)):
    return await get_booking(db, booking_id)


@router.put("/{booking_id}", response_model=BookingResponse)
async def update_booking_endpoint(booking_id: str, booking_data: BookingUpdate, db: AsyncSession = Depends(get_db)):
    """Edit a booking in place; its id and creation time are kept."""
    booking = await update_booking(db, booking_id, booking_data)
    await invalidate_member_cache()
    return booking


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_booking_endpoint(booking_id: str, db: AsyncSession = Depends(get_db)):
    await delete_booking(db, booking_id)
    await invalidate_member_cache()
