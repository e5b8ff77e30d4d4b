"""
Member directory endpoints.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from studyhall.db.session import get_db
from studyhall.schemas.booking import BookingResponse
from studyhall.schemas.member import MemberCreate, MemberResponse, MemberSummaryResponse, MemberUpdate
from studyhall.services.booking_service import list_bookings
from studyhall.services.cache_service import invalidate_member_cache
from studyhall.services.member_service import (
    create_member,
    delete_member,
    get_member,
    list_member_summaries,
    update_member,
)

router = APIRouter(prefix="/members", tags=["Members"])


@router.post("/", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
async def register_member(member_data: MemberCreate, db: AsyncSession = Depends(get_db)):
    """Register a new member."""
    member = await create_member(db, member_data)
    await invalidate_member_cache()
    return member


@router.get("/", response_model=list[MemberSummaryResponse])
async def list_members(
    q: Optional[str] = Query(None, description="Name or member id substring"),
    dues_only: bool = Query(False),
    sort_by: Literal["name", "dues", "paid"] = Query("name"),
    db: AsyncSession = Depends(get_db),
):
    """Member directory with booking totals, cached in Redis between writes."""
    return await list_member_summaries(db, q=q, dues_only=dues_only, sort_by=sort_by)


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member_endpoint(member_id: str, db: AsyncSession = Depends(get_db)):
    return await get_member(db, member_id)


@router.get("/{member_id}/bookings", response_model=list[BookingResponse])
async def list_member_bookings(member_id: str, db: AsyncSession = Depends(get_db)):
    await get_member(db, member_id)
    return await list_bookings(db, member_id=member_id)


@router.put("/{member_id}", response_model=MemberResponse)
async def update_member_endpoint(member_id: str, member_data: MemberUpdate, db: AsyncSession = Depends(get_db)):
    """Update a member. A new name is copied onto all of their bookings."""
    member = await update_member(db, member_id, member_data)
    await invalidate_member_cache()
    return member


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_member_endpoint(member_id: str, db: AsyncSession = Depends(get_db)):
    """Delete a member and every booking they hold."""
    await delete_member(db, member_id)
    await invalidate_member_cache()
