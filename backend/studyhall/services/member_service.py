"""
Member registration, directory listing and cascading deletion.
"""

from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from studyhall.core.exceptions import NotFoundError
from studyhall.core.logging import get_logger
from studyhall.models.booking import Booking
from studyhall.models.member import Member
from studyhall.schemas.member import MemberCreate, MemberSummaryResponse, MemberUpdate
from studyhall.scheduling import compute_member_summaries
from studyhall.services.cache_service import get_cached_member_summaries, set_cached_member_summaries

logger = get_logger(__name__)

SORT_KEYS = {
    "name": (lambda row: row["name"].lower(), False),
    "dues": (lambda row: row["total_dues"], True),
    "paid": (lambda row: row["total_paid"], True),
}


async def create_member(db: AsyncSession, data: MemberCreate) -> Member:
    member = Member(
        name=data.name.strip(),
        email=data.email,
        phone=data.phone,
        default_price=data.default_price,
    )
    db.add(member)
    await db.flush()
    await db.refresh(member)

    logger.info("member_created", member_id=member.id, name=member.name)
    return member


async def get_member(db: AsyncSession, member_id: str) -> Member:
    result = await db.execute(select(Member).where(Member.id == member_id))
    member = result.scalar_one_or_none()

    if not member:
        raise NotFoundError("Member", member_id)
    return member


async def update_member(db: AsyncSession, member_id: str, data: MemberUpdate) -> Member:
    """Update contact details; a rename is copied onto the member's bookings."""
    member = await get_member(db, member_id)
    renamed = member.name != data.name.strip()

    member.name = data.name.strip()
    member.email = data.email
    member.phone = data.phone
    member.default_price = data.default_price

    if renamed:
        await db.execute(
            update(Booking).where(Booking.member_id == member_id).values(member_name=member.name)
        )
    await db.flush()
    await db.refresh(member)

    logger.info("member_updated", member_id=member.id, renamed=renamed)
    return member


async def delete_member(db: AsyncSession, member_id: str) -> int:
    """Delete a member together with all of their bookings. Returns bookings removed."""
    member = await get_member(db, member_id)
    result = await db.execute(delete(Booking).where(Booking.member_id == member_id))
    await db.delete(member)
    await db.flush()

    logger.info("member_deleted", member_id=member_id, bookings_deleted=result.rowcount)
    return result.rowcount


async def _load_summaries(db: AsyncSession) -> list[dict]:
    cached = await get_cached_member_summaries()
    if cached is not None:
        return cached

    members = (await db.execute(select(Member))).scalars().all()
    bookings = (await db.execute(select(Booking))).scalars().all()
    rows = [
        MemberSummaryResponse(
            **_member_fields(s.member),
            total_amount=s.total_amount,
            total_paid=s.total_paid,
            total_dues=s.total_dues,
            booking_count=s.booking_count,
        ).model_dump(mode="json")
        for s in compute_member_summaries(members, bookings)
    ]
    await set_cached_member_summaries(rows)
    return rows


def _member_fields(member: Member) -> dict:
    return {
        "id": member.id,
        "name": member.name,
        "email": member.email,
        "phone": member.phone,
        "default_price": member.default_price,
        "created_at": member.created_at,
    }


async def list_member_summaries(
    db: AsyncSession,
    q: Optional[str] = None,
    dues_only: bool = False,
    sort_by: str = "name",
) -> list[dict]:
    """
    Member directory rows with booking totals.
    `q` matches name or id case-insensitively; `dues_only` keeps members who owe money.
    """
    rows = await _load_summaries(db)

    if q:
        needle = q.lower()
        rows = [r for r in rows if needle in r["name"].lower() or needle in r["id"].lower()]
    if dues_only:
        rows = [r for r in rows if r["total_dues"] > 0]

    key, reverse = SORT_KEYS[sort_by]
    return sorted(rows, key=key, reverse=reverse)
