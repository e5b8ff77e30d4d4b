"""
Booking service: validated, conflict-free seat reservations.

WRITE PATH
==========

Every create and edit runs, inside the request transaction:

  1. Lock the facility settings row (SELECT ... FOR UPDATE). This is the
     single-writer boundary for the whole schedule: two requests booking the
     same seat cannot both read "free" and both insert.
  2. Validate the draft against the scheduling rules (member chosen, seat
     within capacity, date and time order, anchor weekday, amounts).
  3. Load every booking for the seat and run the conflict detector. An edit
     excludes its own record. Any overlap raises ConflictError; nothing is
     written and the caller must pick another seat or schedule.
  4. Derive fee status from (amount, paid_amount) and write.

Locking the settings row instead of the seat's bookings also covers the
empty-seat case, where there are no booking rows to lock.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studyhall.core.config import get_settings
from studyhall.core.exceptions import ConflictError, NotFoundError, ValidationError
from studyhall.core.logging import get_logger
from studyhall.core.metrics import record_booking_write
from studyhall.models.booking import Booking
from studyhall.models.member import Member
from studyhall.schemas.booking import BookingCreate, BookingUpdate, QuoteRequest
from studyhall.scheduling import fee_status, find_conflicts, quote, validate_booking
from studyhall.scheduling.enums import FeeStatus
from studyhall.services.facility_service import get_facility_settings

logger = get_logger(__name__)
settings = get_settings()


async def _check_draft(
    db: AsyncSession,
    draft: BookingCreate,
    operation: str,
    exclude_id: Optional[str] = None,
) -> Member:
    facility = await get_facility_settings(db, for_update=True)

    try:
        validate_booking(draft, facility.total_seats)
    except ValidationError as e:
        record_booking_write(operation, "invalid")
        logger.info("booking_rejected_invalid", field=e.field, reason=e.message)
        raise

    member = (await db.execute(select(Member).where(Member.id == draft.member_id))).scalar_one_or_none()
    if member is None:
        record_booking_write(operation, "invalid")
        raise NotFoundError("Member", draft.member_id)

    result = await db.execute(select(Booking).where(Booking.seat_number == draft.seat_number))
    conflicts = find_conflicts(draft, result.scalars().all(), exclude_id=exclude_id)
    if conflicts:
        record_booking_write(operation, "conflict")
        logger.warning(
            "booking_conflict",
            seat_number=draft.seat_number,
            booking_id=exclude_id,
            conflicting_ids=[b.id for b in conflicts],
        )
        raise ConflictError(draft.seat_number, conflicts)

    return member


def _apply(booking: Booking, draft: BookingCreate, member: Member) -> None:
    booking.member_id = member.id
    booking.member_name = member.name
    booking.seat_number = draft.seat_number
    booking.start_date = draft.start_date
    booking.end_date = draft.end_date
    booking.start_time = draft.start_time
    booking.end_time = draft.end_time
    booking.days_of_week = sorted(set(draft.days_of_week))
    booking.amount = draft.amount
    booking.paid_amount = draft.paid_amount
    booking.fee_status = fee_status(draft.amount, draft.paid_amount).value


async def create_booking(db: AsyncSession, data: BookingCreate) -> Booking:
    member = await _check_draft(db, data, "create")

    booking = Booking()
    _apply(booking, data, member)
    db.add(booking)
    await db.flush()
    await db.refresh(booking)

    record_booking_write("create", "success")
    logger.info(
        "booking_created",
        booking_id=booking.id,
        member_id=member.id,
        seat_number=booking.seat_number,
        start_date=booking.start_date.isoformat(),
        end_date=booking.end_date.isoformat(),
        amount=booking.amount,
    )
    return booking


async def get_booking(db: AsyncSession, booking_id: str) -> Booking:
    result = await db.execute(select(Booking).where(Booking.id == booking_id))
    booking = result.scalar_one_or_none()

    if not booking:
        raise NotFoundError("Booking", booking_id)
    return booking


async def update_booking(db: AsyncSession, booking_id: str, data: BookingUpdate) -> Booking:
    """Edit in place; id and created_at are preserved."""
    booking = await get_booking(db, booking_id)
    member = await _check_draft(db, data, "update", exclude_id=booking.id)

    _apply(booking, data, member)
    await db.flush()
    await db.refresh(booking)

    record_booking_write("update", "success")
    logger.info("booking_updated", booking_id=booking.id, seat_number=booking.seat_number)
    return booking


async def delete_booking(db: AsyncSession, booking_id: str) -> None:
    booking = await get_booking(db, booking_id)
    await db.delete(booking)
    await db.flush()
    logger.info("booking_deleted", booking_id=booking_id, seat_number=booking.seat_number)


async def list_bookings(
    db: AsyncSession,
    q: Optional[str] = None,
    status: Optional[FeeStatus] = None,
    member_id: Optional[str] = None,
) -> list[Booking]:
    """
    Bookings newest first. `q` matches member name or booking id
    (case-insensitive substring) or an exact seat number.
    """
    query = select(Booking).order_by(Booking.created_at.desc())
    if status:
        query = query.where(Booking.fee_status == status.value)
    if member_id:
        query = query.where(Booking.member_id == member_id)
    bookings = list((await db.execute(query)).scalars().all())

    if q:
        needle = q.strip().lower()
        bookings = [
            b for b in bookings
            if needle in b.member_name.lower() or needle in b.id.lower() or str(b.seat_number) == needle
        ]
    return bookings


async def quote_booking(db: AsyncSession, data: QuoteRequest):
    """Pricing preview; unit price and hourly rate fall back to facility defaults."""
    facility = await get_facility_settings(db)
    unit_price = data.unit_price if data.unit_price is not None else facility.price_per_session
    hourly_rate = data.hourly_rate if data.hourly_rate is not None else settings.DEFAULT_HOURLY_RATE

    return quote(
        start_date=data.start_date,
        duration_value=data.duration_value,
        duration_unit=data.duration_unit,
        activation=data.activation,
        days_of_week=data.days_of_week,
        start_time=data.start_time,
        end_time=data.end_time,
        model=data.pricing_model,
        unit_price=unit_price,
        hourly_rate=hourly_rate,
        paid_amount=data.paid_amount,
    )
