"""
Full-snapshot backup and restore.

Export writes settings, members and bookings as one JSON document. Import
replaces everything in a single transaction: either the whole snapshot lands
or nothing changes. Fee status is recomputed from the amounts on the way in.
Overlapping bookings in a snapshot are legacy data, not a reason to refuse a
restore; they are logged and reported back so they can be corrected.
"""

from datetime import datetime, timezone
from itertools import combinations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from studyhall.core.exceptions import ValidationError
from studyhall.core.logging import get_logger
from studyhall.models.booking import Booking
from studyhall.models.member import Member
from studyhall.schemas.backup import BackupSnapshot, BookingRecord, MemberRecord, SettingsRecord
from studyhall.scheduling import fee_status, validate_booking
from studyhall.scheduling.conflicts import overlaps
from studyhall.services.facility_service import get_facility_settings

logger = get_logger(__name__)


async def export_snapshot(db: AsyncSession) -> BackupSnapshot:
    facility = await get_facility_settings(db)
    members = (await db.execute(select(Member).order_by(Member.name))).scalars().all()
    bookings = (await db.execute(select(Booking).order_by(Booking.created_at.desc()))).scalars().all()

    snapshot = BackupSnapshot(
        exported_at=datetime.now(timezone.utc),
        settings=SettingsRecord.model_validate(facility),
        members=[MemberRecord.model_validate(m) for m in members],
        bookings=[BookingRecord.model_validate(b) for b in bookings],
    )
    logger.info("backup_exported", members=len(snapshot.members), bookings=len(snapshot.bookings))
    return snapshot


def find_overlapping_pairs(records: list) -> list[list[str]]:
    by_seat: dict[int, list] = {}
    for record in records:
        by_seat.setdefault(record.seat_number, []).append(record)
    return [
        [a.id, b.id]
        for seat_records in by_seat.values()
        for a, b in combinations(seat_records, 2)
        if overlaps(a, b)
    ]


def _duplicates(ids: list[str]) -> list[str]:
    seen, repeated = set(), []
    for identifier in ids:
        if identifier in seen:
            repeated.append(identifier)
        seen.add(identifier)
    return repeated


async def import_snapshot(db: AsyncSession, snapshot: BackupSnapshot) -> dict:
    facility = await get_facility_settings(db, for_update=True)
    total_seats = snapshot.settings.total_seats if snapshot.settings else facility.total_seats

    for kind, records in (("members", snapshot.members), ("bookings", snapshot.bookings)):
        repeated = _duplicates([r.id for r in records])
        if repeated:
            raise ValidationError(f"Snapshot repeats {kind} ids", field=kind, details={"ids": repeated})

    member_names = {m.id: m.name for m in snapshot.members}
    orphans = [b.id for b in snapshot.bookings if b.member_id not in member_names]
    if orphans:
        raise ValidationError(
            "Snapshot has bookings for unknown members",
            field="bookings",
            details={"booking_ids": orphans},
        )

    for record in snapshot.bookings:
        try:
            validate_booking(record, total_seats)
        except ValidationError as e:
            e.details["booking_id"] = record.id
            raise

    if snapshot.settings:
        facility.total_seats = snapshot.settings.total_seats
        facility.price_per_session = snapshot.settings.price_per_session

    await db.execute(delete(Booking))
    await db.execute(delete(Member))

    for record in snapshot.members:
        db.add(Member(
            id=record.id,
            name=record.name,
            email=record.email,
            phone=record.phone,
            default_price=record.default_price,
        ))
    # members must exist before their bookings reference them
    await db.flush()

    now = datetime.now(timezone.utc)
    for record in snapshot.bookings:
        db.add(Booking(
            id=record.id,
            member_id=record.member_id,
            member_name=member_names[record.member_id],
            seat_number=record.seat_number,
            start_date=record.start_date,
            end_date=record.end_date,
            start_time=record.start_time,
            end_time=record.end_time,
            days_of_week=sorted(set(record.days_of_week)),
            amount=record.amount,
            paid_amount=record.paid_amount,
            fee_status=fee_status(record.amount, record.paid_amount).value,
            created_at=record.created_at or now,
        ))
    await db.flush()

    overlapping = find_overlapping_pairs(snapshot.bookings)
    if overlapping:
        logger.warning("backup_import_overlaps", pairs=overlapping)

    logger.info(
        "backup_imported",
        members=len(snapshot.members),
        bookings=len(snapshot.bookings),
        overlapping=len(overlapping),
    )
    return {
        "members_imported": len(snapshot.members),
        "bookings_imported": len(snapshot.bookings),
        "overlapping_bookings": overlapping,
    }
