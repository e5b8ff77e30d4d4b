"""
Facility settings: created with defaults on first read, never deleted.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studyhall.core.config import get_settings
from studyhall.core.logging import get_logger
from studyhall.models.facility import GLOBAL_SETTINGS_ID, FacilitySettings
from studyhall.schemas.facility import FacilitySettingsUpdate

logger = get_logger(__name__)
settings = get_settings()


async def get_facility_settings(db: AsyncSession, for_update: bool = False) -> FacilitySettings:
    """
    Return the settings row, creating it from config defaults if missing.

    `for_update` locks the row until the transaction ends. Booking writes
    take this lock so their conflict check and insert cannot interleave
    with another writer's.
    """
    query = select(FacilitySettings).where(FacilitySettings.id == GLOBAL_SETTINGS_ID)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    facility = result.scalar_one_or_none()

    if facility is None:
        facility = FacilitySettings(
            id=GLOBAL_SETTINGS_ID,
            total_seats=settings.DEFAULT_TOTAL_SEATS,
            price_per_session=settings.DEFAULT_PRICE_PER_SESSION,
        )
        db.add(facility)
        await db.flush()
        logger.info("facility_settings_created", total_seats=facility.total_seats)

    return facility


async def update_facility_settings(db: AsyncSession, data: FacilitySettingsUpdate) -> FacilitySettings:
    facility = await get_facility_settings(db, for_update=True)
    facility.total_seats = data.total_seats
    facility.price_per_session = data.price_per_session
    await db.flush()
    await db.refresh(facility)

    logger.info(
        "facility_settings_updated",
        total_seats=facility.total_seats,
        price_per_session=facility.price_per_session,
    )
    return facility
