"""
Facility settings endpoints: seat capacity and default session price.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studyhall.db.session import get_db
from studyhall.schemas.facility import FacilitySettingsResponse, FacilitySettingsUpdate
from studyhall.services.facility_service import get_facility_settings, update_facility_settings

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("/", response_model=FacilitySettingsResponse)
async def read_settings(db: AsyncSession = Depends(get_db)):
    return await get_facility_settings(db)


@router.put("/", response_model=FacilitySettingsResponse)
async def write_settings(settings_data: FacilitySettingsUpdate, db: AsyncSession = Depends(get_db)):
    return await update_facility_settings(db, settings_data)
