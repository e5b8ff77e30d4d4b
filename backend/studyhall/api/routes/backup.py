"""
Backup endpoints: full JSON export and all-or-nothing restore.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studyhall.db.session import get_db
from studyhall.schemas.backup import BackupSnapshot, ImportResult
from studyhall.services.backup_service import export_snapshot, import_snapshot
from studyhall.services.cache_service import invalidate_member_cache

router = APIRouter(prefix="/backup", tags=["Backup"])


@router.get("/export", response_model=BackupSnapshot)
async def export_endpoint(db: AsyncSession = Depends(get_db)):
    return await export_snapshot(db)


@router.post("/import", response_model=ImportResult)
async def import_endpoint(snapshot: BackupSnapshot, db: AsyncSession = Depends(get_db)):
    """Replace all members, bookings and settings with the snapshot."""
    result = await import_snapshot(db, snapshot)
    await invalidate_member_cache()
    return result
