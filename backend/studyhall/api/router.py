"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from studyhall.api.routes import backup, bookings, facility, members, occupancy

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(members.router)
api_router.include_router(bookings.router)
api_router.include_router(facility.router)
api_router.include_router(occupancy.router)
api_router.include_router(backup.router)
