"""
Pydantic schemas for facility settings.
"""

from pydantic import BaseModel, Field


class FacilitySettingsUpdate(BaseModel):
    total_seats: int = Field(..., gt=0, le=1000)
    price_per_session: float = Field(..., ge=0, allow_inf_nan=False)


class FacilitySettingsResponse(BaseModel):
    total_seats: int
    price_per_session: float

    model_config = {"from_attributes": True}
