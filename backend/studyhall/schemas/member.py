"""
Pydantic schemas for member-related request/response validation.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class MemberCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    default_price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)


class MemberUpdate(MemberCreate):
    pass


class MemberResponse(BaseModel):
    id: str
    name: str
    email: Optional[str]
    phone: Optional[str]
    default_price: Optional[float]
    created_at: datetime

    model_config = {"from_attributes": True}


class MemberSummaryResponse(MemberResponse):
    total_amount: float
    total_paid: float
    total_dues: float
    booking_count: int
