"""
Pydantic schemas for booking-related request/response validation.

Scheduling rules (anchor day, time window, amounts) are checked by
`studyhall.scheduling.validate_booking` so they surface as 400 validation
errors with a field name rather than as schema errors.
"""

from datetime import date, datetime, time
from typing import Annotated, Optional
from pydantic import BaseModel, Field, PlainSerializer

from studyhall.scheduling.enums import ActivationType, DurationUnit, FeeStatus, PricingModel

# Times travel as zero-padded HH:MM
ClockTime = Annotated[time, PlainSerializer(lambda t: t.strftime("%H:%M"), return_type=str)]


class BookingCreate(BaseModel):
    member_id: str
    seat_number: int = Field(..., gt=0)
    start_date: date
    end_date: date
    start_time: ClockTime
    end_time: ClockTime
    days_of_week: list[int] = Field(default_factory=lambda: list(range(7)))
    amount: float
    paid_amount: float = 0


class BookingUpdate(BookingCreate):
    pass


class BookingResponse(BaseModel):
    id: str
    member_id: str
    member_name: str
    seat_number: int
    start_date: date
    end_date: date
    start_time: ClockTime
    end_time: ClockTime
    days_of_week: list[int]
    amount: float
    paid_amount: float
    due_amount: float
    fee_status: FeeStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class QuoteRequest(BaseModel):
    start_date: date
    duration_value: int = Field(1, gt=0)
    duration_unit: DurationUnit = DurationUnit.MONTH
    activation: ActivationType = ActivationType.DAILY
    days_of_week: list[int] = Field(default_factory=list)
    start_time: ClockTime = time(9, 0)
    end_time: ClockTime = time(18, 0)
    pricing_model: PricingModel = PricingModel.FLAT
    unit_price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    hourly_rate: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    paid_amount: float = Field(0, ge=0, allow_inf_nan=False)


class QuoteResponse(BaseModel):
    start_date: date
    end_date: date
    days_of_week: list[int]
    active_days: int
    hours_per_session: float
    pricing_model: PricingModel
    amount: float
    paid_amount: float
    due_amount: float
    fee_status: FeeStatus
