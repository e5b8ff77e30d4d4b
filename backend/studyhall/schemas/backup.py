"""
Backup snapshot format.

Records use camelCase field names so a snapshot round-trips unchanged through
file export/import. Backups written by the earlier console, which called
members "students", are accepted on import.
"""

from datetime import date, datetime
from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from studyhall.schemas.booking import ClockTime
from studyhall.scheduling.enums import FeeStatus

SNAPSHOT_VERSION = 1


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class SettingsRecord(_Record):
    total_seats: int = Field(..., gt=0)
    price_per_session: float = 0


class MemberRecord(_Record):
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(..., min_length=1, max_length=32)
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = None
    phone: Optional[str] = None
    default_price: Optional[float] = None


class BookingRecord(_Record):
    id: str = Field(..., min_length=1, max_length=32)
    member_id: str = Field(..., validation_alias=AliasChoices("memberId", "member_id", "studentId"))
    member_name: str = Field("", validation_alias=AliasChoices("memberName", "member_name", "studentName"))
    seat_number: int = Field(..., gt=0)
    start_date: date
    end_date: date
    start_time: ClockTime
    end_time: ClockTime
    days_of_week: list[int]
    amount: float
    paid_amount: float = 0
    fee_status: Optional[FeeStatus] = None
    created_at: Optional[datetime] = None


class BackupSnapshot(_Record):
    version: int = SNAPSHOT_VERSION
    exported_at: Optional[datetime] = None
    settings: Optional[SettingsRecord] = None
    members: list[MemberRecord] = Field(
        default_factory=list, validation_alias=AliasChoices("members", "students")
    )
    bookings: list[BookingRecord] = Field(default_factory=list)


class ImportResult(BaseModel):
    members_imported: int
    bookings_imported: int
    overlapping_bookings: list[list[str]]
