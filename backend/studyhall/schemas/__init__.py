from studyhall.schemas.member import MemberCreate, MemberUpdate, MemberResponse, MemberSummaryResponse
from studyhall.schemas.booking import BookingCreate, BookingUpdate, BookingResponse, QuoteRequest, QuoteResponse
from studyhall.schemas.facility import FacilitySettingsUpdate, FacilitySettingsResponse

__all__ = [
    "MemberCreate", "MemberUpdate", "MemberResponse", "MemberSummaryResponse",
    "BookingCreate", "BookingUpdate", "BookingResponse", "QuoteRequest", "QuoteResponse",
    "FacilitySettingsUpdate", "FacilitySettingsResponse",
]
