from studyhall.models.member import Member
from studyhall.models.booking import Booking
from studyhall.models.facility import FacilitySettings

__all__ = ["Member", "Booking", "FacilitySettings"]
