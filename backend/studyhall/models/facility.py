"""
Facility settings: a single row holding seat capacity and default pricing.

Booking writes lock this row (SELECT ... FOR UPDATE) so that conflict checks
and inserts for the whole facility run one at a time.
"""

from sqlalchemy import CheckConstraint, Column, Float, Integer, String

from studyhall.db.base import Base, TimestampMixin

GLOBAL_SETTINGS_ID = "global"


class FacilitySettings(Base, TimestampMixin):
    __tablename__ = "facility_settings"

    id = Column(String(16), primary_key=True, default=GLOBAL_SETTINGS_ID)
    total_seats = Column(Integer, nullable=False)
    price_per_session = Column(Float, nullable=False)

    __table_args__ = (
        CheckConstraint("total_seats > 0", name="check_total_seats_positive"),
    )

    def __repr__(self) -> str:
        return f"<FacilitySettings(seats={self.total_seats}, price={self.price_per_session})>"
