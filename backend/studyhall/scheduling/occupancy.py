"""
Occupancy index: which booking holds each seat at one instant.
"""

from dataclasses import dataclass, field
from datetime import date, time
from typing import Iterable

from studyhall.core.logging import get_logger
from studyhall.core.metrics import record_occupancy_anomaly
from studyhall.scheduling.recurrence import is_active

logger = get_logger(__name__)


@dataclass
class OccupancyAnomaly:
    """More than one booking active on the same seat at the same instant."""

    seat_number: int
    on_date: date
    at_time: time
    bookings: list


@dataclass
class OccupancyIndex:
    on_date: date
    at_time: time
    occupants: dict = field(default_factory=dict)
    anomalies: list[OccupancyAnomaly] = field(default_factory=list)

    def occupant(self, seat_number: int):
        return self.occupants.get(seat_number)

    def is_free(self, seat_number: int) -> bool:
        return seat_number not in self.occupants


def build_index(bookings: Iterable, on_date: date, at_time: time) -> OccupancyIndex:
    """
    Map seat number to its active booking for (on_date, at_time).

    When several bookings match one seat, the last one seen keeps the seat
    and all of them are reported as an anomaly. Rendering carries on.
    """
    matches: dict[int, list] = {}
    for booking in bookings:
        if is_active(booking, on_date, at_time):
            matches.setdefault(booking.seat_number, []).append(booking)

    index = OccupancyIndex(on_date=on_date, at_time=at_time)
    for seat_number, active in matches.items():
        index.occupants[seat_number] = active[-1]
        if len(active) > 1:
            anomaly = OccupancyAnomaly(seat_number, on_date, at_time, active)
            index.anomalies.append(anomaly)
            record_occupancy_anomaly()
            logger.warning(
                "occupancy_anomaly",
                seat_number=seat_number,
                date=on_date.isoformat(),
                time=at_time.strftime("%H:%M"),
                booking_ids=[b.id for b in active],
            )
    return index
