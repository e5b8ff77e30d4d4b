"""
Tests for booking validation rules.
"""

from datetime import date, time

import pytest

from studyhall.core.exceptions import ValidationError
from studyhall.scheduling import validate_booking


def test_valid_draft_passes(make_booking):
    validate_booking(make_booking(), total_seats=40)


def test_start_weekday_must_stay_selected(make_booking):
    # 2024-01-03 is a Wednesday (3)
    draft = make_booking(start_date=date(2024, 1, 3), days_of_week=[1, 5])
    with pytest.raises(ValidationError) as exc:
        validate_booking(draft, total_seats=40)
    assert exc.value.field == "days_of_week"
    assert exc.value.details["anchor_day"] == 3
    assert "Wednesday" in exc.value.message


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"member_id": ""}, "member_id"),
        ({"seat_number": 0}, "seat_number"),
        ({"seat_number": 41}, "seat_number"),
        ({"end_date": date(2023, 12, 31)}, "end_date"),
        ({"days_of_week": []}, "days_of_week"),
        ({"days_of_week": [1, 7]}, "days_of_week"),
        ({"end_time": time(9, 0)}, "end_time"),
        ({"start_time": time(13, 0)}, "end_time"),
        ({"amount": 0}, "amount"),
        ({"paid_amount": -1}, "paid_amount"),
        ({"amount": float("nan")}, "amount"),
        ({"amount": float("inf")}, "amount"),
        ({"paid_amount": float("nan")}, "paid_amount"),
        ({"paid_amount": float("inf")}, "paid_amount"),
    ],
)
def test_rejects_invalid_fields(make_booking, overrides, field):
    with pytest.raises(ValidationError) as exc:
        validate_booking(make_booking(**overrides), total_seats=40)
    assert exc.value.field == field
    assert exc.value.status_code == 400


def test_seat_range_follows_facility_size(make_booking):
    validate_booking(make_booking(seat_number=10), total_seats=10)
    with pytest.raises(ValidationError):
        validate_booking(make_booking(seat_number=11), total_seats=10)


def test_single_day_booking_is_allowed(make_booking):
    draft = make_booking(start_date=date(2024, 1, 6), end_date=date(2024, 1, 6), days_of_week=[6])
    validate_booking(draft, total_seats=40)
