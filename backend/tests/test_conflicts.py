"""
Tests for conflict detection between recurring bookings.
"""

from datetime import date, time

import pytest

from studyhall.scheduling import find_conflicts


@pytest.fixture
def overlapping_pair(make_booking):
    first = make_booking(
        id="jan",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 31),
        days_of_week=[1],
        start_time=time(9, 0),
        end_time=time(12, 0),
    )
    second = make_booking(
        id="janfeb",
        start_date=date(2024, 1, 15),
        end_date=date(2024, 2, 15),
        days_of_week=[1],
        start_time=time(11, 0),
        end_time=time(13, 0),
    )
    return first, second


def test_overlapping_mondays_conflict_both_ways(overlapping_pair):
    first, second = overlapping_pair
    assert find_conflicts(first, [second]) == [second]
    assert find_conflicts(second, [first]) == [first]


def test_different_seat_never_conflicts(make_booking):
    a = make_booking(seat_number=1)
    b = make_booking(seat_number=2)
    assert find_conflicts(a, [b]) == []


def test_back_to_back_windows_do_not_conflict(make_booking):
    morning = make_booking(start_time=time(9, 0), end_time=time(12, 0))
    afternoon = make_booking(start_time=time(12, 0), end_time=time(15, 0))
    assert find_conflicts(afternoon, [morning]) == []


def test_disjoint_weekdays_do_not_conflict(make_booking):
    weekdays = make_booking(days_of_week=[1, 2, 3, 4, 5])
    weekend = make_booking(days_of_week=[0, 6])
    assert find_conflicts(weekend, [weekdays]) == []


def test_disjoint_date_ranges_do_not_conflict(make_booking):
    january = make_booking(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))
    february = make_booking(start_date=date(2024, 2, 1), end_date=date(2024, 2, 29))
    assert find_conflicts(february, [january]) == []


def test_shared_weekday_outside_the_shared_dates_does_not_conflict(make_booking):
    # Both book Mondays, but the only shared date is Tuesday 2024-01-02
    a = make_booking(start_date=date(2024, 1, 1), end_date=date(2024, 1, 2), days_of_week=[1, 2])
    b = make_booking(start_date=date(2024, 1, 2), end_date=date(2024, 1, 31), days_of_week=[1])
    assert find_conflicts(a, [b]) == []
    assert find_conflicts(b, [a]) == []


def test_single_shared_day_conflicts(make_booking):
    a = make_booking(start_date=date(2024, 1, 1), end_date=date(2024, 1, 2), days_of_week=[1, 2])
    b = make_booking(start_date=date(2024, 1, 2), end_date=date(2024, 1, 31), days_of_week=[2])
    assert find_conflicts(a, [b]) == [b]


def test_exclude_id_skips_the_record_being_edited(make_booking):
    original = make_booking(id="keep")
    edited = make_booking(id="keep", end_time=time(13, 0))
    assert find_conflicts(edited, [original], exclude_id="keep") == []
    assert find_conflicts(edited, [original]) == [original]


def test_returns_every_clashing_booking(make_booking):
    candidate = make_booking(days_of_week=list(range(7)), start_time=time(8, 0), end_time=time(20, 0))
    morning = make_booking(start_time=time(9, 0), end_time=time(12, 0))
    evening = make_booking(start_time=time(17, 0), end_time=time(19, 0))
    other_seat = make_booking(seat_number=9)
    assert find_conflicts(candidate, [morning, evening, other_seat]) == [morning, evening]


@pytest.mark.parametrize(
    "a_fields, b_fields",
    [
        ({}, {"start_time": time(11, 30), "end_time": time(14, 0)}),
        ({}, {"start_time": time(12, 0), "end_time": time(14, 0)}),
        ({"days_of_week": [0]}, {"days_of_week": [0, 6]}),
        ({"end_date": date(2024, 1, 5)}, {"start_date": date(2024, 1, 6), "days_of_week": [6]}),
        ({"start_date": date(2024, 1, 8), "end_date": date(2024, 1, 8)}, {"days_of_week": [1]}),
    ],
)
def test_conflict_is_symmetric(make_booking, a_fields, b_fields):
    a = make_booking(**a_fields)
    b = make_booking(**b_fields)
    assert bool(find_conflicts(a, [b])) == bool(find_conflicts(b, [a]))
