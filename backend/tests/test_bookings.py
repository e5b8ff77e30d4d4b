"""
Tests for booking endpoints: validation, conflict checks, edits and listing.
"""

import json

import pytest
from httpx import AsyncClient


def booking_payload(member_id: str, **overrides) -> dict:
    payload = {
        "member_id": member_id,
        "seat_number": 6,
        "start_date": "2024-01-01",
        "end_date": "2024-01-31",
        "start_time": "14:00",
        "end_time": "17:00",
        "days_of_week": [1, 3, 5],
        "amount": 1200,
        "paid_amount": 1200,
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_create_booking(client: AsyncClient, test_member):
    """A valid booking is stored with derived fee status and HH:MM times."""
    response = await client.post("/api/v1/bookings/", json=booking_payload(test_member.id))
    assert response.status_code == 201
    data = response.json()
    assert data["member_name"] == "Asha Rao"
    assert data["seat_number"] == 6
    assert data["start_time"] == "14:00"
    assert data["end_time"] == "17:00"
    assert data["days_of_week"] == [1, 3, 5]
    assert data["fee_status"] == "Paid"
    assert data["due_amount"] == 0


@pytest.mark.asyncio
async def test_fee_status_is_derived_not_trusted(client: AsyncClient, test_member):
    response = await client.post(
        "/api/v1/bookings/",
        json=booking_payload(test_member.id, amount=1200, paid_amount=200, fee_status="Paid"),
    )
    assert response.status_code == 201
    assert response.json()["fee_status"] == "Partial"
    assert response.json()["due_amount"] == 1000


@pytest.mark.asyncio
async def test_start_weekday_must_be_selected(client: AsyncClient, test_member):
    """2024-01-03 is a Wednesday; leaving it out is rejected."""
    response = await client.post(
        "/api/v1/bookings/",
        json=booking_payload(test_member.id, start_date="2024-01-03", days_of_week=[1, 5]),
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["details"]["field"] == "days_of_week"


@pytest.mark.asyncio
async def test_seat_beyond_capacity_rejected(client: AsyncClient, test_member):
    response = await client.post("/api/v1/bookings/", json=booking_payload(test_member.id, seat_number=11))
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "seat_number"


@pytest.mark.asyncio
async def test_unknown_member_returns_404(client: AsyncClient, facility):
    response = await client.post("/api/v1/bookings/", json=booking_payload("NOBODY123"))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_overlapping_booking_returns_409(client: AsyncClient, other_member, test_booking):
    """Mondays 11:00-13:00 from mid-January clash with the seeded 09:00-12:00 weekday booking."""
    response = await client.post(
        "/api/v1/bookings/",
        json=booking_payload(
            other_member.id,
            seat_number=5,
            start_date="2024-01-15",
            end_date="2024-02-15",
            start_time="11:00",
            end_time="13:00",
            days_of_week=[1],
        ),
    )
    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "BOOKING_CONFLICT"
    assert body["details"]["seat_number"] == 5
    [conflict] = body["details"]["conflicts"]
    assert conflict["id"] == test_booking.id
    assert conflict["member_name"] == "Asha Rao"
    assert conflict["start_time"] == "09:00"


@pytest.mark.asyncio
async def test_back_to_back_booking_allowed(client: AsyncClient, other_member, test_booking):
    response = await client.post(
        "/api/v1/bookings/",
        json=booking_payload(
            other_member.id,
            seat_number=5,
            start_time="12:00",
            end_time="15:00",
            days_of_week=[1, 2, 3, 4, 5],
        ),
    )
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_weekend_booking_on_same_seat_allowed(client: AsyncClient, other_member, test_booking):
    # 2024-01-06 is a Saturday
    response = await client.post(
        "/api/v1/bookings/",
        json=booking_payload(
            other_member.id,
            seat_number=5,
            start_date="2024-01-06",
            start_time="09:00",
            end_time="12:00",
            days_of_week=[0, 6],
        ),
    )
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_edit_does_not_conflict_with_itself(client: AsyncClient, test_member, test_booking):
    """Extending a booking's own window is not a conflict; id and created_at stay."""
    before = (await client.get(f"/api/v1/bookings/{test_booking.id}")).json()
    response = await client.put(
        f"/api/v1/bookings/{test_booking.id}",
        json=booking_payload(
            test_member.id,
            seat_number=5,
            start_time="09:00",
            end_time="13:00",
            days_of_week=[1, 2, 3, 4, 5],
            amount=1500,
            paid_amount=1500,
        ),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == test_booking.id
    assert data["created_at"] == before["created_at"]
    assert data["end_time"] == "13:00"
    assert data["fee_status"] == "Paid"


@pytest.mark.asyncio
async def test_edit_into_another_booking_returns_409(client: AsyncClient, test_member, other_member, test_booking):
    afternoon = await client.post(
        "/api/v1/bookings/",
        json=booking_payload(other_member.id, seat_number=5, start_time="13:00", end_time="15:00"),
    )
    assert afternoon.status_code == 201

    response = await client.put(
        f"/api/v1/bookings/{test_booking.id}",
        json=booking_payload(
            test_member.id,
            seat_number=5,
            start_time="09:00",
            end_time="14:00",
            days_of_week=[1, 2, 3, 4, 5],
        ),
    )
    assert response.status_code == 409
    assert response.json()["details"]["conflicts"][0]["id"] == afternoon.json()["id"]


@pytest.mark.asyncio
async def test_update_missing_booking_returns_404(client: AsyncClient, test_member):
    response = await client.put("/api/v1/bookings/missing", json=booking_payload(test_member.id))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_newest_first(client: AsyncClient, other_member, test_booking):
    created = await client.post("/api/v1/bookings/", json=booking_payload(other_member.id))
    assert created.status_code == 201

    response = await client.get("/api/v1/bookings/")
    assert response.status_code == 200
    ids = [b["id"] for b in response.json()]
    assert ids == [created.json()["id"], test_booking.id]


@pytest.mark.asyncio
async def test_list_filters(client: AsyncClient, other_member, test_booking):
    await client.post("/api/v1/bookings/", json=booking_payload(other_member.id, seat_number=7))

    partial = (await client.get("/api/v1/bookings/", params={"fee_status": "Partial"})).json()
    assert [b["id"] for b in partial] == [test_booking.id]

    by_name = (await client.get("/api/v1/bookings/", params={"q": "vikram"})).json()
    assert [b["member_name"] for b in by_name] == ["Vikram Singh"]

    by_seat = (await client.get("/api/v1/bookings/", params={"q": "7"})).json()
    assert [b["seat_number"] for b in by_seat] == [7]


@pytest.mark.asyncio
async def test_delete_booking(client: AsyncClient, test_booking):
    response = await client.delete(f"/api/v1/bookings/{test_booking.id}")
    assert response.status_code == 204

    response = await client.get(f"/api/v1/bookings/{test_booking.id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_quote_hourly_custom_days(client: AsyncClient, facility):
    """Mondays plus anchor Wednesdays over January, 3h sessions at the default 30/h."""
    response = await client.post(
        "/api/v1/bookings/quote",
        json={
            "start_date": "2024-01-03",
            "duration_value": 1,
            "duration_unit": "MONTH",
            "activation": "CUSTOM",
            "days_of_week": [1],
            "start_time": "09:00",
            "end_time": "12:00",
            "pricing_model": "HOURLY",
            "paid_amount": 300,
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["end_date"] == "2024-02-02"
    assert data["days_of_week"] == [1, 3]
    # Wednesdays 3,10,17,24,31 and Mondays 8,15,22,29
    assert data["active_days"] == 9
    assert data["amount"] == 810
    assert data["due_amount"] == 510
    assert data["fee_status"] == "Partial"


@pytest.mark.asyncio
async def test_quote_flat_uses_facility_price(client: AsyncClient, facility):
    response = await client.post(
        "/api/v1/bookings/quote",
        json={"start_date": "2024-01-31", "duration_value": 2, "duration_unit": "MONTH"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["end_date"] == "2024-03-30"
    assert data["amount"] == 300
    assert data["fee_status"] == "Due"


@pytest.mark.asyncio
async def test_quote_rejects_inverted_window(client: AsyncClient, facility):
    response = await client.post(
        "/api/v1/bookings/quote",
        json={"start_date": "2024-01-01", "start_time": "18:00", "end_time": "09:00"},
    )
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "end_time"


async def post_raw_json(client: AsyncClient, url: str, payload: dict):
    """Send NaN/Infinity literals, which httpx refuses to encode itself."""
    return await client.post(url, content=json.dumps(payload), headers={"Content-Type": "application/json"})


@pytest.mark.asyncio
async def test_nan_amount_rejected_and_session_usable(client: AsyncClient, test_member):
    response = await post_raw_json(client, "/api/v1/bookings/", booking_payload(test_member.id, amount=float("nan")))
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "amount"

    listing = await client.get("/api/v1/bookings/")
    assert listing.status_code == 200
    assert listing.json() == []


@pytest.mark.asyncio
async def test_infinite_paid_amount_rejected(client: AsyncClient, test_member):
    response = await post_raw_json(
        client, "/api/v1/bookings/", booking_payload(test_member.id, paid_amount=float("inf"))
    )
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "paid_amount"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "duration_value, duration_unit",
    [(9000, "YEAR"), (10**9, "DAY")],
)
async def test_quote_duration_past_the_calendar(client: AsyncClient, facility, duration_value, duration_unit):
    response = await client.post(
        "/api/v1/bookings/quote",
        json={"start_date": "2024-01-01", "duration_value": duration_value, "duration_unit": duration_unit},
    )
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "duration_value"


@pytest.mark.asyncio
async def test_quote_rejects_unknown_weekday(client: AsyncClient, facility):
    response = await client.post(
        "/api/v1/bookings/quote",
        json={"start_date": "2024-01-01", "activation": "CUSTOM", "days_of_week": [9]},
    )
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "days_of_week"


@pytest.mark.asyncio
async def test_quote_rejects_infinite_rate(client: AsyncClient, facility):
    response = await post_raw_json(
        client,
        "/api/v1/bookings/quote",
        {"start_date": "2024-01-01", "pricing_model": "HOURLY", "hourly_rate": float("inf")},
    )
    assert response.status_code == 422
