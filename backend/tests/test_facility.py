"""
Tests for facility settings and health endpoints.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_settings_created_from_defaults(client: AsyncClient):
    response = await client.get("/api/v1/settings/")
    assert response.status_code == 200
    assert response.json() == {"total_seats": 40, "price_per_session": 150}


@pytest.mark.asyncio
async def test_update_settings_resizes_seat_map(client: AsyncClient, facility):
    response = await client.put("/api/v1/settings/", json={"total_seats": 20, "price_per_session": 200})
    assert response.status_code == 200
    assert response.json()["total_seats"] == 20

    seat_map = (await client.get("/api/v1/occupancy/seats")).json()
    assert len(seat_map["seats"]) == 20


@pytest.mark.asyncio
async def test_update_settings_rejects_zero_seats(client: AsyncClient, facility):
    response = await client.put("/api/v1/settings/", json={"total_seats": 0, "price_per_session": 150})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["cache"] == {"status": "disabled"}
