"""
Pytest fixtures for test database, client, seeded records and booking factory.

Each test gets its own in-memory SQLite database, so tests are isolated and
need no running PostgreSQL or Redis.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["REDIS_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "test"

from datetime import date, datetime, time
from types import SimpleNamespace
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from studyhall.main import app
from studyhall.api.deps import get_now
from studyhall.db.base import Base
from studyhall.db.session import get_db
from studyhall.models import Booking, FacilitySettings, Member

# Wednesday morning, inside the seeded booking's window
FROZEN_NOW = datetime(2024, 1, 3, 10, 30)


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh schema in a private in-memory database for every test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB session and freezes the clock."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: FROZEN_NOW

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def facility(db_session: AsyncSession) -> FacilitySettings:
    """Ten seats at 150 per session."""
    settings_row = FacilitySettings(id="global", total_seats=10, price_per_session=150)
    db_session.add(settings_row)
    await db_session.commit()
    return settings_row


@pytest_asyncio.fixture
async def test_member(db_session: AsyncSession, facility) -> Member:
    member = Member(id="MEMBER001", name="Asha Rao", email="asha@example.com", phone="9800000001")
    db_session.add(member)
    await db_session.commit()
    await db_session.refresh(member)
    return member


@pytest_asyncio.fixture
async def other_member(db_session: AsyncSession, facility) -> Member:
    member = Member(id="MEMBER002", name="Vikram Singh")
    db_session.add(member)
    await db_session.commit()
    await db_session.refresh(member)
    return member


@pytest_asyncio.fixture
async def test_booking(db_session: AsyncSession, test_member: Member) -> Booking:
    """Seat 5, weekday mornings through January 2024, half paid."""
    booking = Booking(
        id="BOOKING0001",
        member_id=test_member.id,
        member_name=test_member.name,
        seat_number=5,
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 31),
        start_time=time(9, 0),
        end_time=time(12, 0),
        days_of_week=[1, 2, 3, 4, 5],
        amount=1500,
        paid_amount=750,
        fee_status="Partial",
    )
    db_session.add(booking)
    await db_session.commit()
    await db_session.refresh(booking)
    return booking


@pytest.fixture
def make_booking():
    """Build an in-memory booking-like record for the pure scheduling functions."""
    counter = iter(range(1, 10_000))

    def _make(**overrides):
        fields = {
            "id": f"b{next(counter)}",
            "member_id": "M1",
            "member_name": "Member One",
            "seat_number": 5,
            "start_date": date(2024, 1, 1),
            "end_date": date(2024, 1, 31),
            "start_time": time(9, 0),
            "end_time": time(12, 0),
            "days_of_week": [1, 2, 3, 4, 5],
            "amount": 1000,
            "paid_amount": 0,
        }
        fields.update(overrides)
        return SimpleNamespace(**fields)

    return _make
