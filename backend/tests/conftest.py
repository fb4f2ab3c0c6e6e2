"""
Pytest fixtures for the booking service, snapshot store and HTTP client.

Every test gets its own BookingService and store, injected through
dependency overrides, so no state leaks between tests.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from booking_engine.main import app
from booking_engine.api.deps import get_booking_service, get_snapshot_store
from booking_engine.services.booking_service import BookingService
from booking_engine.services.interfaces import InMemorySnapshotStore


@pytest.fixture
def service() -> BookingService:
    """A 20-seat train, the default capacity."""
    return BookingService(total_seats=20)


@pytest.fixture
def small_service() -> BookingService:
    """A 2-seat train, so the waiting list fills up quickly."""
    return BookingService(total_seats=2)


@pytest.fixture
def snapshot_store() -> InMemorySnapshotStore:
    return InMemorySnapshotStore()


@pytest_asyncio.fixture(scope="function")
async def client(
    small_service: BookingService,
    snapshot_store: InMemorySnapshotStore,
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client wired to a fresh 2-seat service and in-memory store."""
    app.dependency_overrides[get_booking_service] = lambda: small_service
    app.dependency_overrides[get_snapshot_store] = lambda: snapshot_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def booked_ids(client: AsyncClient) -> list[int]:
    """Alice and Bob confirmed in seats 1 and 2, Carol on the waiting list."""
    ids = []
    for name, age in [("Alice", 30), ("Bob", 41), ("Carol", 25)]:
        response = await client.post("/api/v1/bookings/", json={"name": name, "age": age})
        assert response.status_code == 201
        ids.append(response.json()["ticket_id"])
    return ids
