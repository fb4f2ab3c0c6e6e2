"""
Request dependencies for the booking service and snapshot store.

Both live on app.state (created in the application lifespan), so each app
instance owns its own engine. Tests swap them via app.dependency_overrides.
"""

from fastapi import Request

from booking_engine.services.booking_service import BookingService
from booking_engine.services.interfaces.snapshot_store import SnapshotStore


def get_booking_service(request: Request) -> BookingService:
    return request.app.state.booking_service


def get_snapshot_store(request: Request) -> SnapshotStore:
    return request.app.state.snapshot_store
