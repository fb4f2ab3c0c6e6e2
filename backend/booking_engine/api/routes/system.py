"""
State management endpoints: export/import, save/load and reset.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from booking_engine.api.deps import get_booking_service, get_snapshot_store
from booking_engine.core.logging import get_logger
from booking_engine.schemas.snapshot import SnapshotDocument
from booking_engine.services.booking_service import BookingService, SnapshotImportError
from booking_engine.services.interfaces.snapshot_store import SnapshotStore, SnapshotStoreError

logger = get_logger(__name__)
router = APIRouter(prefix="/system", tags=["System"])


class SystemMessage(BaseModel):
    message: str


def _store_unavailable(e: SnapshotStoreError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(e),
    )


@router.get("/snapshot", response_model=SnapshotDocument)
async def export_snapshot(service: BookingService = Depends(get_booking_service)):
    """Full booking state as a portable document."""
    return service.export_snapshot()


@router.put("/snapshot", response_model=SystemMessage)
async def import_snapshot(
    document: SnapshotDocument,
    service: BookingService = Depends(get_booking_service),
):
    """
    Import a snapshot document.

    Fields left out (or null) keep their current state. Send the full
    document from GET /snapshot for an exact restore.
    """
    try:
        service.import_snapshot(document)
    except SnapshotImportError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    return SystemMessage(message="Snapshot imported successfully!")


@router.post("/save", response_model=SystemMessage)
async def save_state(
    service: BookingService = Depends(get_booking_service),
    store: SnapshotStore = Depends(get_snapshot_store),
):
    try:
        await store.save(service.export_snapshot())
    except SnapshotStoreError as e:
        raise _store_unavailable(e)
    return SystemMessage(message="Data saved successfully!")


@router.post("/load", response_model=SystemMessage)
async def load_state(
    service: BookingService = Depends(get_booking_service),
    store: SnapshotStore = Depends(get_snapshot_store),
):
    try:
        document = await store.load()
    except SnapshotStoreError as e:
        raise _store_unavailable(e)

    if document is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No saved data found!",
        )

    try:
        service.import_snapshot(document)
    except SnapshotImportError as e:
        logger.error("snapshot_load_rejected", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    return SystemMessage(message="Data loaded successfully!")


@router.delete("", response_model=SystemMessage)
async def clear_all(
    service: BookingService = Depends(get_booking_service),
    store: SnapshotStore = Depends(get_snapshot_store),
):
    """
    Delete the saved snapshot, then reset every booking.

    The store goes first: if it is unreachable the request fails with 503
    and the live bookings are left as they were.
    """
    try:
        await store.clear()
    except SnapshotStoreError as e:
        logger.error("clear_aborted", error=str(e))
        raise _store_unavailable(e)
    service.clear_all()
    return SystemMessage(message="All data cleared!")
