"""
Train Booking API - Main Application Entry Point

A single-train seat booking engine exposing:
- Lowest-free-seat assignment with a FIFO waiting list
- Automatic promotion from the waiting list on cancellation
- Single-step LIFO undo of cancellations
- Snapshot save/load to memory or Redis
- Structured logging with request correlation and Prometheus metrics
"""

from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from booking_engine.core.config import get_settings
from booking_engine.core.logging import setup_logging, get_logger
from booking_engine.core.metrics import metrics_endpoint
from booking_engine.api.deps import get_booking_service, get_snapshot_store
from booking_engine.api.router import api_router
from booking_engine.api.middleware import RequestLoggingMiddleware
from booking_engine.infrastructure.redis_client import RedisClient
from booking_engine.services.booking_service import BookingService, SnapshotImportError
from booking_engine.services.interfaces.snapshot_store import SnapshotStore, SnapshotStoreError
from booking_engine.services.store_factory import build_snapshot_store

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        total_seats=settings.TOTAL_SEATS,
    )

    app.state.booking_service = BookingService(
        total_seats=settings.TOTAL_SEATS,
        publish_gauges=True,
    )
    app.state.snapshot_store = build_snapshot_store(settings)

    if settings.AUTOLOAD_SNAPSHOT:
        try:
            document = await app.state.snapshot_store.load()
            if document is not None:
                app.state.booking_service.import_snapshot(document)
                logger.info("snapshot_restored_on_startup")
        except (SnapshotStoreError, SnapshotImportError) as e:
            logger.warning("snapshot_restore_failed", error=str(e), message="Starting empty")

    yield

    # Cleanup
    await RedisClient.close()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Seat booking engine with waiting list promotion and cancellation undo",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Custom middleware
app.add_middleware(RequestLoggingMiddleware)

# Routes
app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check(
    service: BookingService = Depends(get_booking_service),
    store: SnapshotStore = Depends(get_snapshot_store),
):
    """Health check endpoint for Docker and load balancers."""
    seat_map = service.seat_map()
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "seats": {"total": seat_map.total_seats, "available": seat_map.available},
        "persistence": await store.status(),
    }


@app.get("/metrics", include_in_schema=False)
async def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }


def run() -> None:
    """Serve the API with uvicorn using HOST/PORT from settings."""
    import uvicorn

    uvicorn.run(
        "booking_engine.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_config=None,
    )


if __name__ == "__main__":
    run()
