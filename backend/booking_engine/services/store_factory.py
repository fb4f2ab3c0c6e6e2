"""
Snapshot store factory.
Configures where saved booking state lives.
"""

from booking_engine.core.config import Settings, get_settings
from booking_engine.infrastructure.redis_client import get_redis
from booking_engine.services.interfaces.snapshot_store import SnapshotStore
from booking_engine.services.interfaces.memory_snapshot_store import InMemorySnapshotStore
from booking_engine.services.snapshot_service import RedisSnapshotStore


def build_snapshot_store(settings: Settings = None) -> SnapshotStore:
    """
    Build the configured snapshot store.

    Store selection via SNAPSHOT_STORE:
    - memory (default): InMemorySnapshotStore
    - redis: RedisSnapshotStore on REDIS_URL
    """
    settings = settings or get_settings()

    if settings.SNAPSHOT_STORE == 'redis':
        return RedisSnapshotStore(get_redis(), settings.SNAPSHOT_KEY)
    else:
        return InMemorySnapshotStore()
