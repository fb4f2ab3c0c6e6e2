"""
Redis-backed snapshot persistence.

STORAGE LAYOUT
==============

One key (settings.SNAPSHOT_KEY) holding the JSON-serialized SnapshotDocument.
No TTL: a saved snapshot lives until it is overwritten or cleared.

Why a single document:
  - Save and load always move the whole booking state at once
  - One SET is atomic, so a reader never sees half a snapshot
  - The state is small (capacity-sized seat list plus a few hundred tickets)

Failure handling:
  Unlike a cache, a lost save is lost data. Redis errors are logged and
  re-raised as SnapshotStoreError so the API can report them (503) instead
  of pretending the save worked.
"""

from typing import Optional

import redis.asyncio as redis
from pydantic import ValidationError

from booking_engine.core.logging import get_logger
from booking_engine.core.metrics import record_snapshot_operation
from booking_engine.schemas.snapshot import SnapshotDocument
from booking_engine.services.interfaces.snapshot_store import SnapshotStore, SnapshotStoreError

logger = get_logger(__name__)


class RedisSnapshotStore(SnapshotStore):
    """
    Redis snapshot store.

    Use when:
    - Saved state must survive an API restart
    - Several API replicas share one saved snapshot
    """

    name = "redis"

    def __init__(self, client: redis.Redis, key: str):
        self.redis = client
        self.key = key

    async def save(self, document: SnapshotDocument) -> None:
        payload = document.model_dump_json()
        try:
            await self.redis.set(self.key, payload)
        except redis.RedisError as e:
            logger.error("snapshot_save_error", key=self.key, error=str(e))
            record_snapshot_operation("save", "error")
            raise SnapshotStoreError(f"Could not save snapshot: {e}") from e

        logger.info("snapshot_saved", key=self.key, bytes=len(payload))
        record_snapshot_operation("save", "ok")

    async def load(self) -> Optional[SnapshotDocument]:
        try:
            payload = await self.redis.get(self.key)
        except redis.RedisError as e:
            logger.error("snapshot_load_error", key=self.key, error=str(e))
            record_snapshot_operation("load", "error")
            raise SnapshotStoreError(f"Could not load snapshot: {e}") from e

        if payload is None:
            logger.info("snapshot_missing", key=self.key)
            record_snapshot_operation("load", "missing")
            return None

        try:
            document = SnapshotDocument.model_validate_json(payload)
        except ValidationError as e:
            logger.error("snapshot_corrupt", key=self.key, error=str(e))
            record_snapshot_operation("load", "error")
            raise SnapshotStoreError("Saved snapshot is corrupt") from e

        record_snapshot_operation("load", "ok")
        return document

    async def clear(self) -> bool:
        try:
            deleted = await self.redis.delete(self.key)
        except redis.RedisError as e:
            logger.error("snapshot_clear_error", key=self.key, error=str(e))
            record_snapshot_operation("clear", "error")
            raise SnapshotStoreError(f"Could not clear snapshot: {e}") from e

        record_snapshot_operation("clear", "ok")
        return bool(deleted)

    async def status(self) -> dict:
        try:
            await self.redis.ping()
            return {"store": self.name, "status": "connected"}
        except redis.RedisError as e:
            return {"store": self.name, "status": "error", "error": str(e)}
