"""
Infrastructure layer - connections to external systems (Redis).
Snapshot stores receive clients from here instead of opening their own.
"""

from .redis_client import get_redis, RedisClient

__all__ = ['RedisClient', 'get_redis']
