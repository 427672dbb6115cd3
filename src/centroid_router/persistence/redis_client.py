"""
Shared Redis connection pools for the Redis centroid store.

Pools are keyed by URL so every store pointing at the same server in one
process (API worker or Celery worker) shares connections.
"""

from typing import ClassVar

import structlog
from redis import ConnectionPool, Redis

from centroid_router.config import Settings

logger = structlog.get_logger(__name__)


class RedisClient:
    """Per-process registry of Redis connection pools."""

    _pools: ClassVar[dict[str, ConnectionPool]] = {}

    @classmethod
    def get_sync_client(cls, settings: Settings) -> Redis:
        """
        Return a client on the pool for settings.REDIS_URL, creating it once.

        Clients decode responses to str, which the centroid store relies on.
        """
        url = settings.REDIS_URL
        pool = cls._pools.get(url)
        if pool is None:
            pool = ConnectionPool.from_url(
                url,
                max_connections=settings.REDIS_MAX_CONNECTIONS,
                decode_responses=True,
                socket_timeout=5,
                socket_connect_timeout=5,
                retry_on_timeout=True,
            )
            cls._pools[url] = pool
            logger.info(
                "Created Redis connection pool",
                max_connections=settings.REDIS_MAX_CONNECTIONS,
            )
        return Redis(connection_pool=pool)

    @classmethod
    def close_pools(cls) -> None:
        """Disconnect every pool (application shutdown)."""
        while cls._pools:
            _, pool = cls._pools.popitem()
            pool.disconnect()
            logger.info("Closed Redis connection pool")
