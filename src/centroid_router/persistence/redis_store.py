"""
Redis-backed centroid store.

Storage Strategy:
- Whole table stored as one JSON string under a single key
- A single SET replaces it, which is atomic for readers
- No TTL: the table lives until the next build overwrites it
"""

import json

import structlog
from pydantic import ValidationError as PydanticValidationError
from redis import Redis
from redis.exceptions import RedisError

from centroid_router.models.output_models import CentroidTable, centroid_table_adapter
from centroid_router.persistence.base_store import CentroidStore
from centroid_router.persistence.exceptions import CentroidsNotFoundError, PersistenceError


logger = structlog.get_logger(__name__)


class RedisCentroidStore(CentroidStore):
    """
    Stores the table in Redis so several API instances share one table.
    """
    
    DEFAULT_KEY = "centroid_router:centroids"
    
    def __init__(self, redis_client: Redis, key: str = DEFAULT_KEY):
        """
        Initialize store.
        
        Args:
            redis_client: Redis client (decode_responses=True)
            key: Redis key holding the table
        """
        self.redis = redis_client
        self.key = key
    
    def load(self) -> CentroidTable:
        try:
            raw = self.redis.get(self.key)
        except RedisError as e:
            raise PersistenceError(
                f"Failed to read centroids from Redis: {e}",
                details={"key": self.key}
            ) from e
        
        if raw is None:
            raise CentroidsNotFoundError(
                f"No centroids stored under Redis key {self.key}",
                details={"key": self.key}
            )
        
        try:
            table = centroid_table_adapter.validate_json(raw)
        except PydanticValidationError as e:
            raise PersistenceError(
                "Stored centroids are not a JSON object of label -> number array",
                details={"key": self.key, "error": str(e)[:500]}
            ) from e
        
        logger.debug("Loaded centroids", key=self.key, labels=len(table))
        return table
    
    def save(self, table: CentroidTable) -> None:
        try:
            self.redis.set(self.key, json.dumps(table))
        except RedisError as e:
            raise PersistenceError(
                f"Failed to write centroids to Redis: {e}",
                details={"key": self.key}
            ) from e
        
        logger.info("Saved centroids", key=self.key, labels=list(table))
    
    def exists(self) -> bool:
        try:
            return bool(self.redis.exists(self.key))
        except RedisError as e:
            logger.warning("Redis exists check failed", key=self.key, error=str(e))
            return False
    
    def __repr__(self) -> str:
        return f"RedisCentroidStore(key={self.key})"
