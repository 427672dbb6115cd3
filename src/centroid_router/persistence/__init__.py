"""
Centroid table persistence.

- base_store.py: CentroidStore interface (load / save / exists)
- file_store.py: Pretty-printed JSON file with atomic replace
- redis_store.py: Single Redis key, shared across instances
- memory_store.py: In-process store for tests
- training_data.py: Loader for the labeled training file
"""

from centroid_router.config import Settings
from centroid_router.persistence.base_store import CentroidStore
from centroid_router.persistence.exceptions import CentroidsNotFoundError, PersistenceError
from centroid_router.persistence.file_store import FileCentroidStore
from centroid_router.persistence.memory_store import InMemoryCentroidStore
from centroid_router.persistence.redis_client import RedisClient
from centroid_router.persistence.redis_store import RedisCentroidStore
from centroid_router.persistence.training_data import load_training_examples


def create_centroid_store(settings: Settings) -> CentroidStore:
    """
    Create the centroid store selected by CENTROID_STORE_BACKEND.
    
    Args:
        settings: Application settings
    
    Returns:
        CentroidStore instance
    """
    if settings.CENTROID_STORE_BACKEND == "redis":
        return RedisCentroidStore(
            RedisClient.get_sync_client(settings),
            key=settings.CENTROIDS_REDIS_KEY,
        )
    return FileCentroidStore(settings.CENTROIDS_PATH)


__all__ = [
    "create_centroid_store",
    "CentroidStore",
    "FileCentroidStore",
    "InMemoryCentroidStore",
    "RedisCentroidStore",
    "RedisClient",
    "CentroidsNotFoundError",
    "PersistenceError",
    "load_training_examples",
]
