"""
FastAPI dependency injection for Centroid Router.

Provides singleton instances of expensive resources (embedding provider
with its connection pool, centroid store, routing service).
"""

from functools import lru_cache

from centroid_router.config import Settings, settings
from centroid_router.embeddings import create_embedding_provider
from centroid_router.embeddings.base_provider import BaseEmbeddingProvider
from centroid_router.persistence import create_centroid_store
from centroid_router.persistence.base_store import CentroidStore
from centroid_router.service import RoutingService


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.
    
    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_embedding_provider() -> BaseEmbeddingProvider:
    """
    Get singleton embedding provider with connection pooling.
    
    Returns:
        Provider selected by EMBEDDING_BACKEND
    """
    return create_embedding_provider(get_settings())


@lru_cache()
def get_centroid_store() -> CentroidStore:
    """
    Get singleton centroid store.
    
    Returns:
        Store selected by CENTROID_STORE_BACKEND
    """
    return create_centroid_store(get_settings())


@lru_cache()
def get_routing_service() -> RoutingService:
    """
    Get singleton routing service.
    
    Cached so that CACHE_CENTROIDS keeps its table across requests. All
    request state lives in the call stack; the service only holds the
    read-only table.
    
    Returns:
        RoutingService instance
    """
    current = get_settings()
    return RoutingService(
        provider=get_embedding_provider(),
        store=get_centroid_store(),
        threshold=current.CLASSIFICATION_THRESHOLD,
        cache_centroids=current.CACHE_CENTROIDS,
    )
