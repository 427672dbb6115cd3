"""
Embedding provider abstraction and implementations.

Components:
- BaseEmbeddingProvider: Interface used by the routing core (embed_batch / embed)
- HTTPEmbeddingProvider: Shared httpx client, attempt loop and error mapping
- OpenAIEmbeddingProvider: OpenAI /embeddings API
- OllamaEmbeddingProvider: Ollama /api/embed API
- exceptions: Embedding-specific exceptions
"""

from centroid_router.config import Settings
from centroid_router.embeddings.base_provider import BaseEmbeddingProvider
from centroid_router.embeddings.http_provider import HTTPEmbeddingProvider
from centroid_router.embeddings.ollama_provider import OllamaEmbeddingProvider
from centroid_router.embeddings.openai_provider import OpenAIEmbeddingProvider
from centroid_router.embeddings.exceptions import (
    EmbeddingProviderError,
    EmbeddingConnectionError,
    EmbeddingTimeoutError,
    EmbeddingAuthenticationError,
    EmbeddingRateLimitError,
    EmbeddingModelNotAvailableError,
    EmbeddingResponseError,
)


def create_embedding_provider(settings: Settings) -> BaseEmbeddingProvider:
    """
    Create the embedding provider selected by EMBEDDING_BACKEND.
    
    Args:
        settings: Application settings
    
    Returns:
        Configured provider instance
    """
    common = dict(
        timeout=settings.EMBEDDING_TIMEOUT,
        max_attempts=settings.EMBEDDING_MAX_ATTEMPTS,
        batch_size=settings.EMBEDDING_BATCH_SIZE,
    )
    if settings.EMBEDDING_BACKEND == "ollama":
        return OllamaEmbeddingProvider(
            base_url=settings.OLLAMA_BASE_URL,
            model=settings.OLLAMA_EMBEDDING_MODEL,
            **common,
        )
    return OpenAIEmbeddingProvider(
        api_key=settings.OPENAI_API_KEY,
        base_url=settings.OPENAI_BASE_URL,
        model=settings.EMBEDDING_MODEL,
        dimensions=settings.EMBEDDING_DIMENSIONS,
        **common,
    )


__all__ = [
    "create_embedding_provider",
    "BaseEmbeddingProvider",
    "HTTPEmbeddingProvider",
    "OpenAIEmbeddingProvider",
    "OllamaEmbeddingProvider",
    "EmbeddingProviderError",
    "EmbeddingConnectionError",
    "EmbeddingTimeoutError",
    "EmbeddingAuthenticationError",
    "EmbeddingRateLimitError",
    "EmbeddingModelNotAvailableError",
    "EmbeddingResponseError",
]
