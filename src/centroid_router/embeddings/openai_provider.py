"""
OpenAI embeddings provider.

POST {base_url}/embeddings with payload:
{
    "model": "text-embedding-3-small",
    "input": ["text one", "text two"],
    "dimensions": 512            # optional
}

Response:
{
    "object": "list",
    "data": [{"object": "embedding", "index": 0, "embedding": [...]}, ...],
    "model": "text-embedding-3-small",
    "usage": {"prompt_tokens": 8, "total_tokens": 8}
}
"""

from typing import Any, Optional

import structlog

from centroid_router.embeddings.exceptions import (
    EmbeddingAuthenticationError,
    EmbeddingResponseError,
)
from centroid_router.embeddings.http_provider import HTTPEmbeddingProvider
from centroid_router.models.embedding_models import EmbeddingResponse


logger = structlog.get_logger(__name__)


class OpenAIEmbeddingProvider(HTTPEmbeddingProvider):
    """
    Embedding provider for the OpenAI (or any OpenAI-compatible) API.
    
    Response items are re-ordered by their `index` field before being
    returned, so vector positions always match input positions.
    """
    
    backend = "openai"
    
    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://api.openai.com/v1",
        model: str = "text-embedding-3-small",
        dimensions: Optional[int] = None,
        **kwargs
    ):
        """
        Initialize OpenAI provider.
        
        Args:
            api_key: OpenAI API key (requests fail without one)
            base_url: API base URL
            model: Embedding model name
            dimensions: Optional output dimension for models that support it
            **kwargs: HTTPEmbeddingProvider options (timeout, max_attempts, ...)
        """
        self.api_key = api_key
        self.dimensions = dimensions
        super().__init__(base_url=base_url, model=model, **kwargs)
    
    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            return {}
        return {"Authorization": f"Bearer {self.api_key}"}
    
    async def _embed_texts(self, texts: list[str]) -> EmbeddingResponse:
        if not self.api_key:
            raise EmbeddingAuthenticationError("OPENAI_API_KEY is not set")
        
        payload: dict[str, Any] = {"model": self.model, "input": texts}
        if self.dimensions is not None:
            payload["dimensions"] = self.dimensions
        
        data, latency_ms = await self._post_json("/embeddings", payload)
        vectors = self._ordered_vectors(data, expected=len(texts))
        usage = data.get("usage") or {}
        
        logger.info(
            "OpenAI embedding successful",
            model=data.get("model", self.model),
            texts=len(texts),
            latency_ms=latency_ms,
            prompt_tokens=usage.get("prompt_tokens"),
        )
        
        return self._embedding_response(
            vectors=vectors,
            model=data.get("model", self.model),
            prompt_tokens=usage.get("prompt_tokens"),
            latency_ms=latency_ms,
        )
    
    @staticmethod
    def _ordered_vectors(data: dict[str, Any], expected: int) -> list[list[float]]:
        """Place every returned embedding at the position given by its index."""
        items = data.get("data")
        if not isinstance(items, list):
            raise EmbeddingResponseError(
                "Embedding response has no 'data' list",
                details={"keys": sorted(data)}
            )
        
        slots: list[Optional[list[float]]] = [None] * expected
        for position, item in enumerate(items):
            if not isinstance(item, dict):
                raise EmbeddingResponseError(
                    f"Embedding item {position} is not an object",
                    details={"position": position}
                )
            index = item.get("index", position)
            embedding = item.get("embedding")
            if not isinstance(index, int) or not 0 <= index < expected:
                raise EmbeddingResponseError(
                    f"Embedding index out of range: {index}",
                    details={"index": index, "expected": expected}
                )
            if slots[index] is not None:
                raise EmbeddingResponseError(
                    f"Duplicate embedding index: {index}",
                    details={"index": index}
                )
            if not isinstance(embedding, list):
                raise EmbeddingResponseError(
                    f"Embedding {index} is not a list of floats",
                    details={"index": index}
                )
            slots[index] = embedding
        
        missing = [i for i, vector in enumerate(slots) if vector is None]
        if missing:
            raise EmbeddingResponseError(
                f"Embedding response is missing {len(missing)} of {expected} vectors",
                details={"missing_indices": missing[:20]}
            )
        return slots  # type: ignore[return-value]
    
    async def health_check(self) -> bool:
        """
        Check the API via GET /models/{model}.
        
        Also fails when no API key is configured.
        """
        if not self.api_key:
            logger.warning("OpenAI health check skipped: OPENAI_API_KEY is not set")
            return False
        return await self._get_ok(f"/models/{self.model}")
