"""
Abstract base class for embedding providers.

Defines the interface the routing core depends on: batch embedding for the
build phase and single-text embedding for the classify phase. Tests swap in
a deterministic provider without touching the core.
"""

from abc import ABC, abstractmethod
from typing import Sequence

import structlog

from centroid_router.embeddings.exceptions import EmbeddingResponseError
from centroid_router.models.embedding_models import EmbeddingResponse
from centroid_router.models.output_models import Vector
from centroid_router.monitoring.metrics import embedding_tokens_total


logger = structlog.get_logger(__name__)


class BaseEmbeddingProvider(ABC):
    """
    Abstract base class for embedding providers.
    
    Responsibilities:
    - Turn texts into fixed-dimension vectors
    - Return exactly one vector per text, in input order
    - Split large batches into provider-sized requests
    
    Does NOT handle:
    - Normalization (the core normalizes every vector it receives)
    - Retries beyond what a concrete provider opts into
    """
    
    backend: str = "base"
    
    def __init__(self, model: str, batch_size: int = 512):
        """
        Initialize base provider.
        
        Args:
            model: Embedding model identifier
            batch_size: Maximum number of texts sent in one provider request
        """
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self.model = model
        self.batch_size = batch_size
    
    @abstractmethod
    async def _embed_texts(self, texts: list[str]) -> EmbeddingResponse:
        """
        Embed one provider-sized chunk of texts.
        
        Implementations must return vectors in the same order as `texts`.
        
        Raises:
            EmbeddingProviderError subclass on any failure
        """
        pass
    
    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check whether the provider is reachable.
        
        Returns:
            True if healthy, False otherwise. Must not raise.
        """
        pass
    
    async def embed_batch(self, texts: Sequence[str]) -> list[Vector]:
        """
        Embed many texts, preserving order.
        
        Texts are sent in chunks of `batch_size`; the concatenated result has
        exactly one vector per input text at the same position.
        
        Raises:
            EmbeddingResponseError: A chunk came back with the wrong vector count
            EmbeddingProviderError: Any provider failure
        """
        texts = list(texts)
        vectors: list[Vector] = []
        
        for start in range(0, len(texts), self.batch_size):
            chunk = texts[start:start + self.batch_size]
            response = await self._embed_texts(chunk)
            
            if len(response.vectors) != len(chunk):
                raise EmbeddingResponseError(
                    f"Provider returned {len(response.vectors)} vectors for {len(chunk)} texts",
                    details={"expected": len(chunk), "received": len(response.vectors)}
                )
            
            if response.prompt_tokens:
                embedding_tokens_total.labels(model=response.model).inc(response.prompt_tokens)
            
            logger.debug(
                "Embedded chunk",
                backend=self.backend,
                model=response.model,
                chunk_start=start,
                chunk_size=len(chunk),
                latency_ms=response.latency_ms,
            )
            vectors.extend(response.vectors)
        
        return vectors
    
    async def embed(self, text: str) -> Vector:
        """Embed a single text."""
        [vector] = await self.embed_batch([text])
        return vector
    
    async def close(self):
        """
        Close provider connections and cleanup resources.
        
        Default implementation does nothing.
        """
        pass
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
    
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model={self.model}, batch_size={self.batch_size})"
