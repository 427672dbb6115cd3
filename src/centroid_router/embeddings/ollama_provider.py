"""
Ollama embeddings provider.

POST /api/embed with payload:
{
    "model": "nomic-embed-text",
    "input": ["text one", "text two"]
}

Response:
{
    "model": "nomic-embed-text",
    "embeddings": [[...], [...]],
    "total_duration": 14143917,
    "prompt_eval_count": 8
}
"""

from typing import Any

import structlog

from centroid_router.embeddings.exceptions import EmbeddingResponseError
from centroid_router.embeddings.http_provider import HTTPEmbeddingProvider
from centroid_router.models.embedding_models import EmbeddingResponse


logger = structlog.get_logger(__name__)


class OllamaEmbeddingProvider(HTTPEmbeddingProvider):
    """
    Embedding provider for a self-hosted Ollama server.
    
    Ollama returns embeddings in input order without explicit indices.
    """
    
    backend = "ollama"
    
    def __init__(
        self,
        base_url: str = "http://ollama:11434",
        model: str = "nomic-embed-text",
        **kwargs
    ):
        super().__init__(base_url=base_url, model=model, **kwargs)
    
    async def _embed_texts(self, texts: list[str]) -> EmbeddingResponse:
        payload: dict[str, Any] = {"model": self.model, "input": texts}
        data, latency_ms = await self._post_json("/api/embed", payload)
        
        embeddings = data.get("embeddings")
        if not isinstance(embeddings, list):
            raise EmbeddingResponseError(
                "Ollama response has no 'embeddings' list",
                details={"keys": sorted(data)}
            )
        
        logger.info(
            "Ollama embedding successful",
            model=data.get("model", self.model),
            texts=len(texts),
            latency_ms=latency_ms,
        )
        
        return self._embedding_response(
            vectors=embeddings,
            model=data.get("model", self.model),
            prompt_tokens=data.get("prompt_eval_count"),
            latency_ms=latency_ms,
        )
    
    async def health_check(self) -> bool:
        """Check Ollama server health via GET /api/tags."""
        return await self._get_ok("/api/tags")
