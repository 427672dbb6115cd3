"""
Unit tests for the Ollama embedding provider (httpx.MockTransport, no network).
"""

import json

import httpx
import pytest

from centroid_router.embeddings.exceptions import (
    EmbeddingModelNotAvailableError,
    EmbeddingResponseError,
)
from centroid_router.embeddings.ollama_provider import OllamaEmbeddingProvider


def _make_provider(handler, **kwargs) -> OllamaEmbeddingProvider:
    return OllamaEmbeddingProvider(
        base_url="http://ollama.test:11434",
        model="nomic-embed-text",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_embed_batch():
    seen = {}
    
    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["payload"] = json.loads(request.content)
        return httpx.Response(200, json={
            "model": "nomic-embed-text",
            "embeddings": [[0.1, 0.2], [0.3, 0.4]],
            "prompt_eval_count": 6,
        })
    
    provider = _make_provider(handler)
    vectors = await provider.embed_batch(["one", "two"])
    await provider.close()
    
    assert seen["path"] == "/api/embed"
    assert seen["payload"] == {"model": "nomic-embed-text", "input": ["one", "two"]}
    assert vectors == [[0.1, 0.2], [0.3, 0.4]]


@pytest.mark.asyncio
async def test_missing_embeddings_field():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"model": "nomic-embed-text"})
    
    with pytest.raises(EmbeddingResponseError):
        await _make_provider(handler).embed("one")


@pytest.mark.asyncio
async def test_wrong_vector_count():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"embeddings": [[0.1]]})
    
    with pytest.raises(EmbeddingResponseError):
        await _make_provider(handler).embed_batch(["one", "two"])


@pytest.mark.asyncio
async def test_array_body_rejected():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[[0.1, 0.2]])

    with pytest.raises(EmbeddingResponseError, match="not a JSON object"):
        await _make_provider(handler).embed("one")


@pytest.mark.asyncio
async def test_non_numeric_embeddings_rejected():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"embeddings": [["a", "b"]]})

    with pytest.raises(EmbeddingResponseError):
        await _make_provider(handler).embed("one")


@pytest.mark.asyncio
async def test_unknown_model():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "model 'nomic-embed-text' not found"})
    
    with pytest.raises(EmbeddingModelNotAvailableError):
        await _make_provider(handler).embed("one")


@pytest.mark.asyncio
async def test_health_check():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/tags":
            return httpx.Response(200, json={"models": []})
        return httpx.Response(404)
    
    assert await _make_provider(handler).health_check() is True


@pytest.mark.asyncio
async def test_health_check_unreachable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)
    
    assert await _make_provider(handler).health_check() is False
