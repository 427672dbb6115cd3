"""Shared test fixtures and configuration for all tests.

Provides a deterministic embedding provider so the routing core can be
tested without network access.
"""

import json
from pathlib import Path
from typing import Optional

import pytest

from centroid_router.config import Settings
from centroid_router.embeddings.base_provider import BaseEmbeddingProvider
from centroid_router.models.embedding_models import EmbeddingResponse
from centroid_router.models.input_models import TrainingExample
from centroid_router.persistence.memory_store import InMemoryCentroidStore
from centroid_router.service import RoutingService


# Embeddings for the texts in fixtures/emails.json plus a few queries.
# Axes: billing, support, sales.
FIXTURE_VECTORS: dict[str, list[float]] = {
    "I was charged twice for my subscription": [1.0, 0.0, 0.0],
    "Please refund the last invoice": [0.9, 0.1, 0.0],
    "The app crashes when I log in": [0.0, 1.0, 0.0],
    "I cannot reset my password": [0.0, 0.8, 0.2],
    "What does the enterprise plan cost?": [0.0, 0.0, 1.0],
    # Queries
    "My card was billed two times": [0.95, 0.05, 0.0],
    "Login page shows an error": [0.1, 0.9, 0.0],
    "Totally unrelated": [-1.0, -1.0, -1.0],
}


class FakeEmbeddingProvider(BaseEmbeddingProvider):
    """Provider returning fixed vectors per text.

    Records every request so tests can assert on call counts and order.
    Set `error` to make every request fail with that exception.
    """

    backend = "fake"

    def __init__(
        self,
        vectors: Optional[dict[str, list[float]]] = None,
        default: Optional[list[float]] = None,
        batch_size: int = 512,
        healthy: bool = True,
    ):
        super().__init__(model="fake-embedding", batch_size=batch_size)
        self.vectors = dict(FIXTURE_VECTORS if vectors is None else vectors)
        self.default = default
        self.healthy = healthy
        self.error: Optional[Exception] = None
        self.calls: list[list[str]] = []
        self.closed = False

    async def _embed_texts(self, texts: list[str]) -> EmbeddingResponse:
        self.calls.append(list(texts))
        if self.error is not None:
            raise self.error
        return EmbeddingResponse(
            vectors=[self._lookup(text) for text in texts],
            model=self.model,
            prompt_tokens=len(texts),
        )

    def _lookup(self, text: str) -> list[float]:
        if text in self.vectors:
            return list(self.vectors[text])
        if self.default is not None:
            return list(self.default)
        raise KeyError(f"No fake embedding for {text!r}")

    async def health_check(self) -> bool:
        return self.healthy

    async def close(self):
        self.closed = True


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Test settings with safe defaults for local testing.

    Files live under tmp_path; no external services are contacted.
    """
    return Settings(
        APP_NAME="Centroid Router (Test)",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        EMBEDDING_BACKEND="openai",
        OPENAI_API_KEY="sk-test",
        OPENAI_BASE_URL="https://api.test/v1",
        CLASSIFICATION_THRESHOLD=0.4,
        CACHE_CENTROIDS=False,
        CENTROID_STORE_BACKEND="file",
        CENTROIDS_PATH=str(tmp_path / "centroids.json"),
        TRAINING_DATA_PATH=str(tmp_path / "emails.json"),
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def training_file(fixtures_dir: Path) -> Path:
    """Path to the sample training file."""
    return fixtures_dir / "emails.json"


@pytest.fixture
def sample_examples(training_file: Path) -> list[TrainingExample]:
    """Parsed training examples from the sample file."""
    with open(training_file) as f:
        return [TrainingExample(**record) for record in json.load(f)]


@pytest.fixture
def provider_factory():
    """The fake provider class, for tests that need custom vectors."""
    return FakeEmbeddingProvider


@pytest.fixture
def fake_provider() -> FakeEmbeddingProvider:
    """Fake provider over FIXTURE_VECTORS."""
    return FakeEmbeddingProvider()


@pytest.fixture
def two_axis_table() -> dict[str, list[float]]:
    """Centroids {A: [1, 0], B: [0, 1]}."""
    return {"A": [1.0, 0.0], "B": [0.0, 1.0]}


@pytest.fixture
def memory_store() -> InMemoryCentroidStore:
    """Empty in-memory centroid store."""
    return InMemoryCentroidStore()


@pytest.fixture
def routing_service(fake_provider, memory_store) -> RoutingService:
    """Service over the fake provider and an empty in-memory store."""
    return RoutingService(fake_provider, memory_store, threshold=0.4)
