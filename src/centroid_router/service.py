"""
Routing service: the build and classify entry points.

Wires an embedding provider and a centroid store to the core builder and
classifier. Both transports (HTTP and CLI) and the Celery rebuild task go
through this class.
"""

import asyncio
import time
from typing import Any, Optional, Sequence

import structlog

from centroid_router.config import Settings
from centroid_router.core.builder import CentroidBuilder
from centroid_router.core.classifier import DEFAULT_THRESHOLD, Classifier, require_text
from centroid_router.core.exceptions import CentroidsUnavailableError
from centroid_router.embeddings import create_embedding_provider
from centroid_router.embeddings.base_provider import BaseEmbeddingProvider
from centroid_router.models.input_models import TrainingExample
from centroid_router.models.output_models import BuildSummary, CentroidTable, ClassificationResult
from centroid_router.monitoring.metrics import (
    best_score_histogram,
    centroid_builds_total,
    centroid_labels,
    classifications_total,
    routed_label_total,
)
from centroid_router.persistence import create_centroid_store
from centroid_router.persistence.base_store import CentroidStore
from centroid_router.persistence.exceptions import CentroidsNotFoundError


logger = structlog.get_logger(__name__)


class RoutingService:
    """
    Build and classify against a persisted centroid table.
    
    With cache_centroids=False (default) the table is loaded from the store
    on every classify call, so a rebuild by another process is picked up
    immediately. With cache_centroids=True the first loaded table is reused
    until this service builds a new one or invalidate() is called.
    """
    
    def __init__(
        self,
        provider: BaseEmbeddingProvider,
        store: CentroidStore,
        threshold: float = DEFAULT_THRESHOLD,
        cache_centroids: bool = False,
    ):
        """
        Initialize service.
        
        Args:
            provider: Embedding provider for both phases
            store: Centroid table store
            threshold: Minimum best score to route to a label
            cache_centroids: Reuse the loaded table across classify calls
        """
        self.provider = provider
        self.store = store
        self.builder = CentroidBuilder(provider)
        self.classifier = Classifier(provider, threshold=threshold)
        self.cache_centroids = cache_centroids
        self._cached: Optional[CentroidTable] = None
    
    @classmethod
    def from_settings(cls, settings: Settings) -> "RoutingService":
        """Create a service with the provider and store selected by settings."""
        return cls(
            provider=create_embedding_provider(settings),
            store=create_centroid_store(settings),
            threshold=settings.CLASSIFICATION_THRESHOLD,
            cache_centroids=settings.CACHE_CENTROIDS,
        )
    
    @property
    def threshold(self) -> float:
        return self.classifier.threshold
    
    async def build(self, examples: Sequence[TrainingExample]) -> CentroidTable:
        """
        Build a new table from `examples` and replace the stored one.
        
        Raises:
            EmptyInputError: No examples
            EmbeddingProviderError: Embedding failed
            PersistenceError: Table could not be written
        """
        try:
            table = await self.builder.build(examples)
            await asyncio.to_thread(self.store.save, table)
        except Exception as exc:
            centroid_builds_total.labels(status="failure").inc()
            logger.error(
                "Centroid build failed",
                error_type=type(exc).__name__,
                error=str(exc),
                examples=len(examples),
            )
            raise
        
        if self.cache_centroids:
            self._cached = table
        
        centroid_builds_total.labels(status="success").inc()
        centroid_labels.set(len(table))
        logger.info("Centroid table replaced", labels=list(table), store=repr(self.store))
        return table
    
    async def build_with_summary(self, examples: Sequence[TrainingExample]) -> BuildSummary:
        """Build and describe the result (used by the CLI and the rebuild task)."""
        start_time = time.time()
        table = await self.build(examples)
        return BuildSummary(
            labels=list(table),
            example_count=len(examples),
            dimension=len(next(iter(table.values()))),
            duration_ms=int((time.time() - start_time) * 1000),
        )
    
    def load_centroids(self) -> CentroidTable:
        """
        Return the current table (cached or freshly loaded).
        
        Raises:
            CentroidsUnavailableError: No table stored yet, or the stored one is empty
            PersistenceError: Table could not be read
        """
        if self.cache_centroids and self._cached is not None:
            return self._cached
        
        try:
            table = self.store.load()
        except CentroidsNotFoundError as exc:
            logger.warning("Centroids unavailable", store=repr(self.store), error=str(exc))
            raise CentroidsUnavailableError() from exc
        
        if not table:
            raise CentroidsUnavailableError()
        
        if self.cache_centroids:
            self._cached = table
        return table
    
    def invalidate(self) -> None:
        """Drop the cached table so the next classify reloads it."""
        self._cached = None
    
    async def classify(self, text: Any) -> ClassificationResult:
        """
        Classify `text` against the stored table.
        
        Raises:
            InvalidRequestError: Text missing or not a string
            CentroidsUnavailableError: No table built yet
            EmbeddingProviderError: Embedding failed
        """
        text = require_text(text)
        centroids = await asyncio.to_thread(self.load_centroids)
        result = await self.classifier.classify(text, centroids)
        
        classifications_total.labels(
            outcome="unclassified" if result.is_unclassified else "routed"
        ).inc()
        routed_label_total.labels(label=result.routed).inc()
        best_score_histogram.observe(result.best_score)
        return result
    
    def labels(self) -> list[str]:
        """Labels of the current table, in stored order."""
        return list(self.load_centroids())
    
    async def close(self) -> None:
        await self.provider.close()
