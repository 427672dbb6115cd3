"""
Nearest-centroid classification with a confidence floor.

The query is embedded, normalized and scored against every centroid by
dot product. The best label is routed only if its score reaches the
threshold; otherwise the text is reported as "unclassified".
"""

from typing import Any, Optional, Sequence

import structlog

from centroid_router.core.exceptions import CentroidsUnavailableError, InvalidRequestError
from centroid_router.core.vectors import normalize, similarity
from centroid_router.embeddings.base_provider import BaseEmbeddingProvider
from centroid_router.models.output_models import (
    UNCLASSIFIED,
    CentroidTable,
    ClassificationResult,
)


logger = structlog.get_logger(__name__)

DEFAULT_THRESHOLD = 0.4
SCORE_DECIMALS = 3


def require_text(text: Any) -> str:
    """
    Return `text` if it is a non-empty string.
    
    Raises:
        InvalidRequestError: Missing, empty or non-string text
    """
    if not isinstance(text, str) or not text:
        raise InvalidRequestError(details={"received_type": type(text).__name__})
    return text


class Classifier:
    """
    Stateless classifier over an externally supplied centroid table.
    
    The table is only read, so one table can serve any number of
    concurrent classify calls.
    """
    
    def __init__(self, provider: BaseEmbeddingProvider, threshold: float = DEFAULT_THRESHOLD):
        """
        Initialize classifier.
        
        Args:
            provider: Embedding provider used for the query text
            threshold: Minimum best score required to route to a label
        """
        self.provider = provider
        self.threshold = threshold
    
    async def classify(self, text: Any, centroids: Optional[CentroidTable]) -> ClassificationResult:
        """
        Classify `text` against `centroids`.
        
        Args:
            text: Text to classify
            centroids: Label -> unit centroid table
        
        Returns:
            ClassificationResult
        
        Raises:
            InvalidRequestError: Text missing or not a string (no embedding call)
            CentroidsUnavailableError: Table missing or empty (no embedding call)
            EmbeddingProviderError: Embedding failed (propagated as is)
            DimensionMismatchError: Query and centroids differ in dimension
        """
        text = require_text(text)
        if not centroids:
            raise CentroidsUnavailableError()
        
        query_vector = normalize(await self.provider.embed(text))
        result = self.rank(query_vector, centroids)
        
        logger.info(
            "Text classified",
            routed=result.routed,
            best_label=result.best_label,
            best_score=result.best_score,
            threshold=self.threshold,
            text_length=len(text),
        )
        return result
    
    def rank(self, query_vector: Sequence[float], centroids: CentroidTable) -> ClassificationResult:
        """
        Score a normalized query vector against every centroid and decide.
        
        Ties keep the table's iteration order (sorted() is stable).
        """
        if not centroids:
            raise CentroidsUnavailableError()
        
        scores = [
            (label, similarity(query_vector, centroid))
            for label, centroid in centroids.items()
        ]
        ranked = sorted(scores, key=lambda pair: pair[1], reverse=True)
        best_label, best_score = ranked[0]
        
        # Threshold is compared against the unrounded score
        routed = best_label if best_score >= self.threshold else UNCLASSIFIED
        
        return ClassificationResult(
            routed=routed,
            best_label=best_label,
            best_score=round(best_score, SCORE_DECIMALS),
            similarities={label: round(score, SCORE_DECIMALS) for label, score in ranked},
        )
