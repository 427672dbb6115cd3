"""
Centroid computation from labeled training examples.

Build flow:
1. Embed every example text in one batch call
2. Normalize each embedding
3. Group by label (first-seen order)
4. Mean per group, re-normalized (a mean of unit vectors is shorter than 1)
"""

from typing import Sequence

import structlog

from centroid_router.core.exceptions import EmptyInputError
from centroid_router.core.vectors import mean_vector, normalize
from centroid_router.embeddings.base_provider import BaseEmbeddingProvider
from centroid_router.embeddings.exceptions import EmbeddingResponseError
from centroid_router.models.input_models import TrainingExample
from centroid_router.models.output_models import CentroidTable, Vector


logger = structlog.get_logger(__name__)


def compute_centroids(labels: Sequence[str], vectors: Sequence[Vector]) -> CentroidTable:
    """
    Aggregate normalized vectors into one unit-length centroid per label.
    
    Args:
        labels: Label of each vector, position-aligned with `vectors`
        vectors: Unit-normalized embeddings
    
    Returns:
        CentroidTable with labels in first-seen order
    """
    groups: dict[str, list[Vector]] = {}
    for label, vector in zip(labels, vectors, strict=True):
        groups.setdefault(label, []).append(vector)
    
    return {label: normalize(mean_vector(group)) for label, group in groups.items()}


class CentroidBuilder:
    """
    Builds a complete CentroidTable from a batch of training examples.
    
    The table is always built from scratch; there is no incremental update.
    Writing the result is left to the caller.
    """
    
    def __init__(self, provider: BaseEmbeddingProvider):
        self.provider = provider
    
    async def build(self, examples: Sequence[TrainingExample]) -> CentroidTable:
        """
        Embed the examples and compute one centroid per label.
        
        Args:
            examples: Labeled training examples
        
        Returns:
            CentroidTable (label -> unit vector)
        
        Raises:
            EmptyInputError: No examples given
            EmbeddingResponseError: Provider returned a different number of vectors
            EmbeddingProviderError: Any other embedding failure (propagated as is)
        """
        if not examples:
            raise EmptyInputError()
        
        texts = [example.text for example in examples]
        labels = [example.label for example in examples]
        
        raw_vectors = await self.provider.embed_batch(texts)
        
        # Vectors are matched to labels by position only
        if len(raw_vectors) != len(texts):
            raise EmbeddingResponseError(
                f"Provider returned {len(raw_vectors)} vectors for {len(texts)} texts",
                details={"expected": len(texts), "received": len(raw_vectors)}
            )
        
        vectors = [normalize(vector) for vector in raw_vectors]
        centroids = compute_centroids(labels, vectors)
        
        logger.info(
            "Centroids computed",
            examples=len(examples),
            labels=list(centroids),
            dimension=len(vectors[0]),
        )
        return centroids
