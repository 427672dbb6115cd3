"""
Pydantic data models for Centroid Router.

Includes:
- Input models (TrainingExample)
- Output models (ClassificationResult, BuildSummary, CentroidTable)
- Embedding models (EmbeddingResponse)
"""

from centroid_router.models.input_models import TrainingExample, training_examples_adapter
from centroid_router.models.output_models import (
    UNCLASSIFIED,
    BuildSummary,
    CentroidTable,
    ClassificationResult,
    Vector,
    centroid_table_adapter,
)
from centroid_router.models.embedding_models import EmbeddingResponse

__all__ = [
    # Input models
    "TrainingExample",
    "training_examples_adapter",
    # Output models
    "UNCLASSIFIED",
    "Vector",
    "CentroidTable",
    "centroid_table_adapter",
    "ClassificationResult",
    "BuildSummary",
    # Embedding models
    "EmbeddingResponse",
]
