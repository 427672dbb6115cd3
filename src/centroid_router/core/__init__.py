"""
Centroid routing core.

- vectors.py: normalize / similarity / mean_vector
- builder.py: CentroidBuilder (examples -> CentroidTable)
- classifier.py: Classifier (text + CentroidTable -> ClassificationResult)
- exceptions.py: Error taxonomy shared by build and classify
"""

from centroid_router.core.builder import CentroidBuilder, compute_centroids
from centroid_router.core.classifier import DEFAULT_THRESHOLD, Classifier, require_text
from centroid_router.core.exceptions import (
    CentroidsUnavailableError,
    DimensionMismatchError,
    EmptyInputError,
    InvalidRequestError,
    InvalidTrainingDataError,
    RouterError,
)
from centroid_router.core.vectors import mean_vector, normalize, similarity

__all__ = [
    "normalize",
    "similarity",
    "mean_vector",
    "CentroidBuilder",
    "compute_centroids",
    "Classifier",
    "DEFAULT_THRESHOLD",
    "require_text",
    "RouterError",
    "EmptyInputError",
    "CentroidsUnavailableError",
    "InvalidRequestError",
    "DimensionMismatchError",
    "InvalidTrainingDataError",
]
