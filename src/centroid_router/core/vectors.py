"""
Vector math for centroid routing.

Vectors cross module boundaries as plain lists of floats so that centroid
tables stay JSON-serializable; numpy is used for the arithmetic only.
"""

from typing import Sequence

import numpy as np

from centroid_router.core.exceptions import DimensionMismatchError
from centroid_router.models.output_models import Vector


# Guards the division for the all-zero vector
NORM_EPSILON = 1e-12


def normalize(vector: Sequence[float]) -> Vector:
    """
    Scale a vector to unit Euclidean length.
    
    Computes v / (||v|| + 1e-12). The zero vector maps to the zero vector.
    """
    arr = np.asarray(vector, dtype=np.float64)
    return (arr / (np.linalg.norm(arr) + NORM_EPSILON)).tolist()


def similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Dot product of two vectors.
    
    Equals the cosine similarity when both inputs are unit-normalized,
    which is the caller's responsibility.
    
    Raises:
        DimensionMismatchError: Vectors have different lengths
    """
    if len(a) != len(b):
        raise DimensionMismatchError(expected=len(b), actual=len(a))
    return float(np.dot(np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64)))


def mean_vector(vectors: Sequence[Sequence[float]]) -> Vector:
    """
    Component-wise arithmetic mean of a non-empty group of vectors.
    
    Raises:
        DimensionMismatchError: Vectors in the group have different lengths
    """
    dim = len(vectors[0])
    for vector in vectors[1:]:
        if len(vector) != dim:
            raise DimensionMismatchError(expected=dim, actual=len(vector))
    return np.mean(np.asarray(vectors, dtype=np.float64), axis=0).tolist()
