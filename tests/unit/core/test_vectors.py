"""
Unit tests for vector math helpers.
"""

import math

import pytest

from centroid_router.core.exceptions import DimensionMismatchError
from centroid_router.core.vectors import mean_vector, normalize, similarity


@pytest.mark.parametrize(
    "vector",
    [
        [3.0, 4.0],
        [0.9, 0.1],
        [-2.0, 0.5, 7.0],
        [1e-3, 1e-3, 1e-3, 1e-3],
        [1234.5],
    ],
)
def test_normalize_produces_unit_length(vector):
    """Non-zero vectors come out with Euclidean norm ~1."""
    result = normalize(vector)
    
    assert len(result) == len(vector)
    assert math.sqrt(sum(x * x for x in result)) == pytest.approx(1.0, abs=1e-9)


def test_normalize_known_value():
    """[0.9, 0.1] normalizes to ~[0.994, 0.110]."""
    result = normalize([0.9, 0.1])
    
    assert result[0] == pytest.approx(0.994, abs=1e-3)
    assert result[1] == pytest.approx(0.110, abs=1e-3)


def test_normalize_zero_vector():
    """The zero vector maps to the zero vector without dividing by zero."""
    assert normalize([0.0, 0.0, 0.0]) == [0.0, 0.0, 0.0]


def test_normalize_returns_plain_floats():
    """Results stay JSON-serializable (no numpy scalars)."""
    result = normalize([1, 2, 2])
    
    assert isinstance(result, list)
    assert all(type(x) is float for x in result)


def test_normalize_does_not_mutate_input():
    vector = [3.0, 4.0]
    normalize(vector)
    assert vector == [3.0, 4.0]


def test_similarity_of_unit_vector_with_itself():
    v = normalize([0.3, -0.2, 0.9])
    assert similarity(v, v) == pytest.approx(1.0, abs=1e-9)


def test_similarity_orthogonal_and_opposite():
    assert similarity([1.0, 0.0], [0.0, 1.0]) == 0.0
    assert similarity([1.0, 0.0], [-1.0, 0.0]) == -1.0


def test_similarity_is_plain_dot_product():
    """No implicit normalization."""
    assert similarity([2.0, 3.0], [4.0, 5.0]) == pytest.approx(23.0)


def test_similarity_dimension_mismatch():
    with pytest.raises(DimensionMismatchError) as exc_info:
        similarity([1.0, 0.0, 0.0], [1.0, 0.0])
    
    assert exc_info.value.details == {"expected": 2, "actual": 3}


def test_mean_vector():
    assert mean_vector([[1.0, 0.0], [0.0, 1.0]]) == pytest.approx([0.5, 0.5])
    assert mean_vector([[2.0, 4.0, 6.0]]) == pytest.approx([2.0, 4.0, 6.0])


def test_mean_vector_dimension_mismatch():
    with pytest.raises(DimensionMismatchError):
        mean_vector([[1.0, 0.0], [1.0, 0.0, 0.0]])
