"""Similarity and distance metrics over equal-length vectors."""

import math
from typing import Sequence


class DimensionMismatchError(ValueError):
    """Two vectors that must be compared have different lengths."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Vectors must have the same dimensions (expected {expected}, got {actual})"
        )


def check_dimensions(a: Sequence[float], b: Sequence[float]) -> None:
    """Raise DimensionMismatchError unless ``a`` and ``b`` have the same length."""
    if len(a) != len(b):
        raise DimensionMismatchError(expected=len(a), actual=len(b))


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute cosine similarity between two vectors.

    Returns a value in [-1, 1]. If either vector has zero magnitude the
    similarity is defined as 0.0.

    Raises:
        DimensionMismatchError: If the vectors differ in length.
    """
    check_dimensions(a, b)
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)


def euclidean_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute the straight-line distance between two vectors.

    Raises:
        DimensionMismatchError: If the vectors differ in length.
    """
    check_dimensions(a, b)
    return math.sqrt(sum((x - y) ** 2 for x, y in zip(a, b)))
