"""
Distance metrics for embedding vectors.
"""

import numpy as np


def normalize(vector) -> np.ndarray:
    """Return a float32 unit vector; zero vectors are returned unchanged."""
    array = np.asarray(vector, dtype=np.float32)
    norm = np.linalg.norm(array)
    if norm == 0:
        return array
    return array / norm


def cosine(a, b) -> float:
    """Cosine distance between two equal-length vectors.

    Returns ``1 - cos(a, b)``, in the range [0, 2]. A zero vector has no
    direction, so its similarity with anything is taken as 0 (distance 1).

    Raises:
        ValueError: if the vectors do not have the same dimension.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Vector dimension {a.shape} does not match {b.shape}")

    denom = np.linalg.norm(a) * np.linalg.norm(b)
    if denom == 0:
        return 1.0
    return float(1.0 - np.dot(a, b) / denom)


def cosine_many(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Cosine distance between one normalized query and each normalized row of ``matrix``."""
    if matrix.shape[1] != query.shape[0]:
        raise ValueError(
            f"Vector dimension {query.shape[0]} does not match expected dimension {matrix.shape[1]}"
        )
    return 1.0 - matrix @ query
