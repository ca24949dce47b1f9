"""Cosine similarity between query and stored embeddings.

A zero-magnitude vector has no direction; it scores 0.0 against anything,
which places it below the default retrieval floor.
"""

from typing import Sequence

import numpy as np


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """Cosine similarity of two vectors, in [-1, 1].

    Raises:
        ValueError: If the vectors have different dimensions.
    """
    a = np.asarray(vec_a, dtype=np.float64)
    b = np.asarray(vec_b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Vector dimensions must match: {a.shape} != {b.shape}")

    magnitude = np.linalg.norm(a) * np.linalg.norm(b)
    if magnitude == 0:
        return 0.0
    return float(np.clip(np.dot(a, b) / magnitude, -1.0, 1.0))


def cosine_similarities(query: Sequence[float], matrix: np.ndarray) -> np.ndarray:
    """Similarity of ``query`` to every row of ``matrix``."""
    q = np.asarray(query, dtype=np.float64)
    if matrix.shape[0] == 0:
        return np.zeros(0, dtype=np.float64)
    if matrix.ndim != 2 or matrix.shape[1] != q.shape[0]:
        raise ValueError(
            f"Query dimension {q.shape[0]} does not match store dimension "
            f"{matrix.shape[-1]}"
        )

    magnitudes = np.linalg.norm(matrix, axis=1) * np.linalg.norm(q)
    dots = matrix @ q
    with np.errstate(divide="ignore", invalid="ignore"):
        similarities = np.where(magnitudes > 0, dots / magnitudes, 0.0)
    return np.clip(similarities, -1.0, 1.0)
