import numpy as np


def cosine_similarity(a, b) -> float:
    """dot(a, b) / (|a| * |b|); 0.0 when either vector has zero norm."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Vector dimensions differ: {a.shape} vs {b.shape}")
    denom = np.linalg.norm(a) * np.linalg.norm(b)
    if denom == 0:
        return 0.0
    return float(np.clip(np.dot(a, b) / denom, -1.0, 1.0))


def cosine_scores(matrix: np.ndarray, query) -> np.ndarray:
    """Cosine similarity of every row of matrix against one query vector."""
    query = np.asarray(query, dtype=np.float64)
    if matrix.shape[0] == 0:
        return np.empty(0, dtype=np.float64)
    if matrix.shape[1] != query.shape[0]:
        raise ValueError(
            f"Query has {query.shape[0]} dimensions, store has {matrix.shape[1]}"
        )
    denom = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    dots = matrix @ query
    scores = np.divide(dots, denom, out=np.zeros_like(dots), where=denom != 0)
    return np.clip(scores, -1.0, 1.0)


def rank_indices(scores: np.ndarray) -> list[int]:
    """Indices by descending score; equal scores keep their original order."""
    return [int(i) for i in np.argsort(-scores, kind="stable")]
