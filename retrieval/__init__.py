"""
Retrieval component: cosine-similarity search over the corpus store.
"""

__version__ = "2.0.0"

from .models import ScoredChunk
from .retriever import HISTORY_TURNS, SemanticRetriever
from .similarity import cosine_scores, cosine_similarity, rank_indices

__all__ = [
    "__version__",
    "SemanticRetriever",
    "ScoredChunk",
    "HISTORY_TURNS",
    "cosine_similarity",
    "cosine_scores",
    "rank_indices",
]
