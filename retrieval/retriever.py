"""
Semantic Retriever - cosine ranking over the in-memory corpus

Given a user query and the recent conversation, the retriever:
1. Folds the last few turns and the query into one combined query string
2. Embeds it once with the "query" intent
3. Scores every stored chunk by cosine similarity
4. Sorts by descending score, ties kept in store order
5. Returns the text of the top-K chunks

The store is never mutated; the only side effect is the embedding call.

Usage:
    from retrieval import SemanticRetriever

    retriever = SemanticRetriever(store, embedder)
    texts = await retriever.retrieve("How do I act without attachment?", history, top_k=3)
"""

import logging
from typing import Optional, Sequence

from common.logging_config import get_logger
from sessions.models import Turn
from vector_store.embedder import EmbeddingIntent, OllamaEmbedder
from vector_store.store import CorpusStore

from .models import ScoredChunk
from .similarity import cosine_scores, rank_indices

logger = get_logger(__name__)

HISTORY_TURNS = 4


class SemanticRetriever:
    """
    Ranks corpus chunks against a history-enriched query.

    The store is handed in by reference after startup loading; the retriever
    only reads it.
    """

    def __init__(
        self,
        store: CorpusStore,
        embedder: OllamaEmbedder,
        history_turns: int = HISTORY_TURNS,
        log: Optional[logging.Logger] = None,
    ):
        """
        Initialize the retriever.

        Args:
            store: The loaded corpus to search.
            embedder: Embedding service adapter (query intent is used).
            history_turns: How many trailing turns enrich the query.
            log: Optional logger.
        """
        self.store = store
        self.embedder = embedder
        self.history_turns = history_turns
        self._log = log or logger

    def build_query(self, query: str, history: Sequence[Turn]) -> str:
        """Join the texts of the last history turns and the query, newline-separated."""
        recent = list(history)[-self.history_turns:] if self.history_turns > 0 else []
        parts = [turn.text for turn in recent if turn.text]
        parts.append(query)
        return "\n".join(parts)

    async def score(self, query: str, history: Sequence[Turn] = ()) -> list[ScoredChunk]:
        """
        Score and rank every chunk in the store.

        Returns:
            All chunks as ScoredChunk, best first. Empty if the store is empty
            (no embedding call is made in that case).
        """
        if self.store.is_empty:
            self._log.warning("Corpus is empty; returning no context")
            return []

        combined = self.build_query(query, history)
        query_embedding = await self.embedder.embed(combined, EmbeddingIntent.QUERY)

        scores = cosine_scores(self.store.embedding_matrix, query_embedding)
        chunks = self.store.chunks
        return [
            ScoredChunk(chunk=chunks[idx], score=float(scores[idx]), rank=rank)
            for rank, idx in enumerate(rank_indices(scores), 1)
        ]

    async def retrieve(
        self,
        query: str,
        history: Sequence[Turn] = (),
        top_k: int = 3,
    ) -> list[str]:
        """
        Return the texts of the top_k most similar chunks.

        Args:
            query: The user's current message.
            history: Prior turns of the session, oldest first.
            top_k: Maximum number of chunks to return (must be positive).

        Returns:
            Chunk texts ordered by non-increasing similarity.
        """
        if self.store.is_empty:
            return []
        if top_k <= 0:
            raise ValueError(f"top_k must be positive, got {top_k}")

        ranked = await self.score(query, history)
        top = ranked[:top_k]
        if top:
            self._log.debug(
                "Retrieved %d chunks (best score %.4f)", len(top), top[0].score
            )
        return [item.text for item in top]
