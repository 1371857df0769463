"""
Ollama Embedder - Asynchronous embedding generation via the Ollama API

Wraps ollama.AsyncClient to turn text into dense vectors.

Design:
- Documents and queries are embedded asymmetrically. nomic-embed-text expects
  a task prefix ("search_document: " / "search_query: "), so every call is
  tagged with an EmbeddingIntent and the matching prefix is prepended.
- Batch embedding returns exactly one vector per input, in input order.
- Failures surface as EmbeddingError; the caller decides whether that is
  fatal (offline build, startup) or per-request.

Usage:
    from vector_store.embedder import EmbeddingIntent, OllamaEmbedder

    embedder = OllamaEmbedder(model="nomic-embed-text")
    vector = await embedder.embed("What is duty?", EmbeddingIntent.QUERY)
    vectors = await embedder.embed_batch(["Text 1", "Text 2"])
"""

from enum import Enum
from typing import Optional

import ollama

from common.exceptions import EmbeddingError
from common.logging_config import get_logger

logger = get_logger(__name__)


class EmbeddingIntent(str, Enum):
    DOCUMENT = "document"
    QUERY = "query"


TASK_PREFIXES = {
    EmbeddingIntent.DOCUMENT: "search_document: ",
    EmbeddingIntent.QUERY: "search_query: ",
}


class OllamaEmbedder:
    """
    Generates text embeddings using a local Ollama model.

    The embedder connects to a running Ollama instance and uses a specified
    embedding model to convert text into dense vector representations.
    """

    def __init__(
        self,
        model: str = "nomic-embed-text",
        base_url: str = "http://localhost:11434",
        task_prefixes: Optional[dict[EmbeddingIntent, str]] = None,
    ):
        """
        Initialize the embedder.

        Args:
            model: Ollama model name for embeddings.
            base_url: Ollama API base URL.
            task_prefixes: Intent prefixes; defaults to the nomic-embed-text ones.
        """
        self.model = model
        self.base_url = base_url
        self.task_prefixes = dict(TASK_PREFIXES if task_prefixes is None else task_prefixes)
        self._client = ollama.AsyncClient(host=base_url)
        self._dimensions: Optional[int] = None

    @property
    def dimensions(self) -> Optional[int]:
        """Return the embedding dimensions (available after first embed call)."""
        return self._dimensions

    def _tag(self, text: str, intent: EmbeddingIntent) -> str:
        return f"{self.task_prefixes.get(EmbeddingIntent(intent), '')}{text}"

    async def embed(
        self,
        text: str,
        intent: EmbeddingIntent = EmbeddingIntent.QUERY,
    ) -> list[float]:
        """
        Generate an embedding for a single text.

        Args:
            text: The text to embed.
            intent: Whether the text is a query or a corpus document.

        Returns:
            List of floats representing the embedding vector.

        Raises:
            ValueError: If text is empty.
            EmbeddingError: If Ollama is unreachable or the call fails.
        """
        if not text or not text.strip():
            raise ValueError("Cannot embed empty text")

        vectors = await self._request([self._tag(text, intent)])
        return vectors[0]

    async def embed_batch(
        self,
        texts: list[str],
        intent: EmbeddingIntent = EmbeddingIntent.DOCUMENT,
    ) -> list[list[float]]:
        """
        Generate embeddings for multiple texts in one request.

        Args:
            texts: Non-empty texts to embed.
            intent: Whether the texts are queries or corpus documents.

        Returns:
            List of embedding vectors; vector i belongs to texts[i].

        Raises:
            ValueError: If any text is empty.
            EmbeddingError: If the call fails or returns a wrong vector count.
        """
        if not texts:
            return []
        if any(not t or not t.strip() for t in texts):
            raise ValueError("Cannot embed empty text in batch")

        return await self._request([self._tag(t, intent) for t in texts])

    async def _request(self, inputs: list[str]) -> list[list[float]]:
        logger.debug("Embedding %d input(s) with %s", len(inputs), self.model)
        try:
            response = await self._client.embed(model=self.model, input=inputs)
        except ollama.ResponseError as e:
            raise EmbeddingError(
                f"Ollama embedding failed for model '{self.model}'", e
            ) from e
        except Exception as e:
            if "Connect" in type(e).__name__ or "refused" in str(e).lower():
                raise EmbeddingError(
                    f"Cannot connect to Ollama at {self.base_url}. "
                    f"Is Ollama running? Start it with: ollama serve",
                    e,
                ) from e
            raise EmbeddingError("Embedding generation failed", e) from e

        embeddings = [list(vector) for vector in response["embeddings"]]
        if len(embeddings) != len(inputs):
            raise EmbeddingError(
                f"Expected {len(inputs)} embeddings, got {len(embeddings)}"
            )
        if embeddings:
            self._dimensions = len(embeddings[0])
        return embeddings
