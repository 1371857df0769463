"""
Corpus Store - the immutable in-memory vector store

Holds the ordered (text, embedding) chunks of the single source document:
- Build: segment, sanitize, drop empties, embed in sequential batches
- Load/Save: a JSON list of {"text": ..., "embedding": [...]} records
- Read: chunk sequence plus a numpy matrix for similarity scoring

Design:
- Built once offline or loaded once at startup, read-only afterwards
- An empty or malformed corpus is fatal, never a degraded state
- Embedding batches run strictly one after another; the i-th vector of a
  batch belongs to the i-th chunk of that batch

Usage:
    from vector_store import CorpusStore, OllamaEmbedder

    store = await CorpusStore.build(raw_text, OllamaEmbedder())
    store.save("data/embeddings.json")

    store = CorpusStore.load("data/embeddings.json")
"""

import json
import logging
import time
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

import numpy as np
from pydantic import ValidationError

from chunking import sanitize, segment
from common.exceptions import CorpusFormatError, EmbeddingError, EmptyCorpusError
from common.logging_config import get_logger

from .embedder import EmbeddingIntent, OllamaEmbedder
from .models import BuildStats, Chunk, StoreConfig

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int, str], None]


def _clean_segments(segments: Sequence[str]) -> list[str]:
    sanitized = (sanitize(part) for part in segments)
    return [text for text in sanitized if text]


def prepare_chunks(raw_text: str, chunk_size: int = 1500) -> list[str]:
    """Segment raw text, sanitize each segment and drop the empty ones."""
    return _clean_segments(segment(raw_text, chunk_size))


class CorpusStore:
    """
    Ordered, immutable collection of embedded chunks.

    All chunks share one embedding dimensionality; the constructor rejects
    mixed dimensions. An empty store can be constructed (the retriever treats
    it as "nothing to search"), but build() and load() never produce one.
    """

    def __init__(self, chunks: Sequence[Chunk]):
        self._chunks: tuple[Chunk, ...] = tuple(chunks)
        self.build_stats: Optional[BuildStats] = None

        dimensions = {len(chunk.embedding) for chunk in self._chunks}
        if len(dimensions) > 1:
            raise CorpusFormatError(
                "Inconsistent embedding dimensions",
                details=f"found {sorted(dimensions)}",
            )
        if self._chunks:
            self._matrix = np.asarray(
                [chunk.embedding for chunk in self._chunks], dtype=np.float64
            )
        else:
            self._matrix = np.empty((0, 0), dtype=np.float64)
        self._matrix.setflags(write=False)

    def __len__(self) -> int:
        return len(self._chunks)

    @property
    def chunks(self) -> tuple[Chunk, ...]:
        return self._chunks

    @property
    def is_empty(self) -> bool:
        return not self._chunks

    @property
    def dimensions(self) -> int:
        return self._matrix.shape[1] if self._chunks else 0

    @property
    def embedding_matrix(self) -> np.ndarray:
        """Read-only (n_chunks, dimensions) matrix; row i is chunk i."""
        return self._matrix

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    @classmethod
    async def build(
        cls,
        raw_text: str,
        embedder: OllamaEmbedder,
        config: Optional[StoreConfig] = None,
        progress_callback: Optional[ProgressCallback] = None,
        log: Optional[logging.Logger] = None,
    ) -> "CorpusStore":
        """
        Chunk and embed a document's text.

        Args:
            raw_text: Text extracted from the source document.
            embedder: Embedding service adapter.
            config: Chunk and batch sizes. Uses defaults if not provided.
            progress_callback: Optional callback(current, total, status).
            log: Optional logger for progress messages.

        Returns:
            A non-empty CorpusStore with build_stats set.

        Raises:
            EmptyCorpusError: If no chunk survives sanitization. Raised
                before any embedding request is made.
            EmbeddingError: If any embedding request fails.
        """
        config = config or StoreConfig()
        log = log or logger
        total_start = time.time()

        raw_segments = segment(raw_text, config.chunk_size)
        texts = _clean_segments(raw_segments)
        log.info(
            "Document processed. %d valid chunks found. Creating embeddings in batches...",
            len(texts),
        )
        if not texts:
            raise EmptyCorpusError(
                "Document processing resulted in no valid text chunks after sanitization",
                details=f"{len(raw_segments)} raw segments",
            )

        total_batches = (len(texts) + config.batch_size - 1) // config.batch_size
        embeddings: list[list[float]] = []
        embed_time = 0.0

        for batch_number, start in enumerate(range(0, len(texts), config.batch_size), 1):
            batch = texts[start:start + config.batch_size]
            log.info("Processing batch %d/%d...", batch_number, total_batches)
            if progress_callback:
                progress_callback(start, len(texts), f"Embedding batch {batch_number}/{total_batches}")

            embed_start = time.time()
            vectors = await embedder.embed_batch(batch, EmbeddingIntent.DOCUMENT)
            embed_time += time.time() - embed_start

            if len(vectors) != len(batch):
                raise EmbeddingError(
                    f"Batch {batch_number} returned {len(vectors)} embeddings "
                    f"for {len(batch)} chunks"
                )
            embeddings.extend(vectors)

        try:
            chunks = [
                Chunk(text=text, embedding=vector)
                for text, vector in zip(texts, embeddings)
            ]
        except ValidationError as e:
            raise EmbeddingError("Embedding service returned an unusable vector", e) from e
        store = cls(chunks)
        store.build_stats = BuildStats(
            raw_segments=len(raw_segments),
            chunks_stored=len(chunks),
            batches=total_batches,
            dimensions=store.dimensions,
            embedding_time_seconds=round(embed_time, 2),
            total_time_seconds=round(time.time() - total_start, 2),
        )

        if progress_callback:
            progress_callback(len(chunks), len(chunks), "Done")
        log.info("Embeddings created successfully. %d chunks ready.", len(chunks))
        return store

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    @classmethod
    def from_records(cls, records: Any, source: Optional[str] = None) -> "CorpusStore":
        """
        Build a store from deserialized {text, embedding} records.

        Raises:
            CorpusFormatError: If the payload is not a list of valid records.
            EmptyCorpusError: If the list is empty.
        """
        if not isinstance(records, list):
            raise CorpusFormatError(
                "Embeddings file must contain a list of records",
                path=source,
                details=f"got {type(records).__name__}",
            )
        if not records:
            raise EmptyCorpusError("Embeddings file is empty", details=source)

        chunks = []
        for index, record in enumerate(records):
            try:
                chunks.append(Chunk.model_validate(record))
            except ValidationError as e:
                raise CorpusFormatError(
                    f"Malformed record at index {index}",
                    path=source,
                    details=str(e),
                ) from e
        return cls(chunks)

    @classmethod
    def load(cls, path: str | Path) -> "CorpusStore":
        """
        Load a previously built store from a JSON file.

        Raises:
            CorpusFormatError: If the file is missing, unreadable or malformed.
            EmptyCorpusError: If the file holds no records.
        """
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise CorpusFormatError(
                "Could not read embeddings file", path=str(path), details=str(e)
            ) from e

        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorpusFormatError(
                "Embeddings file is not valid JSON", path=str(path), details=str(e)
            ) from e

        store = cls.from_records(records, source=str(path))
        logger.info("Embeddings loaded successfully. %d chunks ready.", len(store))
        return store

    def to_records(self) -> list[dict[str, Any]]:
        return [chunk.to_record() for chunk in self._chunks]

    def save(self, path: str | Path) -> Path:
        """Write the store as a JSON list of records; returns the path."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(self.to_records(), handle, ensure_ascii=False, indent=2)
        logger.info("Embeddings saved to %s", path)
        return path
