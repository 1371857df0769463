"""
Vector Store Module - Ollama embeddings over a single static corpus

Builds the corpus once offline (chunk, sanitize, embed) and persists it as a
JSON list of {text, embedding} records. The chat server loads that file once
at startup and keeps it read-only in memory.

Quick Start:
    from vector_store import CorpusStore, OllamaEmbedder

    # Build (offline)
    store = await CorpusStore.build(raw_text, OllamaEmbedder())
    store.save("data/embeddings.json")

    # Load (server startup)
    store = CorpusStore.load("data/embeddings.json")
"""

__version__ = "2.0.0"

from .embedder import EmbeddingIntent, OllamaEmbedder
from .models import MAX_EMBED_BATCH, BuildStats, Chunk, StoreConfig
from .store import CorpusStore, prepare_chunks

__all__ = [
    "__version__",
    "CorpusStore",
    "prepare_chunks",
    "OllamaEmbedder",
    "EmbeddingIntent",
    "StoreConfig",
    "Chunk",
    "BuildStats",
    "MAX_EMBED_BATCH",
]
