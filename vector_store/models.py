"""
Data Models for the Corpus Vector Store

Defines:
1. StoreConfig - Embedding model, batch size and on-disk location
2. Chunk - One text segment paired with its embedding vector
3. BuildStats - Statistics from an offline corpus build

Design Principles:
- Pydantic v2 for validation (records are validated on load)
- Chunks are frozen: the corpus is built once and never mutated
- The persisted format is a plain JSON list of {text, embedding} records
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat

# The embedding endpoint accepts at most 100 inputs per call.
MAX_EMBED_BATCH = 99


class StoreConfig(BaseModel):
    """Configuration for building and loading the corpus."""
    embedding_model: str = Field(
        "nomic-embed-text",
        description="Ollama embedding model name",
    )
    ollama_base_url: str = Field(
        "http://localhost:11434",
        description="Ollama API base URL",
    )
    chunk_size: int = Field(
        1500,
        description="Maximum characters per chunk before sanitization",
        ge=1,
    )
    batch_size: int = Field(
        MAX_EMBED_BATCH,
        description="Texts per embedding request",
        ge=1,
        le=MAX_EMBED_BATCH,
    )
    embeddings_path: str = Field(
        "data/embeddings.json",
        description="Location of the persisted store",
    )


class Chunk(BaseModel):
    """A sanitized text segment and its document-intent embedding."""
    model_config = ConfigDict(frozen=True)

    text: str = Field(
        ...,
        description="Sanitized chunk text",
        min_length=1,
    )
    embedding: tuple[FiniteFloat, ...] = Field(
        ...,
        description="Finite embedding vector (fixed dimensionality per store)",
        min_length=1,
    )

    def to_record(self) -> dict[str, Any]:
        return {"text": self.text, "embedding": list(self.embedding)}


class BuildStats(BaseModel):
    """Statistics from an offline corpus build."""
    raw_segments: int = Field(
        0,
        description="Segments produced before sanitization",
    )
    chunks_stored: int = Field(
        0,
        description="Non-empty chunks that were embedded",
    )
    batches: int = Field(
        0,
        description="Number of embedding requests issued",
    )
    dimensions: int = Field(
        0,
        description="Embedding dimensionality",
    )
    embedding_time_seconds: float = Field(
        0.0,
        description="Time spent waiting on the embedding service",
    )
    total_time_seconds: float = Field(
        0.0,
        description="Total build time",
    )
