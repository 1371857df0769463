"""
Pytest fixtures shared by the guide tests.

No test talks to Ollama: the embedding and chat collaborators are replaced
with AsyncMock-backed fakes.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from sessions.memory import SessionMemory
from vector_store.embedder import OllamaEmbedder
from vector_store.models import Chunk
from vector_store.store import CorpusStore


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_store(items: list[tuple[str, list[float]]]) -> CorpusStore:
    return CorpusStore([Chunk(text=text, embedding=vector) for text, vector in items])


def make_embedder(query_vector=None, batch_vector=None) -> MagicMock:
    """
    Embedder double.

    embed() returns query_vector; embed_batch() returns one batch_vector per
    input text, so callers can check ordering through call_args.
    """
    embedder = MagicMock(spec=OllamaEmbedder)
    embedder.embed = AsyncMock(return_value=query_vector or [1.0, 0.0])
    embedder.embed_batch = AsyncMock(
        side_effect=lambda texts, intent=None: [list(batch_vector or [1.0, 0.0]) for _ in texts]
    )
    return embedder


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory(clock):
    return SessionMemory(ttl_seconds=3600, check_period_seconds=600, clock=clock)


@pytest.fixture
def gita_store():
    """Two-chunk corpus from the end-to-end scenarios."""
    return make_store([
        ("duty without attachment", [1.0, 0.0, 0.0]),
        ("the nature of the self", [0.0, 1.0, 0.0]),
    ])


@pytest.fixture
def embedder():
    return make_embedder(query_vector=[0.9, 0.1, 0.0], batch_vector=[0.5, 0.5, 0.0])
