"""Tests for vector_store.store — CorpusStore build, load and save."""

import asyncio
import json
from unittest.mock import patch

import numpy as np
import pytest
from pydantic import ValidationError

from chunking import segment
from common.exceptions import CorpusFormatError, EmbeddingError, EmptyCorpusError
from vector_store.embedder import EmbeddingIntent
from vector_store.models import Chunk, StoreConfig
from vector_store.store import CorpusStore, prepare_chunks

from conftest import make_embedder, make_store


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

def _numbered_embedder():
    """embed_batch returns [index-of-text] so ordering is observable."""
    embedder = make_embedder()

    def side_effect(texts, intent=None):
        return [[float(int(t.split()[-1])), 1.0] for t in texts]

    embedder.embed_batch.side_effect = side_effect
    return embedder


def _numbered_text(n: int, width: int = 10) -> str:
    # Each segment of `width` characters sanitizes to "chunk <i>"
    return "".join(f"chunk {i}".ljust(width) for i in range(n))


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestPrepareChunks:
    def test_segments_and_sanitizes(self):
        assert prepare_chunks("aa\x00bbb", 3) == ["aa", "bbb"]

    def test_drops_empty_chunks(self):
        text = "real" + "\x00" * 8 + "text"
        assert prepare_chunks(text, 4) == ["real", "text"]

    def test_noise_only(self):
        assert prepare_chunks("\x00\x01\x02" * 100, 10) == []


class TestBuild:
    def test_build_pairs_text_and_vectors(self):
        embedder = _numbered_embedder()
        config = StoreConfig(chunk_size=10)
        store = asyncio.run(CorpusStore.build(_numbered_text(3), embedder, config))

        assert [c.text for c in store.chunks] == ["chunk 0", "chunk 1", "chunk 2"]
        assert [c.embedding for c in store.chunks] == [(0.0, 1.0), (1.0, 1.0), (2.0, 1.0)]
        assert store.dimensions == 2

    def test_document_intent(self):
        embedder = _numbered_embedder()
        asyncio.run(CorpusStore.build(_numbered_text(2), embedder, StoreConfig(chunk_size=10)))
        assert embedder.embed_batch.await_args.args[1] == EmbeddingIntent.DOCUMENT

    def test_batches_sequentially_in_order(self):
        embedder = _numbered_embedder()
        config = StoreConfig(chunk_size=10, batch_size=4)
        store = asyncio.run(CorpusStore.build(_numbered_text(10), embedder, config))

        batches = [call.args[0] for call in embedder.embed_batch.await_args_list]
        assert [len(b) for b in batches] == [4, 4, 2]
        assert batches[1][0] == "chunk 4"
        assert [c.embedding[0] for c in store.chunks] == [float(i) for i in range(10)]
        assert store.build_stats.batches == 3
        assert store.build_stats.chunks_stored == 10

    def test_default_batch_size_is_99(self):
        embedder = _numbered_embedder()
        asyncio.run(CorpusStore.build(_numbered_text(100), embedder, StoreConfig(chunk_size=10)))
        assert [len(c.args[0]) for c in embedder.embed_batch.await_args_list] == [99, 1]

    def test_noise_document_fails_before_embedding(self):
        embedder = make_embedder()
        noise = "\x00\x01\x02\x03\x7f" * 700
        with pytest.raises(EmptyCorpusError):
            asyncio.run(CorpusStore.build(noise, embedder))
        embedder.embed_batch.assert_not_called()
        embedder.embed.assert_not_called()

    def test_empty_document_fails(self):
        with pytest.raises(EmptyCorpusError):
            asyncio.run(CorpusStore.build("", make_embedder()))

    def test_embedding_failure_propagates(self):
        embedder = make_embedder()
        embedder.embed_batch.side_effect = EmbeddingError("boom")
        with pytest.raises(EmbeddingError):
            asyncio.run(CorpusStore.build("some text", embedder))

    def test_wrong_vector_count_fails(self):
        embedder = make_embedder()
        embedder.embed_batch.side_effect = lambda texts, intent=None: [[1.0]]
        with pytest.raises(EmbeddingError, match="returned 1 embeddings"):
            asyncio.run(CorpusStore.build(_numbered_text(2), embedder, StoreConfig(chunk_size=10)))

    def test_non_finite_vector_fails(self):
        embedder = make_embedder()
        embedder.embed_batch.side_effect = lambda texts, intent=None: [[float("nan"), 1.0] for _ in texts]
        with pytest.raises(EmbeddingError, match="unusable vector"):
            asyncio.run(CorpusStore.build("some text", embedder))

    def test_segments_document_once(self):
        with patch("vector_store.store.segment", wraps=segment) as segment_spy:
            store = asyncio.run(
                CorpusStore.build(_numbered_text(3), _numbered_embedder(), StoreConfig(chunk_size=10))
            )
        assert segment_spy.call_count == 1
        assert store.build_stats.raw_segments == 3
        assert len(store) == 3

    def test_progress_callback(self):
        calls = []
        asyncio.run(
            CorpusStore.build(
                _numbered_text(3),
                _numbered_embedder(),
                StoreConfig(chunk_size=10, batch_size=2),
                progress_callback=lambda current, total, status: calls.append((current, total, status)),
            )
        )
        assert calls[0] == (0, 3, "Embedding batch 1/2")
        assert calls[-1] == (3, 3, "Done")


class TestStoreConfig:
    def test_batch_size_below_service_limit(self):
        with pytest.raises(ValidationError):
            StoreConfig(batch_size=100)

    def test_defaults(self):
        config = StoreConfig()
        assert config.chunk_size == 1500
        assert config.batch_size == 99


class TestCorpusStore:
    def test_inconsistent_dimensions_rejected(self):
        with pytest.raises(CorpusFormatError, match="dimensions"):
            make_store([("a", [1.0, 0.0]), ("b", [1.0])])

    def test_empty_store(self):
        store = CorpusStore([])
        assert store.is_empty
        assert len(store) == 0
        assert store.dimensions == 0

    def test_matrix_is_read_only(self, gita_store):
        matrix = gita_store.embedding_matrix
        assert matrix.shape == (2, 3)
        with pytest.raises(ValueError):
            matrix[0, 0] = 5.0

    def test_chunks_are_frozen(self, gita_store):
        with pytest.raises(ValidationError):
            gita_store.chunks[0].text = "changed"


class TestPersistence:
    def test_save_and_load(self, tmp_path, gita_store):
        path = gita_store.save(tmp_path / "nested" / "embeddings.json")
        loaded = CorpusStore.load(path)

        assert [c.text for c in loaded.chunks] == [c.text for c in gita_store.chunks]
        np.testing.assert_array_equal(loaded.embedding_matrix, gita_store.embedding_matrix)

    def test_saved_format(self, tmp_path, gita_store):
        path = gita_store.save(tmp_path / "embeddings.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data[0] == {"text": "duty without attachment", "embedding": [1.0, 0.0, 0.0]}

    def test_missing_file(self, tmp_path):
        with pytest.raises(CorpusFormatError, match="Could not read"):
            CorpusStore.load(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "embeddings.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CorpusFormatError, match="not valid JSON"):
            CorpusStore.load(path)

    def test_empty_list(self, tmp_path):
        path = tmp_path / "embeddings.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(EmptyCorpusError):
            CorpusStore.load(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "embeddings.json"
        path.write_text('{"text": "a"}', encoding="utf-8")
        with pytest.raises(CorpusFormatError, match="list of records"):
            CorpusStore.load(path)

    @pytest.mark.parametrize(
        "record",
        [
            {"text": "a"},
            {"embedding": [1.0]},
            {"text": "", "embedding": [1.0]},
            {"text": "a", "embedding": []},
            {"text": "a", "embedding": "oops"},
            "just a string",
        ],
    )
    def test_malformed_record(self, record):
        with pytest.raises(CorpusFormatError, match="index 1"):
            CorpusStore.from_records([{"text": "ok", "embedding": [1.0]}, record])

    def test_chunk_record_roundtrip(self):
        chunk = Chunk(text="x", embedding=[1, 2])
        assert chunk.to_record() == {"text": "x", "embedding": [1.0, 2.0]}

    @pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_embedding_rejected(self, tmp_path, token):
        path = tmp_path / "embeddings.json"
        path.write_text(
            f'[{{"text": "a", "embedding": [{token}, 1.0]}}, {{"text": "b", "embedding": [1.0, 0.0]}}]',
            encoding="utf-8",
        )
        with pytest.raises(CorpusFormatError, match="index 0"):
            CorpusStore.load(path)
